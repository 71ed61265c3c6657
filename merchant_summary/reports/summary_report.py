"""
Merchant Summary Report: JSON payload and two-sheet Excel export (Transactions + Summary).
"""
from __future__ import annotations

import re
import uuid
from pathlib import Path

from merchant_summary.config import (
    OUTPUT_FOLDER,
    ROW_INDEX_FIELD, DATE_ONLY_FIELD,
    TRANSACTIONS_SHEET, SUMMARY_SHEET, TOTAL_LABEL,
    SUMMARY_MERCHANT_HEADER, SUMMARY_WITHDRAWAL_HEADER, SUMMARY_FEES_HEADER, SUMMARY_COUNT_HEADER,
)
from merchant_summary.data.schemas import SummaryResult
from merchant_summary.analytics.common import sanitize_for_json
from merchant_summary.excel.writer import Column, ExcelWriter, columns_in_order


OUTPUT_NAME_RE = re.compile(r"^summary_[0-9a-f]{32}\.xlsx$")

_INTERNAL_FIELDS = {ROW_INDEX_FIELD, DATE_ONLY_FIELD}


def new_output_path(folder: Path = OUTPUT_FOLDER) -> Path:
    """Unique workbook path, so concurrent generations never collide."""
    return folder / f"summary_{uuid.uuid4().hex}.xlsx"


def summary_columns(rate_label: str) -> list[Column]:
    return [
        Column(SUMMARY_MERCHANT_HEADER, "text"),
        Column(SUMMARY_WITHDRAWAL_HEADER, "currency"),
        Column(SUMMARY_FEES_HEADER, "currency"),
        Column(rate_label, "currency"),
        Column(SUMMARY_COUNT_HEADER, "number"),
    ]


def summary_rows(result: SummaryResult) -> list[dict]:
    return [row.as_row(result.rate_label) for row in result.summary_rows]


def transaction_rows(result: SummaryResult) -> list[dict]:
    """Filtered source rows with the rate column, minus internal bookkeeping fields."""
    rows = []
    for filtered in result.filtered_rows:
        row = filtered.as_row(result.rate_label)
        for name in _INTERNAL_FIELDS:
            row.pop(name, None)
        rows.append(row)
    return rows


def generate_json(result: SummaryResult) -> dict:
    return sanitize_for_json({
        "summary": summary_rows(result),
        "date_range": result.date_range,
        "rate": result.rate_percent,
        "stats": {
            "transaction_count": len(result.filtered_rows),
            "merchant_count": len(result.merchant_rows),
        },
    })


def generate_excel(result: SummaryResult, output_path: str | Path) -> Path:
    ew = ExcelWriter()

    tx_rows = transaction_rows(result)
    ws = ew.add_sheet(TRANSACTIONS_SHEET)
    tx_cols = [
        Column(key, "currency" if key == result.rate_label else "auto")
        for key in columns_in_order(tx_rows)
    ]
    ew.write_table(ws, tx_cols, tx_rows)

    ws_sum = ew.add_sheet(SUMMARY_SHEET)
    ew.write_table(
        ws_sum, summary_columns(result.rate_label), summary_rows(result),
        is_total_fn=lambda r: r.get(SUMMARY_MERCHANT_HEADER) == TOTAL_LABEL,
    )

    return ew.save(output_path)
