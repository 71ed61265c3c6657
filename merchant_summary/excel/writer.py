"""
Workbook builder used by the summary export.
"""
from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import Any, Callable, Iterable, NamedTuple, Optional

import pandas as pd
from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.worksheet.worksheet import Worksheet

from merchant_summary.excel.formatters import write_header_row, format_data_cell, fit_column_widths


class Column(NamedTuple):
    """Row dict key (also the header text) and how to format its cells."""
    key: str
    col_type: str = "text"


def cell_value(value: Any) -> Any:
    """Make a raw cell value writable by openpyxl.

    NaN/NaT become blank, Timestamps become datetimes, and control characters
    that the xlsx format cannot store are dropped from text.
    """
    if value is None:
        return None
    if isinstance(value, pd.Timestamp):
        if pd.isna(value):
            return None
        value = value.to_pydatetime()
    if isinstance(value, dt.datetime) and value.tzinfo is not None:
        value = value.replace(tzinfo=None)
    if isinstance(value, float) and pd.isna(value):
        return None
    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    if hasattr(value, "item") and not isinstance(value, bytes):
        return value.item()
    return value


def columns_in_order(rows: Iterable[dict]) -> list[str]:
    """Union of row keys in first-seen order."""
    seen: dict[str, None] = {}
    for row in rows:
        for key in row:
            seen.setdefault(key, None)
    return list(seen)


class ExcelWriter:
    """Collects styled sheets in one workbook; sheets appear in creation order."""

    def __init__(self) -> None:
        self.wb = Workbook()
        # openpyxl always starts with one empty sheet
        self.wb.remove(self.wb.active)

    def add_sheet(self, title: str) -> Worksheet:
        return self.wb.create_sheet(title=title)

    def write_table(
        self,
        ws: Worksheet,
        columns: list[Column],
        data: list[dict],
        is_total_fn: Optional[Callable[[dict], bool]] = None,
    ) -> None:
        """Header in row 1 (frozen), then one row per dict in ``data``.

        Keys missing from a row are left blank. Rows for which ``is_total_fn``
        returns True get the total style.
        """
        write_header_row(ws, [cell_value(c.key) for c in columns])

        for row_num, record in enumerate(data, 2):
            is_total = bool(is_total_fn and is_total_fn(record))
            for col_num, column in enumerate(columns, 1):
                format_data_cell(
                    ws, row_num, col_num, cell_value(record.get(column.key)),
                    column.col_type, is_total=is_total,
                )

        fit_column_widths(ws)
        ws.freeze_panes = "A2"

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(path)
        return path
