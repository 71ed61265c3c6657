"""
Row ingestion: raw sheet rows to an immutable Dataset plus its merchant list.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Optional

from merchant_summary.config import DATE_COL
from merchant_summary.data.dates import normalize_date
from merchant_summary.data.schemas import Dataset, TransactionRecord
from merchant_summary.errors import EmptyInputError

logger = logging.getLogger(__name__)


def build_record(row: Mapping[str, Any], position: int) -> TransactionRecord:
    """Attach the canonical date and spreadsheet row number to one raw row."""
    if not isinstance(row, Mapping):
        raise TypeError(f"expected a column mapping, got {type(row).__name__}")
    return TransactionRecord(
        row_index=position + 2,
        date_only=normalize_date(row.get(DATE_COL)),
        fields=row,
    )


def extract_merchants(records: Sequence[TransactionRecord]) -> tuple[str, ...]:
    """Distinct trimmed merchant names, sorted by code point."""
    return tuple(sorted({r.merchant for r in records if r.merchant}))


def ingest_rows(rows: Sequence[Mapping[str, Any]], original_name: Optional[str] = None) -> Dataset:
    """Normalize every row, dropping (and logging) rows that fail to convert.

    Raises EmptyInputError when there is nothing to ingest.
    """
    if not rows:
        raise EmptyInputError("Worksheet contains no data")

    records: list[TransactionRecord] = []
    for position, row in enumerate(rows):
        try:
            records.append(build_record(row, position))
        except Exception as exc:
            logger.warning("Skipping row %d: %s", position + 2, exc)

    dropped = len(rows) - len(records)
    merchants = extract_merchants(records)
    logger.info(
        "Ingested %d rows (%d dropped), %d merchants%s",
        len(records), dropped, len(merchants),
        f" from {original_name}" if original_name else "",
    )
    return Dataset(records=tuple(records), merchants=merchants, original_name=original_name)
