"""
Record, dataset and summary shapes shared by ingestion, the summary engine and exports.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from merchant_summary.config import (
    MERCHANT_COL, WITHDRAWAL_COL, FEES_COL,
    TOTAL_LABEL,
    SUMMARY_MERCHANT_HEADER, SUMMARY_WITHDRAWAL_HEADER, SUMMARY_FEES_HEADER, SUMMARY_COUNT_HEADER,
)


@dataclass(frozen=True)
class TransactionRecord:
    """One source row plus its canonical date.

    ``fields`` holds every column of the source row unchanged (read-only);
    the typed accessors below address the columns the summary depends on.
    """
    row_index: int                       # spreadsheet row number (header is row 1)
    date_only: Optional[str]             # YYYY-MM-DD, None when the Date cell is not a date
    fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def merchant(self) -> Optional[str]:
        """Trimmed merchant name, None unless the cell holds non-blank text."""
        value = self.fields.get(MERCHANT_COL)
        if not isinstance(value, str):
            return None
        return value.strip() or None

    @property
    def withdrawal_amount(self) -> Any:
        return self.fields.get(WITHDRAWAL_COL)

    @property
    def withdrawal_fees(self) -> Any:
        return self.fields.get(FEES_COL)


@dataclass(frozen=True)
class Dataset:
    """All records from one uploaded file, in original row order."""
    records: tuple[TransactionRecord, ...]
    merchants: tuple[str, ...]
    original_name: Optional[str] = None
    uploaded_at: dt.datetime = field(default_factory=dt.datetime.now)

    def __len__(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class FilteredRow:
    """A record that passed the filter, with its ``<rate>% Amount`` (2 places)."""
    record: TransactionRecord
    percent_amount: float

    def as_row(self, rate_label: str) -> dict[str, Any]:
        row = dict(self.record.fields)
        row[rate_label] = self.percent_amount
        return row


@dataclass(frozen=True)
class SummaryRow:
    merchant: str
    withdrawal: float
    fees: float
    percent_amount: float
    count: int

    @property
    def is_total(self) -> bool:
        return self.merchant == TOTAL_LABEL

    def as_row(self, rate_label: str) -> dict[str, Any]:
        return {
            SUMMARY_MERCHANT_HEADER: self.merchant,
            SUMMARY_WITHDRAWAL_HEADER: self.withdrawal,
            SUMMARY_FEES_HEADER: self.fees,
            rate_label: self.percent_amount,
            SUMMARY_COUNT_HEADER: self.count,
        }


@dataclass(frozen=True)
class SummaryResult:
    filtered_rows: tuple[FilteredRow, ...]
    summary_rows: tuple[SummaryRow, ...]    # per-merchant rows, then TOTAL
    rate_percent: float
    rate_label: str
    start_date: str
    end_date: str

    @property
    def total(self) -> SummaryRow:
        return self.summary_rows[-1]

    @property
    def merchant_rows(self) -> tuple[SummaryRow, ...]:
        return self.summary_rows[:-1]

    @property
    def date_range(self) -> str:
        return f"{self.start_date} to {self.end_date}"
