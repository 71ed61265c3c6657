"""
Summary engine: filter a Dataset by merchants and date range, total per merchant, append TOTAL.

Rounding order matters: each merchant's sums are rounded to 2 places first,
and the TOTAL row adds up those rounded figures and rounds again. TOTAL is
never recomputed from the raw rows.
"""
from __future__ import annotations

import datetime as dt
import logging
import math
import re
from collections.abc import Iterable
from typing import Any

import numpy as np
import pandas as pd

from merchant_summary.config import TOTAL_LABEL
from merchant_summary.data.schemas import Dataset, FilteredRow, SummaryResult, SummaryRow
from merchant_summary.analytics.common import rate_label, round_money, running_total, to_number
from merchant_summary.errors import InvalidParameterError, NoMatchingDataError

logger = logging.getLogger(__name__)

# YYYY-MM-DD, optionally followed by "T" or a space and a time of day
_ISO_BOUND_RE = re.compile(r"^([0-9]{4}-[0-9]{2}-[0-9]{2})(?:[T ].*)?$")


# ---------------------------------------------------------------------------
# Parameter checks
# ---------------------------------------------------------------------------

def parse_rate(value: Any) -> float:
    """Percentage as a finite float in [0, 100]; numeric strings are accepted."""
    error = InvalidParameterError(
        "Percentage must be a number between 0 and 100",
        code="INVALID_PERCENTAGE",
        details={"percentage": str(value)},
    )
    if value is None or isinstance(value, (bool, np.bool_)):
        raise error
    try:
        rate = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        raise error from None
    if not math.isfinite(rate) or not 0 <= rate <= 100:
        raise error
    return rate


def parse_date_bound(value: Any) -> str:
    """ISO date (optionally followed by a time) → YYYY-MM-DD."""
    if isinstance(value, dt.datetime):
        return value.date().isoformat()
    if isinstance(value, dt.date):
        return value.isoformat()
    if isinstance(value, str):
        match = _ISO_BOUND_RE.match(value.strip())
        if match:
            try:
                return dt.date.fromisoformat(match.group(1)).isoformat()
            except ValueError:
                pass
    raise InvalidParameterError(
        "Invalid date range provided", code="INVALID_DATE", details={"date": str(value)},
    )


def parse_date_range(start: Any, end: Any) -> tuple[str, str]:
    start_s, end_s = parse_date_bound(start), parse_date_bound(end)
    if start_s > end_s:
        raise InvalidParameterError(
            "Start date must not be after end date",
            code="INVALID_DATE",
            details={"date_range": f"{start_s} to {end_s}"},
        )
    return start_s, end_s


def parse_merchants(selected: Iterable[Any] | str | None) -> tuple[str, ...]:
    """Trimmed, de-duplicated merchant names in caller order."""
    if isinstance(selected, str):
        selected = [selected]
    names: list[str] = []
    for name in selected or ():
        if isinstance(name, str) and name.strip() and name.strip() not in names:
            names.append(name.strip())
    if not names:
        raise InvalidParameterError("No merchants were selected", code="NO_MERCHANTS")
    return tuple(names)


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------

def _total_row(rows: list[SummaryRow]) -> SummaryRow:
    return SummaryRow(
        merchant=TOTAL_LABEL,
        withdrawal=round_money(running_total(r.withdrawal for r in rows)),
        fees=round_money(running_total(r.fees for r in rows)),
        percent_amount=round_money(running_total(r.percent_amount for r in rows)),
        count=sum(r.count for r in rows),
    )


def summarize(
    dataset: Dataset,
    selected_merchants: Iterable[str],
    start_date: Any,
    end_date: Any,
    rate_percent: Any,
) -> SummaryResult:
    """Filter, group and total ``dataset``. Read-only on the dataset; deterministic.

    Merchant rows follow first-seen order within the filtered rows. Selected
    merchants with no matching rows get no row at all.
    """
    rate = parse_rate(rate_percent)
    start, end = parse_date_range(start_date, end_date)
    selected = parse_merchants(selected_merchants)
    wanted = set(selected)

    matches = [
        r for r in dataset.records
        if r.date_only is not None and start <= r.date_only <= end and r.merchant in wanted
    ]
    if not matches:
        raise NoMatchingDataError(
            "No transactions found for the selected criteria",
            details={"date_range": f"{start} to {end}", "merchants": list(selected)},
        )

    frame = pd.DataFrame({
        "merchant": [r.merchant for r in matches],
        "withdrawal": [to_number(r.withdrawal_amount) for r in matches],
        "fees": [to_number(r.withdrawal_fees) for r in matches],
    })
    frame["percent_amount"] = frame["withdrawal"] * rate / 100

    grouped = frame.groupby("merchant", sort=False).agg(
        withdrawal=("withdrawal", running_total),
        fees=("fees", running_total),
        percent_amount=("percent_amount", running_total),
        count=("withdrawal", "size"),
    )

    rows = [
        SummaryRow(
            merchant=str(merchant),
            withdrawal=round_money(withdrawal),
            fees=round_money(fees),
            percent_amount=round_money(percent_amount),
            count=int(count),
        )
        for merchant, withdrawal, fees, percent_amount, count in grouped.itertuples(name=None)
    ]
    rows.append(_total_row(rows))

    filtered = tuple(
        FilteredRow(record=record, percent_amount=round_money(amount))
        for record, amount in zip(matches, frame["percent_amount"].tolist())
    )

    logger.info(
        "Summarized %d transactions across %d merchants for %s to %s at %s%%",
        len(filtered), len(rows) - 1, start, end, rate,
    )
    return SummaryResult(
        filtered_rows=filtered,
        summary_rows=tuple(rows),
        rate_percent=rate,
        rate_label=rate_label(rate),
        start_date=start,
        end_date=end,
    )
