"""
Date normalization: spreadsheet serials, datetimes and free text to canonical YYYY-MM-DD.

Canonical strings compare correctly as plain strings, which is what the
range filter in the summary engine relies on.

Ambiguous text such as ``03-04-2024`` resolves day-first because day-first is
tried before month-first and both are valid. Nothing here tries to guess the
intended locale.
"""
from __future__ import annotations

import datetime as dt
import math
import re
import warnings
from typing import Any, Optional

import numpy as np
import pandas as pd

from merchant_summary.config import EXCEL_EPOCH

_EPOCH = dt.datetime(*EXCEL_EPOCH)
_SEPARATORS = ("-", "/", ".")
_TIME_SPLIT_RE = re.compile(r"[\sT]")
# pandas resolves these against the clock
_RELATIVE_WORDS = {"now", "today"}


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def from_serial(value: float) -> Optional[str]:
    """Spreadsheet day count → date, using ``epoch + (value - 1)`` days."""
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        return None
    try:
        return (_EPOCH + dt.timedelta(days=value - 1)).date().isoformat()
    except OverflowError:
        return None


def _from_parts(token: str) -> Optional[str]:
    """Try DD-MM-YYYY then MM-DD-YYYY for each separator; first valid date wins."""
    for sep in _SEPARATORS:
        parts = [p.strip() for p in token.split(sep)]
        if len(parts) != 3:
            continue
        if not all(p.isdigit() for p in parts) or len(parts[2]) != 4:
            continue
        first, second, year = (int(p) for p in parts)
        for day, month in ((first, second), (second, first)):
            try:
                return dt.date(year, month, day).isoformat()
            except ValueError:
                continue
    return None


def _from_generic(text: str) -> Optional[str]:
    if text.lower() in _RELATIVE_WORDS:
        return None
    with warnings.catch_warnings():
        # pandas warns when it falls back to dateutil for a lone string
        warnings.simplefilter("ignore", UserWarning)
        try:
            parsed = pd.to_datetime(text, errors="coerce")
        except (TypeError, ValueError, OverflowError):
            return None
    if _is_missing(parsed):
        return None
    return parsed.date().isoformat()


def from_text(text: str) -> Optional[str]:
    text = text.strip()
    if not text:
        return None
    token = _TIME_SPLIT_RE.split(text, maxsplit=1)[0]
    return _from_parts(token) or _from_generic(text)


def normalize_date(value: Any) -> Optional[str]:
    """Return ``YYYY-MM-DD`` for a raw Date cell, or None when it is not a date.

    Never raises: anything unparseable, out of range or empty becomes None,
    and callers treat None as outside every date range.
    """
    if _is_missing(value) or isinstance(value, (bool, np.bool_)):
        return None
    if isinstance(value, dt.datetime):
        return value.date().isoformat()
    if isinstance(value, dt.date):
        return value.isoformat()
    if isinstance(value, (int, float, np.integer, np.floating)):
        return from_serial(value)
    if isinstance(value, str):
        return from_text(value)
    return None
