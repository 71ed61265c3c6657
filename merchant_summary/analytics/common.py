"""
Money and JSON helpers used by the summary engine and the reports.
"""
from __future__ import annotations

import datetime as dt
import math
import operator
import re
from collections.abc import Iterable
from decimal import Decimal, ROUND_HALF_UP
from functools import reduce
from typing import Any

import numpy as np
import pandas as pd

_CURRENCY_RE = re.compile(r"[\$,\s]")
_CENT = Decimal("0.01")


def to_number(value: Any, default: float = 0.0) -> float:
    """Parse an amount cell; anything non-numeric or missing becomes ``default``.

    Strings may carry a ``$`` sign and thousands separators.
    """
    if value is None or isinstance(value, (bool, np.bool_)):
        return default
    if isinstance(value, (int, float, Decimal, np.integer, np.floating)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(_CURRENCY_RE.sub("", value))
        except ValueError:
            return default
    else:
        return default
    return number if math.isfinite(number) else default


def running_total(values: Iterable[float]) -> float:
    """Left-to-right float addition in the given order.

    Totals keep the error of plain row-by-row accumulation, which decides
    half-cent ties. Builtin ``sum`` and pandas ``sum`` compensate, so they
    are not used for money.
    """
    return float(reduce(operator.add, values, 0.0))


def round_money(value: float) -> float:
    """Round to 2 places, half away from zero, on the float's exact binary value."""
    rounded = float(Decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP))
    return rounded + 0.0  # -0.0 → 0.0


def format_rate(rate: float) -> str:
    """``5.0`` → ``"5"``, ``3.5`` → ``"3.5"``."""
    rate = float(rate)
    if rate.is_integer():
        return str(int(rate))
    return repr(rate)


def rate_label(rate: float) -> str:
    return f"{format_rate(rate)}% Amount"


def sanitize_for_json(obj):
    """Recursively convert numpy/pandas/datetime values to JSON-native Python."""
    if isinstance(obj, dict):
        return {str(k): sanitize_for_json(v) for k, v in obj.items() if k is not None}
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        obj = float(obj)
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, float):
        return None if (math.isnan(obj) or math.isinf(obj)) else obj
    if isinstance(obj, (dt.datetime, dt.date, dt.time)):
        return None if obj is pd.NaT else obj.isoformat()
    if isinstance(obj, Decimal):
        return float(obj)
    if pd.api.types.is_scalar(obj) and pd.isna(obj):
        return None
    return obj
