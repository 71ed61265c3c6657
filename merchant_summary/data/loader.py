"""
Workbook loading: first sheet of an .xlsx/.xls/.csv file into raw row mappings.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from merchant_summary.config import ALLOWED_EXTENSIONS
from merchant_summary.errors import InvalidWorkbookError

logger = logging.getLogger(__name__)


def _to_python(value: Any) -> Any:
    """NaN/NaT → None, numpy scalars → native Python."""
    if value is None:
        return None
    if isinstance(value, (np.generic,)):
        value = value.item()
    if isinstance(value, float) and np.isnan(value):
        return None
    if value is pd.NaT:
        return None
    return value


def frame_to_rows(df: pd.DataFrame) -> list[dict[str, Any]]:
    """Convert a sheet DataFrame into one dict per row, empty cells as None."""
    df = df.dropna(how="all")
    rows = []
    for record in df.to_dict("records"):
        rows.append({str(k): _to_python(v) for k, v in record.items()})
    return rows


def read_frame(path: Path) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix not in ALLOWED_EXTENSIONS:
        raise InvalidWorkbookError(
            f"Unsupported file type '{suffix or path.name}'",
            details={"allowed": sorted(ALLOWED_EXTENSIONS)},
        )
    try:
        if suffix == ".csv":
            return pd.read_csv(path)
        engine = "xlrd" if suffix == ".xls" else "openpyxl"
        return pd.read_excel(path, sheet_name=0, engine=engine)
    except pd.errors.EmptyDataError:
        return pd.DataFrame()
    except Exception as exc:
        raise InvalidWorkbookError(
            "The file could not be read as a spreadsheet", details={"reason": str(exc)}
        ) from exc


def read_raw_rows(path: str | Path) -> list[dict[str, Any]]:
    """Read the first sheet of ``path`` as a list of column → value mappings."""
    path = Path(path)
    df = read_frame(path)
    rows = frame_to_rows(df)
    logger.info("Read %d rows x %d columns from %s", len(rows), len(df.columns), path.name)
    return rows
