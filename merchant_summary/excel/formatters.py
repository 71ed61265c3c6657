"""
Cell and row styling for the exported workbook.
"""
from __future__ import annotations

import datetime as dt
from typing import Any, Sequence

from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from merchant_summary.excel.styles import (
    HEADER_FONT, HEADER_FILL, HEADER_BORDER,
    DATA_FONT, TOTAL_FONT,
    THIN_BORDER, TOTAL_BORDER,
    ALTERNATE_FILL, TOTAL_FILL,
    CENTER, LEFT, RIGHT,
    CURRENCY_FORMAT, NUMBER_FORMAT, DATE_FORMAT,
)

_NUMBER_FORMATS = {
    "currency": CURRENCY_FORMAT,
    "number": NUMBER_FORMAT,
    "date": DATE_FORMAT,
}


def write_header_row(ws: Worksheet, labels: Sequence[str]) -> None:
    """Write ``labels`` across row 1 with the navy header style."""
    for col_num, label in enumerate(labels, 1):
        cell = ws.cell(row=1, column=col_num, value=label)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = CENTER
        cell.border = HEADER_BORDER


def infer_col_type(value: Any) -> str:
    """Pass-through columns: dates get a date format, everything else stays as read."""
    if isinstance(value, (dt.date, dt.datetime)):
        return "date"
    return "text"


def format_data_cell(
    ws: Worksheet,
    row_num: int,
    col_num: int,
    value: Any,
    col_type: str = "text",
    is_total: bool = False,
) -> None:
    """Write one body cell.

    col_type: "text", "currency", "number", "date" or "auto" (decided per value).
    Total rows are bold on a blue band; other even rows get the alternate fill.
    """
    if col_type == "auto":
        col_type = infer_col_type(value)

    cell = ws.cell(row=row_num, column=col_num, value=value)
    if is_total:
        cell.font, cell.border, cell.fill = TOTAL_FONT, TOTAL_BORDER, TOTAL_FILL
    else:
        cell.font, cell.border = DATA_FONT, THIN_BORDER
        if row_num % 2 == 0:
            cell.fill = ALTERNATE_FILL

    cell.alignment = RIGHT if col_type in ("currency", "number") else LEFT
    if col_type in _NUMBER_FORMATS:
        cell.number_format = _NUMBER_FORMATS[col_type]


def fit_column_widths(ws: Worksheet, min_width: int = 10, max_width: int = 55) -> None:
    """Size each column to its longest rendered value, within the given bounds."""
    for col_num, cells in enumerate(ws.iter_cols(), 1):
        longest = max((len(str(c.value)) for c in cells if c.value is not None), default=0)
        width = min(max(longest + 2, min_width), max_width)
        ws.column_dimensions[get_column_letter(col_num)].width = width
