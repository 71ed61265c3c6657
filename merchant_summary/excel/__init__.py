"""Excel styling, formatting, and writing utilities."""
from .styles import *
from .formatters import write_header_row, format_data_cell, fit_column_widths, infer_col_type
from .writer import Column, ExcelWriter, cell_value, columns_in_order
