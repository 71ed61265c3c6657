"""
Merchant Summary configuration: paths, limits, column names.
"""
import os
import tempfile
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths: override with MERCHANT_SUMMARY_DATA_DIR for deployment
# ---------------------------------------------------------------------------
_data_dir = Path(os.environ.get(
    "MERCHANT_SUMMARY_DATA_DIR", str(Path(tempfile.gettempdir()) / "merchant_summary")
))
UPLOADS_FOLDER = _data_dir / "uploads"
OUTPUT_FOLDER = _data_dir / "output"

# ---------------------------------------------------------------------------
# Upload limits
# ---------------------------------------------------------------------------
MAX_UPLOAD_BYTES = int(os.environ.get("MAX_UPLOAD_BYTES", str(50 * 1024 * 1024)))
ALLOWED_EXTENSIONS = {".xlsx", ".xlsm", ".xls", ".csv"}

# ---------------------------------------------------------------------------
# CORS: comma-separated list, "*" when unset
# ---------------------------------------------------------------------------
ALLOWED_ORIGINS = [
    o.strip() for o in os.environ.get("ALLOWED_ORIGINS", "*").split(",") if o.strip()
] or ["*"]

# ---------------------------------------------------------------------------
# Source columns (case- and spacing-sensitive)
# ---------------------------------------------------------------------------
DATE_COL = "Date"
MERCHANT_COL = "Merchant Name"
WITHDRAWAL_COL = "Withdrawal Amount"
FEES_COL = "Withdrawal Fees"

# Internal bookkeeping fields, never exported
ROW_INDEX_FIELD = "RowIndex"
DATE_ONLY_FIELD = "DateOnly"

# ---------------------------------------------------------------------------
# Summary sheet
# ---------------------------------------------------------------------------
TOTAL_LABEL = "TOTAL"
SUMMARY_MERCHANT_HEADER = "Merchant"
SUMMARY_WITHDRAWAL_HEADER = "Total Withdrawal Amount"
SUMMARY_FEES_HEADER = "Total Withdrawal Fees"
SUMMARY_COUNT_HEADER = "Transaction Count"

TRANSACTIONS_SHEET = "Transactions"
SUMMARY_SHEET = "Summary"

# Spreadsheet serial dates count from here; serial n maps to epoch + (n - 1) days
EXCEL_EPOCH = (1899, 12, 30)
