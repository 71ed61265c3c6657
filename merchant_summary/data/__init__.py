"""Date normalization, row ingestion, workbook loading and the in-memory dataset store."""
from .dates import normalize_date
from .ingest import ingest_rows, extract_merchants
from .loader import read_raw_rows
from .schemas import TransactionRecord, Dataset, FilteredRow, SummaryRow, SummaryResult
from .store import DataStore
