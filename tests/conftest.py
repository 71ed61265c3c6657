"""Shared pytest fixtures.

Upload and output folders are redirected to a per-test temporary directory,
and logging is reset after each test so handlers configured by the app or the
CLI never leak into the next test.
"""
from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from merchant_summary import config
from merchant_summary.data.ingest import ingest_rows
from merchant_summary.logging_setup import reset_logging


@pytest.fixture(autouse=True)
def _isolate_folders(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    base = tmp_path / "data"
    monkeypatch.setattr(config, "UPLOADS_FOLDER", base / "uploads")
    monkeypatch.setattr(config, "OUTPUT_FOLDER", base / "output")
    yield base
    reset_logging()


@pytest.fixture()
def scenario_rows() -> list[dict]:
    """Two merchants, serial dates 45001 (2023-03-15) and 45002 (2023-03-16)."""
    return [
        {"Date": 45001, "Merchant Name": "A", "Withdrawal Amount": 100, "Withdrawal Fees": 2},
        {"Date": 45002, "Merchant Name": "B", "Withdrawal Amount": 50, "Withdrawal Fees": 1},
    ]


@pytest.fixture()
def mixed_rows() -> list[dict]:
    """Text dates, an extra column, a blank date and interleaved merchants."""
    return [
        {"Date": "02-01-2024", "Merchant Name": "Globex", "Withdrawal Amount": 200, "Withdrawal Fees": 3.5, "Ref": "T-1"},
        {"Date": "2024-01-05", "Merchant Name": "ACME ", "Withdrawal Amount": "$1,000.00", "Withdrawal Fees": 10, "Ref": "T-2"},
        {"Date": None, "Merchant Name": "ACME", "Withdrawal Amount": 999, "Withdrawal Fees": 9, "Ref": "T-3"},
        {"Date": "31/01/2024", "Merchant Name": "Globex", "Withdrawal Amount": 25.25, "Withdrawal Fees": None, "Ref": "T-4"},
        {"Date": "2024-02-01", "Merchant Name": "ACME", "Withdrawal Amount": 40, "Withdrawal Fees": 1, "Ref": "T-5"},
        {"Date": "2024-01-20", "Merchant Name": "Initech", "Withdrawal Amount": "n/a", "Withdrawal Fees": "", "Ref": "T-6"},
    ]


@pytest.fixture()
def scenario_dataset(scenario_rows):
    return ingest_rows(scenario_rows, original_name="scenario.xlsx")


@pytest.fixture()
def mixed_dataset(mixed_rows):
    return ingest_rows(mixed_rows, original_name="mixed.xlsx")


def write_workbook(path: Path, rows: list[dict]) -> Path:
    """Write ``rows`` to the first sheet of an .xlsx (or .csv) file."""
    df = pd.DataFrame(rows)
    if path.suffix == ".csv":
        df.to_csv(path, index=False)
    else:
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name="Export", index=False)
    return path


@pytest.fixture()
def scenario_workbook(tmp_path: Path, scenario_rows) -> Path:
    return write_workbook(tmp_path / "scenario.xlsx", scenario_rows)


@pytest.fixture()
def make_workbook():
    return write_workbook
