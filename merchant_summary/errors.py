"""
Named failure conditions raised by the core and mapped to HTTP at the API boundary.
"""
from __future__ import annotations

from typing import Any, Optional


class SummaryError(Exception):
    """Base for every condition the core reports to its caller."""

    code = "SUMMARY_ERROR"
    status_code = 500

    def __init__(self, message: str, *, code: str | None = None, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class EmptyInputError(SummaryError):
    """No rows to ingest."""
    code = "NO_DATA"
    status_code = 400


class NoMatchingDataError(SummaryError):
    """Filtering by merchants and date range left nothing."""
    code = "NO_MATCHING_DATA"
    status_code = 404


class InvalidParameterError(SummaryError):
    """Rate, date range or merchant selection is unusable."""
    code = "INVALID_PARAMETER"
    status_code = 400


class DatasetNotLoadedError(SummaryError):
    code = "NO_DATASET"
    status_code = 400


class InvalidWorkbookError(SummaryError):
    """The uploaded file could not be read as a spreadsheet."""
    code = "INVALID_EXCEL"
    status_code = 400
