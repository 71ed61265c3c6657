"""
FastAPI dependencies: DataStore singleton and error mapping.
"""
from __future__ import annotations

from fastapi import HTTPException

from merchant_summary.data.store import DataStore
from merchant_summary.errors import SummaryError

# ---------------------------------------------------------------------------
# Global store singleton (set during startup)
# ---------------------------------------------------------------------------
_store: DataStore | None = None


def set_store(store: DataStore | None) -> None:
    global _store
    _store = store


def get_store() -> DataStore:
    if _store is None:
        raise HTTPException(503, "Server not initialized yet")
    return _store


# ---------------------------------------------------------------------------
# Core errors → HTTP
# ---------------------------------------------------------------------------

def http_error(exc: SummaryError) -> HTTPException:
    """Translate a core error into an HTTPException carrying its code and details."""
    return HTTPException(exc.status_code, exc.to_dict())
