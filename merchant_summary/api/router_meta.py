"""
Meta endpoints: health, merchants.
"""
from __future__ import annotations

import time
from datetime import datetime

from fastapi import APIRouter, Depends

from merchant_summary.data.store import DataStore
from merchant_summary.api.dependencies import get_store
from merchant_summary.api.response_models import HealthResponse, MerchantsResponse

router = APIRouter(prefix="/api", tags=["meta"])

_STARTED = time.monotonic()


@router.get("/health", response_model=HealthResponse)
def health(store: DataStore = Depends(get_store)):
    dataset = store.current()
    return HealthResponse(
        status="ok",
        loaded=store.is_loaded,
        source=dataset.original_name if dataset is not None else None,
        uploaded_at=dataset.uploaded_at.isoformat() if dataset is not None else None,
        rows=store.row_count(),
        merchants=len(store.merchants()),
        uptime_seconds=round(time.monotonic() - _STARTED, 1),
        timestamp=datetime.now().isoformat(),
    )


@router.get("/merchants", response_model=MerchantsResponse)
def list_merchants(store: DataStore = Depends(get_store)):
    merchants = store.merchants()
    return MerchantsResponse(merchants=merchants, count=len(merchants))
