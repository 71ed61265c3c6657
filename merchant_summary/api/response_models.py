"""
Pydantic request/response schemas for the API.
"""
from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    status: str
    loaded: bool
    source: Optional[str] = None
    uploaded_at: Optional[str] = None
    rows: int
    merchants: int
    uptime_seconds: float
    timestamp: str


class MerchantsResponse(BaseModel):
    merchants: list[str]
    count: int


class UploadResponse(BaseModel):
    success: bool
    merchants: list[str]
    count: int
    first_few: list[dict[str, Any]]


class GenerateRequest(BaseModel):
    """Body of POST /api/generate (camelCase keys, as the browser client sends them)."""
    model_config = ConfigDict(populate_by_name=True)

    selected_merchants: Optional[list[str]] = Field(None, alias="selectedMerchants")
    percentage: Optional[Union[float, str]] = None
    start_date: Optional[str] = Field(None, alias="startDate")
    end_date: Optional[str] = Field(None, alias="endDate")


class GenerateStats(BaseModel):
    transaction_count: int
    merchant_count: int


class GenerateResponse(BaseModel):
    success: bool
    summary: list[dict[str, Any]]
    download_url: str
    date_range: str
    rate: float
    stats: GenerateStats
