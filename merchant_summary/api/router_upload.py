"""
Upload endpoint: read the first sheet of an .xlsx/.xls/.csv file and make it the live dataset.
"""
from __future__ import annotations

import logging
import uuid
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, UploadFile, File

from merchant_summary import config
from merchant_summary.data.ingest import ingest_rows
from merchant_summary.data.loader import read_raw_rows
from merchant_summary.data.store import DataStore
from merchant_summary.analytics.common import sanitize_for_json
from merchant_summary.api.dependencies import get_store, http_error
from merchant_summary.api.response_models import UploadResponse
from merchant_summary.errors import SummaryError

router = APIRouter(prefix="/api", tags=["upload"])

logger = logging.getLogger(__name__)


@router.post("/upload", response_model=UploadResponse)
async def upload_file(file: UploadFile = File(...), store: DataStore = Depends(get_store)):
    """Upload a spreadsheet; replaces the current dataset and returns its merchants."""
    if not file.filename:
        raise HTTPException(400, {"error": "NO_FILE", "message": "No file was uploaded"})

    suffix = Path(file.filename).suffix.lower()
    if suffix not in config.ALLOWED_EXTENSIONS:
        raise HTTPException(400, {
            "error": "INVALID_FILE_TYPE",
            "message": f"Only {', '.join(sorted(config.ALLOWED_EXTENSIONS))} files are accepted (got '{file.filename}')",
        })

    content = await file.read()
    if len(content) > config.MAX_UPLOAD_BYTES:
        raise HTTPException(413, {
            "error": "FILE_TOO_LARGE",
            "message": f"File exceeds the {config.MAX_UPLOAD_BYTES // (1024 * 1024)} MB limit",
        })

    config.UPLOADS_FOLDER.mkdir(parents=True, exist_ok=True)
    dest = config.UPLOADS_FOLDER / f"{uuid.uuid4().hex}{suffix}"
    dest.write_bytes(content)
    try:
        rows = read_raw_rows(dest)
        dataset = ingest_rows(rows, original_name=file.filename)
    except SummaryError as exc:
        logger.warning("Upload of %s rejected: %s", file.filename, exc)
        raise http_error(exc)
    finally:
        dest.unlink(missing_ok=True)

    store.replace(dataset)
    return UploadResponse(
        success=True,
        merchants=list(dataset.merchants),
        count=len(dataset),
        first_few=sanitize_for_json([dict(r.fields) for r in dataset.records[:3]]),
    )
