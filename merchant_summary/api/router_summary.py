"""
Summary endpoints: generate (JSON + workbook) and one-shot workbook download.
"""
from __future__ import annotations

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse
from starlette.background import BackgroundTask

from merchant_summary import config
from merchant_summary.data.store import DataStore
from merchant_summary.analytics.summary import summarize, parse_rate, parse_date_range, parse_merchants
from merchant_summary.api.dependencies import get_store, http_error
from merchant_summary.api.response_models import GenerateRequest, GenerateResponse
from merchant_summary.errors import SummaryError
from merchant_summary.reports import summary_report

router = APIRouter(prefix="/api", tags=["summary"])

logger = logging.getLogger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _remove(path: Path) -> None:
    path.unlink(missing_ok=True)
    logger.info("Removed downloaded workbook %s", path.name)


@router.post("/generate", response_model=GenerateResponse)
def generate_summary(req: GenerateRequest, store: DataStore = Depends(get_store)):
    """Summarize the live dataset and write the Transactions/Summary workbook."""
    try:
        merchants = parse_merchants(req.selected_merchants)
        rate = parse_rate(req.percentage)
        start, end = parse_date_range(req.start_date, req.end_date)
        result = summarize(store.require(), merchants, start, end, rate)
    except SummaryError as exc:
        raise http_error(exc)

    out_path = summary_report.generate_excel(result, summary_report.new_output_path(config.OUTPUT_FOLDER))
    logger.info("Wrote %s", out_path.name)

    data = summary_report.generate_json(result)
    return GenerateResponse(
        success=True,
        download_url=f"/api/download/{out_path.name}",
        **data,
    )


@router.get("/download/{filename}")
def download_summary(filename: str):
    """Stream a generated workbook once; the file is deleted after it is sent."""
    if not summary_report.OUTPUT_NAME_RE.match(filename):
        raise HTTPException(400, {"error": "INVALID_FILENAME", "message": "Invalid filename requested"})

    path = config.OUTPUT_FOLDER / filename
    if not path.is_file():
        raise HTTPException(404, {
            "error": "FILE_NOT_FOUND",
            "message": "The requested file does not exist or has expired",
        })

    return FileResponse(
        path=str(path),
        filename=filename,
        media_type=XLSX_MEDIA_TYPE,
        background=BackgroundTask(_remove, path),
    )
