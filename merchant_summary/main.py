"""
Merchant Summary: FastAPI app factory with temp-folder lifecycle.
"""
from __future__ import annotations

import logging
import shutil
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from merchant_summary import __version__, config
from merchant_summary.data.store import DataStore
from merchant_summary.logging_setup import configure_logging
from merchant_summary.api.dependencies import set_store
from merchant_summary.api.router_meta import router as meta_router
from merchant_summary.api.router_upload import router as upload_router
from merchant_summary.api.router_summary import router as summary_router

logger = logging.getLogger(__name__)


def _reset_folder(folder: Path) -> None:
    """Create ``folder`` if needed and remove anything left in it."""
    folder.mkdir(parents=True, exist_ok=True)
    for child in folder.iterdir():
        if child.is_dir():
            shutil.rmtree(child, ignore_errors=True)
        else:
            child.unlink(missing_ok=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start with clean upload/output folders and an empty store; clean up on shutdown."""
    configure_logging()
    for folder in (config.UPLOADS_FOLDER, config.OUTPUT_FOLDER):
        _reset_folder(folder)
    logger.info("Upload folder: %s", config.UPLOADS_FOLDER)
    logger.info("Output folder: %s", config.OUTPUT_FOLDER)

    store = DataStore()
    set_store(store)
    logger.info("Merchant Summary ready, upload a workbook to begin")
    yield

    logger.info("Shutting down, removing temporary files")
    store.clear()
    set_store(None)
    for folder in (config.UPLOADS_FOLDER, config.OUTPUT_FOLDER):
        _reset_folder(folder)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Merchant Summary API",
        description="Upload a transaction export, summarize withdrawals per merchant, download the workbook",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        expose_headers=["Content-Disposition"],
    )

    app.include_router(meta_router)
    app.include_router(upload_router)
    app.include_router(summary_router)

    return app


app = create_app()
