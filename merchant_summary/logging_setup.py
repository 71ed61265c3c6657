"""Centralized logging configuration for the ``merchant_summary`` package.

Entry points (the FastAPI lifespan, the CLI) call ``configure_logging()`` once.
Library modules only do ``logging.getLogger(__name__)`` and never attach
handlers of their own.
"""
from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "merchant_summary"
_CONFIGURED = False

logging.getLogger(_PKG_LOGGER_NAME).addHandler(logging.NullHandler())


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
    env_val = os.getenv("MERCHANT_SUMMARY_LOG_LEVEL")
    if env_val and level is None:
        return _parse_level(env_val)
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] = sys.stderr,
) -> None:
    """Attach a single stream handler to the package logger (idempotent).

    ``level`` defaults to ``MERCHANT_SUMMARY_LOG_LEVEL`` when set, else INFO.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    numeric = _parse_level(level)
    handler = logging.StreamHandler(stream)
    handler.setLevel(numeric)
    handler.setFormatter(logging.Formatter(fmt or "%(asctime)s %(name)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(numeric)
    logger.propagate = False

    _CONFIGURED = True


def reset_logging() -> None:
    """Drop configured handlers. Mainly for tests."""
    global _CONFIGURED
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    _CONFIGURED = False
