"""
DataStore: owns the single live Dataset for the running service.

Uploads build a complete Dataset first and then swap it in, so concurrent
summary requests see either the previous dataset or the new one, never a
partially populated one.
"""
from __future__ import annotations

import logging
import threading
from typing import Optional

from merchant_summary.data.schemas import Dataset
from merchant_summary.errors import DatasetNotLoadedError

logger = logging.getLogger(__name__)


class DataStore:
    """Holder for the current upload with atomic replace."""

    def __init__(self) -> None:
        self._dataset: Optional[Dataset] = None
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Replace / read
    # ------------------------------------------------------------------

    def replace(self, dataset: Dataset) -> Dataset:
        """Make ``dataset`` the live one. Returns it for chaining."""
        with self._lock:
            self._dataset = dataset
        logger.info(
            "Dataset replaced: %d records, %d merchants (%s)",
            len(dataset), len(dataset.merchants), dataset.original_name or "unnamed",
        )
        return dataset

    def current(self) -> Optional[Dataset]:
        with self._lock:
            return self._dataset

    def require(self) -> Dataset:
        """Current dataset, or DatasetNotLoadedError when nothing was uploaded."""
        dataset = self.current()
        if dataset is None:
            raise DatasetNotLoadedError("No data available. Please upload a file first.")
        return dataset

    def clear(self) -> None:
        with self._lock:
            self._dataset = None

    @property
    def is_loaded(self) -> bool:
        return self.current() is not None

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def row_count(self) -> int:
        dataset = self.current()
        return len(dataset) if dataset is not None else 0

    def merchants(self) -> list[str]:
        dataset = self.current()
        return list(dataset.merchants) if dataset is not None else []
