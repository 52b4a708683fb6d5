"""In-memory storage of calculated Mean_Diff_OC values."""

from __future__ import annotations

import threading
from decimal import Decimal
from typing import Dict, Optional, Tuple

from ar_forecast.domain.repositories.mean_diff_oc_repository import (
    IMeanDiffOCRepository,
)


class InMemoryMeanDiffOCRepository(IMeanDiffOCRepository):
    """Process-local Mean_Diff_OC store keyed by instrument and dataset version."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._values: Dict[Tuple[str, str], Decimal] = {}

    async def find(self, instrument_id: str, dataset_version: str) -> Optional[Decimal]:
        with self._lock:
            return self._values.get((instrument_id, dataset_version))

    async def save(
        self, instrument_id: str, dataset_version: str, value: Decimal
    ) -> Decimal:
        with self._lock:
            self._values[(instrument_id, dataset_version)] = value
        return value
