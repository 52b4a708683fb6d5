"""Usage tracking for AR models, kept apart from the immutable model value."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True, slots=True)
class ModelUsageEvent:
    """Records that a model version produced a successful forecast."""

    instrument_id: str
    model_version: str
    used_at: datetime


class ModelUsageLog:
    """
    Append-only, thread-safe log of model usage events.

    Forecasts running in parallel threads share one log; every write happens
    under a lock, and readers get snapshots.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._events: List[ModelUsageEvent] = []
        self._last_used: Dict[Tuple[str, str], datetime] = {}

    def record(
        self, instrument_id: str, model_version: str, used_at: datetime
    ) -> ModelUsageEvent:
        event = ModelUsageEvent(
            instrument_id=instrument_id, model_version=model_version, used_at=used_at
        )
        key = (instrument_id, model_version)
        with self._lock:
            self._events.append(event)
            previous = self._last_used.get(key)
            if previous is None or used_at > previous:
                self._last_used[key] = used_at
        return event

    def last_used_at(
        self, instrument_id: str, model_version: str
    ) -> Optional[datetime]:
        with self._lock:
            return self._last_used.get((instrument_id, model_version))

    def usage_count(self, instrument_id: str, model_version: str) -> int:
        with self._lock:
            return sum(
                1
                for event in self._events
                if event.instrument_id == instrument_id
                and event.model_version == model_version
            )

    def events(self) -> List[ModelUsageEvent]:
        with self._lock:
            return list(self._events)
