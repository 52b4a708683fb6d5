"""
Cached Model Repository - Infrastructure Layer

Keeps loaded AR models in memory, keyed by (instrument, version), in front of
another model repository.
"""

from __future__ import annotations

import threading
from typing import Dict, List, Optional, Tuple

import structlog

from ar_forecast.domain.entities.ar_model import ARModel
from ar_forecast.domain.repositories.model_repository import IARModelRepository

logger = structlog.get_logger(__name__)


class CachedARModelRepository(IARModelRepository):
    """Read-through cache over an AR model repository."""

    def __init__(self, delegate: IARModelRepository):
        self.delegate = delegate
        self._lock = threading.Lock()
        self._models: Dict[Tuple[str, str], ARModel] = {}
        self._active: Dict[str, str] = {}

    def _store(self, model: ARModel, active: bool = False) -> None:
        with self._lock:
            self._models[model.key] = model
            if active:
                self._active[model.instrument_id] = model.model_version

    async def find_by_instrument_and_version(
        self, instrument_id: str, model_version: str
    ) -> Optional[ARModel]:
        with self._lock:
            cached = self._models.get((instrument_id, model_version))
        if cached is not None:
            logger.debug(
                "model_cache.hit", instrument_id=instrument_id, model_version=model_version
            )
            return cached

        logger.debug(
            "model_cache.miss", instrument_id=instrument_id, model_version=model_version
        )
        model = await self.delegate.find_by_instrument_and_version(
            instrument_id, model_version
        )
        if model is not None:
            self._store(model)
        return model

    async def find_active_by_instrument(self, instrument_id: str) -> Optional[ARModel]:
        with self._lock:
            version = self._active.get(instrument_id)
            cached = self._models.get((instrument_id, version)) if version else None
        if cached is not None:
            logger.debug("model_cache.hit", instrument_id=instrument_id, active=True)
            return cached

        logger.debug("model_cache.miss", instrument_id=instrument_id, active=True)
        model = await self.delegate.find_active_by_instrument(instrument_id)
        if model is not None:
            self._store(model, active=True)
        return model

    async def find_all(self) -> List[ARModel]:
        models = await self.delegate.find_all()
        for model in models:
            self._store(model)
        return models

    def invalidate(
        self, instrument_id: Optional[str] = None, model_version: Optional[str] = None
    ) -> int:
        """
        Drop cached models.

        With no arguments the whole cache is cleared; with an instrument only
        its versions are dropped; with both only that version.

        Returns:
            Number of cached models removed.
        """
        with self._lock:
            if instrument_id is None:
                removed = len(self._models)
                self._models.clear()
                self._active.clear()
            else:
                keys = [
                    key
                    for key in self._models
                    if key[0] == instrument_id
                    and (model_version is None or key[1] == model_version)
                ]
                for key in keys:
                    del self._models[key]
                removed = len(keys)
                if model_version is None or self._active.get(instrument_id) == model_version:
                    self._active.pop(instrument_id, None)

        logger.info(
            "model_cache.invalidated",
            instrument_id=instrument_id,
            model_version=model_version,
            removed=removed,
        )
        return removed

    async def reload(self) -> List[ARModel]:
        """Clear the cache and load every model from the underlying repository."""
        self.invalidate()
        models = await self.find_all()
        logger.info("model_cache.reloaded", models=len(models))
        return models

    @property
    def size(self) -> int:
        with self._lock:
            return len(self._models)
