from __future__ import annotations

from typing import List, Optional

import pytest

from ar_forecast.domain.entities.ar_model import ARModel
from ar_forecast.domain.repositories.model_repository import IARModelRepository
from ar_forecast.infrastructure.repositories.cached_model_repository import (
    CachedARModelRepository,
)
from tests.conftest import make_model


class _CountingRepository(IARModelRepository):
    def __init__(self, models: List[ARModel]):
        self.models = models
        self.calls = 0

    async def find_by_instrument_and_version(
        self, instrument_id: str, model_version: str
    ) -> Optional[ARModel]:
        self.calls += 1
        for model in self.models:
            if model.key == (instrument_id, model_version):
                return model
        return None

    async def find_active_by_instrument(self, instrument_id: str) -> Optional[ARModel]:
        self.calls += 1
        matching = [m for m in self.models if m.instrument_id == instrument_id]
        return max(matching, key=lambda m: m.model_version) if matching else None

    async def find_all(self) -> List[ARModel]:
        self.calls += 1
        return list(self.models)


@pytest.fixture()
def delegate() -> _CountingRepository:
    return _CountingRepository(
        [
            make_model([0.1], model_version="20240101"),
            make_model([0.2], model_version="20240601"),
            make_model([0.3], instrument_id="MSFT", model_version="legacy"),
        ]
    )


@pytest.mark.asyncio
async def test_repeated_lookups_hit_cache(delegate) -> None:
    cache = CachedARModelRepository(delegate)

    first = await cache.find_by_instrument_and_version("AAPL", "20240101")
    second = await cache.find_by_instrument_and_version("AAPL", "20240101")

    assert first is second
    assert delegate.calls == 1


@pytest.mark.asyncio
async def test_active_lookup_is_cached(delegate) -> None:
    cache = CachedARModelRepository(delegate)

    active = await cache.find_active_by_instrument("AAPL")
    again = await cache.find_active_by_instrument("AAPL")
    by_version = await cache.find_by_instrument_and_version("AAPL", "20240601")

    assert active.model_version == "20240601"
    assert again is active and by_version is active
    assert delegate.calls == 1


@pytest.mark.asyncio
async def test_missing_models_are_not_cached(delegate) -> None:
    cache = CachedARModelRepository(delegate)

    assert await cache.find_active_by_instrument("TSLA") is None
    assert await cache.find_active_by_instrument("TSLA") is None
    assert delegate.calls == 2
    assert cache.size == 0


@pytest.mark.asyncio
async def test_invalidate_by_instrument_and_version(delegate) -> None:
    cache = CachedARModelRepository(delegate)
    await cache.find_all()
    assert cache.size == 3

    assert cache.invalidate("AAPL", "20240101") == 1
    assert cache.invalidate("AAPL") == 1
    assert cache.size == 1

    await cache.find_by_instrument_and_version("AAPL", "20240101")
    assert delegate.calls == 2


@pytest.mark.asyncio
async def test_reload_replaces_cached_models(delegate) -> None:
    cache = CachedARModelRepository(delegate)
    await cache.find_active_by_instrument("AAPL")

    delegate.models = [make_model([0.9], model_version="20250101")]
    models = await cache.reload()

    assert [m.model_version for m in models] == ["20250101"]
    assert cache.size == 1
    assert await cache.find_by_instrument_and_version("AAPL", "20240601") is None
