from __future__ import annotations

from decimal import Decimal

import pytest

from ar_forecast.infrastructure.repositories.mean_diff_oc_repository import (
    InMemoryMeanDiffOCRepository,
)


@pytest.mark.asyncio
async def test_save_and_find_by_dataset_version() -> None:
    repository = InMemoryMeanDiffOCRepository()

    assert await repository.find("AAPL", "v1") is None

    stored = await repository.save("AAPL", "v1", Decimal("0.25000000"))

    assert stored == Decimal("0.25000000")
    assert await repository.find("AAPL", "v1") == Decimal("0.25000000")
    assert await repository.find("AAPL", "v2") is None
    assert await repository.find("MSFT", "v1") is None
