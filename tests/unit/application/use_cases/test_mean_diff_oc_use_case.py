from __future__ import annotations

from decimal import Decimal
from typing import Dict, Optional, Tuple

import pytest

from ar_forecast.application.use_cases.mean_diff_oc_use_case import (
    CalculateMeanDiffOCUseCase,
)
from ar_forecast.domain.entities.errors import ValidationError
from ar_forecast.domain.repositories.mean_diff_oc_repository import (
    IMeanDiffOCRepository,
)


class _StubMeanRepository(IMeanDiffOCRepository):
    def __init__(self) -> None:
        self.values: Dict[Tuple[str, str], Decimal] = {}
        self.saves = 0

    async def find(self, instrument_id: str, dataset_version: str) -> Optional[Decimal]:
        return self.values.get((instrument_id, dataset_version))

    async def save(
        self, instrument_id: str, dataset_version: str, value: Decimal
    ) -> Decimal:
        self.saves += 1
        self.values[(instrument_id, dataset_version)] = value
        return value


@pytest.mark.asyncio
async def test_execute_calculates_and_stores_value(scenario_bars) -> None:
    repository = _StubMeanRepository()
    use_case = CalculateMeanDiffOCUseCase(repository)

    value = await use_case.execute("AAPL", list(reversed(scenario_bars)))

    assert value == Decimal("0.25000000")
    assert repository.saves == 1
    (instrument, version), stored = next(iter(repository.values.items()))
    assert instrument == "AAPL"
    assert version.startswith("v1.0.0:")
    assert stored == value


@pytest.mark.asyncio
async def test_execute_reuses_stored_value(scenario_bars) -> None:
    repository = _StubMeanRepository()
    use_case = CalculateMeanDiffOCUseCase(repository)

    first = await use_case.execute("AAPL", scenario_bars)
    second = await use_case.execute("AAPL", scenario_bars)

    assert first == second
    assert repository.saves == 1


@pytest.mark.asyncio
async def test_execute_rejects_empty_price_data() -> None:
    use_case = CalculateMeanDiffOCUseCase(_StubMeanRepository())

    with pytest.raises(ValidationError):
        await use_case.execute("AAPL", [])
