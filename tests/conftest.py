from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ar_forecast.domain.entities.ar_model import ARCoefficient, ARModel  # noqa: E402
from ar_forecast.domain.entities.price_bar import PriceBar  # noqa: E402

START = datetime(2024, 1, 1, tzinfo=timezone.utc)

SCENARIO_OPENS = [100.0, 102.0, 101.0, 105.0, 107.0]
SCENARIO_CLOSES = [98.0, 100.0, 99.0, 103.0, 104.0]


def make_bar(
    open_price: float, close_price: float, timestamp: datetime, volume: float = 1000.0
) -> PriceBar:
    return PriceBar(
        open_price=open_price,
        high_price=max(open_price, close_price) + 1.0,
        low_price=min(open_price, close_price) - 1.0,
        close_price=close_price,
        volume=volume,
        timestamp=timestamp,
    )


def make_bars(
    opens: Sequence[float],
    closes: Sequence[float],
    start: datetime = START,
    step: timedelta = timedelta(days=1),
) -> List[PriceBar]:
    return [
        make_bar(open_price, close_price, start + step * idx)
        for idx, (open_price, close_price) in enumerate(zip(opens, closes))
    ]


def make_model(
    coefficients: Sequence[float],
    mean_diff_oc: Optional[float] = 0.0,
    instrument_id: str = "AAPL",
    sigma2: float = 0.25,
    model_version: str = "20240101",
) -> ARModel:
    return ARModel(
        instrument_id=instrument_id,
        coefficients=tuple(
            ARCoefficient(lag=idx, value=value)
            for idx, value in enumerate(coefficients, start=1)
        ),
        sigma2=sigma2,
        model_version=model_version,
        mean_diff_oc=mean_diff_oc,
        order=len(coefficients),
    )


def synthetic_bars(count: int, start: datetime = START) -> List[PriceBar]:
    """Deterministic wavy price history with positive prices."""
    opens = [100.0 + (idx % 7) * 0.5 + idx * 0.1 for idx in range(count)]
    closes = [value - 1.0 + (idx % 3) * 0.4 for idx, value in enumerate(opens)]
    return make_bars(opens, closes, start=start)


@pytest.fixture()
def scenario_bars() -> List[PriceBar]:
    return make_bars(SCENARIO_OPENS, SCENARIO_CLOSES)


@pytest.fixture()
def scenario_model() -> ARModel:
    return make_model([-0.5, -0.3, -0.2], mean_diff_oc=2.5)


@pytest.fixture()
def master_data() -> Dict[str, float]:
    return {
        "p": 3,
        "sigma2": 0.04,
        "mean_diff_oc": 0.0125,
        "ar.L1": -0.45,
        "ar.L2": -0.2,
        "ar.L3": 0.05,
    }
