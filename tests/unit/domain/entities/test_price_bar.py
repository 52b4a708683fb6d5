from __future__ import annotations

from datetime import datetime, timezone

import pytest

from ar_forecast.domain.entities.errors import ValidationError
from ar_forecast.domain.entities.price_bar import PriceBar

TS = datetime(2024, 1, 2, tzinfo=timezone.utc)


def _bar(**overrides) -> PriceBar:
    values = dict(
        open_price=100.0,
        high_price=105.0,
        low_price=95.0,
        close_price=98.0,
        volume=1200.0,
        timestamp=TS,
    )
    values.update(overrides)
    return PriceBar(**values)


def test_price_bar_derived_properties() -> None:
    bar = _bar()

    assert bar.oc == pytest.approx(2.0)
    assert bar.price_range == pytest.approx(10.0)
    assert bar.is_bearish is True
    assert bar.is_bullish is False


@pytest.mark.parametrize(
    "overrides",
    [
        {"open_price": 0.0},
        {"close_price": -1.0},
        {"volume": -5.0},
        {"volume": float("nan")},
        {"volume": float("inf")},
        {"open_price": float("inf"), "high_price": float("inf")},
        {"close_price": float("nan")},
        {"high_price": float("inf")},
        {"timestamp": None},
        {"high_price": 99.0},
        {"low_price": 99.0},
    ],
)
def test_price_bar_rejects_invalid_values(overrides) -> None:
    with pytest.raises(ValidationError) as exc:
        _bar(**overrides)

    assert exc.value.code == "invalid_price_bar"


def test_price_bar_is_immutable() -> None:
    bar = _bar()

    with pytest.raises(AttributeError):
        bar.open_price = 1.0  # type: ignore[misc]
