from __future__ import annotations

import pytest

from ar_forecast.domain.entities.ar_model import ARCoefficient, ARModel
from ar_forecast.domain.entities.errors import ModelValidationError
from ar_forecast.domain.services.model_validator import validate_ar_model
from tests.conftest import make_model


def test_validate_ar_model_accepts_valid(scenario_model) -> None:
    assert validate_ar_model(scenario_model) == []


def test_validate_ar_model_returns_suspicious_coefficients() -> None:
    model = make_model([1.8, 0.1, -1.9])

    suspicious = validate_ar_model(model)

    assert [c.lag for c in suspicious] == [1, 3]


def test_validate_ar_model_raises_detailed_errors() -> None:
    model = ARModel(
        instrument_id="",
        coefficients=(ARCoefficient(lag=1, value=0.1), ARCoefficient(lag=3, value=0.2)),
        sigma2=-1.0,
        model_version="",
        mean_diff_oc=float("nan"),
        order=3,
    )

    with pytest.raises(ModelValidationError) as exc:
        validate_ar_model(model)

    details = exc.value.details["errors"]
    assert exc.value.code == "invalid_model"
    assert any("Instrument id" in item for item in details)
    assert any("Model version" in item for item in details)
    assert any("must match number of coefficients" in item for item in details)
    assert any("Expected lag ar.L2 but found ar.L3" in item for item in details)
    assert any("Sigma2" in item for item in details)
    assert any("Mean Diff OC" in item for item in details)


@pytest.mark.parametrize("order", [0, 51])
def test_validate_ar_model_rejects_order_out_of_bounds(order) -> None:
    model = ARModel(
        instrument_id="AAPL",
        coefficients=tuple(ARCoefficient(lag=i, value=0.01) for i in range(1, order + 1)),
        sigma2=0.1,
        model_version="legacy",
        mean_diff_oc=0.0,
        order=order,
    )

    with pytest.raises(ModelValidationError) as exc:
        validate_ar_model(model)

    assert any("between 1 and 50" in item for item in exc.value.details["errors"])
