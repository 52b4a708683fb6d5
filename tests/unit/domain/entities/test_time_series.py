from __future__ import annotations

from datetime import datetime, timezone

from ar_forecast.domain.entities.time_series import ForecastStep, TimeSeriesPoint

TS = datetime(2024, 1, 2, tzinfo=timezone.utc)


def test_initial_point_computes_oc() -> None:
    point = TimeSeriesPoint.initial(TS, 101.5, 100.0)

    assert point.oc == 1.5
    assert point.diff_oc is None
    assert point.current_step == ForecastStep.PREPARE_DATA
    assert point.is_complete is False


def test_point_progresses_through_steps_without_mutation() -> None:
    initial = TimeSeriesPoint.initial(TS, 101.0, 100.0)

    lagged = initial.with_differences(0.5, 0.25).with_ar_lags([0.1, 0.2])
    predicted = lagged.with_predicted_diff_oc(0.3)
    level = predicted.with_predicted_oc(1.3)
    final = level.with_predicted_return(1.3 / 101.0)

    assert initial.ar_lags is None
    assert lagged.ar_lags == (0.1, 0.2)
    assert lagged.current_step == ForecastStep.AR_LAGS
    assert predicted.current_step == ForecastStep.PREDICTED_DIFFERENCE
    assert level.current_step == ForecastStep.PREDICTED_OC
    assert final.current_step == ForecastStep.FINAL_RETURN
    assert final.is_complete is True


def test_forecast_step_order_and_descriptions() -> None:
    assert [step.number for step in ForecastStep] == [0, 1, 2, 3, 4]
    assert ForecastStep.AR_LAGS.description.startswith("AR lag preparation")
    assert ForecastStep("final_return") is ForecastStep.FINAL_RETURN
