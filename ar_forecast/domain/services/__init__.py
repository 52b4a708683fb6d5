"""Pure domain services of the forecasting core."""

from .data_preparation import (
    calculate_mean_diff_oc,
    dataset_version_for,
    prepare_series,
    sort_price_bars,
)
from .forecast_metrics import (
    build_forecast_metrics,
    calculate_confidence,
    in_sample_mse,
    valid_prediction_ratio,
)
from .forecast_orchestrator import ForecastOrchestrator
from .forecast_pipeline import (
    build_ar_lags,
    predict_differences,
    predict_oc,
    predict_returns,
    run_pipeline,
)
from .model_validator import validate_ar_model

__all__ = [
    "ForecastOrchestrator",
    "build_ar_lags",
    "build_forecast_metrics",
    "calculate_confidence",
    "calculate_mean_diff_oc",
    "dataset_version_for",
    "in_sample_mse",
    "predict_differences",
    "predict_oc",
    "predict_returns",
    "prepare_series",
    "run_pipeline",
    "sort_price_bars",
    "valid_prediction_ratio",
    "validate_ar_model",
]
