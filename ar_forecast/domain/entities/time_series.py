"""Domain entities for the working series built by the forecast pipeline."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Optional, Sequence, Tuple


class ForecastStep(str, Enum):
    """Stages of the forecasting process, in execution order."""

    PREPARE_DATA = "prepare_data"
    AR_LAGS = "ar_lags"
    PREDICTED_DIFFERENCE = "predicted_difference"
    PREDICTED_OC = "predicted_oc"
    FINAL_RETURN = "final_return"

    @property
    def description(self) -> str:
        return _STEP_DESCRIPTIONS[self]

    @property
    def number(self) -> int:
        return list(ForecastStep).index(self)


_STEP_DESCRIPTIONS = {
    ForecastStep.PREPARE_DATA: "Prepare data - calculate OC and Diff_OC",
    ForecastStep.AR_LAGS: "AR lag preparation - build autoregressive lag variables",
    ForecastStep.PREDICTED_DIFFERENCE: "Predicted difference - apply AR coefficients",
    ForecastStep.PREDICTED_OC: "Predicted OC - convert differences to levels",
    ForecastStep.FINAL_RETURN: "Final return - expected return ratio",
}


@dataclass(frozen=True, slots=True)
class TimeSeriesPoint:
    """One position of the working series; later fields fill in stage by stage."""

    timestamp: datetime
    open_price: float
    close_price: float
    oc: float
    diff_oc: Optional[float] = None
    demean_diff_oc: Optional[float] = None
    ar_lags: Optional[Tuple[float, ...]] = None
    predicted_diff_oc: Optional[float] = None
    predicted_oc: Optional[float] = None
    predicted_return: Optional[float] = None

    @classmethod
    def initial(
        cls, timestamp: datetime, open_price: float, close_price: float
    ) -> "TimeSeriesPoint":
        return cls(
            timestamp=timestamp,
            open_price=open_price,
            close_price=close_price,
            oc=open_price - close_price,
        )

    def with_differences(
        self, diff_oc: float, demean_diff_oc: float
    ) -> "TimeSeriesPoint":
        return replace(self, diff_oc=diff_oc, demean_diff_oc=demean_diff_oc)

    def with_ar_lags(self, ar_lags: Sequence[float]) -> "TimeSeriesPoint":
        return replace(self, ar_lags=tuple(ar_lags))

    def with_predicted_diff_oc(self, predicted_diff_oc: float) -> "TimeSeriesPoint":
        return replace(self, predicted_diff_oc=predicted_diff_oc)

    def with_predicted_oc(self, predicted_oc: float) -> "TimeSeriesPoint":
        return replace(self, predicted_oc=predicted_oc)

    def with_predicted_return(self, predicted_return: float) -> "TimeSeriesPoint":
        return replace(self, predicted_return=predicted_return)

    @property
    def current_step(self) -> ForecastStep:
        """The furthest stage whose output this point carries."""
        if self.predicted_return is not None:
            return ForecastStep.FINAL_RETURN
        if self.predicted_oc is not None:
            return ForecastStep.PREDICTED_OC
        if self.predicted_diff_oc is not None:
            return ForecastStep.PREDICTED_DIFFERENCE
        if self.ar_lags:
            return ForecastStep.AR_LAGS
        return ForecastStep.PREPARE_DATA

    @property
    def is_complete(self) -> bool:
        return (
            self.diff_oc is not None
            and self.demean_diff_oc is not None
            and bool(self.ar_lags)
            and self.predicted_diff_oc is not None
            and self.predicted_oc is not None
            and self.predicted_return is not None
        )
