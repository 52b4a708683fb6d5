"""
Domain Entities - AR Model

An autoregressive model applied to the demeaned OC-difference series. The
model is master data: coefficients and the demeaning constant are supplied,
never estimated here. Instances are immutable so a single model can be shared
across concurrent forecasts; usage tracking lives in ``ModelUsageLog``.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ar_forecast.domain.constants import (
    AR_LAG_PREFIX,
    COEFFICIENT_WARNING_THRESHOLD,
    DEFAULT_AR_ORDER,
    MAX_VALID_COEFFICIENT,
    MIN_VALID_COEFFICIENT,
)

from .errors import ModelValidationError

_LAG_NAME_PATTERN = re.compile(r"^ar\.L(\d+)$")


@dataclass(frozen=True, slots=True)
class ARCoefficient:
    """Coefficient of one AR lag, bounded to [-2.0, 2.0]."""

    lag: int
    value: float

    def __post_init__(self) -> None:
        if self.lag < 1:
            raise ModelValidationError(f"Lag number must be >= 1, got {self.lag}")
        if self.value is None or not math.isfinite(self.value):
            raise ModelValidationError(f"Coefficient {self.lag_name} must be finite")
        if not MIN_VALID_COEFFICIENT <= self.value <= MAX_VALID_COEFFICIENT:
            raise ModelValidationError(
                f"Coefficient {self.lag_name} = {self.value} is outside "
                f"[{MIN_VALID_COEFFICIENT}, {MAX_VALID_COEFFICIENT}]"
            )

    @classmethod
    def from_lag_name(cls, lag_name: str, value: Any) -> "ARCoefficient":
        """Build a coefficient from a master-data key such as ``ar.L3``."""
        match = _LAG_NAME_PATTERN.match(lag_name.strip())
        if not match:
            raise ModelValidationError(f"Invalid lag name format: {lag_name}")
        try:
            numeric = float(value)
        except (TypeError, ValueError) as exc:
            raise ModelValidationError(
                f"Coefficient {lag_name} is not numeric: {value!r}"
            ) from exc
        return cls(lag=int(match.group(1)), value=numeric)

    @property
    def lag_name(self) -> str:
        return f"{AR_LAG_PREFIX}{self.lag}"

    @property
    def is_suspicious(self) -> bool:
        """Large but admissible coefficients are flagged for review."""
        return abs(self.value) > COEFFICIENT_WARNING_THRESHOLD


@dataclass(frozen=True, slots=True)
class ARModel:
    """Represents an AR(p) model for one instrument and master-data version."""

    instrument_id: str
    coefficients: Tuple[ARCoefficient, ...]
    sigma2: float
    model_version: str
    mean_diff_oc: Optional[float] = None
    order: int = DEFAULT_AR_ORDER
    metadata: Mapping[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_master_data(
        cls, instrument_id: str, master_data: Mapping[str, Any], model_version: str
    ) -> "ARModel":
        """
        Build a model from a master-data mapping.

        The mapping holds ``p``, ``sigma2``, an optional ``mean_diff_oc`` and
        one ``ar.L<k>`` entry per lag.

        Raises:
            ModelValidationError: If required keys are missing or malformed.
        """
        errors: List[str] = []
        for key in ("p", "sigma2"):
            if key not in master_data:
                errors.append(f"Master data missing required field: {key}")

        lag_items = [
            (key, value)
            for key, value in master_data.items()
            if isinstance(key, str) and key.startswith(AR_LAG_PREFIX)
        ]
        if not lag_items:
            errors.append("Master data missing AR coefficients (ar.L1, ar.L2, ...)")
        if errors:
            raise ModelValidationError(
                "AR model master data is invalid.", details={"errors": errors}
            )

        coefficients = sorted(
            (ARCoefficient.from_lag_name(key, value) for key, value in lag_items),
            key=lambda coefficient: coefficient.lag,
        )
        mean_diff_oc = master_data.get("mean_diff_oc")
        try:
            order = int(master_data["p"])
            sigma2 = float(master_data["sigma2"])
            mean = float(mean_diff_oc) if mean_diff_oc is not None else None
        except (TypeError, ValueError) as exc:
            raise ModelValidationError(
                "AR model master data has non-numeric parameters."
            ) from exc

        extras: Dict[str, Any] = {
            key: value
            for key, value in master_data.items()
            if key not in ("p", "sigma2", "mean_diff_oc")
            and not (isinstance(key, str) and key.startswith(AR_LAG_PREFIX))
        }
        return cls(
            instrument_id=instrument_id,
            coefficients=tuple(coefficients),
            sigma2=sigma2,
            model_version=model_version,
            mean_diff_oc=mean,
            order=order,
            metadata=extras,
        )

    @property
    def key(self) -> Tuple[str, str]:
        return (self.instrument_id, self.model_version)

    @property
    def coefficient_values(self) -> Tuple[float, ...]:
        """Coefficient values ordered by lag 1..p."""
        return tuple(coefficient.value for coefficient in self.coefficients)

    @property
    def requires_data_points(self) -> int:
        """Minimum number of price bars needed for one prediction."""
        return self.order + 1

    @property
    def suspicious_coefficients(self) -> List[ARCoefficient]:
        return [c for c in self.coefficients if c.is_suspicious]

    def coefficient(self, lag: int) -> ARCoefficient:
        """Return the coefficient for a 1-based lag number."""
        if lag < 1 or lag > len(self.coefficients):
            raise ValueError(
                f"Lag number {lag} is out of range [1, {len(self.coefficients)}]"
            )
        return self.coefficients[lag - 1]

    def with_mean_diff_oc(self, mean_diff_oc: float) -> "ARModel":
        """Return a copy bound to a demeaning constant derived from history."""
        return replace(self, mean_diff_oc=float(mean_diff_oc))

    def __str__(self) -> str:
        return (
            f"ARModel[instrument={self.instrument_id}, order={self.order}, "
            f"version={self.model_version}, coefficients={len(self.coefficients)}]"
        )
