"""Domain service helpers for validating AR model master data."""

import math
from typing import List

from ar_forecast.domain.constants import MAX_AR_ORDER
from ar_forecast.domain.entities.ar_model import ARCoefficient, ARModel
from ar_forecast.domain.entities.errors import ModelValidationError


def _validate_lag_sequence(
    coefficients: List[ARCoefficient], order: int, errors: List[str]
) -> None:
    if not coefficients:
        errors.append("Model must have at least one coefficient.")
        return

    if len(coefficients) != order:
        errors.append(
            f"AR order ({order}) must match number of coefficients "
            f"({len(coefficients)})."
        )

    for idx, coefficient in enumerate(coefficients, start=1):
        if coefficient.lag != idx:
            errors.append(f"Expected lag ar.L{idx} but found {coefficient.lag_name}.")
            break


def validate_ar_model(model: ARModel) -> List[ARCoefficient]:
    """Validate an AR model's order, lag coverage and parameters.

    Returns:
        The coefficients whose magnitude is admissible but suspicious.

    Raises:
        ModelValidationError: If one or more validation rules fail.
    """

    errors: List[str] = []

    if not model.instrument_id or not model.instrument_id.strip():
        errors.append("Instrument id must be provided.")
    if not model.model_version or not model.model_version.strip():
        errors.append("Model version must be provided.")
    if not 1 <= model.order <= MAX_AR_ORDER:
        errors.append(f"AR order must be between 1 and {MAX_AR_ORDER}.")

    _validate_lag_sequence(list(model.coefficients), model.order, errors)

    if not math.isfinite(model.sigma2) or model.sigma2 < 0:
        errors.append("Sigma2 must be a finite, non-negative number.")
    if model.mean_diff_oc is not None and not math.isfinite(model.mean_diff_oc):
        errors.append("Mean Diff OC must be finite when provided.")

    if errors:
        raise ModelValidationError(
            "AR model configuration is invalid.", details={"errors": errors}
        )

    return model.suspicious_coefficients
