"""
Domain Errors

Error taxonomy for the forecasting core. Validation errors are raised before
any calculation starts; integrity errors signal a defect in an earlier
pipeline stage. Neither is retried inside the core.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationError(DomainError):
    """Raised when forecast inputs are missing, inconsistent or insufficient."""

    def __init__(
        self,
        message: str,
        code: str = "invalid_input",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.code = code
        super().__init__(message, details)


class InstrumentMismatchError(ValidationError):
    """Raised when the model belongs to a different instrument than requested."""

    def __init__(self, model_instrument: str, requested_instrument: str):
        message = (
            f"Model instrument ({model_instrument}) does not match "
            f"requested instrument ({requested_instrument})"
        )
        super().__init__(
            message,
            code="instrument_mismatch",
            details={
                "model_instrument": model_instrument,
                "requested_instrument": requested_instrument,
            },
        )


class InsufficientDataError(ValidationError):
    """Raised when there are fewer price bars than the model order requires."""

    def __init__(self, min_required: int, available: int):
        self.min_required = min_required
        self.available = available
        message = (
            f"Insufficient data for forecasting. Need at least {min_required} "
            f"price bars (AR order + 1), but have {available}"
        )
        super().__init__(
            message,
            code="insufficient_data",
            details={"min_required": min_required, "available": available},
        )


class ModelValidationError(ValidationError):
    """Raised when AR model master data violates a validation rule."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="invalid_model", details=details)


class ModelNotFoundError(DomainError):
    """Raised when no AR model is configured for an instrument."""

    def __init__(
        self,
        instrument_id: str,
        model_version: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        message = f"AR model not found for instrument: {instrument_id}"
        if model_version:
            message += f" with version: {model_version}"
        super().__init__(message, details)


class DataIntegrityError(DomainError):
    """Raised when a derived value is missing where preparation guarantees it."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
