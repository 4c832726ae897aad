"""Error kinds raised by the calculation engines and the request boundary.

Every error carries a stable ``code``, a ``category`` and the HTTP status the
boundary maps it to. Engines raise; only ``airperf.api`` catches.

Typical usage:
    from airperf.core.errors import FuelCapacityExceeded

    if litres > MAX_USABLE_FUEL_LITRES:
        raise FuelCapacityExceeded(f"Required fuel ({litres:.1f}L) exceeds 120L")
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FieldError:
    """A single rejected input field.

    Attributes:
        field: Dotted path of the offending field (e.g., "wind.speed")
        message: Human-readable reason
    """

    field: str
    message: str


class AirPerfError(Exception):
    """Base class for all calculation and validation failures."""

    code = "AIRPERF_ERROR"
    category = "system"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AirPerfError):
    """Raised when request input has a bad shape or an out-of-range value.

    All problems found in one request are reported together.
    """

    code = "VALIDATION_ERROR"
    category = "validation"
    status_code = 400

    def __init__(self, errors: list[FieldError] | str) -> None:
        if isinstance(errors, str):
            errors = [FieldError(field="", message=errors)]
        self.errors = list(errors)
        summary = "; ".join(f"{e.field}: {e.message}" if e.field else e.message for e in self.errors)
        super().__init__(summary or "Invalid input")


class DataUnavailable(AirPerfError):
    """Raised when the performance table has no usable rows for a lookup."""

    code = "DATA_UNAVAILABLE"
    category = "data"
    status_code = 503


class FuelCapacityExceeded(AirPerfError):
    """Raised when required fuel exceeds the usable tank capacity."""

    code = "FUEL_CAPACITY_ERROR"
    category = "fuel"
    status_code = 422


class WeightLimitExceeded(AirPerfError):
    """Raised when takeoff or baggage weight exceeds its structural limit."""

    code = "WEIGHT_LIMIT_ERROR"
    category = "weight"
    status_code = 422


class CGOutOfLimits(AirPerfError):
    """Raised when the center of gravity falls outside the forward/aft envelope."""

    code = "CG_LIMIT_ERROR"
    category = "cg"
    status_code = 422


class InfeasiblePayload(AirPerfError):
    """Raised when a loading scenario cannot satisfy MTOW and fuel needs together."""

    code = "INFEASIBLE_PAYLOAD"
    category = "weight"
    status_code = 422


class CalculationError(AirPerfError):
    """Raised for non-numeric values and unexpected arithmetic failures."""

    code = "CALCULATION_ERROR"
    category = "calculation"
    status_code = 500


def format_error(error: BaseException) -> dict[str, Any]:
    """Render an exception as a response body.

    Args:
        error: Any exception raised while handling a request.

    Returns:
        Dictionary with ``error``, ``code`` and ``category`` keys, plus
        ``fields`` for validation errors. Unknown exceptions are reported
        generically so internal details do not leak.
    """
    if isinstance(error, AirPerfError):
        body: dict[str, Any] = {
            "error": error.message,
            "code": error.code,
            "category": error.category,
        }
        if isinstance(error, ValidationError):
            body["fields"] = {e.field: e.message for e in error.errors if e.field}
        return body

    return {
        "error": "An unknown error occurred",
        "code": "UNKNOWN_ERROR",
        "category": "system",
    }


def status_for(error: BaseException) -> int:
    """HTTP status code for an exception (500 for anything unexpected)."""
    if isinstance(error, AirPerfError):
        return error.status_code
    return 500
