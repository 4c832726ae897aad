"""Numeric guards for values arriving from untyped boundaries."""

import math
from typing import Any

from airperf.core.errors import CalculationError


def require_number(value: Any, name: str) -> float:
    """Return ``value`` as a finite float or raise.

    Args:
        value: Candidate number (int or float).
        name: Field name used in the error message.

    Returns:
        The value as float.

    Raises:
        CalculationError: If the value is None, a bool, not numeric, NaN or infinite.
    """
    if value is None:
        raise CalculationError(f"Required numeric value is missing: {name}")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise CalculationError(f"Invalid number value for {name}: {value!r}")
    if not math.isfinite(value):
        raise CalculationError(f"Non-finite value for {name}: {value!r}")
    return float(value)


def round2(value: float) -> float:
    """Round to two decimals, the precision used for reported distances and weights."""
    return round(value, 2)
