"""Request boundary: validation, handlers and the HTTP server."""

from airperf.api.handlers import RequestHandler
from airperf.api.validation import (
    EmptyValue,
    InvalidValue,
    NumericValue,
    RawValue,
    WeightBalanceRequest,
    parse_performance_request,
    parse_raw_value,
    parse_weight_balance_request,
)

__all__ = [
    "EmptyValue",
    "InvalidValue",
    "NumericValue",
    "RawValue",
    "RequestHandler",
    "WeightBalanceRequest",
    "parse_performance_request",
    "parse_raw_value",
    "parse_weight_balance_request",
]
