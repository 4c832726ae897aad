"""Request handlers shared by the HTTP server and the command line.

Each handler takes a decoded JSON body and returns ``(body, status)``. Engine
errors are caught here and only here, and rendered with ``format_error``.
"""

from typing import Any

from airperf.api.validation import parse_performance_request, parse_weight_balance_request
from airperf.core.errors import AirPerfError, format_error, status_for
from airperf.core.logging_system import get_logger
from airperf.systems.performance.performance_calculator import PerformanceCalculator
from airperf.systems.weight_balance.scenarios import ScenarioResolver
from airperf.systems.weight_balance.weight_balance_system import WeightBalanceSolver

logger = get_logger(__name__)


class RequestHandler:
    """Dispatch validated requests to the calculation engines.

    Examples:
        >>> handler = RequestHandler(PerformanceCalculator(lookup))
        >>> body, status = handler.performance({"departure": {...}, ...})
    """

    def __init__(
        self,
        calculator: PerformanceCalculator,
        solver: WeightBalanceSolver | None = None,
        resolver: ScenarioResolver | None = None,
    ) -> None:
        self.calculator = calculator
        self.solver = solver or WeightBalanceSolver()
        self.resolver = resolver or ScenarioResolver(self.solver.planner)

    def performance(self, payload: Any) -> tuple[dict[str, Any], int]:
        """Handle a takeoff or landing performance request."""
        try:
            inputs = parse_performance_request(payload)
            result = self.calculator.calculate(inputs)
        except Exception as e:
            return self._error_response("performance", e)
        return result.to_dict(), 200

    def weight_balance(self, payload: Any) -> tuple[dict[str, Any], int]:
        """Handle a weight and balance request, applying its scenario first."""
        try:
            request = parse_weight_balance_request(payload)
            inputs = request.inputs
            if request.scenario is not None:
                inputs = self.resolver.apply(inputs, request.scenario)
            result = self.solver.solve(inputs, strict=request.strict, actual_dip=request.actual_dip)
        except Exception as e:
            return self._error_response("weight-balance", e)
        return result.to_dict(), 200

    @staticmethod
    def _error_response(endpoint: str, error: Exception) -> tuple[dict[str, Any], int]:
        status = status_for(error)
        if isinstance(error, AirPerfError) and status < 500:
            logger.warning("Rejected %s request: %s", endpoint, error.message)
        elif isinstance(error, AirPerfError):
            logger.error("Failed %s request: %s", endpoint, error.message)
        else:
            logger.exception("Unexpected error in %s request", endpoint)
        return format_error(error), status
