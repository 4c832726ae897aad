"""Weight and balance for the aircraft.

This module provides minimum fuel planning, the load sheet with takeoff and
landing weights and center of gravity, and the loading scenarios that
rebalance fuel against baggage.
"""

from airperf.systems.weight_balance.fuel_planner import FlightTime, FuelPlanner, FuelQuantity
from airperf.systems.weight_balance.scenarios import ScenarioResolver
from airperf.systems.weight_balance.station import LineItem
from airperf.systems.weight_balance.weight_balance_system import (
    FuelState,
    MinimumFuel,
    Scenario,
    WeightBalanceInputs,
    WeightBalanceResult,
    WeightBalanceSolver,
    is_cg_within_limits,
)

__all__ = [
    "FlightTime",
    "FuelPlanner",
    "FuelQuantity",
    "FuelState",
    "LineItem",
    "MinimumFuel",
    "Scenario",
    "ScenarioResolver",
    "WeightBalanceInputs",
    "WeightBalanceResult",
    "WeightBalanceSolver",
    "is_cg_within_limits",
]
