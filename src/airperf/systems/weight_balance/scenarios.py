"""Loading scenarios.

A scenario rewrites the fuel and baggage of a loading under one constraint
policy, always starting from the loading as entered:

- standard: baggage as entered, fuel at the minimum dip less taxi
- maxFuel: no baggage, as much fuel as MTOW and the tanks allow
- minFuel: minimum fuel, remaining allowance filled with baggage up to 20 kg
- fixedBaggage: baggage as entered, remaining allowance filled with fuel
- performanceLimited: fuel, then baggage, cut to keep TOW within 95% of MTOW
"""

from dataclasses import replace

from airperf.aircraft.constants import (
    MAX_BAGGAGE_WEIGHT,
    MAX_TAKEOFF_WEIGHT,
    MAX_USABLE_FUEL_WEIGHT,
    PERFORMANCE_LIMITED_FRACTION,
)
from airperf.core.errors import InfeasiblePayload
from airperf.core.logging_system import get_logger
from airperf.core.numeric import require_number, round2
from airperf.systems.weight_balance.fuel_planner import FuelPlanner
from airperf.systems.weight_balance.weight_balance_system import Scenario, WeightBalanceInputs

logger = get_logger(__name__)


class ScenarioResolver:
    """Adjust fuel and baggage for a named scenario.

    Examples:
        >>> adjusted = ScenarioResolver().apply(inputs, Scenario.MAX_FUEL)
        >>> adjusted.baggage_weight
        0.0
    """

    def __init__(self, planner: FuelPlanner | None = None) -> None:
        self.planner = planner or FuelPlanner()

    def apply(self, inputs: WeightBalanceInputs, scenario: Scenario | None = None) -> WeightBalanceInputs:
        """Recompute fuel and baggage for a scenario.

        Args:
            inputs: Loading as entered
            scenario: Policy to apply; defaults to ``inputs.scenario``

        Returns:
            New inputs with ``fuel_mass``, ``baggage_weight`` and ``scenario`` set.

        Raises:
            InfeasiblePayload: If the policy cannot meet MTOW and fuel needs together.
            FuelCapacityExceeded: If the planned legs need more than 120 L.
        """
        scenario = scenario or inputs.scenario
        handlers = {
            Scenario.STANDARD: self._standard,
            Scenario.MAX_FUEL: self._max_fuel,
            Scenario.MIN_FUEL: self._min_fuel,
            Scenario.FIXED_BAGGAGE: self._fixed_baggage,
            Scenario.PERFORMANCE_LIMITED: self._performance_limited,
        }
        fuel, baggage = handlers[scenario](inputs)

        logger.debug("Scenario %s: fuel=%.2f kg baggage=%.2f kg", scenario.value, fuel, baggage)
        return replace(inputs, fuel_mass=fuel, baggage_weight=baggage, scenario=scenario)

    def _occupied_weight(self, inputs: WeightBalanceInputs) -> float:
        empty_weight = require_number(inputs.empty_weight, "emptyWeight")
        pilot_weight = require_number(inputs.pilot_weight, "pilotWeight")
        passenger_weight = require_number(inputs.passenger_weight, "passengerWeight")
        return empty_weight + pilot_weight + passenger_weight

    def _standard(self, inputs: WeightBalanceInputs) -> tuple[float, float]:
        baggage = require_number(inputs.baggage_weight, "baggageWeight")
        return self.planner.flight_fuel_weight(inputs.flight_time), baggage

    def _max_fuel(self, inputs: WeightBalanceInputs) -> tuple[float, float]:
        allowance = MAX_TAKEOFF_WEIGHT - self._occupied_weight(inputs)
        if allowance <= 0:
            raise InfeasiblePayload(
                f"No payload allowance left for fuel: empty weight and occupants exceed "
                f"{MAX_TAKEOFF_WEIGHT:.0f} kg by {-allowance:.1f} kg"
            )

        fuel = round2(min(MAX_USABLE_FUEL_WEIGHT, allowance))
        required = self.planner.flight_fuel_weight(inputs.flight_time)
        if fuel < required:
            raise InfeasiblePayload(
                f"Maximum fuel ({fuel:.1f} kg) is less than the fuel required for the flight "
                f"({required:.1f} kg)"
            )
        return fuel, 0.0

    def _min_fuel(self, inputs: WeightBalanceInputs) -> tuple[float, float]:
        fuel = self.planner.flight_fuel_weight(inputs.flight_time)
        remaining = MAX_TAKEOFF_WEIGHT - (self._occupied_weight(inputs) + fuel)
        baggage = round2(min(MAX_BAGGAGE_WEIGHT, max(0.0, remaining)))
        return fuel, baggage

    def _fixed_baggage(self, inputs: WeightBalanceInputs) -> tuple[float, float]:
        baggage = require_number(inputs.baggage_weight, "baggageWeight")
        remaining = MAX_TAKEOFF_WEIGHT - self._occupied_weight(inputs) - baggage
        # Fuel is bounded by the tanks as well as by MTOW.
        fuel = round2(min(MAX_USABLE_FUEL_WEIGHT, max(0.0, remaining)))
        return fuel, baggage

    def _performance_limited(self, inputs: WeightBalanceInputs) -> tuple[float, float]:
        baggage = require_number(inputs.baggage_weight, "baggageWeight")
        if inputs.fuel_mass is not None and inputs.fuel_mass > 0:
            fuel = require_number(inputs.fuel_mass, "fuelMass")
        else:
            fuel = self.planner.flight_fuel_weight(inputs.flight_time)

        limit = MAX_TAKEOFF_WEIGHT * PERFORMANCE_LIMITED_FRACTION
        excess = self._occupied_weight(inputs) + baggage + fuel - limit
        if excess > 0:
            fuel_cut = min(fuel, excess)
            fuel -= fuel_cut
            excess -= fuel_cut
        if excess > 0:
            baggage = max(0.0, baggage - excess)
        return round2(fuel), round2(baggage)
