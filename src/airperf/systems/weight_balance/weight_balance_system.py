"""Weight and balance calculation.

This module builds the load sheet for one loading: fuel state, per-station
weights and moments, takeoff and landing weights, center of gravity and the
limit check.

Limit violations are reported in two ways. By default they are an expected
outcome and surface as ``is_within_limits=False`` on a complete result. With
``strict=True`` the same violations raise ``WeightLimitExceeded`` or
``CGOutOfLimits`` instead.
"""

from dataclasses import dataclass
from enum import Enum

from airperf.aircraft.constants import (
    BAGGAGE_ARM,
    CG_AFT,
    CG_FORWARD,
    EMPTY_WEIGHT_ARM,
    FUEL_ARM,
    MAX_BAGGAGE_WEIGHT,
    MAX_TAKEOFF_WEIGHT,
    PILOT_PASSENGER_ARM,
)
from airperf.core.errors import CalculationError, CGOutOfLimits, WeightLimitExceeded
from airperf.core.logging_system import get_logger
from airperf.core.numeric import require_number, round2
from airperf.systems.weight_balance import station
from airperf.systems.weight_balance.fuel_planner import FlightTime, FuelPlanner, FuelQuantity
from airperf.systems.weight_balance.station import LineItem

logger = get_logger(__name__)


class Scenario(Enum):
    """Loading policy applied before solving."""

    STANDARD = "standard"
    MAX_FUEL = "maxFuel"
    MIN_FUEL = "minFuel"
    FIXED_BAGGAGE = "fixedBaggage"
    PERFORMANCE_LIMITED = "performanceLimited"


@dataclass(frozen=True)
class WeightBalanceInputs:
    """A loading of the aircraft (kg, m).

    Attributes:
        empty_weight: Basic empty weight
        flight_time: Planned legs for the fuel calculation
        empty_arm: Empty weight arm
        empty_moment: Empty moment; derived from weight x arm when None
        pilot_weight: Pilot mass
        passenger_weight: Passenger mass
        fuel_mass: Flight fuel on board; None uses the minimum dip less taxi
        baggage_weight: Baggage mass
        scenario: Loading policy the inputs were prepared for
    """

    empty_weight: float
    flight_time: FlightTime
    empty_arm: float = EMPTY_WEIGHT_ARM
    empty_moment: float | None = None
    pilot_weight: float = 0.0
    passenger_weight: float = 0.0
    fuel_mass: float | None = None
    baggage_weight: float = 0.0
    scenario: Scenario = Scenario.STANDARD


@dataclass(frozen=True)
class MinimumFuel:
    """Minimum fuel requirement for the planned legs."""

    time: float
    litres: float
    weight: float

    def to_dict(self) -> dict:
        return {"time": self.time, "litres": self.litres, "weight": self.weight}


@dataclass(frozen=True)
class FuelState:
    """Fuel on board at engine start, after taxi, and burned in flight."""

    actual_dip: FuelQuantity
    taxi: FuelQuantity
    actual_flight_fuel: FuelQuantity
    burn_off: FuelQuantity

    def to_dict(self) -> dict:
        return {
            "actualDip": self.actual_dip.to_dict(),
            "taxi": self.taxi.to_dict(),
            "actualFlightFuel": self.actual_flight_fuel.to_dict(),
            "burnOff": self.burn_off.to_dict(),
        }


@dataclass(frozen=True)
class WeightBalanceResult:
    """Completed load sheet.

    Attributes:
        minimum_fuel: Minimum fuel requirement
        fuel_state: Fuel quantities used for the sheet
        items: Rows in load sheet order, load stations first
        takeoff_weight: Sum of the load station weights (kg)
        landing_weight: Takeoff weight less burn off (kg)
        center_of_gravity: Total moment / takeoff weight (m)
        is_within_limits: CG inside the envelope and takeoff weight <= MTOW
    """

    minimum_fuel: MinimumFuel
    fuel_state: FuelState
    items: tuple[LineItem, ...]
    takeoff_weight: float
    landing_weight: float
    center_of_gravity: float
    is_within_limits: bool

    @property
    def total_moment(self) -> float:
        """Sum of the load station moments (kg-m)."""
        return sum(line.moment for line in self.items if line.name in station.LOAD_STATIONS)

    def item(self, name: str) -> LineItem:
        """Get a row by name.

        Raises:
            KeyError: If the sheet has no such row.
        """
        for line in self.items:
            if line.name == name:
                return line
        raise KeyError(name)

    def to_dict(self) -> dict:
        return {
            "minimumFuelRequired": self.minimum_fuel.to_dict(),
            "actualFuelState": self.fuel_state.to_dict(),
            "weightAndBalance": {
                "items": [line.to_dict() for line in self.items],
                "takeoffWeight": self.takeoff_weight,
                "landingWeight": self.landing_weight,
                "centerOfGravity": self.center_of_gravity,
                "isWithinLimits": self.is_within_limits,
            },
        }


def is_cg_within_limits(cg: float) -> bool:
    """Check a CG position against the forward/aft envelope (inclusive)."""
    return CG_FORWARD <= cg <= CG_AFT


class WeightBalanceSolver:
    """Compute the load sheet for a loading.

    The solver holds no per-call state; one instance serves any number of
    calculations.

    Examples:
        >>> inputs = WeightBalanceInputs(
        ...     empty_weight=432.0,
        ...     flight_time=FlightTime(trip=1.0, reserve=0.5),
        ...     pilot_weight=80.0,
        ...     passenger_weight=70.0,
        ...     baggage_weight=5.0,
        ... )
        >>> result = WeightBalanceSolver().solve(inputs)
        >>> result.is_within_limits
        True
    """

    def __init__(self, planner: FuelPlanner | None = None) -> None:
        self.planner = planner or FuelPlanner()

    def solve(
        self,
        inputs: WeightBalanceInputs,
        strict: bool = False,
        actual_dip: float | None = None,
    ) -> WeightBalanceResult:
        """Build the load sheet.

        Args:
            inputs: Loading to evaluate
            strict: Raise on limit violations instead of flagging them
            actual_dip: Measured fuel dip (litres). Replaces the minimum
                fuel dip on the sheet and in the flight fuel default.

        Returns:
            WeightBalanceResult with every row and aggregate.

        Raises:
            FuelCapacityExceeded: If the planned legs need more than 120 L.
            WeightLimitExceeded: In strict mode, if takeoff weight exceeds MTOW
                or baggage exceeds its limit.
            CGOutOfLimits: In strict mode, if the CG is outside the envelope.
            CalculationError: If a value is not a finite number or the
                arithmetic fails (e.g. zero takeoff weight).
        """
        empty_weight = require_number(inputs.empty_weight, "emptyWeight")
        empty_arm = require_number(inputs.empty_arm, "emptyArm")
        pilot_weight = require_number(inputs.pilot_weight, "pilotWeight")
        passenger_weight = require_number(inputs.passenger_weight, "passengerWeight")
        baggage_weight = require_number(inputs.baggage_weight, "baggageWeight")

        if strict and baggage_weight > MAX_BAGGAGE_WEIGHT:
            raise WeightLimitExceeded(
                f"Baggage weight ({baggage_weight:.1f} kg) exceeds maximum limit of "
                f"{MAX_BAGGAGE_WEIGHT:.0f} kg"
            )

        flight_time = inputs.flight_time
        minimum_litres = self.planner.minimum_fuel(flight_time)
        minimum_weight = self.planner.minimum_fuel_weight(flight_time)
        minimum_fuel = MinimumFuel(
            time=round2(flight_time.total_hours),
            litres=minimum_litres,
            weight=minimum_weight,
        )

        taxi = self.planner.taxi_fuel(flight_time)
        if actual_dip is None:
            dip = FuelQuantity(litres=minimum_litres, weight=minimum_weight)
        else:
            dip = FuelQuantity.from_litres(require_number(actual_dip, "actualDip"))
            if dip.litres < taxi.litres:
                raise CalculationError(
                    f"Actual dip ({dip.litres:.1f}L) is less than taxi fuel ({taxi.litres:.1f}L)"
                )

        if inputs.fuel_mass is None:
            flight_fuel = FuelQuantity.from_weight(round2(dip.weight - taxi.weight))
        else:
            flight_fuel = FuelQuantity.from_weight(require_number(inputs.fuel_mass, "fuelMass"))
        burn_off = self.planner.burn_off(flight_time)

        if inputs.empty_moment is None:
            empty_moment = round2(empty_weight * empty_arm)
        else:
            empty_moment = require_number(inputs.empty_moment, "emptyMoment")

        try:
            loads = (
                LineItem(station.EMPTY_WEIGHT, empty_weight, empty_arm, empty_moment),
                LineItem.at_station(station.PILOT_PASSENGER, pilot_weight + passenger_weight, PILOT_PASSENGER_ARM),
                LineItem.at_station(station.FUEL_MASS, flight_fuel.weight, FUEL_ARM),
                LineItem.at_station(station.BAGGAGE, baggage_weight, BAGGAGE_ARM, MAX_BAGGAGE_WEIGHT),
            )
            takeoff_weight = round2(sum(line.weight for line in loads))
            total_moment = sum(line.moment for line in loads)
            center_of_gravity = total_moment / takeoff_weight

            burn_off_moment = -round2(burn_off.weight * FUEL_ARM)
            landing_weight = round2(takeoff_weight - burn_off.weight)
            landing_moment = total_moment + burn_off_moment
            landing_arm = landing_moment / landing_weight
        except (ZeroDivisionError, TypeError, ValueError) as e:
            raise CalculationError(f"Failed to calculate weight and balance: {e}") from e

        items = loads + (
            LineItem(
                station.TAKEOFF_WEIGHT, takeoff_weight, center_of_gravity, round2(total_moment), MAX_TAKEOFF_WEIGHT
            ),
            LineItem(station.BURN_OFF, burn_off.weight, FUEL_ARM, burn_off_moment),
            LineItem(
                station.LANDING_WEIGHT, landing_weight, landing_arm, round2(landing_moment), MAX_TAKEOFF_WEIGHT
            ),
        )

        cg_ok = is_cg_within_limits(center_of_gravity)
        weight_ok = takeoff_weight <= MAX_TAKEOFF_WEIGHT

        logger.debug(
            "W&B: TOW=%.2f kg LW=%.2f kg moment=%.2f CG=%.4f m within_limits=%s",
            takeoff_weight,
            landing_weight,
            total_moment,
            center_of_gravity,
            cg_ok and weight_ok,
        )

        if strict:
            if not weight_ok:
                raise WeightLimitExceeded(
                    f"Takeoff weight ({takeoff_weight:.1f} kg) exceeds maximum limit of "
                    f"{MAX_TAKEOFF_WEIGHT:.0f} kg"
                )
            if not cg_ok:
                raise CGOutOfLimits(
                    f"Center of gravity ({center_of_gravity:.3f} m) is outside allowed limits "
                    f"({CG_FORWARD}-{CG_AFT} m)"
                )

        return WeightBalanceResult(
            minimum_fuel=minimum_fuel,
            fuel_state=FuelState(actual_dip=dip, taxi=taxi, actual_flight_fuel=flight_fuel, burn_off=burn_off),
            items=items,
            takeoff_weight=takeoff_weight,
            landing_weight=landing_weight,
            center_of_gravity=center_of_gravity,
            is_within_limits=cg_ok and weight_ok,
        )
