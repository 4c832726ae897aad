"""Minimum fuel planning from flight-time legs.

Fuel for each timed leg is burned at a fixed 18 L/hr. Contingency is always
10% of trip fuel; the contingency time entered on the flight plan is shown on
the load sheet but never burned into the total. Taxi fuel is a quantity in
litres, not a time.

Typical usage:
    planner = FuelPlanner()
    litres = planner.minimum_fuel(FlightTime(trip=2.0, other=0.2, reserve=0.5))
"""

from dataclasses import dataclass

from airperf.aircraft.constants import (
    CONTINGENCY_FRACTION,
    FLIGHT_TIME_TO_FUEL_RATE,
    LITRES_TO_KG,
    MAX_USABLE_FUEL_LITRES,
    TAXI_FUEL_LITRES,
)
from airperf.aviation.units import kg_to_litres, litres_to_kg
from airperf.core.errors import FuelCapacityExceeded
from airperf.core.logging_system import get_logger
from airperf.core.numeric import require_number, round2

logger = get_logger(__name__)


@dataclass(frozen=True)
class FlightTime:
    """Planned flight-time legs.

    Attributes:
        trip: Trip time (hours)
        contingency: Contingency time (hours, informational)
        alternate: Time to alternate (hours)
        other: Other planned time (hours)
        reserve: Final reserve (hours)
        taxi: Taxi fuel (litres)
    """

    trip: float = 0.0
    contingency: float = 0.0
    alternate: float = 0.0
    other: float = 0.0
    reserve: float = 0.0
    taxi: float = TAXI_FUEL_LITRES

    @property
    def total_hours(self) -> float:
        """Sum of all timed legs, as shown on the load sheet."""
        return self.trip + self.contingency + self.alternate + self.other + self.reserve


@dataclass(frozen=True)
class FuelQuantity:
    """A fuel quantity in both litres and kilograms."""

    litres: float
    weight: float

    @classmethod
    def from_litres(cls, litres: float) -> "FuelQuantity":
        return cls(litres=litres, weight=litres_to_kg(litres))

    @classmethod
    def from_weight(cls, weight: float) -> "FuelQuantity":
        return cls(litres=kg_to_litres(weight), weight=weight)

    def to_dict(self) -> dict:
        return {"litres": self.litres, "weight": self.weight}


class FuelPlanner:
    """Compute minimum fuel, flight fuel and burn off.

    Examples:
        >>> FuelPlanner().minimum_fuel(FlightTime(trip=2.0, other=0.2, reserve=0.5, taxi=3))
        55.2
    """

    def minimum_fuel(self, flight_time: FlightTime) -> float:
        """Minimum fuel dip, taxi fuel included.

        Args:
            flight_time: Planned legs

        Returns:
            Required fuel in litres, rounded to two decimals.

        Raises:
            FuelCapacityExceeded: If the requirement is above the 120 L usable capacity.
            CalculationError: If a leg is not a finite number.
        """
        trip = require_number(flight_time.trip, "flightTime.trip")
        alternate = require_number(flight_time.alternate, "flightTime.alternate")
        other = require_number(flight_time.other, "flightTime.other")
        reserve = require_number(flight_time.reserve, "flightTime.reserve")
        taxi = require_number(flight_time.taxi, "flightTime.taxi")

        trip_fuel = trip * FLIGHT_TIME_TO_FUEL_RATE
        contingency_fuel = trip_fuel * CONTINGENCY_FRACTION
        total = (
            trip_fuel
            + contingency_fuel
            + alternate * FLIGHT_TIME_TO_FUEL_RATE
            + other * FLIGHT_TIME_TO_FUEL_RATE
            + reserve * FLIGHT_TIME_TO_FUEL_RATE
            + taxi
        )

        if total > MAX_USABLE_FUEL_LITRES:
            raise FuelCapacityExceeded(
                f"Required fuel ({total:.1f}L) exceeds maximum fuel capacity of {MAX_USABLE_FUEL_LITRES:.0f}L"
            )

        logger.debug(
            "Minimum fuel: trip=%.2f contingency=%.2f taxi=%.2f total=%.2f L",
            trip_fuel,
            contingency_fuel,
            taxi,
            total,
        )
        return round2(total)

    def minimum_fuel_weight(self, flight_time: FlightTime) -> float:
        """Minimum fuel dip in kilograms."""
        return litres_to_kg(self.minimum_fuel(flight_time))

    def taxi_fuel(self, flight_time: FlightTime) -> FuelQuantity:
        """Taxi allowance from the flight plan."""
        return FuelQuantity.from_litres(require_number(flight_time.taxi, "flightTime.taxi"))

    def flight_fuel_weight(self, flight_time: FlightTime) -> float:
        """Fuel available for flight at the minimum dip: dip minus taxi (kg)."""
        return round2(self.minimum_fuel_weight(flight_time) - self.taxi_fuel(flight_time).weight)

    def burn_off(self, flight_time: FlightTime) -> FuelQuantity:
        """Fuel burned on the trip leg."""
        trip = require_number(flight_time.trip, "flightTime.trip")
        return FuelQuantity.from_weight(round2(trip * FLIGHT_TIME_TO_FUEL_RATE * LITRES_TO_KG))
