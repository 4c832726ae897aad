"""Load sheet line items for weight and balance calculations.

A line item is one row of the load sheet: a mass at a fixed arm (distance aft
of datum) and the moment it produces. Load stations (empty aircraft, seats,
fuel, baggage) and the derived totals (takeoff, burn off, landing) share the
same shape.
"""

from dataclasses import dataclass

from airperf.core.numeric import round2

EMPTY_WEIGHT = "Empty Weight"
PILOT_PASSENGER = "Pilot & Passenger"
FUEL_MASS = "Fuel Mass"
BAGGAGE = "Baggage"
TAKEOFF_WEIGHT = "Take Off Weight"
BURN_OFF = "Burn Off"
LANDING_WEIGHT = "Landing Weight"

# Rows whose moments make up the takeoff total.
LOAD_STATIONS = (EMPTY_WEIGHT, PILOT_PASSENGER, FUEL_MASS, BAGGAGE)


@dataclass(frozen=True)
class LineItem:
    """One row of the load sheet.

    Attributes:
        name: Row label (e.g., "Pilot & Passenger")
        weight: Mass in kilograms
        arm: Distance from reference datum in metres
        moment: Weight x arm in kg-m
        max_weight: Structural limit for the row, if it has one (kg)

    Examples:
        >>> seats = LineItem.at_station("Pilot & Passenger", 150.0, 1.8)
        >>> seats.moment
        270.0
    """

    name: str
    weight: float
    arm: float
    moment: float
    max_weight: float | None = None

    @classmethod
    def at_station(cls, name: str, weight: float, arm: float, max_weight: float | None = None) -> "LineItem":
        """Build a row at a fixed arm, moment rounded to two decimals."""
        return cls(name=name, weight=weight, arm=arm, moment=round2(weight * arm), max_weight=max_weight)

    def is_overweight(self) -> bool:
        """Check if the row exceeds its limit.

        Returns:
            True if weight > max_weight, False otherwise or when unlimited.
        """
        return self.max_weight is not None and self.weight > self.max_weight

    def to_dict(self) -> dict:
        """Render as a load sheet row; ``max`` is omitted for unlimited rows."""
        item = {"name": self.name, "weight": self.weight, "arm": self.arm, "moment": self.moment}
        if self.max_weight is not None:
            item["max"] = self.max_weight
        return item
