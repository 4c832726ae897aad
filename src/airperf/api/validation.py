"""Request validation for the calculation endpoints.

Raw request bodies are untyped JSON: numbers may arrive as numbers, numeric
strings, empty strings or garbage. Every field is first classified as a
``RawValue`` and only fully validated numbers reach the engines.

All problems in a request are collected and raised together as one
``ValidationError``.

Typical usage:
    inputs = parse_performance_request(request.get_json(silent=True))
"""

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from airperf.aircraft.constants import EMPTY_WEIGHT_ARM, MAX_BAGGAGE_WEIGHT, TAXI_FUEL_LITRES
from airperf.core.errors import FieldError, ValidationError
from airperf.systems.performance.inputs import (
    Departure,
    PerformanceInputs,
    Slope,
    SlopeDirection,
    Surface,
    Wind,
)
from airperf.systems.performance.wind import OperatingPart
from airperf.systems.weight_balance.fuel_planner import FlightTime
from airperf.systems.weight_balance.weight_balance_system import Scenario, WeightBalanceInputs

ICAO_PATTERN = re.compile(r"^[A-Z]{4}$")
RUNWAY_PATTERN = re.compile(r"^\d{2}[LCR]?(-landing)?$")

SURFACES = {"paved": Surface.PAVED, "b": Surface.PAVED, "grass": Surface.GRASS, "g": Surface.GRASS}
SLOPE_DIRECTIONS = {
    "up": SlopeDirection.UP,
    "u": SlopeDirection.UP,
    "down": SlopeDirection.DOWN,
    "d": SlopeDirection.DOWN,
}


@dataclass(frozen=True)
class EmptyValue:
    """Field absent, null or blank."""


@dataclass(frozen=True)
class NumericValue:
    """Field holding a finite number."""

    value: float


@dataclass(frozen=True)
class InvalidValue:
    """Field present but not a usable number."""

    text: str


RawValue = EmptyValue | NumericValue | InvalidValue


def parse_raw_value(raw: Any) -> RawValue:
    """Classify a raw request value.

    Examples:
        >>> parse_raw_value("1013")
        NumericValue(value=1013.0)
        >>> parse_raw_value("")
        EmptyValue()
        >>> parse_raw_value("abc")
        InvalidValue(text='abc')
    """
    if raw is None:
        return EmptyValue()
    if isinstance(raw, bool):
        return InvalidValue(str(raw))
    if isinstance(raw, (int, float)):
        return NumericValue(float(raw)) if math.isfinite(raw) else InvalidValue(str(raw))
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return EmptyValue()
        try:
            value = float(text)
        except ValueError:
            return InvalidValue(raw)
        return NumericValue(value) if math.isfinite(value) else InvalidValue(raw)
    return InvalidValue(repr(raw))


@dataclass(frozen=True)
class WeightBalanceRequest:
    """A validated weight and balance request.

    Attributes:
        inputs: Loading to evaluate
        scenario: Scenario to apply before solving, if requested
        actual_dip: Measured fuel dip (litres), if supplied
        strict: Raise on limit violations instead of flagging them
    """

    inputs: WeightBalanceInputs
    scenario: Scenario | None = None
    actual_dip: float | None = None
    strict: bool = False


class _FieldReader:
    """Read fields from a nested JSON object, collecting every error."""

    def __init__(self, data: Any) -> None:
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        self.data = data
        self.errors: list[FieldError] = []

    def get(self, path: str) -> Any:
        current: Any = self.data
        for part in path.split("."):
            if not isinstance(current, dict):
                return None
            current = current.get(part)
        return current

    def fail(self, path: str, message: str) -> None:
        self.errors.append(FieldError(field=path, message=message))

    def number(
        self,
        path: str,
        label: str,
        required: bool = True,
        default: float | None = None,
        minimum: float | None = None,
        maximum: float | None = None,
        units: str = "",
    ) -> float | None:
        raw = parse_raw_value(self.get(path))
        if isinstance(raw, EmptyValue):
            if required:
                self.fail(path, f"{label} is required")
            return default
        if isinstance(raw, InvalidValue):
            self.fail(path, f"{label} must be a valid number")
            return default

        value = raw.value
        suffix = f" {units}" if units else ""
        if minimum is not None and maximum is not None:
            if not minimum <= value <= maximum:
                self.fail(path, f"{label} must be between {minimum:g} and {maximum:g}{suffix}")
                return default
        elif minimum is not None and value < minimum:
            if minimum == 0:
                self.fail(path, f"{label} cannot be negative")
            else:
                self.fail(path, f"{label} must be at least {minimum:g}{suffix}")
            return default
        elif maximum is not None and value > maximum:
            self.fail(path, f"{label} cannot exceed {maximum:g}{suffix}")
            return default
        return value

    def text(self, path: str, label: str) -> str | None:
        raw = self.get(path)
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            self.fail(path, f"{label} is required")
            return None
        if not isinstance(raw, str):
            self.fail(path, f"{label} must be text")
            return None
        return raw.strip()

    def choice(self, path: str, label: str, options: dict[str, Enum], default: Enum) -> Any:
        raw = self.get(path)
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            return default
        option = options.get(str(raw).strip().lower())
        if option is None:
            self.fail(path, f"{label} must be one of {', '.join(sorted({o.value for o in options.values()}))}")
            return default
        return option

    def flag(self, path: str, label: str) -> bool:
        raw = self.get(path)
        if raw is None:
            return False
        if not isinstance(raw, bool):
            self.fail(path, f"{label} must be true or false")
            return False
        return raw

    def raise_if_errors(self) -> None:
        if self.errors:
            raise ValidationError(self.errors)


def parse_performance_request(data: Any) -> PerformanceInputs:
    """Validate a performance request body.

    Args:
        data: Decoded JSON body

    Returns:
        PerformanceInputs ready for the calculator.

    Raises:
        ValidationError: With every rejected field.
    """
    reader = _FieldReader(data)

    airport = reader.text("departure.airport", "Airport")
    if airport is not None:
        airport = airport.upper()
        if not ICAO_PATTERN.match(airport):
            reader.fail("departure.airport", "Must be a valid 4-letter ICAO code")

    runway = reader.text("departure.runway", "Runway")
    if runway is not None and not RUNWAY_PATTERN.match(runway):
        reader.fail("departure.runway", "Must be valid runway designation (e.g., 18, 18L)")

    elevation = reader.number(
        "departure.elevation", "Elevation", minimum=-1000, maximum=15000, units="feet"
    )
    toda = reader.number("departure.toda", "TODA", required=False, default=0.0, minimum=0)
    lda = reader.number("departure.lda", "LDA", required=False, default=0.0, minimum=0)
    surface = reader.choice("departure.surface", "Surface", SURFACES, Surface.PAVED)

    qnh = reader.number("qnh", "QNH", minimum=900, maximum=1100, units="hPa")
    temperature = reader.number("temperature", "Temperature", minimum=-30, maximum=50, units="C")

    slope_value = reader.number(
        "slope.value", "Slope", required=False, default=0.0, minimum=-5, maximum=5, units="%"
    )
    slope_direction = reader.choice("slope.direction", "Slope direction", SLOPE_DIRECTIONS, SlopeDirection.UP)

    wind_direction = reader.number("wind.direction", "Wind Direction", minimum=0, maximum=360, units="degrees")
    wind_speed = reader.number("wind.speed", "Wind Speed", minimum=0, maximum=99, units="knots")
    runway_heading = reader.number(
        "wind.runwayHeading", "Runway Heading", minimum=0, maximum=360, units="degrees"
    )

    part = OperatingPart.PART_61
    raw_part = parse_raw_value(reader.get("part"))
    if isinstance(raw_part, NumericValue):
        if raw_part.value not in (61, 135):
            reader.fail("part", "Part must be 61 or 135")
        else:
            part = OperatingPart(int(raw_part.value))
    elif isinstance(raw_part, InvalidValue):
        reader.fail("part", "Part must be 61 or 135")

    reader.raise_if_errors()

    return PerformanceInputs(
        departure=Departure(
            airport=airport,
            elevation=elevation,
            runway=runway,
            surface=surface,
            toda=toda,
            lda=lda,
        ),
        slope=Slope(value=slope_value, direction=slope_direction),
        qnh=qnh,
        temperature=temperature,
        # 360 and 0 are the same direction.
        wind=Wind(direction=wind_direction % 360, speed=wind_speed, runway_heading=runway_heading % 360),
        part=part,
    )


def parse_weight_balance_request(data: Any) -> WeightBalanceRequest:
    """Validate a weight and balance request body.

    Args:
        data: Decoded JSON body

    Returns:
        WeightBalanceRequest with the loading and solve options.

    Raises:
        ValidationError: With every rejected field.
    """
    reader = _FieldReader(data)

    empty_weight = reader.number("emptyWeight", "Empty Weight", minimum=0, units="kg")
    empty_arm = reader.number(
        "emptyArm", "Empty Arm", required=False, default=EMPTY_WEIGHT_ARM, minimum=0, units="m"
    )
    empty_moment = reader.number("emptyMoment", "Empty Moment", required=False, minimum=0)
    pilot_weight = reader.number("pilotWeight", "Pilot Weight", required=False, default=0.0, minimum=0)
    passenger_weight = reader.number(
        "passengerWeight", "Passenger Weight", required=False, default=0.0, minimum=0
    )
    fuel_mass = reader.number("fuelMass", "Fuel Mass", required=False, minimum=0)
    baggage_weight = reader.number(
        "baggageWeight",
        "Baggage Weight",
        required=False,
        default=0.0,
        minimum=0,
        maximum=MAX_BAGGAGE_WEIGHT,
        units="kg",
    )
    actual_dip = reader.number("actualDip", "Actual Dip", required=False, minimum=0, units="L")

    if not isinstance(reader.get("flightTime"), dict):
        reader.fail("flightTime", "Flight time is required")
        flight_time = FlightTime()
    else:
        flight_time = FlightTime(
            trip=reader.number("flightTime.trip", "Trip time", minimum=0),
            contingency=reader.number(
                "flightTime.contingency", "Contingency time", required=False, default=0.0, minimum=0
            ),
            alternate=reader.number(
                "flightTime.alternate", "Alternate time", required=False, default=0.0, minimum=0
            ),
            other=reader.number("flightTime.other", "Other time", required=False, default=0.0, minimum=0),
            reserve=reader.number("flightTime.reserve", "Reserve time", required=False, default=0.0, minimum=0),
            taxi=reader.number(
                "flightTime.taxi", "Taxi fuel", required=False, default=TAXI_FUEL_LITRES, minimum=0
            ),
        )

    scenario = None
    raw_scenario = reader.get("scenario")
    if raw_scenario is not None and raw_scenario != "":
        try:
            scenario = Scenario(raw_scenario)
        except ValueError:
            reader.fail("scenario", f"Scenario must be one of {', '.join(s.value for s in Scenario)}")

    strict = reader.flag("strict", "Strict")

    reader.raise_if_errors()

    inputs = WeightBalanceInputs(
        empty_weight=empty_weight,
        flight_time=flight_time,
        empty_arm=empty_arm,
        empty_moment=empty_moment,
        pilot_weight=pilot_weight,
        passenger_weight=passenger_weight,
        # Zero fuel on the form means "use the minimum dip".
        fuel_mass=fuel_mass or None,
        baggage_weight=baggage_weight,
        scenario=scenario or Scenario.STANDARD,
    )
    return WeightBalanceRequest(inputs=inputs, scenario=scenario, actual_dip=actual_dip, strict=strict)
