"""Validated inputs of a performance calculation.

Instances are built by the request boundary (``airperf.api.validation``) or
directly by callers; the engines accept nothing looser than these types.
"""

from dataclasses import dataclass
from enum import Enum

from airperf.systems.performance.wind import OperatingPart

LANDING_RUNWAY_SUFFIX = "-landing"


class Surface(Enum):
    """Runway surface."""

    PAVED = "Paved"
    GRASS = "Grass"


class SlopeDirection(Enum):
    """Runway slope direction in the direction of travel."""

    UP = "Up"
    DOWN = "Down"


@dataclass(frozen=True)
class Departure:
    """Aerodrome and runway data.

    Attributes:
        airport: ICAO code (e.g., "EGKR")
        elevation: Aerodrome elevation (ft)
        runway: Runway designator; a "-landing" suffix requests landing figures
        surface: Runway surface
        toda: Takeoff distance available (m)
        lda: Landing distance available (m)
    """

    airport: str
    elevation: float
    runway: str
    surface: Surface = Surface.PAVED
    toda: float = 0.0
    lda: float = 0.0

    @property
    def is_landing(self) -> bool:
        return self.runway.endswith(LANDING_RUNWAY_SUFFIX)


@dataclass(frozen=True)
class Slope:
    """Runway slope, percent."""

    value: float = 0.0
    direction: SlopeDirection = SlopeDirection.UP


@dataclass(frozen=True)
class Wind:
    """Reported wind and runway heading (degrees, kt)."""

    direction: float
    speed: float
    runway_heading: float


@dataclass(frozen=True)
class PerformanceInputs:
    """Everything a takeoff or landing distance calculation needs."""

    departure: Departure
    slope: Slope
    qnh: float
    temperature: float
    wind: Wind
    part: OperatingPart = OperatingPart.PART_61
