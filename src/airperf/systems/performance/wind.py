"""Wind component resolution relative to the runway.

The reported wind is split into an along-runway component and a crosswind
component, then factored for each operating regime:

- Part 61: components used as resolved
- Part 135: headwind x 0.5, tailwind x 1.5 (crosswind unchanged)
"""

import math
from dataclasses import asdict, dataclass
from enum import Enum

from airperf.core.logging_system import get_logger
from airperf.core.numeric import require_number

logger = get_logger(__name__)

PART_135_HEADWIND_FACTOR = 0.5
PART_135_TAILWIND_FACTOR = 1.5

# Components smaller than this are trigonometric noise (e.g. cos 90 deg).
COMPONENT_EPSILON = 1e-9


class OperatingPart(Enum):
    """Regulatory category the flight is operated under."""

    PART_61 = 61
    PART_135 = 135


@dataclass(frozen=True)
class WindComponents:
    """Wind components for one regime (kt).

    Exactly one of ``headwind``/``tailwind`` is set; the other is None.
    A wind exactly across the runway reports ``headwind == 0``.
    """

    headwind: float | None
    tailwind: float | None
    crosswind: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class WindCalculation:
    """Wind components under both regimes."""

    part61: WindComponents
    part135: WindComponents

    def for_part(self, part: OperatingPart) -> WindComponents:
        """Components to use for the given operating part."""
        return self.part135 if part is OperatingPart.PART_135 else self.part61

    def to_dict(self) -> dict:
        return {"part61": self.part61.to_dict(), "part135": self.part135.to_dict()}


class WindResolver:
    """Resolve reported wind into runway components.

    The angle between wind and runway is the plain absolute difference of the
    two directions (0-360, not folded past 180); cosine and sine are
    symmetric so the components are unaffected.

    Examples:
        >>> wind = WindResolver().resolve(280, 10, 280)
        >>> wind.part61.headwind, wind.part135.headwind
        (10.0, 5.0)
    """

    def resolve(self, wind_direction: float, wind_speed: float, runway_heading: float) -> WindCalculation:
        """Compute headwind/tailwind/crosswind for Part 61 and Part 135.

        Args:
            wind_direction: Direction the wind blows from (degrees)
            wind_speed: Wind speed (kt)
            runway_heading: Runway magnetic heading (degrees)

        Returns:
            WindCalculation with both regimes.

        Raises:
            CalculationError: If an input is not a finite number.
        """
        wind_direction = require_number(wind_direction, "wind.direction")
        wind_speed = require_number(wind_speed, "wind.speed")
        runway_heading = require_number(runway_heading, "wind.runway_heading")

        angle = math.radians(abs(wind_direction - runway_heading))
        along = wind_speed * math.cos(angle)
        crosswind = abs(wind_speed * math.sin(angle))
        if abs(along) < COMPONENT_EPSILON:
            along = 0.0
        if crosswind < COMPONENT_EPSILON:
            crosswind = 0.0

        if along > 0:
            headwind, tailwind = along, None
        elif along < 0:
            headwind, tailwind = None, -along
        else:
            headwind, tailwind = 0.0, None

        part61 = WindComponents(headwind=headwind, tailwind=tailwind, crosswind=crosswind)
        part135 = WindComponents(
            headwind=headwind * PART_135_HEADWIND_FACTOR if headwind is not None else None,
            tailwind=tailwind * PART_135_TAILWIND_FACTOR if tailwind is not None else None,
            crosswind=crosswind,
        )

        logger.debug(
            "Wind %03.0f/%.0f kt on runway %03.0f: along=%.2f kt, cross=%.2f kt",
            wind_direction,
            wind_speed,
            runway_heading,
            along,
            crosswind,
        )
        return WindCalculation(part61=part61, part135=part135)
