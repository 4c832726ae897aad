"""Corrections from table distances to factored required distances.

Corrections are applied in a fixed order, each building on the previous
running total:

1. Wind: per-knot increment on the 50 ft distance
2. Surface: paved runways credit 10% of the ground roll
3. Slope: per-percent increment proportional to the ground roll
4. Safety factor on the slope-corrected total

The result is then compared with the declared distance available, reduced
to 85% for Part 135 operations.
"""

import math
from dataclasses import dataclass

from airperf.aircraft.constants import PART_135_DISTANCE_FACTOR
from airperf.core.errors import CalculationError
from airperf.core.logging_system import get_logger
from airperf.core.numeric import require_number, round2
from airperf.systems.performance.inputs import PerformanceInputs, SlopeDirection, Surface
from airperf.systems.performance.table import BaseDistances, Operation
from airperf.systems.performance.wind import OperatingPart, WindCalculation

logger = get_logger(__name__)


@dataclass(frozen=True)
class CorrectionCoefficients:
    """Correction factors for one operation.

    Attributes:
        headwind_per_kt: Distance change per knot of headwind (m/kt)
        tailwind_per_kt: Distance change per knot of tailwind (m/kt)
        paved_surface_fraction: Fraction of ground roll added on a paved runway
        slope_fraction_per_percent: Fraction of ground roll per 1% slope
        upslope_sign: +1 if upslope lengthens the distance, -1 if it shortens it
        safety_factor: Multiplier on the slope-corrected distance
    """

    headwind_per_kt: float
    tailwind_per_kt: float
    paved_surface_fraction: float
    slope_fraction_per_percent: float
    upslope_sign: int
    safety_factor: float


TAKEOFF_COEFFICIENTS = CorrectionCoefficients(
    headwind_per_kt=-5.0,
    tailwind_per_kt=15.0,
    paved_surface_fraction=-0.10,
    slope_fraction_per_percent=0.07,
    upslope_sign=1,
    safety_factor=1.10,
)

LANDING_COEFFICIENTS = CorrectionCoefficients(
    headwind_per_kt=-4.0,
    tailwind_per_kt=13.0,
    paved_surface_fraction=-0.10,
    slope_fraction_per_percent=0.03,
    upslope_sign=-1,
    safety_factor=1.67,
)

COEFFICIENTS = {
    Operation.TAKEOFF: TAKEOFF_COEFFICIENTS,
    Operation.LANDING: LANDING_COEFFICIENTS,
}


@dataclass(frozen=True)
class DistanceResult:
    """Chain of corrected distances for one operation (m).

    Attributes:
        operation: Takeoff or landing
        ground_roll: Table ground roll
        distance_50ft: Table distance to 50 ft
        wind_corrected: After wind correction
        surface_corrected: After surface correction
        slope_corrected: After slope correction
        final_distance: Factored required distance
        available_distance: TODA or LDA, factored for Part 135
        is_feasible: final_distance <= available_distance
    """

    operation: Operation
    ground_roll: float
    distance_50ft: float
    wind_corrected: float
    surface_corrected: float
    slope_corrected: float
    final_distance: float
    available_distance: float
    is_feasible: bool

    def to_dict(self) -> dict:
        """Render with the takeoff/landing specific key names."""
        if self.operation is Operation.TAKEOFF:
            label, final_key, available_key = "takeoff", "finalTakeoffDistance", "toda"
        else:
            label, final_key, available_key = "landing", "finalLandingDistance", "lda"
        return {
            "groundRoll": self.ground_roll,
            f"{label}Distance50ft": self.distance_50ft,
            "windCorrectedDistance": self.wind_corrected,
            "surfaceCorrectedDistance": self.surface_corrected,
            "slopeCorrectedDistance": self.slope_corrected,
            final_key: self.final_distance,
            available_key: self.available_distance,
            "isFeasible": self.is_feasible,
        }


def available_distance(declared: float, part: OperatingPart) -> float:
    """Distance available for planning.

    Part 135 keeps 85% of the declared distance, rounded down to whole metres.

    Examples:
        >>> available_distance(1283, OperatingPart.PART_135)
        1090.0
    """
    declared = require_number(declared, "available distance")
    if part is OperatingPart.PART_135:
        return float(math.floor(round(declared * PART_135_DISTANCE_FACTOR, 6)))
    return declared


class DistanceCorrector:
    """Apply wind, surface, slope and safety-factor corrections."""

    def correct(
        self,
        base: BaseDistances,
        inputs: PerformanceInputs,
        wind: WindCalculation,
        operation: Operation,
    ) -> DistanceResult:
        """Correct table distances and check them against the runway.

        Args:
            base: Table distances for the conditions
            inputs: Validated performance inputs
            wind: Resolved wind; the regime matching ``inputs.part`` is used
            operation: Takeoff or landing

        Returns:
            DistanceResult with every intermediate figure.

        Raises:
            CalculationError: If any figure is not a finite number.
        """
        coefficients = COEFFICIENTS[operation]
        ground_roll = require_number(base.ground_roll, "ground_roll")
        distance_50ft = require_number(base.distance_50ft, "distance_50ft")
        slope = require_number(inputs.slope.value, "slope.value")

        components = wind.for_part(inputs.part)
        if components.headwind:
            wind_correction = coefficients.headwind_per_kt * components.headwind
        elif components.tailwind:
            wind_correction = coefficients.tailwind_per_kt * components.tailwind
        else:
            wind_correction = 0.0
        wind_corrected = distance_50ft + wind_correction

        surface_correction = 0.0
        if inputs.departure.surface is Surface.PAVED:
            surface_correction = coefficients.paved_surface_fraction * ground_roll
        surface_corrected = wind_corrected + surface_correction

        direction = coefficients.upslope_sign
        if inputs.slope.direction is SlopeDirection.DOWN:
            direction = -direction
        slope_correction = slope * coefficients.slope_fraction_per_percent * direction * ground_roll
        slope_corrected = surface_corrected + slope_correction

        final_distance = round2(slope_corrected * coefficients.safety_factor)
        if not math.isfinite(final_distance):
            raise CalculationError(f"{operation.value} distance is not a finite number")

        declared = inputs.departure.toda if operation is Operation.TAKEOFF else inputs.departure.lda
        available = available_distance(declared, inputs.part)
        is_feasible = available > 0 and final_distance <= available

        logger.debug(
            "%s distances: 50ft=%.2f wind=%+.2f surface=%+.2f slope=%+.2f "
            "final=%.2f available=%.0f feasible=%s",
            operation.value,
            distance_50ft,
            wind_correction,
            surface_correction,
            slope_correction,
            final_distance,
            available,
            is_feasible,
        )

        return DistanceResult(
            operation=operation,
            ground_roll=round2(ground_roll),
            distance_50ft=round2(distance_50ft),
            wind_corrected=round2(wind_corrected),
            surface_corrected=round2(surface_corrected),
            slope_corrected=round2(slope_corrected),
            final_distance=final_distance,
            available_distance=available,
            is_feasible=is_feasible,
        )
