"""Takeoff and landing distance calculation.

This module runs the full performance pipeline for one set of inputs:
pressure altitude, wind components, table lookup, then corrections and the
runway feasibility check.
"""

from dataclasses import dataclass

from airperf.aircraft.constants import FEET_PER_HPA, STANDARD_QNH_HPA
from airperf.core.logging_system import get_logger
from airperf.core.numeric import require_number
from airperf.systems.performance.corrections import DistanceCorrector, DistanceResult
from airperf.systems.performance.inputs import PerformanceInputs
from airperf.systems.performance.table import Operation, PerformanceTableLookup
from airperf.systems.performance.wind import WindCalculation, WindResolver

logger = get_logger(__name__)


@dataclass(frozen=True)
class PressureAltitude:
    """Pressure altitude and the derivation shown to the pilot.

    Attributes:
        result: Pressure altitude (ft)
        calculation: Worked derivation, e.g.
            "(1013 - 1000) x 30 = 390 FT + 222 FT (ELEVATION) = 612 FT (PRESSURE ALTITUDE)"
    """

    result: float
    calculation: str

    def to_dict(self) -> dict:
        return {"result": self.result, "calculation": self.calculation}


def _fmt(value: float) -> str:
    value = round(value, 2)
    return str(int(value)) if value.is_integer() else str(value)


def calculate_pressure_altitude(qnh: float, elevation: float) -> PressureAltitude:
    """Pressure altitude from QNH and aerodrome elevation, 30 ft per hPa.

    Args:
        qnh: Altimeter setting (hPa)
        elevation: Aerodrome elevation (ft)

    Returns:
        PressureAltitude with the result and its derivation.

    Examples:
        >>> calculate_pressure_altitude(1000, 222).result
        612.0
    """
    qnh = require_number(qnh, "qnh")
    elevation = require_number(elevation, "departure.elevation")

    correction = (STANDARD_QNH_HPA - qnh) * FEET_PER_HPA
    result = round(correction + elevation, 2)
    calculation = (
        f"({_fmt(STANDARD_QNH_HPA)} - {_fmt(qnh)}) x {_fmt(FEET_PER_HPA)} = {_fmt(correction)} FT "
        f"+ {_fmt(elevation)} FT (ELEVATION) = {_fmt(result)} FT (PRESSURE ALTITUDE)"
    )
    return PressureAltitude(result=result, calculation=calculation)


@dataclass(frozen=True)
class PerformanceResult:
    """Outcome of one performance calculation.

    Exactly one of ``takeoff``/``landing`` is set.
    """

    pressure_altitude: PressureAltitude
    wind: WindCalculation
    takeoff: DistanceResult | None = None
    landing: DistanceResult | None = None

    def to_dict(self) -> dict:
        return {
            "pressureAltitude": self.pressure_altitude.to_dict(),
            "windCalculation": self.wind.to_dict(),
            "takeoffPerformance": self.takeoff.to_dict() if self.takeoff else None,
            "landingPerformance": self.landing.to_dict() if self.landing else None,
        }


class PerformanceCalculator:
    """Calculate corrected takeoff or landing distances.

    The calculator holds no per-request state; the table lookup it wraps is
    read-only after loading, so a single instance serves any number of calls.

    Examples:
        >>> calc = PerformanceCalculator(PerformanceTableLookup(YamlPerformanceTableSource()))
        >>> result = calc.calculate(inputs)
        >>> result.takeoff.is_feasible
        True
    """

    def __init__(
        self,
        lookup: PerformanceTableLookup,
        wind_resolver: WindResolver | None = None,
        corrector: DistanceCorrector | None = None,
    ) -> None:
        self.lookup = lookup
        self.wind_resolver = wind_resolver or WindResolver()
        self.corrector = corrector or DistanceCorrector()

    def calculate(self, inputs: PerformanceInputs, operation: Operation | None = None) -> PerformanceResult:
        """Run the performance pipeline.

        Args:
            inputs: Validated performance inputs
            operation: Takeoff or landing. When omitted, a runway designator
                ending in "-landing" selects landing, anything else takeoff.

        Returns:
            PerformanceResult for the selected operation.

        Raises:
            DataUnavailable: If the table cannot serve the lookup.
            CalculationError: If an input is not a finite number.
        """
        if operation is None:
            operation = Operation.LANDING if inputs.departure.is_landing else Operation.TAKEOFF

        pressure_altitude = calculate_pressure_altitude(inputs.qnh, inputs.departure.elevation)
        wind = self.wind_resolver.resolve(inputs.wind.direction, inputs.wind.speed, inputs.wind.runway_heading)
        base = self.lookup.lookup(pressure_altitude.result, inputs.temperature, operation)
        distances = self.corrector.correct(base, inputs, wind, operation)

        logger.info(
            "%s %s %s (Part %d): PA=%.0f ft, required %.0f m of %.0f m available, feasible=%s",
            inputs.departure.airport,
            inputs.departure.runway,
            operation.value,
            inputs.part.value,
            pressure_altitude.result,
            distances.final_distance,
            distances.available_distance,
            distances.is_feasible,
        )

        if operation is Operation.TAKEOFF:
            return PerformanceResult(pressure_altitude=pressure_altitude, wind=wind, takeoff=distances)
        return PerformanceResult(pressure_altitude=pressure_altitude, wind=wind, landing=distances)
