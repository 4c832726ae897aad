"""Takeoff and landing performance calculations.

This module provides:
- Bilinear lookup over the pressure altitude x temperature distance tables
- Wind resolution into Part 61 and Part 135 components
- Wind, surface, slope and safety-factor corrections
- Feasibility against the declared distance available
"""

from airperf.systems.performance.corrections import DistanceCorrector, DistanceResult
from airperf.systems.performance.inputs import (
    Departure,
    PerformanceInputs,
    Slope,
    SlopeDirection,
    Surface,
    Wind,
)
from airperf.systems.performance.performance_calculator import (
    PerformanceCalculator,
    PerformanceResult,
    PressureAltitude,
    calculate_pressure_altitude,
)
from airperf.systems.performance.table import (
    BaseDistances,
    InMemoryPerformanceTableSource,
    Operation,
    PerformanceTableLookup,
    PerformanceTableRow,
    PerformanceTableSource,
    TableCondition,
    YamlPerformanceTableSource,
)
from airperf.systems.performance.wind import OperatingPart, WindCalculation, WindComponents, WindResolver

__all__ = [
    "BaseDistances",
    "Departure",
    "DistanceCorrector",
    "DistanceResult",
    "InMemoryPerformanceTableSource",
    "OperatingPart",
    "Operation",
    "PerformanceCalculator",
    "PerformanceInputs",
    "PerformanceResult",
    "PerformanceTableLookup",
    "PerformanceTableRow",
    "PerformanceTableSource",
    "PressureAltitude",
    "Slope",
    "SlopeDirection",
    "Surface",
    "TableCondition",
    "Wind",
    "WindCalculation",
    "WindComponents",
    "WindResolver",
    "YamlPerformanceTableSource",
    "calculate_pressure_altitude",
]
