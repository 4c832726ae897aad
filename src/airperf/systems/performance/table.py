"""Takeoff/landing distance tables and bilinear lookup.

The table is a grid of pressure-altitude breakpoints, each carrying a ground
roll row and a 50 ft obstacle distance row across fixed OAT breakpoints.
Lookups interpolate piecewise-linearly across temperature first, then across
pressure altitude. Temperatures beyond the stored range take the value at the
nearest breakpoint. Pressure altitudes beyond the stored range extrapolate
linearly through the two nearest altitude breakpoints.

Typical usage:
    lookup = PerformanceTableLookup(YamlPerformanceTableSource())
    base = lookup.lookup(pressure_altitude=612.0, temperature=15.0, operation=Operation.TAKEOFF)
    print(base.ground_roll, base.distance_50ft)
"""

import bisect
import threading
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Protocol

import numpy as np
import yaml

from airperf.core.errors import DataUnavailable
from airperf.core.logging_system import get_logger
from airperf.core.numeric import require_number
from airperf.core.resource_path import get_data_path

logger = get_logger(__name__)

DEFAULT_TABLE_FILE = "performance_tables.yaml"


class Operation(Enum):
    """Phase the distances are computed for."""

    TAKEOFF = "takeoff"
    LANDING = "landing"


class TableCondition(Enum):
    """Which distance a table row holds."""

    GROUND_ROLL = "ground_roll"
    DISTANCE_50FT = "distance_50ft"


@dataclass(frozen=True)
class PerformanceTableRow:
    """One row of a distance table.

    Attributes:
        operation: Table the row belongs to (takeoff or landing)
        pressure_altitude: Altitude breakpoint (ft)
        condition: Ground roll or distance to 50 ft
        temperatures: OAT breakpoints in ascending order (deg C)
        distances: Distance at each temperature breakpoint (m)
    """

    operation: Operation
    pressure_altitude: float
    condition: TableCondition
    temperatures: tuple[float, ...]
    distances: tuple[float, ...]

    def distance_at(self, temperature: float) -> float:
        """Interpolate this row across temperature, clamping outside the breakpoints."""
        return float(np.interp(temperature, self.temperatures, self.distances))


@dataclass(frozen=True)
class BaseDistances:
    """Uncorrected distances read from the table (m)."""

    ground_roll: float
    distance_50ft: float


class PerformanceTableSource(Protocol):
    """Anything that can supply the rows of the distance tables."""

    def load(self) -> list[PerformanceTableRow]:
        """Read every row. Called once per lookup instance."""
        ...


class InMemoryPerformanceTableSource:
    """Table source over rows already in memory (tests, embedding)."""

    def __init__(self, rows: list[PerformanceTableRow]) -> None:
        self._rows = list(rows)

    def load(self) -> list[PerformanceTableRow]:
        return list(self._rows)


class YamlPerformanceTableSource:
    """Table source reading the YAML dataset shipped with the package.

    Expected layout::

        temperature_breakpoints: [-25, 0, 25, 50]
        takeoff:
          - {pressure_altitude: 0, condition: ground_roll, distances: {-25: 180, 0: 196, ...}}
        landing:
          - ...

    Every row must list exactly the declared temperature breakpoints.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        """Initialize the source.

        Args:
            path: YAML file to read. Defaults to the packaged dataset.
        """
        self.path = Path(path) if path is not None else get_data_path(DEFAULT_TABLE_FILE)

    def load(self) -> list[PerformanceTableRow]:
        """Read and parse all rows.

        Returns:
            Rows of both tables.

        Raises:
            DataUnavailable: If the file is missing, unreadable or malformed.
        """
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise DataUnavailable(f"Performance table not readable: {self.path}") from e
        except yaml.YAMLError as e:
            raise DataUnavailable(f"Performance table is not valid YAML: {self.path}") from e

        if not isinstance(data, dict):
            raise DataUnavailable(f"Performance table has no content: {self.path}")

        breakpoints = data.get("temperature_breakpoints")
        rows: list[PerformanceTableRow] = []
        for operation in Operation:
            for entry in data.get(operation.value) or []:
                rows.append(self._parse_row(operation, entry, breakpoints))

        logger.info("Read %d performance table rows from %s", len(rows), self.path)
        return rows

    def _parse_row(self, operation: Operation, entry: Any, breakpoints: list | None) -> PerformanceTableRow:
        try:
            distances = {float(t): float(d) for t, d in entry["distances"].items()}
            temperatures = tuple(sorted(distances))
            if breakpoints is not None and temperatures != tuple(sorted(float(t) for t in breakpoints)):
                raise ValueError(f"breakpoints {temperatures} do not match {breakpoints}")
            return PerformanceTableRow(
                operation=operation,
                pressure_altitude=float(entry["pressure_altitude"]),
                condition=TableCondition(entry["condition"]),
                temperatures=temperatures,
                distances=tuple(distances[t] for t in temperatures),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise DataUnavailable(f"Malformed {operation.value} table row {entry!r}: {e}") from e


class PerformanceTableLookup:
    """Bilinear lookup over the takeoff and landing distance tables.

    The source is read lazily on the first lookup and never again; the
    resulting index is read-only, so one instance can serve concurrent callers.

    Examples:
        >>> lookup = PerformanceTableLookup(YamlPerformanceTableSource())
        >>> base = lookup.lookup(0.0, 0.0, Operation.TAKEOFF)
        >>> base.ground_roll
        196.0
    """

    def __init__(self, source: PerformanceTableSource) -> None:
        self._source = source
        self._index: dict[Operation, dict[float, dict[TableCondition, PerformanceTableRow]]] | None = None
        self._lock = threading.Lock()

    def load(self) -> None:
        """Read the source now instead of on the first lookup."""
        self._get_index()

    def _get_index(self) -> dict[Operation, dict[float, dict[TableCondition, PerformanceTableRow]]]:
        if self._index is None:
            with self._lock:
                if self._index is None:
                    self._index = self._build_index(self._source.load())
        return self._index

    @staticmethod
    def _build_index(
        rows: list[PerformanceTableRow],
    ) -> dict[Operation, dict[float, dict[TableCondition, PerformanceTableRow]]]:
        index: dict[Operation, dict[float, dict[TableCondition, PerformanceTableRow]]] = {}
        for row in rows:
            by_condition = index.setdefault(row.operation, {}).setdefault(row.pressure_altitude, {})
            if row.condition in by_condition:
                raise DataUnavailable(
                    f"Duplicate {row.operation.value} row at {row.pressure_altitude:.0f} ft "
                    f"({row.condition.value})"
                )
            by_condition[row.condition] = row

        for operation, by_altitude in index.items():
            logger.debug(
                "Indexed %s table: %d altitude breakpoints", operation.value, len(by_altitude)
            )
        return index

    def altitude_breakpoints(self, operation: Operation) -> list[float]:
        """Stored pressure-altitude breakpoints for an operation, ascending."""
        return sorted(self._get_index().get(operation, {}))

    def lookup(self, pressure_altitude: float, temperature: float, operation: Operation) -> BaseDistances:
        """Interpolate ground roll and 50 ft distance for the given conditions.

        Args:
            pressure_altitude: Pressure altitude (ft)
            temperature: Outside air temperature (deg C)
            operation: Takeoff or landing table

        Returns:
            BaseDistances in metres.

        Raises:
            DataUnavailable: If the table has no rows for the operation, or a
                selected altitude breakpoint lacks one of the two conditions.
            CalculationError: If an input is not a finite number.
        """
        pressure_altitude = require_number(pressure_altitude, "pressure_altitude")
        temperature = require_number(temperature, "temperature")

        by_altitude = self._get_index().get(operation)
        if not by_altitude:
            raise DataUnavailable(f"No {operation.value} performance data available")

        low, high = _bracket(sorted(by_altitude), pressure_altitude)

        values = {}
        for altitude in {low, high}:
            rows = by_altitude[altitude]
            missing = [c.value for c in TableCondition if c not in rows]
            if missing:
                raise DataUnavailable(
                    f"No {operation.value} data for {', '.join(missing)} at {altitude:.0f} ft"
                )
            values[altitude] = (
                rows[TableCondition.GROUND_ROLL].distance_at(temperature),
                rows[TableCondition.DISTANCE_50FT].distance_at(temperature),
            )

        if low == high:
            ground_roll, distance_50ft = values[low]
        else:
            ground_roll = _linear(pressure_altitude, low, high, values[low][0], values[high][0])
            distance_50ft = _linear(pressure_altitude, low, high, values[low][1], values[high][1])

        logger.debug(
            "%s lookup PA=%.0f ft OAT=%.1f C between %.0f/%.0f ft: GR=%.2f m, 50ft=%.2f m",
            operation.value,
            pressure_altitude,
            temperature,
            low,
            high,
            ground_roll,
            distance_50ft,
        )
        return BaseDistances(ground_roll=ground_roll, distance_50ft=distance_50ft)


def _bracket(altitudes: list[float], pressure_altitude: float) -> tuple[float, float]:
    """Pick the two breakpoints straddling the altitude.

    A stored altitude is returned on its own. Outside the stored range the
    two nearest breakpoints are returned, so the lookup extrapolates; a table
    with a single altitude always returns that altitude.
    """
    i = bisect.bisect_left(altitudes, pressure_altitude)
    if i < len(altitudes) and altitudes[i] == pressure_altitude:
        return altitudes[i], altitudes[i]
    if len(altitudes) == 1:
        return altitudes[0], altitudes[0]
    if i == 0:
        return altitudes[0], altitudes[1]
    if i == len(altitudes):
        return altitudes[-2], altitudes[-1]
    return altitudes[i - 1], altitudes[i]


def _linear(x: float, x0: float, x1: float, y0: float, y1: float) -> float:
    """Straight line through (x0, y0) and (x1, y1), evaluated at x."""
    return y0 + (x - x0) * (y1 - y0) / (x1 - x0)
