"""Pytest configuration and fixtures for all tests."""

import pytest

from airperf.systems.performance.inputs import Departure, PerformanceInputs, Slope, SlopeDirection, Surface, Wind
from airperf.systems.performance.table import (
    InMemoryPerformanceTableSource,
    Operation,
    PerformanceTableLookup,
    PerformanceTableRow,
    TableCondition,
)
from airperf.systems.performance.wind import OperatingPart
from airperf.systems.weight_balance.fuel_planner import FlightTime
from airperf.systems.weight_balance.weight_balance_system import WeightBalanceInputs

TEMPERATURES = (-25.0, 0.0, 25.0, 50.0)


def make_row(
    operation: Operation, altitude: float, condition: TableCondition, distances: tuple[float, ...]
) -> PerformanceTableRow:
    """Build a table row over the standard temperature breakpoints."""
    return PerformanceTableRow(
        operation=operation,
        pressure_altitude=altitude,
        condition=condition,
        temperatures=TEMPERATURES,
        distances=distances,
    )


def synthetic_rows() -> list[PerformanceTableRow]:
    """Small two-altitude table with round numbers.

    Takeoff at 0 ft:    GR 100/200/300/400, 50ft 500/600/700/800
    Takeoff at 1000 ft: GR 200/300/400/500, 50ft 700/800/900/1000
    Landing at 0 ft:    GR 150/160/170/180, 50ft 350/360/370/380
    Landing at 1000 ft: GR 170/180/190/200, 50ft 390/400/410/420
    """
    return [
        make_row(Operation.TAKEOFF, 0.0, TableCondition.GROUND_ROLL, (100.0, 200.0, 300.0, 400.0)),
        make_row(Operation.TAKEOFF, 0.0, TableCondition.DISTANCE_50FT, (500.0, 600.0, 700.0, 800.0)),
        make_row(Operation.TAKEOFF, 1000.0, TableCondition.GROUND_ROLL, (200.0, 300.0, 400.0, 500.0)),
        make_row(Operation.TAKEOFF, 1000.0, TableCondition.DISTANCE_50FT, (700.0, 800.0, 900.0, 1000.0)),
        make_row(Operation.LANDING, 0.0, TableCondition.GROUND_ROLL, (150.0, 160.0, 170.0, 180.0)),
        make_row(Operation.LANDING, 0.0, TableCondition.DISTANCE_50FT, (350.0, 360.0, 370.0, 380.0)),
        make_row(Operation.LANDING, 1000.0, TableCondition.GROUND_ROLL, (170.0, 180.0, 190.0, 200.0)),
        make_row(Operation.LANDING, 1000.0, TableCondition.DISTANCE_50FT, (390.0, 400.0, 410.0, 420.0)),
    ]


@pytest.fixture
def table_rows() -> list[PerformanceTableRow]:
    """Rows of the synthetic table."""
    return synthetic_rows()


@pytest.fixture
def row_factory():
    """Row builder over the standard temperature breakpoints."""
    return make_row


@pytest.fixture
def table_source() -> InMemoryPerformanceTableSource:
    """In-memory table source over the synthetic rows."""
    return InMemoryPerformanceTableSource(synthetic_rows())


@pytest.fixture
def table_lookup(table_source: InMemoryPerformanceTableSource) -> PerformanceTableLookup:
    """Lookup over the synthetic table."""
    return PerformanceTableLookup(table_source)


@pytest.fixture
def performance_inputs() -> PerformanceInputs:
    """Takeoff at sea level on a grass strip in still air, standard pressure.

    Pressure altitude is 0 ft, so the synthetic table gives GR 200 m and
    50 ft distance 600 m at 0 C.
    """
    return PerformanceInputs(
        departure=Departure(
            airport="EGKR",
            elevation=0.0,
            runway="26",
            surface=Surface.GRASS,
            toda=1283.0,
            lda=1100.0,
        ),
        slope=Slope(value=0.0, direction=SlopeDirection.UP),
        qnh=1013.0,
        temperature=0.0,
        wind=Wind(direction=260.0, speed=0.0, runway_heading=260.0),
        part=OperatingPart.PART_61,
    )


@pytest.fixture
def flight_time() -> FlightTime:
    """Flight plan needing 55.2 L minimum fuel."""
    return FlightTime(trip=2.0, contingency=0.2, alternate=0.0, other=0.2, reserve=0.5, taxi=3.0)


@pytest.fixture
def wb_inputs(flight_time: FlightTime) -> WeightBalanceInputs:
    """Two occupants, light baggage, fuel at the minimum dip."""
    return WeightBalanceInputs(
        empty_weight=432.0,
        flight_time=flight_time,
        pilot_weight=80.0,
        passenger_weight=70.0,
        baggage_weight=5.0,
    )


@pytest.fixture
def performance_payload() -> dict:
    """Performance request body as sent by the web form."""
    return {
        "departure": {
            "airport": "egkr",
            "elevation": "222",
            "runway": "26",
            "surface": "B",
            "toda": 1283,
            "lda": 1100,
        },
        "slope": {"value": 0, "direction": "U"},
        "qnh": "1000",
        "temperature": 15,
        "wind": {"direction": 260, "speed": 10, "runwayHeading": 260},
        "part": 61,
    }


@pytest.fixture
def wb_payload() -> dict:
    """Weight and balance request body as sent by the web form."""
    return {
        "emptyWeight": "432",
        "pilotWeight": 80,
        "passengerWeight": 70,
        "fuelMass": 0,
        "baggageWeight": 5,
        "flightTime": {
            "trip": 2.0,
            "contingency": 0.2,
            "alternate": 0,
            "other": 0.2,
            "reserve": 0.5,
            "taxi": 3,
        },
    }
