"""Tests for weight and balance system."""

import math
from dataclasses import replace

import pytest

from airperf.core.errors import CalculationError, CGOutOfLimits, FuelCapacityExceeded, WeightLimitExceeded
from airperf.systems.weight_balance import (
    FlightTime,
    LineItem,
    WeightBalanceInputs,
    WeightBalanceSolver,
    is_cg_within_limits,
)
from airperf.systems.weight_balance import station


@pytest.fixture
def solver() -> WeightBalanceSolver:
    return WeightBalanceSolver()


class TestLineItem:
    """Test LineItem class."""

    def test_at_station(self) -> None:
        """Test moment is weight x arm, rounded to two decimals."""
        item = LineItem.at_station("Fuel Mass", 37.58, 2.209)

        assert item.weight == 37.58
        assert item.arm == 2.209
        assert item.moment == 83.01

    def test_is_overweight(self) -> None:
        """Test overweight detection against the row limit."""
        assert not LineItem.at_station("Baggage", 20.0, 2.417, max_weight=20.0).is_overweight()
        assert LineItem.at_station("Baggage", 20.5, 2.417, max_weight=20.0).is_overweight()

    def test_unlimited_row_never_overweight(self) -> None:
        """Test rows without a limit are never overweight."""
        assert not LineItem.at_station("Pilot & Passenger", 500.0, 1.8).is_overweight()

    def test_to_dict(self) -> None:
        """Test 'max' is present only for limited rows."""
        limited = LineItem.at_station("Baggage", 5.0, 2.417, max_weight=20.0).to_dict()
        unlimited = LineItem.at_station("Pilot & Passenger", 150.0, 1.8).to_dict()

        assert limited["max"] == 20.0
        assert "max" not in unlimited
        assert unlimited == {"name": "Pilot & Passenger", "weight": 150.0, "arm": 1.8, "moment": 270.0}


class TestCGLimits:
    """Test the CG envelope."""

    @pytest.mark.parametrize("cg", [1.841, 1.9, 1.978])
    def test_inside(self, cg: float) -> None:
        assert is_cg_within_limits(cg)

    @pytest.mark.parametrize("cg", [1.84, 1.979, 0.0])
    def test_outside(self, cg: float) -> None:
        assert not is_cg_within_limits(cg)


class TestWeightBalanceSolver:
    """Test the load sheet for a normal loading."""

    def test_minimum_fuel(self, solver: WeightBalanceSolver, wb_inputs: WeightBalanceInputs) -> None:
        """Test the minimum fuel block."""
        result = solver.solve(wb_inputs)

        assert result.minimum_fuel.time == 2.9
        assert result.minimum_fuel.litres == 55.2
        assert result.minimum_fuel.weight == 39.74

    def test_fuel_state(self, solver: WeightBalanceSolver, wb_inputs: WeightBalanceInputs) -> None:
        """Test dip, taxi, flight fuel and burn off."""
        state = solver.solve(wb_inputs).fuel_state

        assert state.actual_dip.litres == 55.2
        assert state.taxi.weight == 2.16
        assert state.actual_flight_fuel.weight == 37.58
        assert state.actual_flight_fuel.litres == 52.19
        assert state.burn_off.weight == 25.92

    def test_station_rows(self, solver: WeightBalanceSolver, wb_inputs: WeightBalanceInputs) -> None:
        """Test each load station weight, arm and moment."""
        result = solver.solve(wb_inputs)

        assert result.item(station.EMPTY_WEIGHT).moment == 803.52
        assert result.item(station.PILOT_PASSENGER).weight == 150.0
        assert result.item(station.PILOT_PASSENGER).moment == 270.0
        assert result.item(station.FUEL_MASS).moment == 83.01
        assert result.item(station.BAGGAGE).moment == pytest.approx(12.09, abs=0.01)
        assert result.item(station.BAGGAGE).max_weight == 20.0

    def test_totals(self, solver: WeightBalanceSolver, wb_inputs: WeightBalanceInputs) -> None:
        """Test takeoff and landing weights and the CG."""
        result = solver.solve(wb_inputs)

        assert result.takeoff_weight == 624.58
        assert result.landing_weight == 598.66
        assert result.center_of_gravity == pytest.approx(1.871, abs=0.001)
        assert result.is_within_limits

    def test_cg_is_moment_over_weight(self, solver: WeightBalanceSolver, wb_inputs: WeightBalanceInputs) -> None:
        """Test CG equals total moment divided by takeoff weight."""
        result = solver.solve(wb_inputs)
        assert result.center_of_gravity == pytest.approx(result.total_moment / result.takeoff_weight)

    def test_takeoff_weight_is_sum_of_stations(
        self, solver: WeightBalanceSolver, wb_inputs: WeightBalanceInputs
    ) -> None:
        result = solver.solve(wb_inputs)
        stations = sum(result.item(name).weight for name in station.LOAD_STATIONS)
        assert result.takeoff_weight == pytest.approx(stations)

    def test_summary_rows(self, solver: WeightBalanceSolver, wb_inputs: WeightBalanceInputs) -> None:
        """Test the takeoff, burn off and landing rows."""
        result = solver.solve(wb_inputs)

        burn_off = result.item(station.BURN_OFF)
        assert burn_off.weight == 25.92
        assert burn_off.moment == -57.26

        takeoff = result.item(station.TAKEOFF_WEIGHT)
        assert takeoff.arm == result.center_of_gravity
        assert takeoff.max_weight == 650.0

        landing = result.item(station.LANDING_WEIGHT)
        assert landing.weight == 598.66
        assert landing.arm == pytest.approx((result.total_moment - 57.26) / 598.66)

    def test_row_order(self, solver: WeightBalanceSolver, wb_inputs: WeightBalanceInputs) -> None:
        """Test rows are in load sheet order."""
        names = [line.name for line in solver.solve(wb_inputs).items]
        assert names == [
            "Empty Weight",
            "Pilot & Passenger",
            "Fuel Mass",
            "Baggage",
            "Take Off Weight",
            "Burn Off",
            "Landing Weight",
        ]

    def test_unknown_row(self, solver: WeightBalanceSolver, wb_inputs: WeightBalanceInputs) -> None:
        with pytest.raises(KeyError):
            solver.solve(wb_inputs).item("Cargo")

    def test_explicit_fuel_mass(self, solver: WeightBalanceSolver, wb_inputs: WeightBalanceInputs) -> None:
        """Test an entered fuel mass replaces the minimum dip default."""
        result = solver.solve(replace(wb_inputs, fuel_mass=50.0))

        assert result.item(station.FUEL_MASS).weight == 50.0
        assert result.takeoff_weight == 637.0

    def test_explicit_empty_moment(self, solver: WeightBalanceSolver, wb_inputs: WeightBalanceInputs) -> None:
        """Test a weighed empty moment is used as given."""
        result = solver.solve(replace(wb_inputs, empty_moment=800.0))
        assert result.item(station.EMPTY_WEIGHT).moment == 800.0

    def test_repeatable(self, solver: WeightBalanceSolver, wb_inputs: WeightBalanceInputs) -> None:
        """Test the same inputs give the same sheet."""
        assert solver.solve(wb_inputs) == solver.solve(wb_inputs)


class TestActualDip:
    """Test a measured dip in place of the minimum fuel."""

    def test_dip_sets_flight_fuel(self, solver: WeightBalanceSolver, wb_inputs: WeightBalanceInputs) -> None:
        """Test flight fuel defaults to the measured dip less taxi."""
        result = solver.solve(wb_inputs, actual_dip=80.0)

        assert result.fuel_state.actual_dip.weight == 57.6
        assert result.fuel_state.actual_flight_fuel.weight == 55.44
        assert result.minimum_fuel.litres == 55.2

    def test_dip_below_taxi(self, solver: WeightBalanceSolver, wb_inputs: WeightBalanceInputs) -> None:
        """Test a dip that does not cover taxi fuel is rejected."""
        with pytest.raises(CalculationError, match="less than taxi fuel"):
            solver.solve(wb_inputs, actual_dip=2.0)


class TestLimitViolations:
    """Test flagged and strict handling of limit violations."""

    @pytest.fixture
    def overweight(self, wb_inputs: WeightBalanceInputs) -> WeightBalanceInputs:
        return replace(wb_inputs, empty_weight=500.0, pilot_weight=100.0, passenger_weight=50.0)

    @pytest.fixture
    def nose_heavy(self, wb_inputs: WeightBalanceInputs) -> WeightBalanceInputs:
        return replace(wb_inputs, empty_arm=1.70)

    def test_overweight_flagged(self, solver: WeightBalanceSolver, overweight: WeightBalanceInputs) -> None:
        """Test overweight is a complete result with the flag cleared."""
        result = solver.solve(overweight)

        assert result.takeoff_weight > 650.0
        assert result.item(station.TAKEOFF_WEIGHT).is_overweight()
        assert not result.is_within_limits

    def test_overweight_strict(self, solver: WeightBalanceSolver, overweight: WeightBalanceInputs) -> None:
        """Test strict mode raises for overweight."""
        with pytest.raises(WeightLimitExceeded, match="exceeds maximum limit of 650 kg"):
            solver.solve(overweight, strict=True)

    def test_cg_flagged(self, solver: WeightBalanceSolver, nose_heavy: WeightBalanceInputs) -> None:
        """Test a CG forward of the envelope clears the flag."""
        result = solver.solve(nose_heavy)

        assert result.center_of_gravity < 1.841
        assert not result.is_within_limits

    def test_cg_strict(self, solver: WeightBalanceSolver, nose_heavy: WeightBalanceInputs) -> None:
        """Test strict mode raises for a CG outside the envelope."""
        with pytest.raises(CGOutOfLimits, match="outside allowed limits"):
            solver.solve(nose_heavy, strict=True)

    def test_baggage_flagged(self, solver: WeightBalanceSolver, wb_inputs: WeightBalanceInputs) -> None:
        """Test excess baggage marks its row overweight."""
        result = solver.solve(replace(wb_inputs, baggage_weight=25.0))
        assert result.item(station.BAGGAGE).is_overweight()

    def test_baggage_strict(self, solver: WeightBalanceSolver, wb_inputs: WeightBalanceInputs) -> None:
        """Test strict mode rejects baggage above 20 kg."""
        with pytest.raises(WeightLimitExceeded, match="Baggage weight"):
            solver.solve(replace(wb_inputs, baggage_weight=25.0), strict=True)

    def test_strict_passes_when_within_limits(
        self, solver: WeightBalanceSolver, wb_inputs: WeightBalanceInputs
    ) -> None:
        assert solver.solve(wb_inputs, strict=True).is_within_limits


class TestSolverErrors:
    """Test rejected inputs."""

    def test_zero_takeoff_weight(self, solver: WeightBalanceSolver) -> None:
        """Test an empty sheet raises CalculationError instead of dividing by zero."""
        inputs = WeightBalanceInputs(empty_weight=0.0, flight_time=FlightTime(), fuel_mass=0.0)

        with pytest.raises(CalculationError, match="Failed to calculate weight and balance"):
            solver.solve(inputs)

    def test_non_finite_weight(self, solver: WeightBalanceSolver, wb_inputs: WeightBalanceInputs) -> None:
        with pytest.raises(CalculationError):
            solver.solve(replace(wb_inputs, empty_weight=math.nan))

    def test_fuel_capacity(self, solver: WeightBalanceSolver, wb_inputs: WeightBalanceInputs) -> None:
        """Test an impossible flight plan is rejected before the sheet is built."""
        with pytest.raises(FuelCapacityExceeded):
            solver.solve(replace(wb_inputs, flight_time=FlightTime(trip=7.0)))


class TestResultShape:
    """Test the rendered load sheet."""

    def test_to_dict(self, solver: WeightBalanceSolver, wb_inputs: WeightBalanceInputs) -> None:
        data = solver.solve(wb_inputs).to_dict()

        assert set(data) == {"minimumFuelRequired", "actualFuelState", "weightAndBalance"}
        assert data["minimumFuelRequired"] == {"time": 2.9, "litres": 55.2, "weight": 39.74}
        assert set(data["actualFuelState"]) == {"actualDip", "taxi", "actualFlightFuel", "burnOff"}

        sheet = data["weightAndBalance"]
        assert len(sheet["items"]) == 7
        assert sheet["takeoffWeight"] == 624.58
        assert sheet["landingWeight"] == 598.66
        assert sheet["isWithinLimits"] is True
