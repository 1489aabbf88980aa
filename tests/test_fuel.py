import math

from wasteroute.services.fuel import (
    INSUFFICIENT_FUEL_REASON,
    NOT_ACTIVE_REASON,
    FuelConstraintFilter,
    recommend_deductions,
)
from wasteroute.services.routing.models import Route

from helpers import make_bin, make_truck


def test_max_route_distance_caps_bin_count():
    fuel_filter = FuelConstraintFilter()
    truck = make_truck("T1")

    assert fuel_filter.max_route_distance(truck, 1) == 30
    assert fuel_filter.max_route_distance(truck, 4) == 120
    assert fuel_filter.max_route_distance(truck, 25) == 300


def test_filter_by_fuel_drops_trucks_below_worst_case():
    fuel_filter = FuelConstraintFilter()
    bins = [make_bin("S1", "A", 90)]
    low = make_truck("Low", fuel=2, efficiency=10)
    enough = make_truck("Enough", fuel=3, efficiency=10)

    eligible = fuel_filter.filter_by_fuel([low, enough], bins)

    assert [truck.truck_id for truck in eligible] == ["Enough"]


def test_filter_by_fuel_skips_non_positive_efficiency():
    fuel_filter = FuelConstraintFilter()
    broken = make_truck("Broken", efficiency=0)

    assert fuel_filter.filter_by_fuel([broken], [make_bin("S1", "A", 90)]) == []


def test_validate_fuel_accepts_sufficient_fuel():
    result = FuelConstraintFilter().validate_fuel(make_truck("T1", fuel=5, efficiency=10), 40)

    assert result.valid is True
    assert result.required_fuel == 4.0
    assert result.reason is None
    assert result.current_fuel == 5


def test_validate_fuel_reports_insufficient_fuel():
    result = FuelConstraintFilter().validate_fuel(make_truck("T1", fuel=5, efficiency=3), 20)

    assert result.valid is False
    assert result.required_fuel == 6.67
    assert result.reason == INSUFFICIENT_FUEL_REASON


def test_validate_fuel_rejects_inactive_truck():
    result = FuelConstraintFilter().validate_fuel(make_truck("T1", status="Maintenance"), 1)

    assert result.valid is False
    assert result.reason == NOT_ACTIVE_REASON
    assert result.required_fuel is None


def test_recommend_deductions_uses_route_distance():
    route = Route(
        truck_id="T1",
        truck_plate="WP-T1",
        bin_sensor_ids=["S1"],
        stops=[],
        total_distance=25.0,
        estimated_time_min=150,
    )

    deductions = recommend_deductions([route], [make_truck("T1", efficiency=3)])

    assert len(deductions) == 1
    assert deductions[0].truck_id == "T1"
    assert deductions[0].liters == 8.33


def test_nan_efficiency_is_treated_as_unusable():
    fuel_filter = FuelConstraintFilter()
    broken = make_truck("Broken", efficiency=math.nan)

    result = fuel_filter.validate_fuel(broken, 10)

    assert result.valid is False
    assert result.required_fuel is None
    assert result.reason == INSUFFICIENT_FUEL_REASON
    assert fuel_filter.filter_by_fuel([broken], [make_bin("S1", "A", 90)]) == []
