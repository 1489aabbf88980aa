from wasteroute.data.distance_repository import get_distance_provider
from wasteroute.services.routing.allocator import AllocationLimits, MultiTruckAllocator

from helpers import DEPOT, make_bin, make_truck, small_provider


def _allocator() -> MultiTruckAllocator:
    return MultiTruckAllocator(small_provider(), limits=AllocationLimits())


def test_priority_bins_suppress_regular_bins():
    bins = [make_bin("A", "A", 100), make_bin("B", "B", 75)]
    trucks = [make_truck("T1")]

    routes = _allocator().allocate(bins, trucks, DEPOT)

    assert len(routes) == 1
    route = routes[0]
    assert route.priority_route is True
    assert route.bin_sensor_ids == ["A"]
    assert all(stop.priority for stop in route.stops)


def test_regular_bins_assigned_once_priority_is_cleared():
    bins = [make_bin("A", "A", 40), make_bin("B", "B", 75)]

    routes = _allocator().allocate(bins, [make_truck("T1")], DEPOT)

    assert [route.bin_sensor_ids for route in routes] == [["B"]]
    assert routes[0].priority_route is False
    assert routes[0].status == "planned"
    assert not routes[0].stops[0].priority


def test_trucks_without_priority_bins_get_no_regular_work():
    bins = [make_bin("P", "A", 120), make_bin("R1", "B", 90), make_bin("R2", "C", 90)]
    trucks = [make_truck("T1"), make_truck("T2")]

    routes = _allocator().allocate(bins, trucks, DEPOT)

    assert [route.truck_id for route in routes] == ["T1"]
    assert routes[0].bin_sensor_ids == ["P"]


def test_priority_cap_is_three_bins_per_truck():
    bins = [make_bin(f"P{i}", loc, 100 + i) for i, loc in enumerate(["A", "B", "C", "E", "A"])]
    trucks = [make_truck("T1"), make_truck("T2")]

    routes = _allocator().allocate(bins, trucks, DEPOT)

    assert [len(route.bin_sensor_ids) for route in routes] == [3, 2]
    claimed = [sensor for route in routes for sensor in route.bin_sensor_ids]
    assert sorted(claimed) == sorted(bin_.sensor_id for bin_ in bins)


def test_regular_cap_is_five_bins_per_truck():
    bins = [make_bin(f"R{i}", loc, 80) for i, loc in enumerate(["A", "B", "C", "E", "A", "B", "C"])]

    routes = _allocator().allocate(bins, [make_truck("T1")], DEPOT)

    assert len(routes) == 1
    assert len(routes[0].bin_sensor_ids) == 5


def test_each_truck_claims_nearest_bins_greedily():
    bins = [make_bin(f"R{i}", loc, 80) for i, loc in enumerate(["A", "B", "C"])]
    limits = AllocationLimits(max_regular_bins_per_truck=1)
    allocator = MultiTruckAllocator(small_provider(), limits=limits)
    trucks = [make_truck("T1", location="E"), make_truck("T2")]

    routes = allocator.allocate(bins, trucks, DEPOT)

    # E is 1 km from C; the depot-based truck then takes the nearest of A and B.
    assert routes[0].bin_sensor_ids == ["R2"]
    assert routes[1].bin_sensor_ids == ["R0"]


def test_priority_ties_fall_back_to_fill_level_order():
    bins = [make_bin("Lower", "A", 100), make_bin("Higher", "A", 130)]
    limits = AllocationLimits(max_priority_bins_per_truck=1)
    allocator = MultiTruckAllocator(small_provider(), limits=limits)

    routes = allocator.allocate(bins, [make_truck("T1"), make_truck("T2")], DEPOT)

    assert [route.bin_sensor_ids for route in routes] == [["Higher"], ["Lower"]]


def test_bins_appear_in_at_most_one_route():
    bins = [make_bin(f"R{i}", loc, 85) for i, loc in enumerate(["A", "B", "C", "E"] * 3)]
    trucks = [make_truck(f"T{i}") for i in range(4)]

    routes = _allocator().allocate(bins, trucks, DEPOT)

    claimed = [sensor for route in routes for sensor in route.bin_sensor_ids]
    assert len(claimed) == len(set(claimed)) == len(bins)
    assert len({route.truck_id for route in routes}) == len(routes)


def test_inactive_trucks_are_skipped_and_input_is_untouched():
    bins = [make_bin("R1", "A", 80), make_bin("R2", "B", 80)]
    trucks = [make_truck("T1", status="Inactive"), make_truck("T2")]

    routes = _allocator().allocate(bins, trucks, DEPOT)

    assert [route.truck_id for route in routes] == ["T2"]
    assert [bin_.sensor_id for bin_ in bins] == ["R1", "R2"]


def test_route_totals_follow_the_time_model():
    bins = [make_bin("S3", "C", 80), make_bin("S1", "A", 80), make_bin("S2", "B", 80)]

    route = _allocator().allocate(bins, [make_truck("T1")], DEPOT)[0]

    assert route.total_distance == 16.0
    assert route.estimated_time_min == 96
    assert [stop.location_name for stop in route.stops] == ["A", "B", "C"]
    assert {stop.estimated_time for stop in route.stops} == {32}


def test_later_trucks_break_priority_ties_by_fill_level():
    fills = {
        "Poonagary": 120,
        "Murikandy": 110,
        "Puthukudiyiruppu": 101,
        "Kilinochchi Town": 105,
        "Karachchi": 200,
        "Mallavi": 102,
        "Thunukkai": 150,
    }
    bins = [make_bin(location[:4], location, fill) for location, fill in fills.items()]
    trucks = [make_truck("T1", location="Paranthan"), make_truck("T2", location="Yard X")]
    allocator = MultiTruckAllocator(get_distance_provider(), limits=AllocationLimits())

    routes = allocator.allocate(bins, trucks, "Kilinochchi Town")

    # Every leg from the unknown yard falls back to the default distance.
    assert [route.bin_sensor_ids for route in routes] == [
        ["Poon", "Muri", "Puth"],
        ["Kara", "Thun", "Kili"],
    ]
    assert all(route.priority_route for route in routes)


def test_limits_follow_settings_changed_after_import(monkeypatch):
    from wasteroute.config import settings

    monkeypatch.setattr(settings, "max_regular_bins_per_truck", 2)
    bins = [make_bin(f"R{i}", loc, 80) for i, loc in enumerate(["A", "B", "C"])]

    routes = MultiTruckAllocator(small_provider()).allocate(bins, [make_truck("T1")], DEPOT)

    assert AllocationLimits().max_regular_bins_per_truck == 2
    assert len(routes[0].bin_sensor_ids) == 2
