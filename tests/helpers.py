from wasteroute.models.domain import Bin, Truck, TruckStatus
from wasteroute.services.distance import TableDistanceProvider

DEPOT = "Depot"

SMALL_TABLE = {
    "Depot": {"A": 2, "B": 5, "C": 9, "E": 20},
    "A": {"B": 4, "C": 6},
    "B": {"C": 1},
    "E": {"C": 1, "B": 3, "A": 30},
}


def make_bin(sensor_id: str, location: str, fill: float) -> Bin:
    return Bin(sensor_id=sensor_id, location_name=location, fill_level=fill)


def make_truck(
    truck_id: str,
    *,
    location: str | None = None,
    status: TruckStatus | str = TruckStatus.ACTIVE,
    fuel: float = 100.0,
    efficiency: float = 20.0,
) -> Truck:
    return Truck(
        truck_id=truck_id,
        plate=f"WP-{truck_id}",
        status=status,
        current_location=location,
        fuel_capacity=100.0,
        current_fuel_level=fuel,
        fuel_efficiency=efficiency,
    )


def small_provider(default_km: float = 10.0) -> TableDistanceProvider:
    return TableDistanceProvider(SMALL_TABLE, default_km=default_km)
