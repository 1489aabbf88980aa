"""Domain models for bin and truck snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class BinStatus(str, Enum):
    EMPTY = "Empty"
    HALF = "Half"
    FULL = "Full"
    PRIORITY = "Priority"


class TruckStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    MAINTENANCE = "Maintenance"

    @classmethod
    def parse(cls, value: "TruckStatus | str") -> "TruckStatus":
        if isinstance(value, cls):
            return value
        normalized = str(value).strip()
        if normalized.lower() == "in maintenance":
            return cls.MAINTENANCE
        for member in cls:
            if member.value.lower() == normalized.lower():
                return member
        raise ValueError(f"Unknown truck status '{value}'.")


@dataclass(slots=True)
class Bin:
    """A sensor-equipped bin as read from the bin store."""

    sensor_id: str
    location_name: str
    fill_level: float
    bin_id: Optional[str] = None
    historical_avg_fill: float = 0.0
    last_seen_at: Optional[datetime] = None


@dataclass(slots=True)
class Truck:
    """A collection truck with its fuel state."""

    truck_id: str
    plate: str
    status: TruckStatus = TruckStatus.ACTIVE
    current_location: Optional[str] = None
    fuel_capacity: float = 100.0
    current_fuel_level: float = 100.0
    fuel_efficiency: float = 20.0

    def __post_init__(self) -> None:
        self.status = TruckStatus.parse(self.status)

    @property
    def is_active(self) -> bool:
        return self.status is TruckStatus.ACTIVE

    def start_location(self, depot_location: str) -> str:
        return self.current_location or depot_location
