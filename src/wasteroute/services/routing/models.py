"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Literal, Optional, get_args

PlanMode = Literal["real-time", "predictive"]
PLAN_MODES: tuple[str, ...] = get_args(PlanMode)


@dataclass(slots=True)
class RouteStop:
    sensor_id: str
    order: int
    estimated_time: int
    location_name: str
    priority: bool = False


@dataclass(slots=True)
class Route:
    truck_id: str
    truck_plate: str
    bin_sensor_ids: List[str]
    stops: List[RouteStop]
    total_distance: float
    estimated_time_min: int
    status: str = "planned"
    priority_route: bool = False


@dataclass(slots=True)
class Efficiency:
    time_saved: float = 0.0
    distance_saved: float = 0.0
    fuel_saved: float = 0.0


@dataclass(slots=True)
class FuelDeduction:
    """Fuel a truck is expected to burn on its route. Applied out-of-band."""

    truck_id: str
    truck_plate: str
    liters: float


@dataclass(slots=True)
class AllocationSummary:
    total_distance: float = 0.0
    total_fuel_consumption: float = 0.0
    total_estimated_time: int = 0
    average_distance_per_truck: float = 0.0
    average_fuel_per_truck: float = 0.0
    truck_utilization: int = 0


@dataclass(slots=True)
class RoutePlan:
    mode: PlanMode
    generated_for: datetime
    routes: List[Route]
    efficiency: Efficiency
    fuel_deductions: List[FuelDeduction] = field(default_factory=list)
    summary: AllocationSummary = field(default_factory=AllocationSummary)
    approved: bool = False
    dispatched_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
