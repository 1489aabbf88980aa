"""Route planning request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..models.domain import Bin, Truck, TruckStatus
from ..services.routing.models import PlanMode


class BinSnapshot(BaseModel):
    sensor_id: str = Field(..., min_length=1)
    location_name: str = Field(..., description="Key into the distance table.")
    fill_level: float = Field(0, ge=0, description="Percentage; values above 100 are accepted.")
    id: Optional[str] = None
    historical_avg_fill: float = 0.0
    last_seen_at: Optional[datetime] = None

    def to_domain(self) -> Bin:
        return Bin(
            sensor_id=self.sensor_id,
            location_name=self.location_name,
            fill_level=self.fill_level,
            bin_id=self.id,
            historical_avg_fill=self.historical_avg_fill,
            last_seen_at=self.last_seen_at,
        )


class TruckSnapshot(BaseModel):
    id: str
    plate: str
    status: str = "Active"
    current_location: Optional[str] = None
    fuel_capacity: float = Field(100.0, ge=0)
    current_fuel_level: float = Field(100.0, ge=0)
    fuel_efficiency: float = Field(20.0, description="Kilometres per litre.")

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: Any) -> str:
        return TruckStatus.parse(value).value

    def to_domain(self) -> Truck:
        return Truck(
            truck_id=self.id,
            plate=self.plate,
            status=TruckStatus.parse(self.status),
            current_location=self.current_location,
            fuel_capacity=self.fuel_capacity,
            current_fuel_level=self.current_fuel_level,
            fuel_efficiency=self.fuel_efficiency,
        )


class PlanRequest(BaseModel):
    bins: List[BinSnapshot]
    trucks: List[TruckSnapshot]
    depot_location: Optional[str] = Field(default=None, description="Falls back to the configured depot.")
    mode: PlanMode = "real-time"


class RouteStopModel(BaseModel):
    sensor_id: str
    order: int
    estimated_time: int
    location_name: str
    priority: bool


class RouteModel(BaseModel):
    truck_id: str
    truck_plate: str
    bin_sensor_ids: List[str]
    stops: List[RouteStopModel]
    total_distance: float
    estimated_time_min: int
    status: Literal["planned", "dispatched", "in-progress", "completed"] = "planned"
    priority_route: bool


class EfficiencyModel(BaseModel):
    time_saved: float = 0.0
    distance_saved: float = 0.0
    fuel_saved: float = 0.0


class FuelDeductionModel(BaseModel):
    truck_id: str
    truck_plate: str
    liters: float


class AllocationSummaryModel(BaseModel):
    total_distance: float
    total_fuel_consumption: float
    total_estimated_time: int
    average_distance_per_truck: float
    average_fuel_per_truck: float
    truck_utilization: int


class RoutePlanDocument(BaseModel):
    mode: PlanMode
    generated_for: datetime
    routes: List[RouteModel]
    approved: bool = False
    dispatched_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    efficiency: EfficiencyModel
    fuel_deductions: List[FuelDeductionModel] = Field(default_factory=list)
    summary: Optional[AllocationSummaryModel] = None


class ErrorModel(BaseModel):
    kind: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class PlanResponse(BaseModel):
    ok: bool
    plan: Optional[RoutePlanDocument] = None
    error: Optional[ErrorModel] = None


class FuelValidationRequest(BaseModel):
    truck_id: str
    estimated_distance_km: float = Field(..., ge=0)
    trucks: List[TruckSnapshot]


class FuelValidationResponse(BaseModel):
    ok: bool
    valid: bool = False
    required_fuel: Optional[float] = None
    reason: Optional[str] = None
    current_fuel: Optional[float] = None
    fuel_efficiency: Optional[float] = None
    error: Optional[ErrorModel] = None
