"""Fuel eligibility checks for trucks ahead of allocation."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..config import settings
from ..models.domain import Bin, Truck
from .numeric import finite_or_zero, round_half_up
from .routing.models import FuelDeduction, Route

logger = logging.getLogger(__name__)

NOT_ACTIVE_REASON = "Truck is not active"
INSUFFICIENT_FUEL_REASON = "Insufficient fuel for estimated route"


@dataclass(slots=True)
class FuelValidation:
    valid: bool
    required_fuel: Optional[float]
    reason: Optional[str]
    current_fuel: Optional[float] = None
    fuel_efficiency: Optional[float] = None


@dataclass(slots=True)
class FuelConstraintFilter:
    """Worst-case fuel estimate used to decide which trucks may be allocated.

    The estimate depends only on how many bins need collecting, never on the
    bins a truck ends up with.
    """

    max_bins_per_truck: int = field(default_factory=lambda: settings.fuel_max_bins_per_truck)
    avg_leg_km: float = field(default_factory=lambda: settings.fuel_avg_leg_km)
    return_trip_multiplier: float = field(default_factory=lambda: settings.fuel_return_trip_multiplier)

    def max_route_distance(self, truck: Truck, candidate_count: int) -> float:
        bins_for_truck = min(max(candidate_count, 0), self.max_bins_per_truck)
        return bins_for_truck * self.avg_leg_km * self.return_trip_multiplier

    @staticmethod
    def required_fuel(truck: Truck, distance_km: float) -> Optional[float]:
        if not math.isfinite(truck.fuel_efficiency) or truck.fuel_efficiency <= 0:
            return None
        return finite_or_zero(distance_km, context="route distance") / truck.fuel_efficiency

    def filter_by_fuel(self, trucks: Sequence[Truck], bins: Sequence[Bin], depot_location: str | None = None) -> list[Truck]:
        eligible: list[Truck] = []
        for truck in trucks:
            required = self.required_fuel(truck, self.max_route_distance(truck, len(bins)))
            if required is None:
                logger.warning("Truck %s has unusable fuel efficiency %r, skipping", truck.plate, truck.fuel_efficiency)
                continue
            if truck.current_fuel_level >= required:
                eligible.append(truck)
            else:
                logger.debug(
                    "Truck %s filtered out: %.2f L available, %.2f L required",
                    truck.plate,
                    truck.current_fuel_level,
                    required,
                )
        return eligible

    def validate_fuel(self, truck: Truck, estimated_distance_km: float) -> FuelValidation:
        if not truck.is_active:
            return FuelValidation(valid=False, required_fuel=None, reason=NOT_ACTIVE_REASON)

        required = self.required_fuel(truck, estimated_distance_km)
        if required is None:
            return FuelValidation(
                valid=False,
                required_fuel=None,
                reason=INSUFFICIENT_FUEL_REASON,
                current_fuel=truck.current_fuel_level,
                fuel_efficiency=truck.fuel_efficiency,
            )
        has_enough = truck.current_fuel_level >= required
        return FuelValidation(
            valid=has_enough,
            required_fuel=round_half_up(required, 2),
            reason=None if has_enough else INSUFFICIENT_FUEL_REASON,
            current_fuel=truck.current_fuel_level,
            fuel_efficiency=truck.fuel_efficiency,
        )


def recommend_deductions(routes: Sequence[Route], trucks: Sequence[Truck]) -> list[FuelDeduction]:
    """Fuel each routed truck should have deducted once its route is executed."""

    by_id = {truck.truck_id: truck for truck in trucks}
    deductions: list[FuelDeduction] = []
    for route in routes:
        truck = by_id.get(route.truck_id)
        if truck is None:
            continue
        liters = FuelConstraintFilter.required_fuel(truck, route.total_distance) or 0.0
        deductions.append(
            FuelDeduction(
                truck_id=route.truck_id,
                truck_plate=route.truck_plate,
                liters=round_half_up(liters, 2),
            )
        )
    return deductions
