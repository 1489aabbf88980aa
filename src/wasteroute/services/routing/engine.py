"""Route plan generation over a bin and truck snapshot."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Sequence

from ...config import settings
from ...models.domain import Bin, Truck
from ..classification import select_candidates
from ..distance import DistanceProvider
from ..efficiency import EfficiencyEstimator, summarize_allocation
from ..errors import ErrorKind, Outcome
from ..fuel import FuelConstraintFilter, FuelValidation, recommend_deductions
from .allocator import AllocationLimits, MultiTruckAllocator
from .builder import NearestNeighborStrategy, RouteStrategy
from .models import PLAN_MODES, PlanMode, RoutePlan
from .time_model import TimeModel

logger = logging.getLogger(__name__)


def get_strategy(name: str, distance_provider: DistanceProvider) -> RouteStrategy:
    match name:
        case "nearest_neighbor":
            return NearestNeighborStrategy(distance_provider)
        case "ortools":
            from .sequence_solver import OrToolsSequenceStrategy

            return OrToolsSequenceStrategy(distance_provider)
        case _:
            raise ValueError(f"Unknown route strategy '{name}'.")


class RouteEngine:
    """Pure, synchronous planner over an in-memory snapshot.

    The engine never re-reads storage and holds no locks. Two concurrent
    calls on overlapping snapshots can claim the same bin in both plans, so
    callers must either serialize plan generation or reject already-claimed
    bins when persisting a plan.

    Truck fuel is never decremented here. The plan carries a recommended
    deduction per routed truck for a separate component to apply.
    """

    def __init__(
        self,
        distance_provider: DistanceProvider,
        *,
        strategy: RouteStrategy | None = None,
        time_model: TimeModel | None = None,
        fuel_filter: FuelConstraintFilter | None = None,
        estimator: EfficiencyEstimator | None = None,
        limits: AllocationLimits | None = None,
    ) -> None:
        self.distance_provider = distance_provider
        self.strategy = strategy or get_strategy(settings.route_strategy, distance_provider)
        self.time_model = time_model or TimeModel()
        self.fuel_filter = fuel_filter or FuelConstraintFilter()
        self.estimator = estimator or EfficiencyEstimator()
        self.limits = limits or AllocationLimits()
        self.allocator = MultiTruckAllocator(
            distance_provider,
            strategy=self.strategy,
            time_model=self.time_model,
            limits=self.limits,
        )

    def generate_plan(
        self,
        bins: Sequence[Bin],
        trucks: Sequence[Truck],
        depot_location: str | None = None,
        mode: PlanMode = "real-time",
    ) -> Outcome[RoutePlan]:
        if mode not in PLAN_MODES:
            raise ValueError(f"Unknown plan mode '{mode}'.")
        depot = depot_location or settings.depot_location

        candidates = select_candidates(bins, self.limits.collection_threshold)
        if not candidates:
            logger.info("No bins above %.0f%% fill across %d bins", self.limits.collection_threshold, len(bins))
            return Outcome.failure(ErrorKind.NO_BINS_REQUIRE_COLLECTION, total_bins=len(bins))

        active_trucks = [truck for truck in trucks if truck.is_active]
        if not active_trucks:
            logger.info("No active trucks among %d trucks", len(trucks))
            return Outcome.failure(ErrorKind.NO_ACTIVE_TRUCKS, total_trucks=len(trucks))

        eligible = self.fuel_filter.filter_by_fuel(active_trucks, candidates, depot)
        if not eligible:
            logger.warning("Fuel filter removed all %d active trucks", len(active_trucks))
            return Outcome.failure(
                ErrorKind.INSUFFICIENT_FLEET_FUEL,
                active_trucks=len(active_trucks),
                candidate_bins=len(candidates),
            )

        routes = self.allocator.allocate(candidates, eligible, depot)
        deductions = recommend_deductions(routes, eligible)
        plan = RoutePlan(
            mode=mode,
            generated_for=datetime.now(timezone.utc),
            routes=routes,
            efficiency=self.estimator.estimate(routes),
            fuel_deductions=deductions,
            summary=summarize_allocation(routes, deductions),
        )
        logger.info("Generated %s plan with %d routes", mode, len(routes))
        return Outcome.success(plan)

    def validate_truck_fuel(
        self,
        trucks: Sequence[Truck],
        truck_id: str,
        estimated_distance_km: float,
    ) -> Outcome[FuelValidation]:
        truck = next((item for item in trucks if item.truck_id == truck_id), None)
        if truck is None:
            return Outcome.failure(ErrorKind.INVALID_TRUCK_FUEL_QUERY, truck_id=truck_id)
        return Outcome.success(self.fuel_filter.validate_fuel(truck, estimated_distance_km))
