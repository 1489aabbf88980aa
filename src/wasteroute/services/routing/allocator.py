"""Greedy multi-truck bin allocation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from ...config import settings
from ...models.domain import Bin, Truck
from ..classification import is_priority, select_candidates
from ..distance import DistanceProvider
from .builder import NearestNeighborStrategy, RouteStrategy
from .models import Route
from .time_model import TimeModel

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AllocationLimits:
    collection_threshold: float = field(default_factory=lambda: settings.collection_threshold)
    priority_threshold: float = field(default_factory=lambda: settings.priority_threshold)
    max_priority_bins_per_truck: int = field(default_factory=lambda: settings.max_priority_bins_per_truck)
    max_regular_bins_per_truck: int = field(default_factory=lambda: settings.max_regular_bins_per_truck)


class MultiTruckAllocator:
    """Assigns candidate bins to active trucks and orders each truck's visits.

    Bins above the collection threshold are split into priority bins and
    regular bins. When any priority bin exists, only priority bins are
    assigned this cycle, even to trucks that end up with nothing. Each truck
    in fleet order claims its nearest bins from a shared pool; claims are
    never revisited, so a bin lands in at most one route and a truck gets at
    most one route.
    """

    def __init__(
        self,
        distance_provider: DistanceProvider,
        *,
        strategy: RouteStrategy | None = None,
        time_model: TimeModel | None = None,
        limits: AllocationLimits | None = None,
    ) -> None:
        self.distance_provider = distance_provider
        self.strategy = strategy or NearestNeighborStrategy(distance_provider)
        self.time_model = time_model or TimeModel()
        self.limits = limits or AllocationLimits()

    def split_candidates(self, bins: Sequence[Bin]) -> tuple[list[Bin], list[Bin]]:
        candidates = select_candidates(bins, self.limits.collection_threshold)
        priority = [bin_ for bin_ in candidates if is_priority(bin_, self.limits.priority_threshold)]
        regular = [bin_ for bin_ in candidates if not is_priority(bin_, self.limits.priority_threshold)]
        return priority, regular

    def allocate(self, bins: Sequence[Bin], trucks: Sequence[Truck], depot_location: str | None = None) -> list[Route]:
        depot = depot_location or settings.depot_location
        priority_bins, regular_bins = self.split_candidates(bins)
        active_trucks = [truck for truck in trucks if truck.is_active]

        logger.info(
            "Allocating %d priority and %d regular bins across %d active trucks",
            len(priority_bins),
            len(regular_bins),
            len(active_trucks),
        )

        if priority_bins:
            priority_bins.sort(key=lambda bin_: bin_.fill_level, reverse=True)
            if regular_bins:
                logger.info("Priority bins present, deferring %d regular bins to a later cycle", len(regular_bins))
            return self._assign(
                priority_bins,
                active_trucks,
                depot,
                cap=self.limits.max_priority_bins_per_truck,
                priority=True,
            )
        return self._assign(
            regular_bins,
            active_trucks,
            depot,
            cap=self.limits.max_regular_bins_per_truck,
            priority=False,
        )

    def _assign(
        self,
        pool: list[Bin],
        trucks: Sequence[Truck],
        depot_location: str,
        *,
        cap: int,
        priority: bool,
    ) -> list[Route]:
        routes: list[Route] = []
        for truck in trucks:
            if not pool:
                break
            start = truck.start_location(depot_location)
            if priority:
                # Unclaimed priority bins keep their fill-level order for the next truck's ties.
                nearest = sorted(pool, key=lambda bin_: self.strategy.leg(start, bin_.location_name))
                claimed = nearest[:cap]
                claimed_ids = {id(bin_) for bin_ in claimed}
                pool[:] = [bin_ for bin_ in pool if id(bin_) not in claimed_ids]
            else:
                pool.sort(key=lambda bin_: self.strategy.leg(start, bin_.location_name))
                claimed = pool[:cap]
                del pool[:cap]
            logger.debug("Truck %s claimed %s", truck.plate, [bin_.sensor_id for bin_ in claimed])
            routes.append(self._route_for(truck, start, claimed, priority=priority))
        if pool:
            logger.info("%d bins left unassigned after all trucks were filled", len(pool))
        return routes

    def _route_for(self, truck: Truck, start: str, claimed: list[Bin], *, priority: bool) -> Route:
        built = self.strategy.build(start, claimed)
        return Route(
            truck_id=truck.truck_id,
            truck_plate=truck.plate,
            bin_sensor_ids=[bin_.sensor_id for bin_ in claimed],
            stops=built.stops(self.time_model, priority=priority),
            total_distance=built.rounded_distance,
            estimated_time_min=self.time_model.route_minutes(built.total_distance),
            priority_route=priority,
        )
