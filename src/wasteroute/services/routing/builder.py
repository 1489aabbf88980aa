"""Single-truck visit ordering."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Sequence

from ...models.domain import Bin
from ..distance import DistanceProvider
from ..numeric import finite_or_zero, round_half_up
from .models import RouteStop
from .time_model import TimeModel

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BuiltRoute:
    """Ordered tour for one truck.

    ``locations`` starts at the truck location and, when any bin is visited,
    ends with the return leg back to it. ``visits`` lists the bins in the
    order they are collected.
    """

    locations: List[str]
    total_distance: float
    visits: List[Bin] = field(default_factory=list)

    def stops(self, time_model: TimeModel, *, priority: bool) -> list[RouteStop]:
        estimate = time_model.stop_estimate(self.total_distance, len(self.locations))
        return [
            RouteStop(
                sensor_id=bin_.sensor_id,
                order=index,
                estimated_time=estimate,
                location_name=bin_.location_name,
                priority=priority,
            )
            for index, bin_ in enumerate(self.visits, start=1)
        ]

    @property
    def rounded_distance(self) -> float:
        return round_half_up(self.total_distance, 2)


class RouteStrategy(ABC):
    """Contract for ordering the bins already assigned to one truck."""

    def __init__(self, distance_provider: DistanceProvider) -> None:
        self.distance_provider = distance_provider

    @abstractmethod
    def build(self, start_location: str, bins: Sequence[Bin]) -> BuiltRoute:
        raise NotImplementedError

    def leg(self, origin: str, destination: str) -> float:
        return finite_or_zero(
            self.distance_provider.distance(origin, destination),
            context=f"distance {origin} -> {destination}",
        )

    def tour_distance(self, start_location: str, visits: Sequence[Bin]) -> float:
        total = 0.0
        current = start_location
        for bin_ in visits:
            total += self.leg(current, bin_.location_name)
            current = bin_.location_name
        if visits:
            total += self.leg(current, start_location)
        return total


class NearestNeighborStrategy(RouteStrategy):
    """Greedy nearest-neighbor tour, O(n^2) in the bins of one truck.

    Exact ties keep the first bin seen so output is deterministic for a
    given input order.
    """

    def build(self, start_location: str, bins: Sequence[Bin]) -> BuiltRoute:
        if not bins:
            return BuiltRoute(locations=[start_location], total_distance=0.0)

        locations = [start_location]
        visits: list[Bin] = []
        remaining = list(bins)
        current = start_location
        total = 0.0

        while remaining:
            nearest_index = 0
            nearest_distance = self.leg(current, remaining[0].location_name)
            for index in range(1, len(remaining)):
                candidate = self.leg(current, remaining[index].location_name)
                if candidate < nearest_distance:
                    nearest_index = index
                    nearest_distance = candidate

            nearest = remaining.pop(nearest_index)
            locations.append(nearest.location_name)
            visits.append(nearest)
            total += nearest_distance
            current = nearest.location_name

        total += self.leg(current, start_location)
        locations.append(start_location)
        return BuiltRoute(locations=locations, total_distance=total, visits=visits)


def build_route(
    distance_provider: DistanceProvider,
    start_location: str,
    bins: Sequence[Bin],
) -> BuiltRoute:
    return NearestNeighborStrategy(distance_provider).build(start_location, bins)
