"""OR-Tools sequence optimization for bins already assigned to a truck.

Only the visit order changes. Which bins a truck collects is decided by the
allocator, so swapping this strategy in never moves a bin between trucks.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ortools.constraint_solver import pywrapcp, routing_enums_pb2

from ...config import settings
from ...models.domain import Bin
from ..distance import DistanceProvider
from .builder import BuiltRoute, NearestNeighborStrategy, RouteStrategy

logger = logging.getLogger(__name__)

# Solver arc costs must be integers, so kilometres are scaled to metres.
_METRES_PER_KM = 1000


class OrToolsSequenceStrategy(RouteStrategy):
    def __init__(
        self,
        distance_provider: DistanceProvider,
        *,
        time_limit_seconds: int | None = None,
    ) -> None:
        super().__init__(distance_provider)
        self.time_limit_seconds = (
            settings.solver_time_limit_seconds if time_limit_seconds is None else time_limit_seconds
        )
        self._fallback = NearestNeighborStrategy(distance_provider)

    def _matrix(self, nodes: Sequence[str]) -> list[list[int]]:
        return [
            [0 if i == j else int(round(self.leg(origin, destination) * _METRES_PER_KM)) for j, destination in enumerate(nodes)]
            for i, origin in enumerate(nodes)
        ]

    def build(self, start_location: str, bins: Sequence[Bin]) -> BuiltRoute:
        if len(bins) < 2:
            return self._fallback.build(start_location, bins)

        nodes = [start_location] + [bin_.location_name for bin_ in bins]
        matrix = self._matrix(nodes)

        manager = pywrapcp.RoutingIndexManager(len(nodes), 1, 0)
        routing = pywrapcp.RoutingModel(manager)

        def distance_callback(from_index: int, to_index: int) -> int:
            from_node = manager.IndexToNode(from_index)
            to_node = manager.IndexToNode(to_index)
            return matrix[from_node][to_node]

        transit_callback_index = routing.RegisterTransitCallback(distance_callback)
        routing.SetArcCostEvaluatorOfAllVehicles(transit_callback_index)

        search_parameters = pywrapcp.DefaultRoutingSearchParameters()
        search_parameters.first_solution_strategy = (
            routing_enums_pb2.FirstSolutionStrategy.PATH_CHEAPEST_ARC
        )
        if self.time_limit_seconds > 0:
            search_parameters.local_search_metaheuristic = (
                routing_enums_pb2.LocalSearchMetaheuristic.GUIDED_LOCAL_SEARCH
            )
            search_parameters.time_limit.FromSeconds(self.time_limit_seconds)

        assignment = routing.SolveWithParameters(search_parameters)
        if not assignment:
            logger.warning("Could not solve sequence from %s, using nearest-neighbor order", start_location)
            return self._fallback.build(start_location, bins)

        visits: list[Bin] = []
        index = routing.Start(0)
        while not routing.IsEnd(index):
            node = manager.IndexToNode(index)
            if node != 0:
                visits.append(bins[node - 1])
            index = assignment.Value(routing.NextVar(index))

        locations = [start_location] + [bin_.location_name for bin_ in visits] + [start_location]
        return BuiltRoute(
            locations=locations,
            total_distance=self.tour_distance(start_location, visits),
            visits=visits,
        )
