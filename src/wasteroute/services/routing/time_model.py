"""Heuristic travel-time model for planned routes."""

from __future__ import annotations

from dataclasses import dataclass, field

from ...config import settings
from ..numeric import finite_or_zero, round_half_up


@dataclass(slots=True)
class TimeModel:
    """Derives stop and route minutes from distance at a flat average speed.

    The defaults (6 min/km, i.e. 10 km/h, and a x10 stop factor) are not a
    physical simulation; swap this class out to change them.
    """

    minutes_per_km: float = field(default_factory=lambda: settings.minutes_per_km)
    stop_time_factor: float = field(default_factory=lambda: settings.stop_time_factor)

    def stop_estimate(self, total_km: float, location_count: int) -> int:
        if location_count <= 0:
            return 0
        value = finite_or_zero(total_km / location_count * self.stop_time_factor, context="stop estimate")
        return int(round_half_up(value))

    def route_minutes(self, total_km: float) -> int:
        value = finite_or_zero(total_km * self.minutes_per_km, context="route minutes")
        return int(round_half_up(value))
