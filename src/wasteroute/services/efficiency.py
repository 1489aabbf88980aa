"""Savings estimate of optimized routes against a flat per-bin baseline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from ..config import settings
from .numeric import finite_or_zero, round_half_up
from .routing.models import AllocationSummary, Efficiency, FuelDeduction, Route


@dataclass(slots=True)
class EfficiencyEstimator:
    """No measured history exists, so the baseline is synthetic: every bin
    costs a fixed number of kilometres when visited without optimization."""

    km_per_bin: float = field(default_factory=lambda: settings.baseline_km_per_bin)
    minutes_per_km: float = field(default_factory=lambda: settings.minutes_per_km)
    fuel_liters_per_km: float = field(default_factory=lambda: settings.fuel_liters_per_km)

    def estimate(self, routes: Sequence[Route]) -> Efficiency:
        total_bins = sum(len(route.bin_sensor_ids) for route in routes)
        baseline_distance = total_bins * self.km_per_bin
        baseline_time = baseline_distance * self.minutes_per_km

        optimized_distance = sum(finite_or_zero(route.total_distance) for route in routes)
        optimized_time = sum(finite_or_zero(route.estimated_time_min) for route in routes)

        distance_saved = max(0.0, baseline_distance - optimized_distance)
        return Efficiency(
            time_saved=max(0.0, baseline_time - optimized_time),
            distance_saved=distance_saved,
            fuel_saved=max(0.0, distance_saved * self.fuel_liters_per_km),
        )


def summarize_allocation(routes: Sequence[Route], deductions: Sequence[FuelDeduction]) -> AllocationSummary:
    if not routes:
        return AllocationSummary()
    total_distance = sum(route.total_distance for route in routes)
    total_fuel = sum(deduction.liters for deduction in deductions)
    total_time = sum(route.estimated_time_min for route in routes)
    return AllocationSummary(
        total_distance=round_half_up(total_distance, 2),
        total_fuel_consumption=round_half_up(total_fuel, 2),
        total_estimated_time=total_time,
        average_distance_per_truck=round_half_up(total_distance / len(routes), 2),
        average_fuel_per_truck=round_half_up(total_fuel / len(routes), 2),
        truck_utilization=len(routes),
    )
