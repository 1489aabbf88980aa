"""Serializers for route plan outputs."""

from __future__ import annotations

import csv
import io
from dataclasses import asdict

from ..routing.models import RoutePlan


def _isoformat(value) -> str | None:
    return value.isoformat() if value is not None else None


def route_plan_to_json(plan: RoutePlan) -> dict:
    return {
        "mode": plan.mode,
        "generated_for": _isoformat(plan.generated_for),
        "approved": plan.approved,
        "dispatched_at": _isoformat(plan.dispatched_at),
        "completed_at": _isoformat(plan.completed_at),
        "efficiency": asdict(plan.efficiency),
        "summary": asdict(plan.summary),
        "fuel_deductions": [asdict(deduction) for deduction in plan.fuel_deductions],
        "routes": [
            {
                "truck_id": route.truck_id,
                "truck_plate": route.truck_plate,
                "bin_sensor_ids": list(route.bin_sensor_ids),
                "total_distance": route.total_distance,
                "estimated_time_min": route.estimated_time_min,
                "status": route.status,
                "priority_route": route.priority_route,
                "stops": [asdict(stop) for stop in route.stops],
            }
            for route in plan.routes
        ],
    }


def route_plan_to_csv(plan: RoutePlan) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "truck_id",
        "truck_plate",
        "order",
        "sensor_id",
        "location_name",
        "estimated_time",
        "priority",
        "total_distance",
        "estimated_time_min",
        "priority_route",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for route in plan.routes:
        for stop in route.stops:
            writer.writerow(
                {
                    "truck_id": route.truck_id,
                    "truck_plate": route.truck_plate,
                    "order": stop.order,
                    "sensor_id": stop.sensor_id,
                    "location_name": stop.location_name,
                    "estimated_time": stop.estimated_time,
                    "priority": stop.priority,
                    "total_distance": route.total_distance,
                    "estimated_time_min": route.estimated_time_min,
                    "priority_route": route.priority_route,
                }
            )
    return buffer.getvalue()
