"""Route planning orchestration service."""

from __future__ import annotations

import logging

from ...data.distance_repository import get_distance_provider
from ...schemas.planning import (
    ErrorModel,
    FuelValidationRequest,
    FuelValidationResponse,
    PlanRequest,
    PlanResponse,
    RoutePlanDocument,
)
from ..distance import DistanceProvider
from ..errors import PlanningError
from ..outputs.plan_formatter import route_plan_to_json
from ..routing.engine import RouteEngine

logger = logging.getLogger(__name__)


def _error_model(error: PlanningError) -> ErrorModel:
    return ErrorModel(kind=error.kind.value, message=error.message, details=error.details)


def _build_engine(distance_provider: DistanceProvider | None) -> RouteEngine:
    return RouteEngine(distance_provider or get_distance_provider())


def generate_route_plan(payload: PlanRequest, *, distance_provider: DistanceProvider | None = None) -> PlanResponse:
    engine = _build_engine(distance_provider)
    bins = [snapshot.to_domain() for snapshot in payload.bins]
    trucks = [snapshot.to_domain() for snapshot in payload.trucks]

    outcome = engine.generate_plan(bins, trucks, payload.depot_location, payload.mode)
    if not outcome.ok:
        logger.info("Plan generation failed: %s", outcome.error.message)
        return PlanResponse(ok=False, error=_error_model(outcome.error))

    document = RoutePlanDocument.model_validate(route_plan_to_json(outcome.value))
    return PlanResponse(ok=True, plan=document)


def validate_truck_fuel(
    payload: FuelValidationRequest,
    *,
    distance_provider: DistanceProvider | None = None,
) -> FuelValidationResponse:
    engine = _build_engine(distance_provider)
    trucks = [snapshot.to_domain() for snapshot in payload.trucks]
    outcome = engine.validate_truck_fuel(trucks, payload.truck_id, payload.estimated_distance_km)
    if not outcome.ok:
        return FuelValidationResponse(ok=False, error=_error_model(outcome.error))

    validation = outcome.value
    return FuelValidationResponse(
        ok=True,
        valid=validation.valid,
        required_fuel=validation.required_fuel,
        reason=validation.reason,
        current_fuel=validation.current_fuel,
        fuel_efficiency=validation.fuel_efficiency,
    )
