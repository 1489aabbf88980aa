"""Typed planning errors returned as values instead of raised."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    NO_ACTIVE_TRUCKS = "NoActiveTrucks"
    NO_BINS_REQUIRE_COLLECTION = "NoBinsRequireCollection"
    INSUFFICIENT_FLEET_FUEL = "InsufficientFleetFuel"
    INVALID_TRUCK_FUEL_QUERY = "InvalidTruckFuelQuery"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    ErrorKind.NO_ACTIVE_TRUCKS: "No active trucks available",
    ErrorKind.NO_BINS_REQUIRE_COLLECTION: "No bins require collection",
    ErrorKind.INSUFFICIENT_FLEET_FUEL: "No trucks have sufficient fuel for the collection routes",
    ErrorKind.INVALID_TRUCK_FUEL_QUERY: "Truck not found",
}


@dataclass(slots=True)
class PlanningError:
    kind: ErrorKind
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def of(cls, kind: ErrorKind, **details: Any) -> "PlanningError":
        return cls(kind=kind, message=kind.message, details=details)


class PlanningFailure(RuntimeError):
    """Raised by :meth:`Outcome.unwrap` for callers that prefer exceptions."""

    def __init__(self, error: PlanningError) -> None:
        super().__init__(error.message)
        self.error = error


@dataclass(slots=True)
class Outcome(Generic[T]):
    """Either a computed value or a planning error, never both."""

    value: Optional[T] = None
    error: Optional[PlanningError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, **details: Any) -> "Outcome[T]":
        return cls(error=PlanningError.of(kind, **details))

    def unwrap(self) -> T:
        if self.error is not None:
            raise PlanningFailure(self.error)
        return self.value  # type: ignore[return-value]
