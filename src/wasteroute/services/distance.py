"""Symmetric distance lookup between named locations."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Mapping, Optional

from ..config import settings

logger = logging.getLogger(__name__)


class DistanceProvider(ABC):
    """Contract for travel distance lookups in kilometres."""

    @abstractmethod
    def lookup(self, origin: str, destination: str) -> Optional[float]:
        """Return the known distance or ``None`` when the pair is unknown."""
        raise NotImplementedError

    @property
    @abstractmethod
    def default_km(self) -> float:
        raise NotImplementedError

    def distance(self, origin: str, destination: str) -> float:
        known = self.lookup(origin, destination)
        if known is None:
            logger.debug("Distance unknown for %s -> %s, using default %.2f km", origin, destination, self.default_km)
            return self.default_km
        return known


class TableDistanceProvider(DistanceProvider):
    """Distance provider backed by a hand-authored nested table.

    A pair is looked up as given, then reversed. Pairs missing in both
    directions resolve to ``default_km``. That includes ``distance(a, a)``
    for a location the table does not know, which is a known approximation
    for sparse tables rather than something to correct here.
    """

    def __init__(
        self,
        table: Mapping[str, Mapping[str, float]] | None = None,
        *,
        default_km: float | None = None,
    ) -> None:
        resolved_default = settings.default_distance_km if default_km is None else default_km
        if resolved_default < 0:
            raise ValueError("default_km must be >= 0")
        self._default_km = float(resolved_default)
        self._table: dict[str, dict[str, float]] = {}
        for origin, row in (table or {}).items():
            self._table[origin] = {destination: float(km) for destination, km in row.items()}

    @property
    def default_km(self) -> float:
        return self._default_km

    def lookup(self, origin: str, destination: str) -> Optional[float]:
        row = self._table.get(origin)
        if row is not None and destination in row:
            return row[destination]
        row = self._table.get(destination)
        if row is not None and origin in row:
            return row[origin]
        return None

    def set_distance(self, origin: str, destination: str, km: float) -> None:
        if km < 0:
            raise ValueError("distance must be >= 0")
        self._table.setdefault(origin, {})[destination] = float(km)
        self._table.setdefault(destination, {})[origin] = float(km)

    def locations(self) -> list[str]:
        names: set[str] = set(self._table)
        for row in self._table.values():
            names.update(row)
        return sorted(names)
