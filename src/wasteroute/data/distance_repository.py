"""Distance table loader with a built-in Kilinochchi district fallback."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Mapping

from ..config import settings
from ..services.distance import TableDistanceProvider

_DESTINATIONS = (
    "Paranthan", "Poonagary", "Kilinochchi Town", "Ramanathapuram", "Uruthirapuram",
    "Akkarayankulam", "Mulankavil", "Pallai", "Kandawalai", "Murikandy",
    "Thiruvaiaru", "Nachchikuda", "Anaivilunthan", "Puthukudiyiruppu", "Jayapuram",
    "Elephant Pass", "Iranamadu", "Mankulam", "Puliyankulam", "Vavuniya Road",
    "Oddusuddan", "Kanakapuram", "Karachchi", "Mallavi", "Thunukkai",
)

# Approximate road distances (km) from a handful of hubs to every district location.
_HUB_ROWS = {
    "Paranthan": (0, 5, 10, 15, 8, 12, 18, 20, 25, 7, 22, 14, 16, 9, 11, 30, 35, 40, 28, 45, 50, 55, 60, 65, 70),
    "Poonagary": (5, 0, 8, 12, 6, 10, 15, 18, 22, 4, 20, 12, 14, 7, 9, 28, 33, 38, 26, 43, 48, 53, 58, 63, 68),
    "Kilinochchi Town": (10, 8, 0, 6, 4, 5, 10, 12, 15, 6, 14, 8, 10, 3, 5, 25, 30, 35, 23, 40, 45, 50, 55, 60, 65),
    "Akkarayankulam": (12, 10, 5, 8, 6, 0, 8, 10, 12, 8, 15, 5, 7, 4, 3, 20, 25, 30, 18, 35, 40, 45, 50, 55, 60),
    "Murikandy": (7, 4, 6, 10, 5, 8, 12, 15, 18, 0, 16, 10, 12, 6, 8, 25, 30, 35, 23, 40, 45, 50, 55, 60, 65),
}

BUILTIN_DISTANCE_TABLE: dict[str, dict[str, float]] = {
    hub: dict(zip(_DESTINATIONS, row)) for hub, row in _HUB_ROWS.items()
}


def _validate_table(data: object, source: Path) -> dict[str, dict[str, float]]:
    if not isinstance(data, Mapping):
        raise ValueError(f"Distance table '{source}' must be a JSON object.")
    table: dict[str, dict[str, float]] = {}
    for origin, row in data.items():
        if not isinstance(row, Mapping):
            raise ValueError(f"Distance table row '{origin}' must be an object.")
        try:
            table[str(origin)] = {str(dest): float(km) for dest, km in row.items()}
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Distance table row '{origin}' has a non-numeric distance.") from exc
    return table


@lru_cache(maxsize=4)
def load_distance_table(source: Path | None = None) -> dict[str, dict[str, float]]:
    """Load a nested ``{origin: {destination: km}}`` table, or the built-in one."""

    path = source or settings.distance_table_file
    if path is None:
        return {origin: dict(row) for origin, row in BUILTIN_DISTANCE_TABLE.items()}
    if not path.exists():
        raise FileNotFoundError(f"Distance table not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    return _validate_table(data, path)


def get_distance_provider(source: Path | None = None, *, default_km: float | None = None) -> TableDistanceProvider:
    return TableDistanceProvider(load_distance_table(source), default_km=default_km)
