"""Engine configuration and settings management."""

from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="WASTEROUTE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Waste Collection Route Engine"
    depot_location: str = Field(
        default="Kilinochchi Town",
        description="Home location used when a truck has no current location.",
    )
    default_distance_km: float = Field(
        default=10.0,
        ge=0.0,
        description="Distance returned for location pairs missing from the distance table.",
    )
    distance_table_file: Optional[Path] = Field(
        default=None,
        description="JSON file with a nested {location: {location: km}} table. Built-in table when unset.",
    )
    half_threshold: float = Field(default=25, ge=0)
    full_threshold: float = Field(default=70, ge=0)
    collection_threshold: float = Field(default=70, ge=0)
    priority_threshold: float = Field(default=100, ge=0)
    max_priority_bins_per_truck: int = Field(default=3, ge=1)
    max_regular_bins_per_truck: int = Field(default=5, ge=1)
    fuel_max_bins_per_truck: int = Field(default=10, ge=1)
    fuel_avg_leg_km: float = Field(default=15.0, ge=0.0)
    fuel_return_trip_multiplier: float = Field(default=2, ge=1)
    baseline_km_per_bin: float = Field(default=5.0, ge=0.0)
    minutes_per_km: float = Field(default=6.0, ge=0.0)
    stop_time_factor: float = Field(default=10.0, ge=0.0)
    fuel_liters_per_km: float = Field(default=0.08, ge=0.0)
    route_strategy: Literal["nearest_neighbor", "ortools"] = Field(
        default="nearest_neighbor",
        description="Single-truck visit ordering strategy.",
    )
    solver_time_limit_seconds: int = Field(default=5, ge=0)
    log_level: str = Field(default="INFO")

    @field_validator("distance_table_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Optional[Path]:
        if value is None or value == "":
            return None
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> str:
        return str(value or "INFO").strip().upper()


settings = Settings()
