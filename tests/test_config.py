from pathlib import Path

from wasteroute.config import Settings


def test_defaults_match_district_constants():
    config = Settings()

    assert config.depot_location == "Kilinochchi Town"
    assert config.default_distance_km == 10.0
    assert config.max_priority_bins_per_truck == 3
    assert config.max_regular_bins_per_truck == 5
    assert config.route_strategy == "nearest_neighbor"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("WASTEROUTE_DEFAULT_DISTANCE_KM", "12.5")
    monkeypatch.setenv("WASTEROUTE_LOG_LEVEL", "debug")

    config = Settings()

    assert config.default_distance_km == 12.5
    assert config.log_level == "DEBUG"


def test_distance_table_path_is_resolved(tmp_path: Path):
    config = Settings(distance_table_file=str(tmp_path / "table.json"))

    assert config.distance_table_file == (tmp_path / "table.json").resolve()


def test_configure_logging_rejects_unknown_level():
    import logging

    import pytest

    from wasteroute.logging_config import configure_logging

    configure_logging("warning")
    assert logging.getLogger("wasteroute").level == logging.WARNING
    with pytest.raises(ValueError):
        configure_logging("chatty")


def test_plan_request_rejects_unknown_mode():
    import pytest
    from pydantic import ValidationError

    from wasteroute.schemas.planning import PlanRequest

    assert PlanRequest(bins=[], trucks=[], mode="predictive").mode == "predictive"
    with pytest.raises(ValidationError):
        PlanRequest(bins=[], trucks=[], mode="weekly")


def test_time_model_reads_settings_at_construction(monkeypatch):
    from wasteroute.config import settings
    from wasteroute.services.routing.time_model import TimeModel

    monkeypatch.setattr(settings, "minutes_per_km", 4.0)

    assert TimeModel().route_minutes(10) == 40
