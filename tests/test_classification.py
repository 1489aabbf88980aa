import pytest

from wasteroute.models.domain import BinStatus
from wasteroute.services.classification import bin_statistics, classify_fill_level, select_candidates

from helpers import make_bin


@pytest.mark.parametrize(
    ("fill", "expected"),
    [
        (0, BinStatus.EMPTY),
        (24, BinStatus.EMPTY),
        (25, BinStatus.HALF),
        (69, BinStatus.HALF),
        (70, BinStatus.FULL),
        (99, BinStatus.FULL),
        (100, BinStatus.PRIORITY),
        (150, BinStatus.PRIORITY),
    ],
)
def test_classify_fill_level(fill, expected):
    assert classify_fill_level(fill) is expected


def test_select_candidates_requires_strictly_above_threshold():
    bins = [make_bin("S1", "A", 70), make_bin("S2", "A", 70.5), make_bin("S3", "A", 120)]

    assert [bin_.sensor_id for bin_ in select_candidates(bins)] == ["S2", "S3"]


def test_bin_statistics_counts_each_status():
    bins = [make_bin(f"S{i}", "A", fill) for i, fill in enumerate([0, 30, 50, 75, 100, 110])]

    assert bin_statistics(bins) == {"total": 6, "full": 1, "priority": 2, "empty": 1, "half": 2}


def test_classification_follows_configured_thresholds(monkeypatch):
    from wasteroute.config import settings

    monkeypatch.setattr(settings, "half_threshold", 40)
    monkeypatch.setattr(settings, "full_threshold", 80)

    assert classify_fill_level(30) is BinStatus.EMPTY
    assert classify_fill_level(50) is BinStatus.HALF
    assert classify_fill_level(75) is BinStatus.HALF
    assert classify_fill_level(80) is BinStatus.FULL
