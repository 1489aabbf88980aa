"""Fill-level classification and bin statistics."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Sequence

from ..config import settings
from ..models.domain import Bin, BinStatus


def classify_fill_level(fill_level: float) -> BinStatus:
    if fill_level >= settings.priority_threshold:
        return BinStatus.PRIORITY
    if fill_level >= settings.full_threshold:
        return BinStatus.FULL
    if fill_level >= settings.half_threshold:
        return BinStatus.HALF
    return BinStatus.EMPTY


def needs_collection(bin_: Bin, threshold: float | None = None) -> bool:
    limit = settings.collection_threshold if threshold is None else threshold
    return bin_.fill_level > limit


def is_priority(bin_: Bin, threshold: float | None = None) -> bool:
    limit = settings.priority_threshold if threshold is None else threshold
    return bin_.fill_level >= limit


def select_candidates(bins: Iterable[Bin], threshold: float | None = None) -> list[Bin]:
    return [bin_ for bin_ in bins if needs_collection(bin_, threshold)]


def bin_statistics(bins: Sequence[Bin]) -> dict[str, int]:
    counts: Counter[BinStatus] = Counter(classify_fill_level(bin_.fill_level) for bin_ in bins)
    return {
        "total": len(bins),
        "full": counts[BinStatus.FULL],
        "priority": counts[BinStatus.PRIORITY],
        "empty": counts[BinStatus.EMPTY],
        "half": counts[BinStatus.HALF],
    }
