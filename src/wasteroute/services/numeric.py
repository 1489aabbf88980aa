"""Rounding and sanitizing helpers shared by the engine."""

from __future__ import annotations

import logging
import math

logger = logging.getLogger(__name__)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves toward positive infinity, matching dashboard arithmetic.

    Non-finite input rounds to 0.
    """

    if not math.isfinite(value):
        logger.warning("Non-finite value %r rounded to 0", value)
        return 0.0
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def finite_or_zero(value: float, *, context: str = "value") -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.warning("Non-numeric %s %r coerced to 0", context, value)
        return 0.0
    if not math.isfinite(number):
        logger.warning("Non-finite %s %r coerced to 0", context, value)
        return 0.0
    return number
