"""Logging setup for engine consumers."""

from __future__ import annotations

import logging

from .config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Apply the configured log level to the root logger."""

    resolved = (level or settings.log_level).upper()
    numeric = logging.getLevelName(resolved)
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level '{resolved}'.")
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
    logging.getLogger("wasteroute").setLevel(numeric)
