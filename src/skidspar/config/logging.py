"""Shared logging helpers."""

from __future__ import annotations

import logging
import os


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    Parameters mirror ``logging.basicConfig`` with a simplified contract: we default
    to INFO level and a terse format suitable for a scheduled job. Pass ``force=True``
    to reconfigure during tests or specialised entry points.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    # request lines are logged by the broker debug hook instead
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))


def get_log_level(default: int = logging.INFO) -> int:
    name = os.getenv("LOG_LEVEL", "").strip().upper()
    if not name:
        return default
    level = logging.getLevelNamesMapping().get(name)
    return level if level is not None else default
