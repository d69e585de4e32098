"""
Logging setup for entry points.

Library modules only create module-level loggers; the demo and CLI call
``configure_logging`` once at startup.
"""

from __future__ import annotations

import logging

DEFAULT_FORMAT = "%(asctime)s %(levelname)-7s [%(threadName)s] %(name)s: %(message)s"


def configure_logging(level: int | str = logging.INFO, fmt: str = DEFAULT_FORMAT) -> None:
    """Configure root logging. Accepts a level number or name ("DEBUG")."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(level=level, format=fmt)
    # pygame's own logger is chatty at DEBUG
    logging.getLogger("pygame").setLevel(max(level, logging.WARNING))
