"""Logging setup shared by the game engine, API server, and tick loop."""

from __future__ import annotations

import logging
from logging import Logger

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Per-request chatter from these libraries drowns out game events at INFO.
_NOISY_LOGGERS = ("urllib3", "uvicorn.access")


def configure_logging(level: int | str = logging.INFO) -> Logger:
    """Configure root logging once and return the ``recall_app`` logger.

    ``level`` accepts either a ``logging`` constant or a name such as ``"debug"``.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level!r}")
        level = resolved
    logging.basicConfig(level=level, format=LOG_FORMAT)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    return logging.getLogger("recall_app")
