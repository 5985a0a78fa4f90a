"""Logging configuration shared by the CLI and the research scripts."""
from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Chatty third-party loggers
_NOISY_LOGGERS = ("matplotlib", "PIL")


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger. Unknown level names fall back to INFO."""
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO

    logging.basicConfig(format=LOG_FORMAT, force=True)
    logging.getLogger().setLevel(resolved)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
