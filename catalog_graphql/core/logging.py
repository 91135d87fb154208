"""
Logging setup for the API process and Celery workers.
Plain stdlib logging: one root handler, level from settings.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _resolve_level(value: str | int) -> int:
    if isinstance(value, int):
        return value
    resolved = logging.getLevelName(value.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {value}")
    return resolved


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Configure the root logger once per process (called from app factory / worker)."""
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(_resolve_level(level))
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    logging.captureWarnings(True)
    return root
