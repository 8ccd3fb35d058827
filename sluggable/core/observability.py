"""Logging helpers.

Environment knobs:

- LOG_LEVEL (default: INFO): root logger level
- SLUGGABLE_LOG_LEVEL: overrides the level of the ``sluggable`` loggers only,
  handy for tracing suffix decisions without raising SQLAlchemy's verbosity
"""

from __future__ import annotations

import logging
import os

from pythonjsonlogger.json import JsonFormatter

from .config import settings


def _level(name: str | None, default: int) -> int:
    if not name:
        return default
    return getattr(logging, name.strip().upper(), default)


def setup_logging() -> None:
    """Configure structured JSON logging."""
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter("%(levelname)s %(name)s %(message)s"))
    root = logging.getLogger()
    root.handlers = [handler]
    # Prefer process env, then Settings fallback (loaded from .env)
    level = _level(os.getenv("LOG_LEVEL") or getattr(settings, "LOG_LEVEL", "INFO"), logging.INFO)
    root.setLevel(level)
    pkg_level = os.getenv("SLUGGABLE_LOG_LEVEL")
    if pkg_level:
        logging.getLogger("sluggable").setLevel(_level(pkg_level, level))
