"""Centralized logging helpers.

Keeps handler setup in one place so the CLI and tests agree on format and
level, and provides the small helpers used for structured DEBUG traces.
"""

from __future__ import annotations

import logging
import os
import sys
import time
from typing import Any, Dict, Iterable, Optional

from constants import Constants

_HANDLER_NAME = "depinspect-console"


def configure_logging(level: Optional[str] = None) -> None:
    """Install the console handler on the root logger.

    The level is taken from ``level`` if given, otherwise from the
    DEPINSPECT_LOG_LEVEL environment variable, defaulting to INFO.
    Calling this again only updates the level.
    """
    level_name = (level or os.environ.get(Constants.LOG_LEVEL_ENV) or "INFO").upper()
    level_value = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    if not any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level_value)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted by ``logger``."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**kwargs: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping for structured log records, dropping None values."""
    return {k: v for k, v in kwargs.items() if v is not None}


def log_discovered_files(logger: logging.Logger, lang: str, files: Iterable[str]) -> None:
    """DEBUG trace of the lock files discovered for a language."""
    files = list(files)
    logger.debug(
        "Discovered %d %s lock file(s)",
        len(files),
        lang,
        extra=extra_context(
            event="discovery",
            component="scan",
            action="discover_lock_files",
            target=lang,
            count=len(files),
        ),
    )


class Timer:
    """Context manager measuring elapsed wall time in milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *exc) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
