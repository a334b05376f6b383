"""Structured logging configuration for pagehook."""

from __future__ import annotations

import logging
import os
from typing import Optional

logger = logging.getLogger("pagehook.server")

# Attributes every LogRecord has; anything else came in through `extra=`.
_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class ExtraFormatter(logging.Formatter):
    """Append `extra=` fields to the message as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = {k: v for k, v in vars(record).items() if k not in _RESERVED}
        if not extras:
            return line
        rendered = " ".join(f"{key}={value!r}" for key, value in sorted(extras.items()))
        return f"{line} | {rendered}"


def configure_logging(level: Optional[str] = None) -> None:
    """Install a single stream handler at the configured level.

    Calling it again is a no-op, so the app module and tests can both call it.
    """
    if logger.handlers:
        return

    log_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    numeric_level = getattr(logging, log_level, logging.INFO)

    handler = logging.StreamHandler()
    handler.setFormatter(
        ExtraFormatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logging.basicConfig(level=numeric_level, handlers=[handler])
    logger.addHandler(logging.NullHandler())

    # Suppress noisy HTTP client logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
