"""Logging setup for the toolfetch CLI.

`toolfetch.cli.main` calls `configure_logging` before dispatching a command.
The extraction engine under `toolfetch.core` only logs through module loggers:
per-entry progress at DEBUG, skipped entry types at WARNING and a one-line
extraction summary at INFO. Setting `TOOLFETCH_LOG_LEVEL=DEBUG` shows every
materialized entry.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

_LEVEL_MAP = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "NOTSET": logging.NOTSET,
}


def configure_logging(level: str | int | None = None, *, force: bool = False) -> None:
    """Configure root logger.

    Order of precedence for level:
    1. Explicit `level` argument if given
    2. Environment variable `TOOLFETCH_LOG_LEVEL`
    3. Fallback to `INFO`

    An unknown level name falls back to `INFO` and logs a warning.
    """
    if level is None:
        level = os.environ.get("TOOLFETCH_LOG_LEVEL", "INFO")

    invalid_level = None
    if isinstance(level, str):
        resolved = _LEVEL_MAP.get(level.strip().upper())
        if resolved is None:
            invalid_level = level
            resolved = logging.INFO
        level = resolved

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=force,
    )
    if invalid_level is not None:
        logging.getLogger("toolfetch").warning(
            "Invalid log level %r; falling back to INFO. Valid values: %s.",
            invalid_level,
            ", ".join(sorted(_LEVEL_MAP)),
        )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a project logger, configuring logging lazily on first access."""
    logger = logging.getLogger(name or "toolfetch")
    if not logging.getLogger().handlers:  # pragma: no cover - first use only
        configure_logging()
    return logger


__all__ = ["configure_logging", "get_logger"]
