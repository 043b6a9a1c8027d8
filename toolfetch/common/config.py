"""Configuration helpers for toolfetch.

Settings are sourced from the environment:
    - `TOOLFETCH_TOOLCHAIN_DIR` default destination for extracted tools
    - `TOOLFETCH_CHUNK_SIZE` bytes copied per write while extracting files
    - `TOOLFETCH_LOG_LEVEL` consumed by `logging_config.configure_logging`
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .constants import DEFAULT_CHUNK_SIZE, DEFAULT_TOOLCHAIN_DIR


def env_int(environ: Mapping[str, str], key: str, default: int) -> int:
    value = environ.get(key)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass
class ToolfetchSettings:
    """Typed settings sourced from the environment."""

    toolchain_dir: str = DEFAULT_TOOLCHAIN_DIR
    chunk_size: int = DEFAULT_CHUNK_SIZE

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ToolfetchSettings":
        environ = os.environ if environ is None else environ
        chunk_size = env_int(environ, "TOOLFETCH_CHUNK_SIZE", DEFAULT_CHUNK_SIZE)
        if chunk_size <= 0:
            chunk_size = DEFAULT_CHUNK_SIZE
        return cls(
            toolchain_dir=environ.get("TOOLFETCH_TOOLCHAIN_DIR") or DEFAULT_TOOLCHAIN_DIR,
            chunk_size=chunk_size,
        )
