"""Shared CLI helpers for toolfetch commands."""

import sys
from typing import Optional

from toolfetch.common.constants import ExitCodes
from toolfetch.common.errors import (
    CorruptHeaderError,
    CorruptStreamError,
    FilesystemError,
    UnsafeEntryPathError,
)


def exit_with_error(message: str, exit_code: int) -> None:
    """Print an error message and exit with the specified code."""
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(exit_code)


def map_exception_to_exit_code(exc: Exception) -> Optional[int]:
    """Translate known exceptions to toolfetch exit codes."""
    if isinstance(exc, CorruptStreamError):
        return ExitCodes.CORRUPT_STREAM
    if isinstance(exc, CorruptHeaderError):
        return ExitCodes.CORRUPT_HEADER
    if isinstance(exc, UnsafeEntryPathError):
        return ExitCodes.UNSAFE_ENTRY_PATH
    if isinstance(exc, FilesystemError):
        return ExitCodes.FILESYSTEM_ERROR
    return None
