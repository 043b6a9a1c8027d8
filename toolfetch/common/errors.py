"""
Custom exception classes for toolfetch.
"""

from typing import Optional


class ToolfetchError(Exception):
    """Base exception class for toolfetch errors."""
    pass


class ExtractionError(ToolfetchError):
    """Base class for failures raised while extracting an archive."""
    pass


class CorruptStreamError(ExtractionError):
    """Raised when the compressed stream cannot be decoded."""
    pass


class CorruptHeaderError(ExtractionError):
    """Raised when a tar header block fails structural or numeric validation."""
    pass


class UnsupportedEntryTypeError(ExtractionError):
    """Raised for an archive entry whose typeflag is not materialized.

    Non-fatal: the extractor records it and moves on to the next entry.
    """

    def __init__(self, typeflag: str, path: str) -> None:
        super().__init__(f"Unsupported entry type {typeflag!r} for {path!r}")
        self.typeflag = typeflag
        self.path = path


class FilesystemError(ExtractionError):
    """Raised when creating, removing or writing a filesystem object fails."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class UnsafeEntryPathError(FilesystemError):
    """Raised when an entry path would land outside the destination root."""
    pass
