"""Extraction driver: decompress, demultiplex and materialize a .tar.gz archive."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, NamedTuple, Optional, Tuple, Union

from ..common.config import ToolfetchSettings
from ..common.constants import DEFAULT_CHUNK_SIZE
from ..common.errors import FilesystemError, UnsupportedEntryTypeError
from .gzip_stream import open_gzip_stream
from .materializer import apply_directory_modes, materialize
from .tar_reader import EntryKind, iter_entries

_log = logging.getLogger(__name__)


@dataclass
class ExtractionSummary:
    """Outcome of a completed extraction."""

    destination: Path
    directories: int = 0
    files: int = 0
    symlinks: int = 0
    bytes_written: int = 0
    skipped: List[UnsupportedEntryTypeError] = field(default_factory=list)

    @property
    def entries(self) -> int:
        return self.directories + self.files + self.symlinks


class EntryListing(NamedTuple):
    """Archive member as reported by `list_entries`."""
    kind: EntryKind
    mode: int
    size: int
    path: str
    linkname: str


def extract(
    source_path: Union[str, Path],
    destination_root: Union[str, Path],
    settings: Optional[ToolfetchSettings] = None,
) -> ExtractionSummary:
    """
    Extract a gzip-compressed tar archive into `destination_root`.

    Entries are materialized strictly in archive order. Entries with an
    unsupported typeflag are logged and recorded in the summary; every other
    failure aborts the extraction and leaves already written entries in place.

    Directory modes are applied once every entry is written, so a read-only
    directory can still receive its own members. The decompressed stream is
    read to its end after the archive marker so the gzip trailer is verified.

    Args:
        source_path: Local .tar.gz file
        destination_root: Directory to extract into, created if absent
        settings: Optional settings; read from the environment when omitted

    Returns:
        ExtractionSummary with per-kind counts and skipped entries

    Raises:
        CorruptStreamError: If the gzip layer or archive data is damaged
        CorruptHeaderError: If a tar header is invalid
        FilesystemError: If a filesystem operation fails
    """
    settings = settings or ToolfetchSettings.from_env()
    destination = Path(destination_root)
    summary = ExtractionSummary(destination=destination)

    _log.info("Extracting %s into %s", source_path, destination)
    with open_gzip_stream(source_path) as stream:
        try:
            destination.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(
                f"Cannot create destination {destination}: {exc}", path=str(destination)
            ) from exc

        directory_modes: List[Tuple[Path, int]] = []
        for entry in iter_entries(stream):
            try:
                written = materialize(
                    entry,
                    destination,
                    chunk_size=settings.chunk_size,
                    directory_modes=directory_modes,
                )
            except UnsupportedEntryTypeError as exc:
                _log.warning("Skipping %s", exc)
                summary.skipped.append(exc)
                continue

            _log.debug("Extracted %s %s", entry.kind.value, entry.path)
            if entry.kind is EntryKind.DIRECTORY:
                summary.directories += 1
            elif entry.kind is EntryKind.SYMLINK:
                summary.symlinks += 1
            else:
                summary.files += 1
                summary.bytes_written += written

        trailing = stream.drain(settings.chunk_size)
        if trailing:
            _log.debug("Discarded %d bytes after end-of-archive marker", trailing)
        apply_directory_modes(directory_modes)

    _log.info(
        "Extracted %d entries (%d bytes) from %s",
        summary.entries,
        summary.bytes_written,
        source_path,
    )
    return summary


def list_entries(source_path: Union[str, Path]) -> List[EntryListing]:
    """Read the archive and describe its members without touching the filesystem."""
    with open_gzip_stream(source_path) as stream:
        listing = [
            EntryListing(entry.kind, entry.mode, entry.size, entry.path, entry.linkname)
            for entry in iter_entries(stream)
        ]
        stream.drain(DEFAULT_CHUNK_SIZE)
    return listing
