"""Filesystem materializer: turns logical entries into directories, files and links."""

from __future__ import annotations

import logging
import os
import shutil
import stat
from pathlib import Path, PurePosixPath
from typing import List, Optional, Tuple

from ..common.constants import DEFAULT_CHUNK_SIZE
from ..common.errors import FilesystemError, UnsafeEntryPathError, UnsupportedEntryTypeError
from .tar_reader import EntryKind, LogicalEntry

_log = logging.getLogger(__name__)


def resolve_target(entry_path: str, destination_root: Path) -> Path:
    """Map an archive path onto the destination tree.

    Leading slashes and "." components are dropped. An empty result is the
    destination root itself.

    Raises:
        UnsafeEntryPathError: If the path climbs out of the destination root
    """
    parts = [part for part in PurePosixPath(entry_path).parts if part not in ("/", ".")]
    if ".." in parts:
        raise UnsafeEntryPathError(f"Unsafe archive member path: {entry_path!r}", path=entry_path)

    root = destination_root.resolve()
    if not parts:
        return root
    target = root.joinpath(*parts)
    parent = target.parent.resolve()
    if parent != root and root not in parent.parents:
        raise UnsafeEntryPathError(f"Unsafe archive member path: {entry_path!r}", path=entry_path)
    return target


def _existing_mode(path: Path):
    try:
        return path.lstat().st_mode
    except FileNotFoundError:
        return None


def _make_directory(target: Path, mode: int, directory_modes=None) -> None:
    existing = _existing_mode(target)
    if existing is not None and not stat.S_ISDIR(existing):
        _log.debug("Replacing non-directory at %s", target)
        target.unlink()
    target.mkdir(parents=True, exist_ok=True)
    if directory_modes is None:
        os.chmod(target, mode)
        return
    # Owner keeps write and search access until the walk is done.
    os.chmod(target, mode | stat.S_IRWXU)
    directory_modes.append((target, mode))


def apply_directory_modes(directory_modes: List[Tuple[Path, int]]) -> None:
    """Set the recorded mode on directories whose mode was deferred.

    Later entries for the same path win. Paths that no longer hold a
    directory, because a later file entry replaced them, are left alone.

    Raises:
        FilesystemError: If a chmod fails
    """
    seen = set()
    for target, mode in reversed(directory_modes):
        if target in seen:
            continue
        seen.add(target)
        existing = _existing_mode(target)
        if existing is None or not stat.S_ISDIR(existing):
            continue
        try:
            os.chmod(target, mode)
        except OSError as exc:
            raise FilesystemError(
                f"Failed to set mode on directory {target}: {exc}", path=str(target)
            ) from exc


def _write_file(target: Path, entry: LogicalEntry, chunk_size: int) -> int:
    existing = _existing_mode(target)
    if existing is not None:
        if stat.S_ISDIR(existing):
            _log.debug("Replacing directory at %s", target)
            shutil.rmtree(target)
        elif stat.S_ISLNK(existing):
            target.unlink()
    target.parent.mkdir(parents=True, exist_ok=True)

    written = 0
    with target.open("wb") as out_file:
        if entry.payload is not None:
            while True:
                chunk = entry.payload.read(chunk_size)
                if not chunk:
                    break
                out_file.write(chunk)
                written += len(chunk)
    os.chmod(target, entry.mode)
    return written


def _make_symlink(target: Path, linkname: str) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    os.symlink(linkname, target)


def materialize(
    entry: LogicalEntry,
    destination_root: Path,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    directory_modes: Optional[List[Tuple[Path, int]]] = None,
) -> int:
    """
    Create the filesystem object for one entry under `destination_root`.

    Args:
        entry: The entry to materialize
        destination_root: Root of the extraction tree
        chunk_size: Bytes copied per write for file payloads
        directory_modes: When given, directory modes are recorded here for
            `apply_directory_modes` instead of being applied immediately

    Returns:
        Number of payload bytes written (0 for directories and links)

    Raises:
        UnsupportedEntryTypeError: For entries with an unhandled typeflag
        FilesystemError: If any filesystem operation fails
    """
    if entry.kind is EntryKind.UNSUPPORTED:
        raise UnsupportedEntryTypeError(entry.typeflag.decode("latin-1"), entry.path)

    target = resolve_target(entry.path, destination_root)
    if entry.kind is not EntryKind.DIRECTORY and target == destination_root.resolve():
        raise UnsafeEntryPathError(
            f"Archive member {entry.path!r} would replace the destination root", path=entry.path
        )
    try:
        if entry.kind is EntryKind.DIRECTORY:
            _make_directory(target, entry.mode, directory_modes)
            return 0
        if entry.kind is EntryKind.SYMLINK:
            _make_symlink(target, entry.linkname)
            return 0
        return _write_file(target, entry, chunk_size)
    except OSError as exc:
        raise FilesystemError(
            f"Failed to create {entry.kind.value} {entry.path!r}: {exc}", path=str(target)
        ) from exc
