"""Decompression stage: a sequential byte stream over a .tar.gz source."""

from __future__ import annotations

import gzip
import zlib
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union

from ..common.errors import CorruptStreamError, FilesystemError

# Exceptions the gzip module raises for damaged input. BadGzipFile covers
# bad magic and trailer CRC/length mismatches, EOFError a truncated member.
_GZIP_ERRORS = (gzip.BadGzipFile, EOFError, zlib.error)


class GzipStream:
    """Read-once view of the decompressed bytes of a gzip file."""

    def __init__(self, handle: gzip.GzipFile, source: str) -> None:
        self._handle = handle
        self.source = source
        self.bytes_read = 0

    def read(self, size: int) -> bytes:
        """Return up to `size` decompressed bytes, or b"" at end of stream."""
        try:
            data = self._handle.read(size)
        except _GZIP_ERRORS as exc:
            raise CorruptStreamError(f"Corrupt gzip stream in {self.source}: {exc}") from exc
        self.bytes_read += len(data)
        return data

    def read_exact(self, size: int) -> bytes:
        """Read until `size` bytes are collected or the stream ends."""
        chunks = []
        remaining = size
        while remaining > 0:
            data = self.read(remaining)
            if not data:
                break
            chunks.append(data)
            remaining -= len(data)
        return b"".join(chunks)

    def drain(self, chunk_size: int) -> int:
        """Read to end of stream so the gzip trailer CRC and length get checked.

        Returns the number of bytes discarded after the end-of-archive marker.
        """
        discarded = 0
        while True:
            data = self.read(chunk_size)
            if not data:
                return discarded
            discarded += len(data)


@contextmanager
def open_gzip_stream(source_path: Union[str, Path]) -> Iterator[GzipStream]:
    """Open `source_path` for sequential decompressed reading.

    The gzip header is checked before the stream is handed out, so a source
    that is not gzip at all fails before the caller touches the filesystem.
    """
    source = str(source_path)
    try:
        raw = open(source, "rb")
    except OSError as exc:
        raise FilesystemError(f"Cannot open archive {source}: {exc}", path=source) from exc

    with raw, gzip.GzipFile(fileobj=raw, mode="rb") as handle:
        try:
            peeked = handle.peek(1)
        except _GZIP_ERRORS as exc:
            raise CorruptStreamError(f"Corrupt gzip stream in {source}: {exc}") from exc
        if not peeked and raw.tell() == 0:
            raise CorruptStreamError(f"Archive {source} is empty")
        yield GzipStream(handle, source)
