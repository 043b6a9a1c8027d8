"""
Tar demultiplexer.

Walks a decompressed tar stream block by block and yields one
`LogicalEntry` per archive member, folding GNU long-name/long-link records
and pax extended headers into the entry that follows them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, Optional

from ..common.constants import BLOCK_SIZE, GNU_LONGLINK_NAME, TarTypes
from ..common.errors import CorruptHeaderError, CorruptStreamError
from .gzip_stream import GzipStream
from .tar_headers import decode_text, is_zero_block, parse_header, parse_pax_records

_log = logging.getLogger(__name__)


class EntryKind(Enum):
    DIRECTORY = "directory"
    FILE = "file"
    SYMLINK = "symlink"
    UNSUPPORTED = "unsupported"


class EntryPayload:
    """Bounded reader over one entry's data; `skip` also eats the block padding."""

    def __init__(self, stream: GzipStream, size: int) -> None:
        self._stream = stream
        self.remaining = size
        self._padding = -size % BLOCK_SIZE

    def read(self, size: int = -1) -> bytes:
        if self.remaining == 0:
            return b""
        if size < 0 or size > self.remaining:
            size = self.remaining
        data = self._stream.read(size)
        if not data:
            raise CorruptStreamError(
                f"Archive ended with {self.remaining} bytes of entry data missing"
            )
        self.remaining -= len(data)
        return data

    def skip(self) -> None:
        while self.remaining:
            self.read(BLOCK_SIZE * 128)
        if self._padding:
            self._stream.read_exact(self._padding)
            self._padding = 0


@dataclass
class LogicalEntry:
    """One reconciled archive member, ready to be materialized."""

    path: str
    kind: EntryKind
    mode: int
    size: int = 0
    linkname: str = ""
    typeflag: bytes = TarTypes.REGTYPE
    payload: Optional[EntryPayload] = None


def classify(typeflag: bytes, path: str) -> EntryKind:
    """Map a typeflag to an entry kind; the path shape only decides unset flags."""
    if typeflag == TarTypes.DIRTYPE:
        return EntryKind.DIRECTORY
    if typeflag in (TarTypes.REGTYPE, TarTypes.CONTTYPE):
        return EntryKind.FILE
    if typeflag == TarTypes.SYMTYPE:
        return EntryKind.SYMLINK
    if typeflag in (TarTypes.AREGTYPE, b""):
        return EntryKind.DIRECTORY if path.endswith("/") else EntryKind.FILE
    return EntryKind.UNSUPPORTED


def _read_record_payload(stream: GzipStream, size: int) -> bytes:
    payload = EntryPayload(stream, size)
    chunks = []
    while payload.remaining:
        chunks.append(payload.read())
    payload.skip()
    return b"".join(chunks)


def iter_entries(stream: GzipStream) -> Iterator[LogicalEntry]:
    """
    Yield the logical entries of a tar stream in archive order.

    The walk ends at end of stream, at a short trailing block or at the first
    all-zero block. File entries carry a live `payload`; whatever the consumer
    leaves unread is drained before the next header is read.

    Raises:
        CorruptHeaderError: On an invalid header block
        CorruptStreamError: If the stream ends inside an entry's data
    """
    long_name: Optional[str] = None
    long_link: Optional[str] = None
    pax: Dict[str, str] = {}

    while True:
        block = stream.read_exact(BLOCK_SIZE)
        if len(block) < BLOCK_SIZE:
            if block:
                _log.debug("Ignoring %d trailing bytes after last header", len(block))
            break
        if is_zero_block(block):
            break

        header = parse_header(block)
        if header.size < 0:
            raise CorruptHeaderError(f"Negative size for {header.full_name!r}")

        if header.typeflag == TarTypes.GNUTYPE_LONGLINK:
            long_link = decode_text(_read_record_payload(stream, header.size))
            continue
        if header.typeflag == TarTypes.GNUTYPE_LONGNAME or header.full_name == GNU_LONGLINK_NAME:
            if long_name is not None:
                _log.debug("Discarding unused long name %r", long_name)
            long_name = decode_text(_read_record_payload(stream, header.size))
            continue
        if header.typeflag == TarTypes.XHDTYPE:
            pax = parse_pax_records(_read_record_payload(stream, header.size))
            continue
        if header.typeflag == TarTypes.XGLTYPE:
            _read_record_payload(stream, header.size)
            _log.debug("Ignoring pax global header")
            continue

        path = header.full_name
        if long_name is not None:
            path = long_name
        elif "path" in pax:
            path = pax["path"]
        linkname = header.linkname
        if long_link is not None:
            linkname = long_link
        elif "linkpath" in pax:
            linkname = pax["linkpath"]
        size = header.size
        if "size" in pax:
            try:
                size = int(pax["size"])
            except ValueError as exc:
                raise CorruptHeaderError(f"Invalid pax size for {path!r}") from exc
        long_name, long_link, pax = None, None, {}

        kind = classify(header.typeflag, path)
        payload = EntryPayload(stream, size)
        yield LogicalEntry(
            path=path,
            kind=kind,
            mode=header.mode & 0o7777,
            size=size if kind is EntryKind.FILE else 0,
            linkname=linkname,
            typeflag=header.typeflag,
            payload=payload if kind is EntryKind.FILE else None,
        )
        payload.skip()

    if long_name is not None:
        _log.debug("Dropping long name %r with no following entry", long_name)
