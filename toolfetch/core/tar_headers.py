"""
Tar header block parsing.

Handles the fixed-width ustar/GNU header layout: NUL-terminated text fields,
octal (or GNU base-256) numeric fields and the header checksum.
"""

import struct
from typing import Dict, NamedTuple, Tuple

from ..common.constants import BLOCK_SIZE, USTAR_MAGIC
from ..common.errors import CorruptHeaderError

ENCODING = "utf-8"
ERRORS = "surrogateescape"


class TarHeader(NamedTuple):
    """Fields of interest from one 512-byte header block."""
    full_name: str
    mode: int
    size: int
    typeflag: bytes
    linkname: str


def decode_text(field: bytes) -> str:
    """Decode a NUL-terminated text field."""
    end = field.find(b"\0")
    if end != -1:
        field = field[:end]
    return field.decode(ENCODING, ERRORS)


def parse_number(field: bytes, name: str = "numeric") -> int:
    """
    Parse a numeric header field.

    Args:
        field: Raw field bytes
        name: Field name used in error messages

    Returns:
        The decoded value

    Raises:
        CorruptHeaderError: If the field is not valid octal
    """
    if field and field[0] in (0x80, 0xFF):
        # GNU base-256: big-endian digits after the marker byte, 0xff is negative
        value = int.from_bytes(field[1:], "big")
        if field[0] == 0xFF:
            value -= 256 ** (len(field) - 1)
        return value

    end = field.find(b"\0")
    if end != -1:
        field = field[:end]
    text = field.strip()
    if not text:
        return 0
    try:
        return int(text.decode("ascii"), 8)
    except (UnicodeDecodeError, ValueError) as exc:
        raise CorruptHeaderError(f"Invalid octal in {name} field: {bytes(field)!r}") from exc


def calc_checksums(block: bytes) -> Tuple[int, int]:
    """Return (unsigned, signed) byte sums with the checksum field as spaces."""
    unsigned = 256 + sum(struct.unpack_from("148B8x356B", block))
    signed = 256 + sum(struct.unpack_from("148b8x356b", block))
    return unsigned, signed


def is_zero_block(block: bytes) -> bool:
    """True for the all-zero block that marks end of archive."""
    return not block.strip(b"\0")


def parse_header(block: bytes) -> TarHeader:
    """
    Parse one header block.

    Raises:
        CorruptHeaderError: On a short block, bad checksum or bad numeric field
    """
    if len(block) != BLOCK_SIZE:
        raise CorruptHeaderError(f"Header block is {len(block)} bytes, expected {BLOCK_SIZE}")

    checksum = parse_number(block[148:156], "chksum")
    if checksum not in calc_checksums(block):
        raise CorruptHeaderError("Header checksum mismatch")

    name = decode_text(block[0:100])
    if block[257:263] == USTAR_MAGIC:
        prefix = decode_text(block[345:500])
        if prefix:
            name = f"{prefix}/{name}"

    return TarHeader(
        full_name=name,
        mode=parse_number(block[100:108], "mode"),
        size=parse_number(block[124:136], "size"),
        typeflag=block[156:157],
        linkname=decode_text(block[157:257]),
    )


def parse_pax_records(payload: bytes) -> Dict[str, str]:
    """
    Parse pax extended header records of the form "<len> <key>=<value>\\n".

    Raises:
        CorruptHeaderError: If a record length or separator is malformed
    """
    records: Dict[str, str] = {}
    pos = 0
    while pos < len(payload):
        if payload[pos:].strip(b"\0") == b"":
            break
        space = payload.find(b" ", pos)
        if space == -1:
            raise CorruptHeaderError("Malformed pax record: missing length")
        try:
            length = int(payload[pos:space])
        except ValueError as exc:
            raise CorruptHeaderError("Malformed pax record length") from exc
        record = payload[space + 1:pos + length]
        if length <= 0 or not record.endswith(b"\n") or b"=" not in record:
            raise CorruptHeaderError("Malformed pax record")
        key, value = record[:-1].split(b"=", 1)
        records[key.decode(ENCODING, ERRORS)] = value.decode(ENCODING, ERRORS)
        pos += length
    return records
