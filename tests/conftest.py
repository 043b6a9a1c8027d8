"""Test configuration: stable temp directory on WSL and tar archive builders."""

from __future__ import annotations

import gzip
import os
import platform
import sys
import tempfile

import pytest

# Ensure project root is on sys.path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


def _is_wsl() -> bool:
    release = platform.release().lower()
    version = platform.version().lower()
    return "microsoft" in release or "microsoft" in version


if _is_wsl() and os.path.isdir("/tmp"):
    os.environ["TMPDIR"] = "/tmp"
    os.environ["TEMP"] = "/tmp"
    os.environ["TMP"] = "/tmp"
    tempfile.tempdir = "/tmp"


def tar_header(
    name: str,
    typeflag: bytes = b"0",
    size: int = 0,
    mode: int = 0o644,
    linkname: str = "",
    prefix: str = "",
    magic: bytes = b"ustar\x0000",
) -> bytes:
    """Assemble one 512-byte header block with a valid checksum."""
    block = bytearray(512)
    block[0:100] = name.encode("utf-8")[:100].ljust(100, b"\0")
    block[100:108] = b"%07o\0" % mode
    block[108:116] = b"%07o\0" % 0
    block[116:124] = b"%07o\0" % 0
    block[124:136] = b"%011o\0" % size
    block[136:148] = b"%011o\0" % 0
    block[148:156] = b" " * 8
    block[156:157] = typeflag
    block[157:257] = linkname.encode("utf-8")[:100].ljust(100, b"\0")
    block[257:265] = magic
    block[345:500] = prefix.encode("utf-8")[:155].ljust(155, b"\0")
    block[148:156] = b"%06o\0 " % sum(block)
    return bytes(block)


def tar_member(name: str, data: bytes = b"", typeflag: bytes = b"0", **kwargs) -> bytes:
    """Header plus payload padded to the block boundary."""
    padding = b"\0" * (-len(data) % 512)
    return tar_header(name, typeflag=typeflag, size=len(data), **kwargs) + data + padding


def long_name_member(long_name: str) -> bytes:
    """GNU ././@LongLink record carrying `long_name`."""
    return tar_member("././@LongLink", long_name.encode("utf-8") + b"\0", typeflag=b"L")


@pytest.fixture
def write_archive(tmp_path):
    """Return a helper that gzips tar members into a file under tmp_path."""

    def _write(members, name: str = "archive.tar.gz", end_blocks: int = 2):
        path = tmp_path / name
        payload = b"".join(members) + b"\0" * (512 * end_blocks)
        path.write_bytes(gzip.compress(payload))
        return path

    return _write
