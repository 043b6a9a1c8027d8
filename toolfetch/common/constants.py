"""
Constants and exit codes for toolfetch.
"""

DEFAULT_TOOLCHAIN_DIR = '/opt/toolfetch/toolchain'
DEFAULT_CHUNK_SIZE = 64 * 1024


class ExitCodes:
    """Exit codes for different error conditions."""
    OK = 0
    CORRUPT_STREAM = 1
    CORRUPT_HEADER = 2
    FILESYSTEM_ERROR = 3
    UNSAFE_ENTRY_PATH = 4
    EXTRACTION_FAILED = 5


class TarTypes:
    """Tar typeflag values understood by the reader."""
    AREGTYPE = b"\0"   # unset; kind is inferred from the path
    REGTYPE = b"0"
    LNKTYPE = b"1"
    SYMTYPE = b"2"
    CHRTYPE = b"3"
    BLKTYPE = b"4"
    DIRTYPE = b"5"
    FIFOTYPE = b"6"
    CONTTYPE = b"7"
    GNUTYPE_LONGNAME = b"L"
    GNUTYPE_LONGLINK = b"K"
    XHDTYPE = b"x"
    XGLTYPE = b"g"


# Tar container layout
BLOCK_SIZE = 512
GNU_LONGLINK_NAME = '././@LongLink'
USTAR_MAGIC = b"ustar\x00"  # POSIX only; GNU writes "ustar  \0" and has no prefix field
