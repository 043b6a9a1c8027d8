"""Archive extraction engine: gzip stream, tar demultiplexer, materializer."""

from .extractor import EntryListing, ExtractionSummary, extract, list_entries
from .tar_reader import EntryKind, LogicalEntry, iter_entries

__all__ = [
    "EntryKind",
    "EntryListing",
    "ExtractionSummary",
    "LogicalEntry",
    "extract",
    "iter_entries",
    "list_entries",
]
