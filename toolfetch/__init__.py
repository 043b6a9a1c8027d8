"""toolfetch - provision tool archives into a fixed toolchain directory.

Provides:
* A self-contained .tar.gz extraction engine (`extract`, `list_entries`)
* Environment-driven settings and logging helpers
* Thin CLI wrapper (`toolfetch`)

The CLI is the primary user interface; `extract` is the programmatic entry
point used by provisioning scripts.
"""

from ._version import __version__
from .common.config import ToolfetchSettings  # noqa: F401
from .common.logging_config import configure_logging  # noqa: F401
from .core.extractor import ExtractionSummary, extract, list_entries  # noqa: F401

__all__ = [
	"__version__",
	"configure_logging",
	"ToolfetchSettings",
	"ExtractionSummary",
	"extract",
	"list_entries",
]
