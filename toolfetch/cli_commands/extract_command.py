"""Extract command handling for the toolfetch CLI."""

from toolfetch.cli_helpers import exit_with_error, map_exception_to_exit_code
from toolfetch.common.config import ToolfetchSettings
from toolfetch.common.constants import ExitCodes
from toolfetch.common.errors import CorruptHeaderError, CorruptStreamError, UnsafeEntryPathError
from toolfetch.core.extractor import extract


class ExtractCommand:
    """Handles archive extraction into the toolchain directory."""

    @staticmethod
    def add_parser(subparsers) -> None:
        """Add extract command parser to subparsers."""
        parser = subparsers.add_parser('extract', help='Extract a .tar.gz archive')
        parser.add_argument('archive', help='Path to the gzip-compressed tar archive')
        parser.add_argument('destination', nargs='?', default=None,
                            help='Destination directory (defaults to the toolchain directory)')
        parser.set_defaults(func=ExtractCommand.execute)

    @staticmethod
    def execute(args) -> None:
        """Extract an archive and print a one-line summary."""
        settings = getattr(args, "settings", None)
        if not isinstance(settings, ToolfetchSettings):
            settings = ToolfetchSettings.from_env()
        destination = args.destination or settings.toolchain_dir

        try:
            summary = extract(args.archive, destination, settings=settings)
        except Exception as exc:
            exit_code = map_exception_to_exit_code(exc)
            if isinstance(exc, CorruptStreamError):
                message = f"Archive is not a valid gzip stream: {exc}"
            elif isinstance(exc, CorruptHeaderError):
                message = f"Archive contains an invalid tar header: {exc}"
            elif isinstance(exc, UnsafeEntryPathError):
                message = f"Refusing to extract: {exc}"
            else:
                message = f"Extraction failed: {exc}"

            if exit_code is None:
                exit_code = ExitCodes.EXTRACTION_FAILED

            exit_with_error(message, exit_code)
            return

        print(
            f"Extracted {summary.entries} entries into {summary.destination} "
            f"({summary.directories} directories, {summary.files} files, "
            f"{summary.symlinks} symlinks)"
        )
        for skipped in summary.skipped:
            print(f"  skipped {skipped.path} (type {skipped.typeflag!r})")
