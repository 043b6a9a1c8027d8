"""List command handling for the toolfetch CLI."""

from toolfetch.cli_helpers import exit_with_error, map_exception_to_exit_code
from toolfetch.common.constants import ExitCodes
from toolfetch.core.extractor import list_entries
from toolfetch.core.tar_reader import EntryKind

_KIND_MARKERS = {
    EntryKind.DIRECTORY: 'd',
    EntryKind.FILE: '-',
    EntryKind.SYMLINK: 'l',
    EntryKind.UNSUPPORTED: '?',
}


class ListCommand:
    """Prints archive members without extracting them."""

    @staticmethod
    def add_parser(subparsers) -> None:
        parser = subparsers.add_parser('list', help='List the members of a .tar.gz archive')
        parser.add_argument('archive', help='Path to the gzip-compressed tar archive')
        parser.set_defaults(func=ListCommand.execute)

    @staticmethod
    def execute(args) -> None:
        try:
            listing = list_entries(args.archive)
        except Exception as exc:
            exit_code = map_exception_to_exit_code(exc)
            if exit_code is None:
                exit_code = ExitCodes.EXTRACTION_FAILED
            exit_with_error(f"Cannot read archive: {exc}", exit_code)
            return

        for item in listing:
            line = f"{_KIND_MARKERS[item.kind]} {item.mode:04o} {item.size:>10} {item.path}"
            if item.kind is EntryKind.SYMLINK:
                line += f" -> {item.linkname}"
            print(line)
