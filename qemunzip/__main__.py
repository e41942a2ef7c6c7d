"""
Copyright 2025 DNAi inc.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

from __future__ import annotations

"""
Command-line interface for qem-unzip (``qem-unzip``).

Example usages:

    # Extract into the current directory
    python -m qemunzip games.zip

    # Extract into ./win1 with sQLux/Q-emulator file name escaping
    python -m qemunzip -d win1 -e games.zip

    # Show the QDOS metadata carried by an archive
    python -m qemunzip -l games.zip

Exit status is 0 when the archive was processed, even if single entries
were skipped, 1 when the archive or the extraction directory cannot be
used, and 2 on usage errors.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

try:  # pragma: no cover - environment-dependent import path
    from . import __version__
    from .config import ExtractOptions
    from .debug import dump_archive
    from .errors import QemUnzipError
    from .extractor import extract_archive
except ImportError:  # pragma: no cover
    from qemunzip import __version__
    from qemunzip.config import ExtractOptions
    from qemunzip.debug import dump_archive
    from qemunzip.errors import QemUnzipError
    from qemunzip.extractor import extract_archive

PROG = "qem-unzip"


def _print_error(message: str, exit_code: int = 1, suggestion: Optional[str] = None) -> None:
    """Print an error message to stderr and exit with the given code.

    Args:
        message: Error message to display.
        exit_code: Exit code to use.
        suggestion: Optional suggestion to help the user resolve the error.
    """
    sys.stderr.write(f"{PROG}: {message}\n")
    if suggestion:
        sys.stderr.write(f"{PROG}: Suggestion: {suggestion}\n")
    sys.exit(exit_code)


def _configure_logging(verbose: bool, quiet: bool) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.INFO

    logging.basicConfig(level=level, format=f"{PROG}: %(levelname)s: %(message)s", stream=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Extract QDOS/SMSQ files from a ZIP archive, restoring their "
        "file headers in Q-emulator format.",
    )
    parser.add_argument("zipfile", help="ZIP archive to extract")
    parser.add_argument(
        "-d",
        dest="directory",
        metavar="DIRECTORY",
        help="directory to extract to (created if absent)",
    )
    parser.add_argument(
        "-e",
        dest="escape",
        action="store_true",
        help="escape the file names sQLux/Q-emulator style",
    )
    parser.add_argument(
        "-l",
        "--list",
        dest="list_only",
        action="store_true",
        help="list entries and their QDOS metadata without extracting",
    )
    parser.add_argument(
        "-x",
        "--dump",
        dest="dump_headers",
        action="store_true",
        help="hex dump the QDOS header of every entry that has one (not with -q)",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="show debug output")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="only show errors")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def cmd_list(archive: Path) -> None:
    """List the entries of an archive."""
    try:
        print(dump_archive(archive))
    except QemUnzipError as e:
        _print_error(str(e), exit_code=1)


def cmd_extract(archive: Path, directory: Optional[str], escape: bool, dump_headers: bool, quiet: bool = False) -> None:
    """Extract an archive and print a summary of skipped entries."""
    options = ExtractOptions(
        destination=Path(directory) if directory else Path("."),
        escape_names=escape,
        dump_headers=dump_headers,
    )

    try:
        summary = extract_archive(archive, options)
    except QemUnzipError as e:
        _print_error(str(e), exit_code=1)
        return

    if not quiet:
        print("Extraction complete:")
        print(f"  Total entries: {len(summary.results)}")
        print(f"  Extracted files: {summary.extracted}")
        print(f"  Directories: {summary.directories}")
        if summary.skipped > 0:
            print(f"  Skipped entries: {summary.skipped}")
            for failed in summary.failed_entries:
                print(f"    - {failed.name}: {failed.error}")


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line interface.

    Args:
        argv: Arguments (defaults to sys.argv[1:]).

    Returns:
        Process exit status.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.quiet and args.dump_headers:
        parser.error("-x cannot be combined with -q, header dumps are not shown in quiet mode")

    _configure_logging(args.verbose, args.quiet)

    archive = Path(os.path.expanduser(args.zipfile))

    if args.list_only:
        cmd_list(archive)
    else:
        cmd_extract(archive, args.directory, args.escape, args.dump_headers, quiet=args.quiet)
    return 0


if __name__ == "__main__":
    sys.exit(main())
