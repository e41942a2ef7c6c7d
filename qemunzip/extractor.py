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

"""
Extraction of QDOS files from ZIP archives.

Entries are processed one at a time in central-directory order. For every
file entry the QDOS extra field is validated, typed files get a Q-emulator
header in front of their contents, and the result is written below the
destination directory. A bad entry never stops the walk: its outcome is
recorded in an EntryResult and the next entry is processed.
"""

import enum
import logging
import lzma
import os
import zipfile
import zlib
from dataclasses import dataclass, field, replace
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Optional

from .archive import ArchiveEntry, ArchiveReader
from .config import ExtractOptions
from .debug import describe_qdos_header, hex_dump
from .errors import DestinationError, EntryOpenError
from .extra import ExtraFieldStatus, find_qdos_extra
from .names import escape_entry_name
from .structures import QdosFileHeader
from .translate import SizeCheck, translate_header
from .utils import write_all

logger = logging.getLogger(__name__)


class EntryStatus(enum.Enum):
    """What happened to an archive entry."""

    EXTRACTED = "extracted"
    DIRECTORY = "directory"
    SKIPPED = "skipped"


@dataclass
class EntryResult:
    """Outcome of processing one archive entry.

    'advisories' holds the conditions that were reported but did not stop
    the entry from being written; 'error' is the reason an entry was skipped.
    """

    name: str
    status: EntryStatus = EntryStatus.SKIPPED
    output_name: Optional[str] = None
    path: Optional[Path] = None
    header_written: bool = False
    bytes_written: int = 0
    advisories: list[str] = field(default_factory=list)
    error: Optional[str] = None


@dataclass
class ExtractionSummary:
    """Results of an extraction run, in archive order."""

    archive: str
    results: list[EntryResult] = field(default_factory=list)

    def _count(self, status: EntryStatus) -> int:
        return sum(1 for r in self.results if r.status is status)

    @property
    def extracted(self) -> int:
        return self._count(EntryStatus.EXTRACTED)

    @property
    def directories(self) -> int:
        return self._count(EntryStatus.DIRECTORY)

    @property
    def skipped(self) -> int:
        return self._count(EntryStatus.SKIPPED)

    @property
    def advisories(self) -> int:
        return sum(len(r.advisories) for r in self.results)

    @property
    def failed_entries(self) -> list[EntryResult]:
        return [r for r in self.results if r.status is EntryStatus.SKIPPED]


def prepare_destination(path: str | os.PathLike) -> Path:
    """Create the extraction directory if needed.

    Args:
        path: Extraction directory; '~' is expanded.

    Returns:
        The directory as a Path.

    Raises:
        DestinationError: If the directory cannot be created or is not a directory.
    """
    destination = Path(os.path.expanduser(os.fspath(path)))
    try:
        destination.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DestinationError(f"Could not create directory {destination}: {e}") from e

    if not destination.is_dir() or not os.access(destination, os.W_OK | os.X_OK):
        raise DestinationError(f"Could not change to directory {destination}")

    return destination


class QdosExtractor:
    """Extracts the entries of an open archive.

    Example:
        with ArchiveReader("games.zip") as archive:
            summary = QdosExtractor(archive, ExtractOptions(escape_names=True)).extract()
    """

    def __init__(self, archive: ArchiveReader, options: Optional[ExtractOptions] = None):
        self._archive = archive
        self._options = options if options is not None else ExtractOptions()

    @property
    def options(self) -> ExtractOptions:
        return self._options

    def extract(self) -> ExtractionSummary:
        """Extract every entry of the archive.

        Returns:
            ExtractionSummary with one EntryResult per entry.
        """
        summary = ExtractionSummary(archive=self._archive.name)

        for entry in self._archive.entries():
            summary.results.append(self.extract_entry(entry))

        logger.debug(
            "%d entries: %d extracted, %d directories, %d skipped",
            len(summary.results),
            summary.extracted,
            summary.directories,
            summary.skipped,
        )
        return summary

    def extract_entry(self, entry: ArchiveEntry) -> EntryResult:
        """Extract a single entry.

        Args:
            entry: Entry to extract.

        Returns:
            EntryResult describing what was done.
        """
        result = EntryResult(name=entry.name)
        logger.info("Entry: %s", entry.name)

        output_name = self._output_name(entry)
        result.output_name = output_name

        path = self._resolve(output_name)
        if path is None:
            return self._skip(result, f"Unsafe path {output_name!r}, skipping it")
        result.path = path

        if entry.is_dir:
            return self._make_directory(result, path)

        try:
            stream = self._archive.open(entry)
        except EntryOpenError as e:
            return self._skip(result, f"Error opening zip file {output_name}, skipping it ({e})", level=logging.ERROR)

        with stream:
            qdos = find_qdos_extra(entry.extra, name=entry.name)
            if qdos.status is ExtraFieldStatus.MALFORMED:
                result.advisories.append(qdos.message)
            elif qdos.status is ExtraFieldStatus.VALID:
                self._dump_header(entry, qdos.record.header)

            # ArchiveReader always knows the size; other archive sources may not
            if entry.size is None:
                return self._skip(result, f"Error file size unknown for {output_name}, skipping it")

            translation = translate_header(qdos.record, entry.size)
            if translation.size_check is SizeCheck.MISMATCH:
                self._advise(
                    result,
                    f"qdos/zip file size mismatch for {output_name}: "
                    f"zip {entry.size}, qdos {qdos.record.header.length}",
                )

            content = self._read_content(stream, entry.size, output_name, result)

        header = translation.header.pack() if translation.emit_header else b""
        return self._write_file(result, path, header, content)

    def _output_name(self, entry: ArchiveEntry) -> str:
        if not self._options.escape_names:
            return entry.name

        escaped = escape_entry_name(entry.name, entry.encoding)
        logger.info("Escaped Entry: %s", escaped)
        return escaped

    def _resolve(self, name: str) -> Optional[Path]:
        relative = PurePosixPath(name.rstrip("/"))
        if not relative.parts or relative.is_absolute() or ".." in relative.parts:
            return None
        return self._options.destination.joinpath(*relative.parts)

    def _make_directory(self, result: EntryResult, path: Path) -> EntryResult:
        logger.info("Creating Directory %s", result.output_name)
        try:
            path.mkdir(exist_ok=True)
        except (OSError, ValueError) as e:
            return self._skip(result, f"Could not create directory {result.output_name}: {e}", level=logging.ERROR)

        result.status = EntryStatus.DIRECTORY
        return result

    def _dump_header(self, entry: ArchiveEntry, header: QdosFileHeader) -> None:
        level = logging.INFO if self._options.dump_headers else logging.DEBUG
        if logger.isEnabledFor(level):
            logger.log(
                level,
                "QDOS header of %s:\n%s\n%s",
                entry.name,
                hex_dump(header.raw),
                describe_qdos_header(header),
            )

    def _read_content(self, stream: BinaryIO, size: int, name: str, result: EntryResult) -> bytes:
        buffer = bytearray()
        try:
            while len(buffer) < size:
                chunk = stream.read(min(self._options.chunk_size, size - len(buffer)))
                if not chunk:
                    break
                buffer.extend(chunk)
        except (OSError, EOFError, zlib.error, lzma.LZMAError, zipfile.BadZipFile) as e:
            self._advise(result, f"Error unzipping file {name} after {len(buffer)} of {size} bytes: {e}")
            return bytes(buffer)

        if len(buffer) != size:
            self._advise(result, f"Short read unzipping file {name}: {len(buffer)} of {size} bytes")
        return bytes(buffer)

    def _write_file(self, result: EntryResult, path: Path, header: bytes, content: bytes) -> EntryResult:
        logger.info("Extracting %s", result.output_name)
        try:
            f = open(path, "wb")
        except (OSError, ValueError) as e:
            return self._skip(result, f"Could not create file {result.output_name}: {e}", level=logging.ERROR)

        with f:
            try:
                if header:
                    result.bytes_written += write_all(f, header)
                    result.header_written = True
                result.bytes_written += write_all(f, content)
            except OSError as e:
                return self._skip(result, f"Error writing file {result.output_name}: {e}", level=logging.ERROR)

        result.status = EntryStatus.EXTRACTED
        return result

    def _advise(self, result: EntryResult, message: str) -> None:
        logger.warning(message)
        result.advisories.append(message)

    def _skip(self, result: EntryResult, message: str, level: int = logging.WARNING) -> EntryResult:
        logger.log(level, message)
        result.status = EntryStatus.SKIPPED
        result.error = message
        return result


def extract_archive(
    file: str | os.PathLike | BinaryIO, options: Optional[ExtractOptions] = None
) -> ExtractionSummary:
    """Extract a QDOS ZIP archive.

    Args:
        file: Path to ZIP file or binary file-like object.
        options: Extraction options (defaults to the current directory, no escaping).

    Returns:
        ExtractionSummary describing every entry.

    Raises:
        DestinationError: If the extraction directory cannot be created.
        ArchiveOpenError: If the archive cannot be opened.
    """
    if options is None:
        options = ExtractOptions()

    destination = prepare_destination(options.destination)
    if destination != options.destination:
        options = replace(options, destination=destination)

    logger.info("Opening Zip %s", file if isinstance(file, (str, os.PathLike)) else getattr(file, "name", "<stream>"))
    with ArchiveReader(file) as archive:
        return QdosExtractor(archive, options).extract()
