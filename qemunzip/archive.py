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
Read-only archive handle.

This module wraps the standard library zipfile module and exposes the
entries of an archive in central-directory order together with the raw
central-directory extra field of each entry.
"""

import os
import zipfile
from dataclasses import dataclass, field
from datetime import datetime
from typing import BinaryIO, Optional

from .constants import DEFAULT_NAME_ENCODING, FLAG_UTF8
from .errors import ArchiveOpenError, EntryOpenError


@dataclass
class ArchiveEntry:
    """ZIP entry metadata.

    This class represents a file or directory entry in a ZIP archive as
    listed in the central directory.
    """

    name: str
    encoding: str
    is_dir: bool
    size: Optional[int]
    compressed_size: int
    crc32: int
    date_time: datetime
    extra: bytes
    info: Optional[zipfile.ZipInfo] = field(default=None, repr=False, compare=False)

    @property
    def raw_name(self) -> bytes:
        """Get the entry name as stored in the archive."""
        return self.name.encode(self.encoding, errors="surrogateescape")


def _entry_from_info(info: zipfile.ZipInfo) -> ArchiveEntry:
    encoding = "utf-8" if info.flag_bits & FLAG_UTF8 else DEFAULT_NAME_ENCODING
    # orig_filename keeps anything after an embedded NUL
    name = info.orig_filename

    try:
        date_time = datetime(*info.date_time)
    except ValueError:
        date_time = datetime(1980, 1, 1, 0, 0, 0)

    return ArchiveEntry(
        name=name,
        encoding=encoding,
        is_dir=name.endswith("/"),
        size=info.file_size,
        compressed_size=info.compress_size,
        crc32=info.CRC,
        date_time=date_time,
        extra=info.extra,
        info=info,
    )


class ArchiveReader:
    """Reader for ZIP archives carrying QDOS metadata.

    Example:
        with ArchiveReader("archive.zip") as z:
            for entry in z.entries():
                with z.open(entry) as f:
                    data = f.read()
    """

    def __init__(self, file: str | os.PathLike | BinaryIO):
        """Initialize ArchiveReader with a file path or file-like object.

        Args:
            file: Path to ZIP file or binary file-like object.

        Raises:
            ArchiveOpenError: If the file cannot be opened or is not a valid ZIP.
        """
        if hasattr(file, "__fspath__"):
            file = os.fspath(file)

        if not isinstance(file, str):
            if not hasattr(file, "read"):
                raise ArchiveOpenError("File-like object must have a read() method")
            if not hasattr(file, "seek"):
                raise ArchiveOpenError("File-like object must have a seek() method")

        self._name = file if isinstance(file, str) else getattr(file, "name", "<stream>")
        self._closed: bool = False

        try:
            self._zip = zipfile.ZipFile(file, "r")
        except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile, NotImplementedError, ValueError) as e:
            raise ArchiveOpenError(f"Error opening zip file {self._name}: {e}") from e

        self._entries: list[ArchiveEntry] = [_entry_from_info(i) for i in self._zip.infolist()]

    @property
    def name(self) -> str:
        return str(self._name)

    def entries(self) -> list[ArchiveEntry]:
        """List all entries in central-directory order.

        Returns:
            List of ArchiveEntry objects (files and directories).
        """
        return list(self._entries)

    def open(self, entry: ArchiveEntry) -> BinaryIO:
        """Open an entry for reading decompressed data.

        Args:
            entry: Entry to open, as returned by entries().

        Returns:
            Binary file-like object yielding decompressed data.

        Raises:
            EntryOpenError: If the archive is closed or the entry cannot be opened.
        """
        if self._closed:
            raise EntryOpenError("Archive is closed")

        try:
            return self._zip.open(entry.info if entry.info is not None else entry.name, "r")
        except (KeyError, OSError, RuntimeError, NotImplementedError, ValueError, zipfile.BadZipFile) as e:
            raise EntryOpenError(f"Error opening entry {entry.name}: {e}") from e

    def close(self) -> None:
        """Close the archive file."""
        if self._closed:
            return

        self._zip.close()
        self._closed = True

    def __enter__(self) -> "ArchiveReader":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
