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
Debugging utilities for qem-unzip.

This module provides tools for looking at QDOS headers and at the QDOS
metadata carried by an archive.
"""

import os
from typing import BinaryIO, Optional

from .archive import ArchiveReader
from .extra import ExtraFieldStatus, find_qdos_extra
from .structures import QdosFileHeader


def hex_dump(data: bytes, offset: int = 0, length: Optional[int] = None) -> str:
    """Create a hex dump of binary data.

    Args:
        data: Binary data to dump.
        offset: Starting offset for display.
        length: Maximum length to dump (None for all).

    Returns:
        Formatted hex dump string.
    """
    if length is not None:
        data = data[:length]

    lines = []
    for i in range(0, len(data), 16):
        chunk = data[i : i + 16]
        hex_part = " ".join(f"{b:02X}" for b in chunk)
        ascii_part = "".join(chr(b) if 32 <= b < 127 else "." for b in chunk)
        lines.append(f"{offset + i:08X}  {hex_part:<48}  {ascii_part}")

    return "\n".join(lines)


def describe_qdos_header(header: QdosFileHeader) -> str:
    """Describe the fields of a QDOS file header.

    Args:
        header: Parsed QDOS header.

    Returns:
        One field per line.
    """
    lines = [
        f"  name:        {header.name!r}",
        f"  type:        {header.type} ({header.type_name})",
        f"  length:      {header.length}",
        f"  data length: {header.data_length}",
        f"  access:      0x{header.access:02X}",
        f"  reserved:    0x{header.reserved:08X}",
    ]
    return "\n".join(lines)


def dump_archive(file: str | os.PathLike | BinaryIO) -> str:
    """List the entries of an archive with their QDOS metadata.

    Args:
        file: Path to ZIP file or binary file-like object.

    Returns:
        Formatted listing.

    Raises:
        ArchiveOpenError: If the archive cannot be opened.
    """
    output = []

    with ArchiveReader(file) as z:
        entries = z.entries()
        output.append(f"Archive: {z.name}")
        output.append(f"{'Size':>10}  {'Type':>4}  {'Data':>8}  Name")
        output.append("-" * 60)

        qdos_count = 0
        for entry in entries:
            size = "?" if entry.size is None else str(entry.size)
            result = find_qdos_extra(entry.extra, name=entry.name)
            if result.status is ExtraFieldStatus.VALID:
                qdos = result.record.header
                qdos_count += 1
                output.append(f"{size:>10}  {qdos.type:>4}  {qdos.data_length:>8}  {entry.name}")
            elif result.status is ExtraFieldStatus.MALFORMED:
                output.append(f"{size:>10}  {'!':>4}  {'':>8}  {entry.name}")
            else:
                output.append(f"{size:>10}  {'-':>4}  {'':>8}  {entry.name}")

        output.append("-" * 60)
        output.append(f"{len(entries)} entries, {qdos_count} with QDOS headers")

    return "\n".join(output)
