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
Utility functions for qem-unzip.

QDOS headers store their fields big-endian while the ZIP extra-field
directory is little-endian. Every field is decoded on its own with an
explicit byte order.
"""

import struct
from typing import BinaryIO

from .errors import HeaderFormatError


def read_exact(f: BinaryIO, size: int) -> bytes:
    """Read exactly 'size' bytes from file, raising HeaderFormatError on short read.

    Args:
        f: Binary file-like object to read from.
        size: Number of bytes to read.

    Returns:
        Exactly 'size' bytes of data.

    Raises:
        HeaderFormatError: If fewer than 'size' bytes could be read or size is invalid.
    """
    if size < 0:
        raise HeaderFormatError(f"Invalid read size: {size} (must be non-negative)")

    data = f.read(size)
    if len(data) != size:
        raise HeaderFormatError(
            f"Unexpected end of header: expected {size} bytes, got {len(data)}"
        )
    return data


def read_uint8(f: BinaryIO) -> int:
    """Read an unsigned byte from file."""
    return read_exact(f, 1)[0]


def read_uint16_be(f: BinaryIO) -> int:
    """Read a big-endian 16-bit unsigned integer from file.

    Args:
        f: Binary file-like object to read from.

    Returns:
        16-bit unsigned integer value.
    """
    data = read_exact(f, 2)
    return struct.unpack(">H", data)[0]


def read_uint32_be(f: BinaryIO) -> int:
    """Read a big-endian 32-bit unsigned integer from file.

    Args:
        f: Binary file-like object to read from.

    Returns:
        32-bit unsigned integer value.
    """
    data = read_exact(f, 4)
    return struct.unpack(">I", data)[0]


def unpack_uint16_le(data: bytes, offset: int) -> int:
    """Decode a little-endian 16-bit unsigned integer at 'offset' in 'data'."""
    return struct.unpack_from("<H", data, offset)[0]


def pack_uint32_be(value: int) -> bytes:
    """Encode a big-endian 32-bit unsigned integer."""
    return struct.pack(">I", value & 0xFFFFFFFF)


def write_all(f: BinaryIO, data: bytes) -> int:
    """Write 'data' to file, checking that every byte was accepted.

    Args:
        f: Binary file-like object to write to.
        data: Bytes to write.

    Returns:
        Number of bytes written.

    Raises:
        OSError: If the write operation writes fewer bytes than expected.
    """
    written = f.write(data)
    if written != len(data):
        raise OSError(f"Write operation failed: expected to write {len(data)} bytes, wrote {written} bytes")
    return written
