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
QDOS and Q-emulator header structures and parsing functions.

This module defines dataclasses for the QDOS file header found in the ZIP
extra field, the extra-field record wrapping it, and the Q-emulator header
written in front of typed files.
"""

import io
from dataclasses import dataclass
from typing import Optional

from .constants import (
    QDOS_EXTRA_RECORD_SIZE,
    QDOS_HEADER_SIZE,
    QDOS_NAME_SIZE,
    QDOS_TYPE_NAMES,
    QEMULATOR_HEADER_SIZE,
    QEMULATOR_SIGNATURE,
    QEMULATOR_WORD_LENGTH,
)
from .errors import HeaderFormatError
from .utils import pack_uint32_be, read_exact, read_uint8, read_uint16_be, read_uint32_be


@dataclass(frozen=True)
class QdosFileHeader:
    """QDOS file header structure.

    This is the 64-byte directory record QDOS keeps for every file. All
    multi-byte fields are big-endian on the wire.
    """

    length: int
    access: int
    type: int
    data_length: int
    reserved: int
    name_length: int
    name_bytes: bytes
    update_date: int
    reference_date: int
    backup_date: int
    raw: bytes = b""

    @property
    def name(self) -> str:
        """Get the QDOS file name as text."""
        size = min(self.name_length, QDOS_NAME_SIZE)
        return self.name_bytes[:size].decode("latin-1")

    @property
    def type_name(self) -> str:
        """Get a readable name for the QDOS file type."""
        return QDOS_TYPE_NAMES.get(self.type, f"type {self.type}")


@dataclass(frozen=True)
class QdosExtraRecord:
    """QDOS extra field record.

    Payload of the 0xFB4A extra field: a long-format id, a sub id and the
    QDOS file header.
    """

    long_id: bytes
    extra_id: bytes
    header: QdosFileHeader


@dataclass(frozen=True)
class QemulatorHeader:
    """Q-emulator file header structure.

    Written in front of the file contents so that Q-emulator and sQLux can
    recover the QDOS file type and data space.
    """

    signature: bytes = QEMULATOR_SIGNATURE
    word_length: int = QEMULATOR_WORD_LENGTH
    access: int = 0
    type: int = 0
    data_length: int = 0
    reserved: int = 0

    def pack(self) -> bytes:
        """Serialize the header to its 30-byte wire form.

        Returns:
            Header bytes.

        Raises:
            HeaderFormatError: If the signature does not fit its field.
        """
        if len(self.signature) > len(QEMULATOR_SIGNATURE):
            raise HeaderFormatError(
                f"Q-emulator signature too long: {len(self.signature)} bytes "
                f"(max {len(QEMULATOR_SIGNATURE)})"
            )

        data = bytearray()
        data.extend(self.signature.ljust(len(QEMULATOR_SIGNATURE), b"\x00"))
        data.append(0)
        data.append(self.word_length & 0xFF)
        data.append(self.access & 0xFF)
        data.append(self.type & 0xFF)
        data.extend(pack_uint32_be(self.data_length))
        data.extend(pack_uint32_be(self.reserved))

        return bytes(data)


# Built once; translation derives copies with dataclasses.replace()
QEMULATOR_TEMPLATE = QemulatorHeader()


def parse_qdos_file_header(data: bytes) -> QdosFileHeader:
    """Parse a QDOS file header.

    Args:
        data: Exactly 64 bytes of header data.

    Returns:
        QdosFileHeader object.

    Raises:
        HeaderFormatError: If the buffer is not 64 bytes long.
    """
    if len(data) != QDOS_HEADER_SIZE:
        raise HeaderFormatError(
            f"Invalid QDOS header size: {len(data)} bytes, expected {QDOS_HEADER_SIZE}"
        )

    f = io.BytesIO(data)
    length = read_uint32_be(f)
    access = read_uint8(f)
    file_type = read_uint8(f)
    data_length = read_uint32_be(f)
    reserved = read_uint32_be(f)
    name_length = read_uint16_be(f)
    name_bytes = read_exact(f, QDOS_NAME_SIZE)
    update_date = read_uint32_be(f)
    reference_date = read_uint32_be(f)
    backup_date = read_uint32_be(f)

    return QdosFileHeader(
        length=length,
        access=access,
        type=file_type,
        data_length=data_length,
        reserved=reserved,
        name_length=name_length,
        name_bytes=name_bytes,
        update_date=update_date,
        reference_date=reference_date,
        backup_date=backup_date,
        raw=bytes(data),
    )


def parse_qdos_extra_record(payload: bytes) -> QdosExtraRecord:
    """Parse the payload of a QDOS extra field.

    Args:
        payload: Exactly 72 bytes of extra field data (without the id/size prefix).

    Returns:
        QdosExtraRecord object.

    Raises:
        HeaderFormatError: If the payload is not 72 bytes long.
    """
    if len(payload) != QDOS_EXTRA_RECORD_SIZE:
        raise HeaderFormatError(
            f"Invalid QDOS extra record size: {len(payload)} bytes, "
            f"expected {QDOS_EXTRA_RECORD_SIZE}"
        )

    return QdosExtraRecord(
        long_id=payload[0:4],
        extra_id=payload[4:8],
        header=parse_qdos_file_header(payload[8:]),
    )


def parse_qemulator_header(data: bytes) -> Optional[QemulatorHeader]:
    """Parse a Q-emulator header from the start of a file.

    Args:
        data: File contents, at least 30 bytes.

    Returns:
        QemulatorHeader object, or None if the data does not start with the
        Q-emulator signature.
    """
    if len(data) < QEMULATOR_HEADER_SIZE or not data.startswith(QEMULATOR_SIGNATURE):
        return None

    f = io.BytesIO(data[:QEMULATOR_HEADER_SIZE])
    signature = read_exact(f, len(QEMULATOR_SIGNATURE))
    read_uint8(f)
    word_length = read_uint8(f)
    access = read_uint8(f)
    file_type = read_uint8(f)
    data_length = read_uint32_be(f)
    reserved = read_uint32_be(f)

    return QemulatorHeader(
        signature=signature,
        word_length=word_length,
        access=access,
        type=file_type,
        data_length=data_length,
        reserved=reserved,
    )
