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
Recognition and validation of the QDOS ZIP extra field.

The central-directory extra field of an entry is a sequence of
(id, size, data) blocks with little-endian id and size. A block with id
0xFB4A is trusted only when it is exactly 72 bytes long; any other size is
reported once and ignored.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from .constants import QDOS_EXTRA_FIELD_TAG, QDOS_EXTRA_RECORD_SIZE, QDOS_LONG_IDS
from .structures import QdosExtraRecord, parse_qdos_extra_record
from .utils import unpack_uint16_le

logger = logging.getLogger(__name__)


class ExtraFieldStatus(enum.Enum):
    """Outcome of validating an entry's extra field."""

    ABSENT = "absent"
    VALID = "valid"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class ExtraFieldResult:
    """Result of looking for a QDOS record in an extra field.

    'record' is set only when 'status' is VALID. 'declared_size' is the size
    announced by the extra-field block, when one carried the QDOS id.
    """

    status: ExtraFieldStatus
    record: Optional[QdosExtraRecord] = None
    declared_size: Optional[int] = None
    message: Optional[str] = None

    @property
    def valid(self) -> bool:
        return self.status is ExtraFieldStatus.VALID


ABSENT = ExtraFieldResult(ExtraFieldStatus.ABSENT)


def iter_extra_fields(extra: bytes) -> Iterator[tuple[int, int, bytes]]:
    """Iterate over the blocks of a ZIP extra field.

    Args:
        extra: Raw extra field bytes.

    Yields:
        (field_id, declared_size, payload) tuples. A block whose declared size
        runs past the end of the buffer is yielded with the bytes that are
        present, and iteration stops after it.
    """
    pos = 0
    while pos + 4 <= len(extra):
        field_id = unpack_uint16_le(extra, pos)
        size = unpack_uint16_le(extra, pos + 2)
        pos += 4

        payload = extra[pos : pos + size]
        yield field_id, size, payload

        if pos + size > len(extra):
            break
        pos += size


def validate_extra_field(
    field_id: int, payload: bytes, name: Optional[str] = None, declared_size: Optional[int] = None
) -> ExtraFieldResult:
    """Validate a single extra-field block.

    Args:
        field_id: 16-bit extra field identifier.
        payload: Block data, without the id/size prefix.
        name: Entry name, used in the warning message.
        declared_size: Size announced by the block header (defaults to len(payload)).

    Returns:
        ExtraFieldResult with status ABSENT, VALID or MALFORMED.
    """
    if field_id != QDOS_EXTRA_FIELD_TAG:
        return ABSENT

    if declared_size is None:
        declared_size = len(payload)

    if declared_size != QDOS_EXTRA_RECORD_SIZE or len(payload) != QDOS_EXTRA_RECORD_SIZE:
        message = f"QDOS extra field size mismatch ({declared_size} bytes, expected {QDOS_EXTRA_RECORD_SIZE}), ignoring it"
        if name is not None:
            message = f"{name}: {message}"
        logger.warning(message)
        return ExtraFieldResult(
            ExtraFieldStatus.MALFORMED, declared_size=declared_size, message=message
        )

    record = parse_qdos_extra_record(payload)
    if record.long_id not in QDOS_LONG_IDS:
        logger.debug("Unusual QDOS extra field id %r on %s", record.long_id, name or "entry")

    return ExtraFieldResult(ExtraFieldStatus.VALID, record=record, declared_size=declared_size)


def find_qdos_extra(extra: bytes, name: Optional[str] = None) -> ExtraFieldResult:
    """Find and validate the QDOS record in an entry's extra field.

    Only the first block carrying the QDOS id is considered.

    Args:
        extra: Raw central-directory extra field bytes.
        name: Entry name, used in warning messages.

    Returns:
        ExtraFieldResult; ABSENT when no block carries the QDOS id.
    """
    for field_id, size, payload in iter_extra_fields(extra):
        if field_id == QDOS_EXTRA_FIELD_TAG:
            return validate_extra_field(field_id, payload, name=name, declared_size=size)
    return ABSENT
