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
Translation of QDOS file headers into Q-emulator headers.
"""

import enum
from dataclasses import dataclass, replace
from typing import Optional

from .constants import QDOS_TYPE_DATA
from .structures import QEMULATOR_TEMPLATE, QdosExtraRecord, QemulatorHeader


class SizeCheck(enum.Enum):
    """Comparison of the QDOS file length with the archive's entry size."""

    MATCH = "match"
    MISMATCH = "mismatch"
    UNCHECKED = "unchecked"


@dataclass(frozen=True)
class HeaderTranslation:
    """Result of translating a QDOS record.

    'header' is set exactly when 'emit_header' is true.
    """

    emit_header: bool
    header: Optional[QemulatorHeader]
    size_check: SizeCheck


NO_HEADER = HeaderTranslation(emit_header=False, header=None, size_check=SizeCheck.UNCHECKED)


def translate_header(
    record: Optional[QdosExtraRecord],
    archive_size: int,
    template: QemulatorHeader = QEMULATOR_TEMPLATE,
) -> HeaderTranslation:
    """Translate a QDOS extra record into a Q-emulator header.

    A header is produced only for typed files; plain data (type 0) is
    written without one. The template's signature, word length and access
    byte are kept as they are.

    Args:
        record: Validated QDOS record, or None if the entry has none.
        archive_size: Uncompressed size reported by the archive.
        template: Header to copy the fixed fields from.

    Returns:
        HeaderTranslation object.
    """
    if record is None:
        return NO_HEADER

    qdos = record.header
    size_check = SizeCheck.MATCH if archive_size == qdos.length else SizeCheck.MISMATCH

    if qdos.type == QDOS_TYPE_DATA:
        return HeaderTranslation(emit_header=False, header=None, size_check=size_check)

    header = replace(
        template,
        type=qdos.type,
        data_length=qdos.data_length,
        reserved=qdos.reserved,
    )
    return HeaderTranslation(emit_header=True, header=header, size_check=size_check)
