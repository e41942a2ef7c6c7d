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
qem-unzip - extract QDOS/SMSQ files from ZIP archives.

Files zipped on QDOS carry their QDOS file header in a ZIP extra field.
This package restores them for Q-emulator and sQLux: typed files get a
Q-emulator header in front of their contents, and entry names can be
escaped into a form the emulator's host filesystem accepts.
"""

from .archive import ArchiveEntry, ArchiveReader
from .config import ExtractOptions
from .extractor import EntryResult, EntryStatus, ExtractionSummary, QdosExtractor, extract_archive
from .names import escape_filename

__all__ = [
    "ArchiveEntry",
    "ArchiveReader",
    "EntryResult",
    "EntryStatus",
    "ExtractOptions",
    "ExtractionSummary",
    "QdosExtractor",
    "escape_filename",
    "extract_archive",
]

__version__ = "0.1.0"
