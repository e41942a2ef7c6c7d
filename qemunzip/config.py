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
Extraction options.
"""

from dataclasses import dataclass, field
from pathlib import Path

from .constants import DEFAULT_CHUNK_SIZE


@dataclass(frozen=True)
class ExtractOptions:
    """Options controlling an extraction run.

    Attributes:
        destination: Directory the entries are extracted into.
        escape_names: Rewrite entry names sQLux/Q-emulator style.
        dump_headers: Log a hex dump of every valid QDOS header.
        chunk_size: Number of bytes read from an entry at a time.
    """

    destination: Path = field(default_factory=lambda: Path("."))
    escape_names: bool = False
    dump_headers: bool = False
    chunk_size: int = DEFAULT_CHUNK_SIZE

    def __post_init__(self) -> None:
        if not isinstance(self.destination, Path):
            object.__setattr__(self, "destination", Path(self.destination))
        if self.chunk_size <= 0:
            raise ValueError(f"Invalid chunk size: {self.chunk_size} (must be positive)")
