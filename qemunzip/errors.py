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
Custom exception classes for qem-unzip.

Only ArchiveOpenError and DestinationError abort an extraction run. The
other conditions are handled per entry by the extractor.
"""


class QemUnzipError(Exception):
    """Base exception class for all qem-unzip errors."""

    pass


class ArchiveOpenError(QemUnzipError):
    """Raised when the ZIP archive cannot be opened.

    This exception is raised when:
    - The archive file does not exist or cannot be read
    - The file is not a ZIP archive or its central directory is corrupt
    """

    pass


class DestinationError(QemUnzipError):
    """Raised when the extraction directory cannot be created or entered."""

    pass


class EntryOpenError(QemUnzipError):
    """Raised when a single archive entry cannot be opened for reading.

    This exception is raised when:
    - The entry uses an unsupported compression method
    - The entry is encrypted
    - The local file header is corrupt
    """

    pass


class HeaderFormatError(QemUnzipError):
    """Raised when a QDOS or Q-emulator header buffer has the wrong size."""

    pass
