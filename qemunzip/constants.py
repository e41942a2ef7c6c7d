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
QDOS and Q-emulator constants: extra-field identifiers, record sizes,
header signatures and the markers used when escaping file names.
"""

# ZIP extra field carrying a QDOS file header ("JB" tag, stored little-endian)
QDOS_EXTRA_FIELD_TAG = 0xFB4A

# Long-format identifiers written by Info-ZIP for QDOS/SMSQ archives
QDOS_LONG_IDS = (b"QDOS", b"QZHD")

# QDOS file header (fixed part, big-endian fields)
QDOS_HEADER_SIZE = 64

# Extra field payload: long id (4) + extra id (4) + QDOS file header (64)
QDOS_EXTRA_RECORD_SIZE = 72

# Maximum significant bytes of a QDOS file name inside the header
QDOS_NAME_SIZE = 36

# Q-emulator / sQLux file header
QEMULATOR_SIGNATURE = b"]!QDOS File Header"
QEMULATOR_WORD_LENGTH = 15  # header length in 16-bit words
QEMULATOR_HEADER_SIZE = 30  # short header written before file contents

# QDOS file types
QDOS_TYPE_DATA = 0
QDOS_TYPE_EXECUTABLE = 1
QDOS_TYPE_RELOCATABLE = 2
QDOS_TYPE_DIRECTORY = 255

QDOS_TYPE_NAMES = {
    QDOS_TYPE_DATA: "data",
    QDOS_TYPE_EXECUTABLE: "executable",
    QDOS_TYPE_RELOCATABLE: "relocatable",
    QDOS_TYPE_DIRECTORY: "directory",
}

# File name escaping (sQLux / Q-emulator host filesystem rules)
MAX_SIGNIFICANT_NAME = 31
MAX_ESCAPED_NAME = 255
NONAME_PLACEHOLDER = b"-noname-"
NOASCII_MARKER = b"-noASCII-"
ASCII_RUN_MARKER = b"!"
HEX_DIGITS = b"0123456789ABCDEF"

# General purpose bit flag: file name is UTF-8
FLAG_UTF8 = 0x0800

# Historical ZIP file name encoding
DEFAULT_NAME_ENCODING = "cp437"

# Read entry contents in chunks of this size
DEFAULT_CHUNK_SIZE = 64 * 1024
