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
File name escaping compatible with sQLux and Q-emulator.

QDOS names may hold control characters, colons and bytes above 127, none of
which survive on the host filesystem. Names containing a control character
or a colon in their first 31 bytes are rewritten as

    -noASCII-!abc 3A!def 1 E9

where every run of plain characters starts with '!' and every other byte is
written in hexadecimal, separated from what precedes it by a space. Dots are
always replaced by underscores because the emulator uses '_' as its
extension separator.
"""

from typing import Union

from .constants import (
    ASCII_RUN_MARKER,
    HEX_DIGITS,
    MAX_ESCAPED_NAME,
    MAX_SIGNIFICANT_NAME,
    NOASCII_MARKER,
    NONAME_PLACEHOLDER,
)

_COLON = ord(":")


def _needs_escape(name: bytes) -> bool:
    # Spaces and '!' do not trigger escaping, they only get escaped once
    # something else has.
    return any(c < 32 or c == _COLON for c in name)


def _is_plain(c: int) -> bool:
    return 34 <= c <= 127 and c != _COLON


def _rebuild(name: bytes) -> bytes:
    out = bytearray(NOASCII_MARKER)
    in_plain_run = False

    for i, c in enumerate(name):
        if _is_plain(c):
            if not in_plain_run:
                out.extend(ASCII_RUN_MARKER)
                in_plain_run = True
            out.append(c)
        else:
            if i > 0:
                out.append(ord(" "))
            if c > 15:
                out.append(HEX_DIGITS[(c >> 4) & 15])
            out.append(HEX_DIGITS[c & 15])
            in_plain_run = False

    return bytes(out[:MAX_ESCAPED_NAME])


def escape_filename(name: Union[bytes, str]) -> Union[bytes, str]:
    """Escape a file name for the emulator's host filesystem.

    Args:
        name: Entry name as raw bytes, or as text (processed as UTF-8).

    Returns:
        The escaped name, of the same type as 'name'.
    """
    if isinstance(name, str):
        raw = name.encode("utf-8", errors="surrogateescape")
        return escape_filename(raw).decode("utf-8", errors="surrogateescape")

    significant = min(len(name), MAX_SIGNIFICANT_NAME)
    name = name.replace(b".", b"_")

    if significant == 0:
        return NONAME_PLACEHOLDER

    if not _needs_escape(name[:significant]):
        return name

    return _rebuild(name[:significant])


def escape_entry_name(name: str, encoding: str) -> str:
    """Escape a decoded archive entry name.

    The name is turned back into the bytes stored in the archive so that
    non-ASCII characters are escaped byte by byte.

    Args:
        name: Entry name as decoded from the archive.
        encoding: Encoding the archive used for the name ("utf-8" or "cp437").

    Returns:
        Escaped name as text.
    """
    raw = name.encode(encoding, errors="surrogateescape")
    return escape_filename(raw).decode(encoding, errors="surrogateescape")
