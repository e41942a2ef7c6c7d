"""
Shared fixtures: QDOS header builders and small ZIP archives.
"""
import io
import struct
import zipfile
from datetime import datetime

import pytest

from qemunzip.archive import ArchiveEntry
from qemunzip.constants import QDOS_EXTRA_FIELD_TAG


def qdos_header(length=0, access=0, type=0, data_length=0, reserved=0, name=b"",
                update=0, refdate=0, backup=0):
    """Build a 64-byte QDOS file header."""
    return struct.pack(
        ">IBBIIH36sIII",
        length, access, type, data_length, reserved,
        len(name), name.ljust(36, b"\x00")[:36],
        update, refdate, backup,
    )


def qdos_extra(header, long_id=b"QDOS", extra_id=b"02\x00\x00"):
    """Build a complete extra-field block carrying a QDOS record."""
    payload = long_id + extra_id + header
    return struct.pack("<HH", QDOS_EXTRA_FIELD_TAG, len(payload)) + payload


def extra_block(field_id, payload):
    return struct.pack("<HH", field_id, len(payload)) + payload


@pytest.fixture
def make_archive(tmp_path):
    """Write a ZIP archive from (name, data, extra) tuples; plain strings are directories."""
    def _make(entries, name="test.zip", compression=zipfile.ZIP_DEFLATED):
        path = tmp_path / name
        with zipfile.ZipFile(path, "w") as zf:
            for entry in entries:
                if isinstance(entry, str):
                    zf.writestr(zipfile.ZipInfo(entry, date_time=(2023, 1, 1, 0, 0, 0)), b"")
                    continue
                entry_name, data, extra = entry
                info = zipfile.ZipInfo(entry_name, date_time=(2023, 1, 1, 0, 0, 0))
                info.compress_type = compression
                info.extra = extra
                zf.writestr(info, data)
        return path
    return _make


@pytest.fixture
def destination(tmp_path):
    path = tmp_path / "out"
    path.mkdir()
    return path


class FakeArchive:
    """Stand-in for ArchiveReader serving canned entries and streams."""

    name = "fake.zip"

    def __init__(self, entries):
        # entries: list of (ArchiveEntry, stream factory or exception)
        self._entries = entries

    def entries(self):
        return [entry for entry, _ in self._entries]

    def open(self, entry):
        for candidate, source in self._entries:
            if candidate is entry:
                if isinstance(source, Exception):
                    raise source
                return source()
        raise KeyError(entry.name)


class BrokenStream(io.BytesIO):
    """Yields 'good' bytes, then fails with 'error'."""

    def __init__(self, good, error):
        super().__init__(good)
        self._error = error

    def read(self, size=-1):
        data = super().read(size)
        if not data:
            raise self._error
        return data


def fake_entry(name, size, extra=b""):
    return ArchiveEntry(
        name=name,
        encoding="utf-8",
        is_dir=name.endswith("/"),
        size=size,
        compressed_size=size or 0,
        crc32=0,
        date_time=datetime(2023, 1, 1),
        extra=extra,
    )
