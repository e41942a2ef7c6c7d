"""
Tests for QDOS and Q-emulator header structures.
"""
import dataclasses

import pytest

from conftest import qdos_header
from qemunzip.constants import QEMULATOR_HEADER_SIZE
from qemunzip.errors import HeaderFormatError
from qemunzip.structures import (
    QEMULATOR_TEMPLATE,
    QemulatorHeader,
    parse_qdos_extra_record,
    parse_qdos_file_header,
    parse_qemulator_header,
)


def test_qdos_header_fields_are_big_endian():
    """Multi-byte fields decode in network order regardless of host."""
    raw = qdos_header(length=0x00012345, access=0x80, type=1, data_length=0x1000,
                      reserved=0xDEADBEEF, name=b"boot_bas", update=7)
    header = parse_qdos_file_header(raw)

    assert header.length == 0x12345
    assert header.access == 0x80
    assert header.type == 1
    assert header.data_length == 0x1000
    assert header.reserved == 0xDEADBEEF
    assert header.name_length == 8
    assert header.name == "boot_bas"
    assert header.update_date == 7
    assert header.raw == raw


def test_qdos_header_raw_byte_positions():
    raw = bytearray(64)
    raw[0:4] = b"\x00\x00\x01\x00"
    raw[5] = 2
    raw[6:10] = b"\x00\x00\x02\x00"
    header = parse_qdos_file_header(bytes(raw))

    assert header.length == 256
    assert header.type == 2
    assert header.type_name == "relocatable"
    assert header.data_length == 512


def test_qdos_header_wrong_size():
    with pytest.raises(HeaderFormatError):
        parse_qdos_file_header(b"\x00" * 63)


def test_extra_record_splits_ids_and_header():
    record = parse_qdos_extra_record(b"QZHD" + b"02\x00\x00" + qdos_header(type=1))

    assert record.long_id == b"QZHD"
    assert record.extra_id == b"02\x00\x00"
    assert record.header.type == 1


def test_extra_record_wrong_size():
    with pytest.raises(HeaderFormatError):
        parse_qdos_extra_record(b"QDOS" + qdos_header())


def test_template_packs_signature_and_word_length():
    packed = QEMULATOR_TEMPLATE.pack()

    assert len(packed) == QEMULATOR_HEADER_SIZE
    assert packed[:18] == b"]!QDOS File Header"
    assert packed[18:] == b"\x00\x0f" + b"\x00" * 10


def test_header_pack_layout():
    header = QemulatorHeader(type=1, data_length=0x1000, reserved=0x01020304)

    assert header.pack() == (
        b"]!QDOS File Header"
        + b"\x00\x0f\x00\x01"
        + b"\x00\x00\x10\x00"
        + b"\x01\x02\x03\x04"
    )


def test_template_is_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        QEMULATOR_TEMPLATE.type = 1


def test_parse_qemulator_header():
    data = QemulatorHeader(type=1, data_length=4096).pack() + b"program"
    header = parse_qemulator_header(data)

    assert header.type == 1
    assert header.data_length == 4096
    assert header.word_length == 15


def test_parse_qemulator_header_without_signature():
    assert parse_qemulator_header(b"\x00" * 40) is None
    assert parse_qemulator_header(b"]!QDOS") is None
