"""
Tests for sQLux/Q-emulator file name escaping.
"""
import pytest

from qemunzip.names import escape_entry_name, escape_filename


def test_dots_become_underscores():
    assert escape_filename("a.b.c") == "a_b_c"
    assert escape_filename(b"boot.bas") == b"boot_bas"


def test_empty_name():
    assert escape_filename("") == "-noname-"
    assert escape_filename(b"") == b"-noname-"


def test_colon_triggers_rebuild():
    assert escape_filename("A:B") == "-noASCII-!A 3A!B"


def test_control_characters_use_short_hex():
    assert escape_filename(b"\x01ab") == b"-noASCII-1!ab"
    assert escape_filename(b"ab\x0a") == b"-noASCII-!ab A"


def test_consecutive_escaped_bytes_are_space_separated():
    assert escape_filename(b"x\x01\x1fy") == b"-noASCII-!x 1 1F!y"


def test_space_and_bang_do_not_trigger():
    assert escape_filename("hello world!") == "hello world!"


def test_space_and_bang_escaped_once_triggered():
    assert escape_filename(b"a b!:") == b"-noASCII-!a 20!b 21 3A"


def test_high_bytes_do_not_trigger():
    assert escape_filename(b"caf\xe9") == b"caf\xe9"


def test_high_bytes_escaped_once_triggered():
    assert escape_filename(b"\xe9:") == b"-noASCII-E9 3A"


def test_delete_is_copied_through():
    assert escape_filename(b"\x7f:") == b"-noASCII-!\x7f 3A"


def test_dots_replaced_before_escaping():
    assert escape_filename("x.y:z") == "-noASCII-!x_y 3A!z"


def test_only_first_31_bytes_are_scanned():
    name = b"a" * 31 + b":b"
    assert escape_filename(name) == name


def test_escaped_output_covers_first_31_bytes():
    name = b":" + b"b" * 40
    assert escape_filename(name) == b"-noASCII-3A!" + b"b" * 30


def test_long_clean_name_is_kept_whole():
    name = "x" * 40 + ".txt"
    assert escape_filename(name) == "x" * 40 + "_txt"


def test_escaping_is_deterministic():
    assert escape_filename("win1_A:B") == escape_filename("win1_A:B")


@pytest.mark.parametrize("encoding", ["utf-8", "cp437"])
def test_escape_entry_name_uses_archive_bytes(encoding):
    assert escape_entry_name("a:b.c", encoding) == "-noASCII-!a 3A!b_c"


def test_escape_entry_name_escapes_utf8_bytes():
    assert escape_entry_name("é:", "utf-8") == "-noASCII-C3 A9 3A"


def test_escape_entry_name_escapes_cp437_bytes():
    # 'é' is 0x82 in cp437
    assert escape_entry_name("é:", "cp437") == "-noASCII-82 3A"
