import logging
import sys
from array import array

import pytest
from hypothesis import given
from hypothesis import strategies as st

from utfwidth.convert import (
    REPLACEMENT_CHAR_8,
    REPLACEMENT_CHAR_16,
    REPLACEMENT_CHAR_32,
    ConversionResult,
    ErrorPolicy,
    revalidate,
    to_utf8,
    to_utf16,
    to_utf32,
    transcode,
)
from utfwidth.decode import Encoding, iter_codepoints

REPLACE = ErrorPolicy.USE_REPLACEMENT_CHARACTER
SKIP = ErrorPolicy.SKIP_INVALID_VALUES
STOP = ErrorPolicy.STOP_ON_FIRST_ERROR

INVALID_UTF8 = b"start_\xc0\xaf_middle_\xff_end"
INVALID_UTF16 = [ord(c) for c in "start_"] + [0xD800] + [ord(c) for c in "_middle_"] + [0xDFFF] + [ord(c) for c in "_end"]

_UTF16_CODEC = "utf-16-le" if sys.byteorder == "little" else "utf-16-be"


def _u16(s):
    return array("H", s.encode(_UTF16_CODEC))


def _u32(s):
    return [ord(c) for c in s]


def test_replacement_constants():
    assert REPLACEMENT_CHAR_8 == "\ufffd".encode("utf-8") == b"\xef\xbf\xbd"
    assert REPLACEMENT_CHAR_16 == 0xFFFD
    assert REPLACEMENT_CHAR_32 == 0x0000FFFD


def test_result_truthiness_and_unpacking():
    ok = ConversionResult(b"ok", True)
    bad = ConversionResult(b"", False)
    assert ok and not bad
    value, is_valid = bad
    assert value == b"" and is_valid is False
    with pytest.raises(AttributeError):
        ok.is_valid = False


class TestInvalidUtf8ToUtf32:
    def test_use_replacement_character(self):
        result = to_utf32(INVALID_UTF8, Encoding.UTF8, REPLACE)
        assert not result.is_valid
        assert result.value.tolist() == _u32("start_\ufffd\ufffd_middle_\ufffd_end")

    def test_skip_invalid_values(self):
        result = to_utf32(INVALID_UTF8, Encoding.UTF8, SKIP)
        assert not result.is_valid
        assert result.value.tolist() == _u32("start__middle__end")

    def test_stop_on_first_error(self):
        result = to_utf32(INVALID_UTF8, Encoding.UTF8, STOP)
        assert not result.is_valid
        assert result.value.tolist() == _u32("start_")

    def test_default_policy_replaces(self):
        assert transcode(b"\xff", Encoding.UTF8, Encoding.UTF32).value.tolist() == [0xFFFD]


class TestInvalidUtf16ToUtf8:
    def test_use_replacement_character(self):
        result = to_utf8(INVALID_UTF16, Encoding.UTF16, REPLACE)
        assert not result.is_valid
        assert result.value == "start_\ufffd_middle_\ufffd_end".encode("utf-8")

    def test_skip_invalid_values(self):
        result = to_utf8(INVALID_UTF16, Encoding.UTF16, SKIP)
        assert not result.is_valid
        assert result.value == b"start__middle__end"

    def test_stop_on_first_error(self):
        result = to_utf8(INVALID_UTF16, Encoding.UTF16, STOP)
        assert not result.is_valid
        assert result.value == b"start_"


class TestInvalidUtf32:
    units = [0x41, 0xD800, 0x42, 0x110000, 0x43]

    def test_to_utf8(self):
        assert to_utf8(self.units, Encoding.UTF32, REPLACE) == ConversionResult(b"A\xef\xbf\xbdB\xef\xbf\xbdC", False)
        assert to_utf8(self.units, Encoding.UTF32, SKIP) == ConversionResult(b"ABC", False)
        assert to_utf8(self.units, Encoding.UTF32, STOP) == ConversionResult(b"A", False)

    def test_to_utf16(self):
        assert to_utf16(self.units, Encoding.UTF32, REPLACE).value.tolist() == [0x41, 0xFFFD, 0x42, 0xFFFD, 0x43]
        assert to_utf16(self.units, Encoding.UTF32, SKIP).value.tolist() == [0x41, 0x42, 0x43]
        assert to_utf16(self.units, Encoding.UTF32, STOP).value.tolist() == [0x41]


def test_utf8_to_utf16_replacement_is_one_unit():
    result = to_utf16(b"a\xffb", Encoding.UTF8)
    assert result.value.tolist() == [0x61, 0xFFFD, 0x62]
    assert not result


@pytest.mark.parametrize(
    "source, encoding",
    [
        (bytearray(b"\xff\xc0\xaf"), Encoding.UTF8),
        (array("H", [0xD800, 0xDC00, 0xDFFF]), Encoding.UTF16),
        (array("I" if array("I").itemsize == 4 else "L", [0x110000, 0xD800]), Encoding.UTF32),
    ],
)
def test_identity_copy_is_always_valid(source, encoding):
    result = transcode(source, encoding, encoding, STOP)
    assert result.is_valid
    assert list(result.value) == list(source)
    assert result.value is not source


@pytest.mark.parametrize(
    "units, encoding, expected",
    [
        ([0x41, 0x1F602], Encoding.UTF16, [0x41, 0xFFFD]),
        ([0x41, -1], Encoding.UTF16, [0x41, 0xFFFD]),
        ([0x41, 0x100], Encoding.UTF8, list(b"A\xef\xbf\xbd")),
        ([0x41, 1 << 32], Encoding.UTF32, [0x41, 0xFFFD]),
    ],
)
def test_identity_with_units_wider_than_the_encoding(units, encoding, expected):
    result = transcode(units, encoding, encoding)
    assert not result.is_valid
    assert list(result.value) == expected
    assert list(transcode(units, encoding, encoding, STOP).value) == [0x41]


def test_revalidate_checks_same_encoding():
    result = revalidate(b"ok\xff", Encoding.UTF8, REPLACE)
    assert result == ConversionResult(b"ok\xef\xbf\xbd", False)
    assert revalidate([0x41, 0xDC00], Encoding.UTF16, SKIP).value.tolist() == [0x41]
    assert revalidate(b"fine", Encoding.UTF8).is_valid


def test_encoding_accepts_plain_ints():
    assert transcode(b"A", 8, 32).value.tolist() == [0x41]


def test_output_types():
    assert isinstance(to_utf8([0x41], Encoding.UTF32).value, bytes)
    assert to_utf16(b"A", Encoding.UTF8).value.itemsize == 2
    assert to_utf32(b"A", Encoding.UTF8).value.itemsize == 4


def test_stop_is_logged_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="utfwidth.convert"):
        to_utf8(INVALID_UTF16, Encoding.UTF16, STOP)
    assert "UTF16 -> UTF8" in caplog.text


@pytest.mark.parametrize(
    "s",
    ["Hello, World!", "R\u00e9sum\u00e9", "\U0001F602" * 3, "\U0001F468\u200d\U0001F469\u200d\U0001F467\u200d\U0001F466", "中国人"],
)
def test_round_trips_are_exact(s):
    u8 = s.encode("utf-8")

    u16 = to_utf16(u8, Encoding.UTF8)
    assert u16.is_valid and u16.value == _u16(s)
    back = to_utf8(u16.value, Encoding.UTF16)
    assert back.is_valid and back.value == u8

    u32 = to_utf32(u8, Encoding.UTF8)
    assert u32.is_valid and u32.value.tolist() == _u32(s)
    back = to_utf8(u32.value, Encoding.UTF32)
    assert back.is_valid and back.value == u8

    via32 = to_utf32(u16.value, Encoding.UTF16)
    assert via32.is_valid
    back16 = to_utf16(via32.value, Encoding.UTF32)
    assert back16.is_valid and back16.value == u16.value


@given(st.text())
def test_round_trip_property(s):
    u8 = s.encode("utf-8")
    for target in (Encoding.UTF16, Encoding.UTF32):
        there = transcode(u8, Encoding.UTF8, target)
        back = transcode(there.value, target, Encoding.UTF8)
        assert there.is_valid and back.is_valid
        assert back.value == u8


@given(st.binary())
def test_utf8_decodes_like_stdlib_for_valid_input(data):
    try:
        expected = data.decode("utf-8")
    except UnicodeDecodeError:
        assert not to_utf32(data, Encoding.UTF8, SKIP).is_valid
    else:
        result = to_utf32(data, Encoding.UTF8, STOP)
        assert result.is_valid
        assert result.value.tolist() == _u32(expected)


@given(st.binary())
def test_replacement_preserves_decoded_length(data):
    decoded = list(iter_codepoints(data, Encoding.UTF8))
    result = to_utf32(data, Encoding.UTF8, REPLACE)
    assert len(result.value) == len(decoded)
    assert result.is_valid == all(d.is_valid for d in decoded)


@given(st.lists(st.integers(0, 0xFFFF)))
def test_utf16_replacement_preserves_decoded_length(units):
    decoded = list(iter_codepoints(units, Encoding.UTF16))
    assert len(to_utf32(units, Encoding.UTF16, REPLACE).value) == len(decoded)


@given(st.binary())
def test_skip_is_replace_without_defects(data):
    skipped = to_utf32(data, Encoding.UTF8, SKIP).value.tolist()
    replaced = to_utf32(data, Encoding.UTF8, REPLACE).value.tolist()
    decoded = iter_codepoints(data, Encoding.UTF8)
    assert skipped == [cp for cp, d in zip(replaced, decoded) if d.is_valid]


def test_real_replacement_character_survives_skip():
    data = b"a\xef\xbf\xbd\xffb"
    assert to_utf32(data, Encoding.UTF8, SKIP).value.tolist() == [0x61, 0xFFFD, 0x62]


@given(st.binary())
def test_stop_is_prefix_of_skip(data):
    stopped = to_utf32(data, Encoding.UTF8, STOP)
    skipped = to_utf32(data, Encoding.UTF8, SKIP)
    assert stopped.is_valid == skipped.is_valid
    assert skipped.value.tolist()[: len(stopped.value)] == stopped.value.tolist()
    prefix = []
    for d in iter_codepoints(data, Encoding.UTF8):
        if not d.is_valid:
            break
        prefix.append(d.codepoint)
    assert stopped.value.tolist() == prefix


@given(st.binary(), st.sampled_from(list(ErrorPolicy)))
def test_identity_property(data, policy):
    result = transcode(data, Encoding.UTF8, Encoding.UTF8, policy)
    assert result.is_valid and result.value == data
