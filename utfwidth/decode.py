#
# Validating single-codepoint decoders for UTF-8, UTF-16 and UTF-32.
#
# Every decoder looks at one position of its input and reports the decoded
# codepoint, how many units it consumed and whether the units were well
# formed. A defect always consumes exactly one unit, so a caller looping on
# `consumed` makes progress through any input.
#
# Copyright 2025 Dair Aidarkhanov.
#
# Licensed under the Apache License, Version 2.0 <LICENSE-APACHE or
# http://www.apache.org/licenses/LICENSE-2.0> or the MIT license <LICENSE-MIT
# or http://opensource.org/licenses/MIT>, at your option.

import enum
from typing import Iterator, NamedTuple, Sequence

from .tables import (
    HIGH_SURROGATE_LAST,
    LOW_SURROGATE_FIRST,
    SURROGATE_FIRST,
    SURROGATE_LAST,
    is_scalar_value,
)


class Encoding(enum.IntEnum):
    """Unicode encoding forms, valued by their unit size in bits."""

    UTF8 = 8
    UTF16 = 16
    UTF32 = 32


class DecodeResult(NamedTuple):
    codepoint: int
    consumed: int
    is_valid: bool


_EMPTY = DecodeResult(0, 0, False)
_DEFECT = DecodeResult(0, 1, False)


def _is_continuation(b: int) -> bool:
    return 0x80 <= b <= 0xBF


def decode_utf8_one(data: Sequence[int], start: int = 0) -> DecodeResult:
    """Decode the UTF-8 sequence beginning at data[start].

    Overlong forms, surrogates, values above U+10FFFF, truncated sequences and
    bad continuation bytes are rejected; the defect consumes one byte, so the
    overlong pair C0 AF yields two defects.
    """
    n = len(data) - start
    if n <= 0:
        return _EMPTY

    c = data[start]
    if c < 0:
        return _DEFECT
    if c < 0x80:
        return DecodeResult(c, 1, True)

    if c < 0xC2:
        # stray continuation byte, or a C0/C1 lead that can only be overlong
        return _DEFECT

    if c < 0xE0:
        if n < 2 or not _is_continuation(data[start + 1]):
            return _DEFECT
        cp = ((c & 0x1F) << 6) | (data[start + 1] & 0x3F)
        if cp < 0x80:
            return _DEFECT
        return DecodeResult(cp, 2, True)

    if c < 0xF0:
        if n < 3 or not (_is_continuation(data[start + 1]) and _is_continuation(data[start + 2])):
            return _DEFECT
        cp = ((c & 0x0F) << 12) | ((data[start + 1] & 0x3F) << 6) | (data[start + 2] & 0x3F)
        if cp < 0x800 or SURROGATE_FIRST <= cp <= SURROGATE_LAST:
            return _DEFECT
        return DecodeResult(cp, 3, True)

    if c < 0xF5:
        if n < 4 or not (
            _is_continuation(data[start + 1])
            and _is_continuation(data[start + 2])
            and _is_continuation(data[start + 3])
        ):
            return _DEFECT
        cp = (
            ((c & 0x07) << 18)
            | ((data[start + 1] & 0x3F) << 12)
            | ((data[start + 2] & 0x3F) << 6)
            | (data[start + 3] & 0x3F)
        )
        if cp < 0x10000 or cp > 0x10FFFF:
            return _DEFECT
        return DecodeResult(cp, 4, True)

    return _DEFECT


def decode_utf16_one(units: Sequence[int], start: int = 0) -> DecodeResult:
    """Decode the UTF-16 unit or surrogate pair beginning at units[start]."""
    n = len(units) - start
    if n <= 0:
        return _EMPTY

    c1 = units[start]
    if c1 < 0:
        return _DEFECT
    if c1 < SURROGATE_FIRST or SURROGATE_LAST < c1 <= 0xFFFF:
        return DecodeResult(c1, 1, True)
    if c1 > HIGH_SURROGATE_LAST or n < 2:
        # lone low surrogate, truncated pair, or wider than 16 bits
        return _DEFECT

    c2 = units[start + 1]
    if not LOW_SURROGATE_FIRST <= c2 <= SURROGATE_LAST:
        return _DEFECT
    return DecodeResult(0x10000 + ((c1 - SURROGATE_FIRST) << 10) + (c2 - LOW_SURROGATE_FIRST), 2, True)


def decode_utf32_one(units: Sequence[int], start: int = 0) -> DecodeResult:
    if len(units) - start <= 0:
        return _EMPTY
    cp = units[start]
    if not is_scalar_value(cp):
        return _DEFECT
    return DecodeResult(cp, 1, True)


DECODERS = {
    Encoding.UTF8: decode_utf8_one,
    Encoding.UTF16: decode_utf16_one,
    Encoding.UTF32: decode_utf32_one,
}


def iter_codepoints(source: Sequence[int], encoding: Encoding) -> Iterator[DecodeResult]:
    """Yield one DecodeResult per codepoint or defect in `source`."""
    decode_one = DECODERS[encoding]
    i, n = 0, len(source)
    while i < n:
        decoded = decode_one(source, i)
        yield decoded
        i += decoded.consumed
