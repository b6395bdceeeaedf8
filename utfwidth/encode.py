#
# Append-style encoders writing one codepoint into a growing buffer.
#
# Copyright 2025 Dair Aidarkhanov.
#
# Licensed under the Apache License, Version 2.0 <LICENSE-APACHE or
# http://www.apache.org/licenses/LICENSE-2.0> or the MIT license <LICENSE-MIT
# or http://opensource.org/licenses/MIT>, at your option.

from array import array
from typing import Callable, Union

from .decode import Encoding
from .tables import LOW_SURROGATE_FIRST, SURROGATE_FIRST, is_scalar_value

UTF16_TYPECODE = "H"
UTF32_TYPECODE = "I" if array("I").itemsize == 4 else "L"

assert array(UTF16_TYPECODE).itemsize == 2
assert array(UTF32_TYPECODE).itemsize == 4

Buffer = Union[bytearray, array]


def _check(cp: int) -> None:
    if not is_scalar_value(cp):
        raise ValueError(f"not a Unicode scalar value: 0x{cp:X}")


def encode_utf8(cp: int, out: bytearray) -> None:
    _check(cp)
    if cp <= 0x7F:
        out.append(cp)
    elif cp <= 0x7FF:
        out.append(0xC0 | (cp >> 6))
        out.append(0x80 | (cp & 0x3F))
    elif cp <= 0xFFFF:
        out.append(0xE0 | (cp >> 12))
        out.append(0x80 | ((cp >> 6) & 0x3F))
        out.append(0x80 | (cp & 0x3F))
    else:
        out.append(0xF0 | (cp >> 18))
        out.append(0x80 | ((cp >> 12) & 0x3F))
        out.append(0x80 | ((cp >> 6) & 0x3F))
        out.append(0x80 | (cp & 0x3F))


def encode_utf16(cp: int, out: array) -> None:
    _check(cp)
    if cp <= 0xFFFF:
        out.append(cp)
    else:
        cp -= 0x10000
        out.append(SURROGATE_FIRST + (cp >> 10))
        out.append(LOW_SURROGATE_FIRST + (cp & 0x3FF))


def encode_utf32(cp: int, out: array) -> None:
    _check(cp)
    out.append(cp)


ENCODERS: dict[Encoding, Callable[[int, Buffer], None]] = {
    Encoding.UTF8: encode_utf8,
    Encoding.UTF16: encode_utf16,
    Encoding.UTF32: encode_utf32,
}


def new_buffer(encoding: Encoding) -> Buffer:
    if encoding == Encoding.UTF8:
        return bytearray()
    if encoding == Encoding.UTF16:
        return array(UTF16_TYPECODE)
    return array(UTF32_TYPECODE)


def freeze(buf: Buffer, encoding: Encoding):
    """Turn a finished buffer into the public result type for `encoding`."""
    if encoding == Encoding.UTF8:
        return bytes(buf)
    return buf


def copy_units(source, encoding: Encoding):
    """Structural copy of `source` into the result type, without validation."""
    if encoding == Encoding.UTF8:
        return bytes(source)
    if encoding == Encoding.UTF16:
        return array(UTF16_TYPECODE, source)
    return array(UTF32_TYPECODE, source)
