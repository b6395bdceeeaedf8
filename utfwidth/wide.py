#
# Host wide-character adapter and console writers.
#
# A wide sequence holds units of the platform wchar_t: 16 bits on Windows,
# 32 bits on Linux, macOS and most other Unix systems. It is treated as a
# bit-identical view of UTF-16 or UTF-32 respectively; nothing in the core
# modules knows about it.
#
# Copyright 2025 Dair Aidarkhanov.
#
# Licensed under the Apache License, Version 2.0 <LICENSE-APACHE or
# http://www.apache.org/licenses/LICENSE-2.0> or the MIT license <LICENSE-MIT
# or http://opensource.org/licenses/MIT>, at your option.

import ctypes
import sys
from array import array
from typing import Callable, Optional, Sequence, TextIO

from .convert import ConversionResult, ErrorPolicy, transcode
from .decode import Encoding
from .encode import UTF16_TYPECODE, UTF32_TYPECODE
from .route import convert, uswidth

WIDE_UNIT_SIZE = ctypes.sizeof(ctypes.c_wchar)

if WIDE_UNIT_SIZE == 2:
    WIDE_ENCODING = Encoding.UTF16
    WIDE_TYPECODE = UTF16_TYPECODE
elif WIDE_UNIT_SIZE == 4:
    WIDE_ENCODING = Encoding.UTF32
    WIDE_TYPECODE = UTF32_TYPECODE
else:
    raise ImportError(f"unsupported wchar_t size {WIDE_UNIT_SIZE}, expecting 16 or 32 bits")

# (units, length) -> None
Writer = Callable[[Sequence[int], int], None]


def ws_to_us(ws: Sequence[int]) -> array:
    """Reinterpret wide units as the Unicode encoding of the same unit size."""
    return array(WIDE_TYPECODE, ws)


def us_to_ws(us: Sequence[int]) -> array:
    return array(WIDE_TYPECODE, us)


def ws(source, policy: ErrorPolicy = ErrorPolicy.USE_REPLACEMENT_CHARACTER, source_encoding=None) -> ConversionResult:
    """Convert any routable source into a wide sequence."""
    return convert(source, WIDE_ENCODING, policy, source_encoding)


def from_wide(wide: Sequence[int], to, policy: ErrorPolicy = ErrorPolicy.USE_REPLACEMENT_CHARACTER) -> ConversionResult:
    units = ws_to_us(wide)
    if to is str:
        return convert(units, str, policy, WIDE_ENCODING)
    return transcode(units, WIDE_ENCODING, to, policy)


def wswidth(wide: Sequence[int]) -> int:
    return uswidth(ws_to_us(wide), WIDE_ENCODING)


def default_writer(stream: TextIO) -> Writer:
    def write(units: Sequence[int], length: int) -> None:
        stream.write(from_wide(units[:length], str).value)

    return write


def wcout(wide: Sequence[int], writer: Optional[Writer] = None) -> None:
    (writer or default_writer(sys.stdout))(wide, len(wide))


def wcerr(wide: Sequence[int], writer: Optional[Writer] = None) -> None:
    writer = writer or default_writer(sys.stderr)
    writer(wide, len(wide))
    writer(us_to_ws([0x0A]), 1)


def wprint(wide: Sequence[int], writer: Optional[Writer] = None) -> None:
    wcout(wide, writer)


def wprintln(wide: Sequence[int], writer: Optional[Writer] = None) -> None:
    writer = writer or default_writer(sys.stdout)
    wcout(wide, writer)
    wcout(us_to_ws([0x0A]), writer)
