#
# Routing between Python sequence types and the conversion engine.
#
# bytes-like objects are UTF-8, arrays are UTF-16 or UTF-32 depending on
# their item size, and str is native text: a sequence of codepoints that is
# reinterpreted as UTF-32 units on the way in and rebuilt from UTF-32 on the
# way out. Every route is a single decode/encode pass: str and wide inputs
# are reinterpreted, not validated, so no route ANDs two validity flags.
# Signed arrays are read as unsigned units of the same width.
#
# Copyright 2025 Dair Aidarkhanov.
#
# Licensed under the Apache License, Version 2.0 <LICENSE-APACHE or
# http://www.apache.org/licenses/LICENSE-2.0> or the MIT license <LICENSE-MIT
# or http://opensource.org/licenses/MIT>, at your option.

from array import array
from typing import Optional, Union

from .convert import ConversionResult, ErrorPolicy, revalidate, transcode
from .decode import Encoding
from .encode import UTF16_TYPECODE, UTF32_TYPECODE
from .width import wcswidth

Target = Union[Encoding, type]

_ITEMSIZE_ENCODINGS = {1: Encoding.UTF8, 2: Encoding.UTF16, 4: Encoding.UTF32}
_UNSIGNED_TYPECODES = {1: "B", 2: UTF16_TYPECODE, 4: UTF32_TYPECODE}
_SIGNED_TYPECODES = frozenset("bhilq")


def encoding_of(source) -> Optional[Encoding]:
    """Encoding implied by the type of `source`; None for native text (str)."""
    if isinstance(source, str):
        return None
    if isinstance(source, (bytes, bytearray)):
        return Encoding.UTF8
    if isinstance(source, (array, memoryview)):
        enc = _ITEMSIZE_ENCODINGS.get(source.itemsize)
        if enc is not None:
            return enc
    raise TypeError(f"cannot infer a Unicode encoding for {type(source).__name__}; pass source_encoding")


def _source_encoding(source, source_encoding: Optional[Encoding]) -> Optional[Encoding]:
    if source_encoding is not None and not isinstance(source, str):
        return Encoding(source_encoding)
    return encoding_of(source)


def _as_unsigned(source):
    """Same bits as `source`, read as unsigned units; signed arrays only."""
    if isinstance(source, (array, memoryview)) and source.itemsize in _UNSIGNED_TYPECODES:
        typecode = source.typecode if isinstance(source, array) else source.format
        if typecode in _SIGNED_TYPECODES:
            return array(_UNSIGNED_TYPECODES[source.itemsize], source.tobytes())
    return source


def convert(
    source,
    to: Target,
    policy: ErrorPolicy = ErrorPolicy.USE_REPLACEMENT_CHARACTER,
    source_encoding: Optional[Encoding] = None,
) -> ConversionResult:
    """Convert `source` to the encoding `to`, or to native text when `to` is str.

    `source_encoding` is needed only for sources whose type does not imply
    an encoding, such as a list of code units.
    """
    if to is not str and not isinstance(to, Encoding):
        raise TypeError(f"conversion target must be an Encoding or str, not {to!r}")

    from_encoding = _source_encoding(source, source_encoding)
    source = _as_unsigned(source)
    if from_encoding is None:
        if to is str:
            return ConversionResult(str(source), True)
        return transcode(array(UTF32_TYPECODE, map(ord, source)), Encoding.UTF32, to, policy)

    if to is not str:
        return transcode(source, from_encoding, to, policy)

    # str cannot hold units past U+10FFFF, so the exit hop always validates
    if from_encoding == Encoding.UTF32:
        units = revalidate(source, Encoding.UTF32, policy)
        return ConversionResult("".join(map(chr, units.value)), units.is_valid)
    units = transcode(source, from_encoding, Encoding.UTF32, policy)
    return ConversionResult("".join(map(chr, units.value)), units.is_valid)


def u8s(source, policy: ErrorPolicy = ErrorPolicy.USE_REPLACEMENT_CHARACTER, source_encoding=None) -> ConversionResult:
    return convert(source, Encoding.UTF8, policy, source_encoding)


def u16s(source, policy: ErrorPolicy = ErrorPolicy.USE_REPLACEMENT_CHARACTER, source_encoding=None) -> ConversionResult:
    return convert(source, Encoding.UTF16, policy, source_encoding)


def u32s(source, policy: ErrorPolicy = ErrorPolicy.USE_REPLACEMENT_CHARACTER, source_encoding=None) -> ConversionResult:
    return convert(source, Encoding.UTF32, policy, source_encoding)


def text(source, policy: ErrorPolicy = ErrorPolicy.USE_REPLACEMENT_CHARACTER, source_encoding=None) -> ConversionResult:
    return convert(source, str, policy, source_encoding)


def uswidth(source, source_encoding: Optional[Encoding] = None) -> int:
    """Terminal width of any Unicode sequence; -1 if it holds a control character.

    UTF-32 units are measured as they are. Every other form is converted to
    UTF-32 first, dropping ill-formed units.
    """
    from_encoding = _source_encoding(source, source_encoding)
    source = _as_unsigned(source)
    if from_encoding is None:
        return wcswidth([ord(c) for c in source])
    if from_encoding == Encoding.UTF32:
        return wcswidth(source)
    return wcswidth(transcode(source, from_encoding, Encoding.UTF32, ErrorPolicy.SKIP_INVALID_VALUES).value)
