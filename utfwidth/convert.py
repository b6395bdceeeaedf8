#
# Conversion engine between UTF-8, UTF-16 and UTF-32.
#
# Each conversion streams decode -> encode -> advance over the source and
# applies the caller's ErrorPolicy to every defect. Converting an encoding to
# itself is a structural copy that is always reported valid; the units are
# not re-validated. Callers that need validation must go through a different
# encoding, or call revalidate(). Units that do not fit the unit width (a
# UTF-16 unit past 0xFFFF, a negative unit) cannot be copied and go through
# the full pipeline instead.
#
# Copyright 2025 Dair Aidarkhanov.
#
# Licensed under the Apache License, Version 2.0 <LICENSE-APACHE or
# http://www.apache.org/licenses/LICENSE-2.0> or the MIT license <LICENSE-MIT
# or http://opensource.org/licenses/MIT>, at your option.

import enum
import logging
from dataclasses import dataclass
from typing import Any, Generic, Iterator, Sequence, TypeVar

from .decode import Encoding, iter_codepoints
from .encode import ENCODERS, copy_units, freeze, new_buffer

logger = logging.getLogger(__name__)

REPLACEMENT_CHARACTER = 0xFFFD
REPLACEMENT_CHAR_8 = b"\xef\xbf\xbd"
REPLACEMENT_CHAR_16 = 0xFFFD
REPLACEMENT_CHAR_32 = 0x0000FFFD

_REPLACEMENTS = {
    Encoding.UTF8: REPLACEMENT_CHAR_8,
    Encoding.UTF16: (REPLACEMENT_CHAR_16,),
    Encoding.UTF32: (REPLACEMENT_CHAR_32,),
}


class ErrorPolicy(enum.Enum):
    """What a conversion does with an ill-formed source element."""

    USE_REPLACEMENT_CHARACTER = "replace"  # emit U+FFFD and continue
    SKIP_INVALID_VALUES = "skip"  # emit nothing and continue
    STOP_ON_FIRST_ERROR = "stop"  # return the prefix converted so far


T = TypeVar("T")


@dataclass(frozen=True)
class ConversionResult(Generic[T]):
    """Converted units plus a flag telling whether the source was well formed.

    Truthiness follows `is_valid`, and the result unpacks as
    ``value, is_valid = result``.
    """

    value: T
    is_valid: bool

    def __bool__(self) -> bool:
        return self.is_valid

    def __iter__(self) -> Iterator[Any]:
        yield self.value
        yield self.is_valid


def _stream(
    source: Sequence[int],
    from_encoding: Encoding,
    to_encoding: Encoding,
    policy: ErrorPolicy,
) -> ConversionResult:
    encode = ENCODERS[to_encoding]
    replacement = _REPLACEMENTS[to_encoding]
    out = new_buffer(to_encoding)
    is_valid = True
    for decoded in iter_codepoints(source, from_encoding):
        if decoded.is_valid:
            encode(decoded.codepoint, out)
            continue
        is_valid = False
        if policy is ErrorPolicy.STOP_ON_FIRST_ERROR:
            logger.debug(
                "stopping %s -> %s conversion at first defect after %d output units",
                from_encoding.name,
                to_encoding.name,
                len(out),
            )
            break
        if policy is ErrorPolicy.USE_REPLACEMENT_CHARACTER:
            out.extend(replacement)
    return ConversionResult(freeze(out, to_encoding), is_valid)


def transcode(
    source: Sequence[int],
    from_encoding: Encoding,
    to_encoding: Encoding,
    policy: ErrorPolicy = ErrorPolicy.USE_REPLACEMENT_CHARACTER,
) -> ConversionResult:
    from_encoding = Encoding(from_encoding)
    to_encoding = Encoding(to_encoding)
    if from_encoding == to_encoding:
        try:
            return ConversionResult(copy_units(source, to_encoding), True)
        except (OverflowError, ValueError):
            # units wider than the encoding cannot be copied, only decoded
            return _stream(source, from_encoding, to_encoding, policy)
    return _stream(source, from_encoding, to_encoding, policy)


def revalidate(
    source: Sequence[int],
    encoding: Encoding,
    policy: ErrorPolicy = ErrorPolicy.USE_REPLACEMENT_CHARACTER,
) -> ConversionResult:
    """Validating copy of `source` within one encoding.

    transcode() never checks a same-encoding conversion; this runs the full
    decode/encode pipeline instead.
    """
    encoding = Encoding(encoding)
    return _stream(source, encoding, encoding, policy)


def to_utf8(
    source: Sequence[int],
    from_encoding: Encoding,
    policy: ErrorPolicy = ErrorPolicy.USE_REPLACEMENT_CHARACTER,
) -> ConversionResult:
    return transcode(source, from_encoding, Encoding.UTF8, policy)


def to_utf16(
    source: Sequence[int],
    from_encoding: Encoding,
    policy: ErrorPolicy = ErrorPolicy.USE_REPLACEMENT_CHARACTER,
) -> ConversionResult:
    return transcode(source, from_encoding, Encoding.UTF16, policy)


def to_utf32(
    source: Sequence[int],
    from_encoding: Encoding,
    policy: ErrorPolicy = ErrorPolicy.USE_REPLACEMENT_CHARACTER,
) -> ConversionResult:
    return transcode(source, from_encoding, Encoding.UTF32, policy)
