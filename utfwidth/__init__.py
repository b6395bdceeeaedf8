#
# Unicode transcoding between UTF-8, UTF-16 and UTF-32 with selectable
# handling of ill-formed input, and terminal column width of Unicode text.
#
# Copyright 2025 Dair Aidarkhanov.
#
# Licensed under the Apache License, Version 2.0 <LICENSE-APACHE or
# http://www.apache.org/licenses/LICENSE-2.0> or the MIT license <LICENSE-MIT
# or http://opensource.org/licenses/MIT>, at your option.

from .convert import (
    REPLACEMENT_CHAR_8,
    REPLACEMENT_CHAR_16,
    REPLACEMENT_CHAR_32,
    REPLACEMENT_CHARACTER,
    ConversionResult,
    ErrorPolicy,
    revalidate,
    to_utf8,
    to_utf16,
    to_utf32,
    transcode,
)
from .decode import DecodeResult, Encoding, decode_utf8_one, decode_utf16_one, decode_utf32_one
from .encode import encode_utf8, encode_utf16, encode_utf32
from .route import convert, encoding_of, text, u8s, u16s, u32s, uswidth
from .width import wcswidth, wcwidth

__version__ = "0.1.0"

__all__ = [
    "REPLACEMENT_CHAR_8",
    "REPLACEMENT_CHAR_16",
    "REPLACEMENT_CHAR_32",
    "REPLACEMENT_CHARACTER",
    "ConversionResult",
    "DecodeResult",
    "Encoding",
    "ErrorPolicy",
    "convert",
    "decode_utf8_one",
    "decode_utf16_one",
    "decode_utf32_one",
    "encode_utf8",
    "encode_utf16",
    "encode_utf32",
    "encoding_of",
    "revalidate",
    "text",
    "to_utf8",
    "to_utf16",
    "to_utf32",
    "transcode",
    "u8s",
    "u16s",
    "u32s",
    "uswidth",
    "wcswidth",
    "wcwidth",
]
