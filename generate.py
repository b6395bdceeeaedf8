#!/usr/bin/env python3
#
# Regenerate the utfwidth interval tables from the Unicode Character Database.
# The zero-width table follows the wcwidth.c rule (Mn, Me and Cf minus
# U+00AD, plus U+1160..U+11FF and U+200B) with the emoji patches of the
# shipped snapshot; the double-width table is East Asian Width W and F.
# All Unicode files are fetched from .../<version>/ucd/<path>.
#
# Copyright 2011-2025 The Rust Project Developers.
# Copyright 2025 Dair Aidarkhanov.
#
# Licensed under the Apache License, Version 2.0 <LICENSE-APACHE or
# http://www.apache.org/licenses/LICENSE-2.0> or the MIT license <LICENSE-MIT
# or http://opensource.org/licenses/MIT>, at your option.
#
# Unicode® data: https://www.unicode.org/license.txt

import argparse
import enum
import operator
import os
import re
import sys
import urllib.request
from typing import Callable, Iterable

UNICODE_VERSION = "16.0.0"
NUM_CODEPOINTS = 0x110000
OUTPUT_TABLES = "tables.py"

# Kept zero-width whatever the general category says.
EMOJI_ZERO_WIDTH = [
    (0x200D, 0x200D),  # ZWJ
    (0xFE00, 0xFE0F),  # variation selectors
    (0x1F3FB, 0x1F3FF),  # skin tone modifiers
    (0xE0020, 0xE007F),  # tags
    (0xE0100, 0xE01EF),  # variation selectors supplement
]

Codepoint = int


class EastAsianWidth(enum.IntEnum):
    NARROW = 1
    WIDE = 2
    AMBIGUOUS = 3


def fetch_open(path_rel_ucd: str, local_prefix: str = "", version: str = UNICODE_VERSION):
    """Fetch file from Public/<version>/ucd/<path_rel_ucd> into local cache."""
    basename = os.path.basename(path_rel_ucd)
    localname = os.path.join(local_prefix, basename)
    if not os.path.exists(localname):
        try:
            if not hasattr(fetch_open, "_notice"):
                print("\nDownloading Unicode data files from unicode.org...")
                print("By continuing, you agree to the Unicode License:")
                print("  https://www.unicode.org/license.txt\n")
                fetch_open._notice = True
            url = f"https://www.unicode.org/Public/{version}/ucd/{path_rel_ucd}"
            urllib.request.urlretrieve(url, localname)
        except Exception as e:
            sys.stderr.write(f"Error downloading {path_rel_ucd}: {e}\n")
            sys.exit(1)

    try:
        return open(localname, encoding="utf-8")
    except OSError as e:
        sys.stderr.write(f"Cannot load {localname}: {e}\n")
        sys.exit(1)


def load_unicode_version(local_prefix: str = "") -> tuple[int, int, int]:
    with fetch_open("ReadMe.txt", local_prefix) as readme:
        m = re.search(r"for Version (\d+)\.(\d+)\.(\d+)", readme.read())
        if not m:
            sys.stderr.write("Could not determine Unicode version\n")
            sys.exit(1)
        return tuple(map(int, m.groups()))


def load_property(
    path_rel_ucd: str, pattern: str, action: Callable[[int], None], local_prefix: str = ""
):
    with fetch_open(path_rel_ucd, local_prefix) as properties:
        single = re.compile(rf"^([0-9A-F]+)\s*;\s*{pattern}\s+")
        multiple = re.compile(rf"^([0-9A-F]+)\.\.([0-9A-F]+)\s*;\s*{pattern}\s+")
        for line in properties.readlines():
            raw = None
            if m := single.match(line):
                raw = (m.group(1), m.group(1))
            elif m := multiple.match(line):
                raw = (m.group(1), m.group(2))
            else:
                continue
            lo, hi = int(raw[0], 16), int(raw[1], 16)
            for cp in range(lo, hi + 1):
                action(cp)


def to_sorted_ranges(it: Iterable[Codepoint]) -> list[tuple[Codepoint, Codepoint]]:
    lst = sorted(it)
    out: list[tuple[int, int]] = []
    for cp in lst:
        if out and out[-1][1] == cp - 1:
            out[-1] = (out[-1][0], cp)
        else:
            out.append((cp, cp))
    return out


def load_eaw(local_prefix: str = "") -> list[EastAsianWidth]:
    with fetch_open("EastAsianWidth.txt", local_prefix) as eaw:
        single = re.compile(r"^([0-9A-F]+)\s*;\s*(\w+) +# ")
        multiple = re.compile(r"^([0-9A-F]+)\.\.([0-9A-F]+)\s*;\s*(\w+) +# ")
        codes = {
            **{c: EastAsianWidth.NARROW for c in ["N", "Na", "H"]},
            **{c: EastAsianWidth.WIDE for c in ["W", "F"]},
            "A": EastAsianWidth.AMBIGUOUS,
        }
        out: list[EastAsianWidth] = []
        cur = 0
        for line in eaw.readlines():
            raw = None
            if m := single.match(line):
                raw = (m.group(1), m.group(1), m.group(2))
            elif m := multiple.match(line):
                raw = (m.group(1), m.group(2), m.group(3))
            else:
                continue
            lo, hi, w = int(raw[0], 16), int(raw[1], 16), codes[raw[2]]
            assert cur <= hi
            while cur <= hi:
                out.append(EastAsianWidth.NARROW if cur < lo else w)
                cur += 1
        while len(out) < NUM_CODEPOINTS:
            out.append(EastAsianWidth.NARROW)
    return out


def load_zero_widths(local_prefix: str = "") -> list[bool]:
    zw = [False] * NUM_CODEPOINTS
    load_property(
        "extracted/DerivedGeneralCategory.txt",
        r"(?:Mn|Me|Cf)",
        lambda cp: operator.setitem(zw, cp, True),
        local_prefix,
    )
    for cp in range(0x1160, 0x1200):
        zw[cp] = True
    zw[0x200B] = True
    for lo, hi in EMOJI_ZERO_WIDTH:
        for cp in range(lo, hi + 1):
            zw[cp] = True

    zw[0x00AD] = False
    return zw


def build_tables(
    local_prefix: str = "",
) -> tuple[list[tuple[int, int]], list[tuple[int, int]]]:
    eaw = load_eaw(local_prefix)
    zw = load_zero_widths(local_prefix)
    zero = [cp for cp, z in enumerate(zw) if z]
    wide = [
        cp
        for cp, (w, z) in enumerate(zip(eaw, zw))
        if w == EastAsianWidth.WIDE and not z and cp >= 0xA0
    ]
    return to_sorted_ranges(zero), to_sorted_ranges(wide)


def emit_tables(
    path: str,
    ver: tuple[int, int, int],
    zero: list[tuple[int, int]],
    wide: list[tuple[int, int]],
):
    with open(path, "w", newline="\n") as f:
        f.write(
            f"""# Generated by generate.py from Unicode {ver[0]}.{ver[1]}.{ver[2]} data.
#
# Unicode® data: https://www.unicode.org/license.txt

UNICODE_VERSION = ({ver[0]}, {ver[1]}, {ver[2]})
"""
        )
        for name, ranges in (("ZERO_WIDTH", zero), ("DOUBLE_WIDTH", wide)):
            f.write(f"\n{name} = (\n")
            for lo, hi in ranges:
                f.write(f"    (0x{lo:04X}, 0x{hi:04X}),\n")
            f.write(")\n")


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(description="Regenerate utfwidth interval tables")
    parser.add_argument("-o", "--output", default=OUTPUT_TABLES,
                        help=f"Output file name (default: {OUTPUT_TABLES})")
    parser.add_argument("--cache-dir", default="",
                        help="Directory holding downloaded UCD files (default: current directory)")
    args = parser.parse_args(argv)

    print("Generating Python tables for Unicode width calculation...")
    ver = load_unicode_version(args.cache_dir)
    print(f"Unicode version: {ver[0]}.{ver[1]}.{ver[2]}")

    print("Building tables...")
    zero, wide = build_tables(args.cache_dir)

    print("Emitting tables...")
    emit_tables(args.output, ver, zero, wide)

    print(f"Done. Generated {args.output} with {len(zero)} zero-width and {len(wide)} double-width ranges.")


if __name__ == "__main__":
    main()
