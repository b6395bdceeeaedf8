#
# Terminal column width of codepoints and codepoint sequences.
#
# wcwidth() follows Markus Kuhn's wcwidth.c:
#
#    - The null character (U+0000) has a column width of 0.
#    - Other C0/C1 control characters and DEL give -1.
#    - Non-spacing and enclosing combining characters, format characters,
#      Hangul Jamo medial vowels and final consonants (U+1160-U+11FF), and
#      the emoji modifiers of the zero-width table have a column width of 0.
#      SOFT HYPHEN (U+00AD) has a column width of 1.
#    - East Asian Wide (W) and Full-width (F) characters, plus the emoji
#      and pictograph blocks, have a column width of 2.
#    - Everything else has a column width of 1.
#
# wcswidth() adds emoji cluster coalescing on top: after a cluster starter,
# skin tones, VS-16 and tag characters are skipped, and a ZWJ swallows the
# starter that follows it, so a joined family counts as a single emoji.
#
# Copyright 2025 Dair Aidarkhanov.
#
# Licensed under the Apache License, Version 2.0 <LICENSE-APACHE or
# http://www.apache.org/licenses/LICENSE-2.0> or the MIT license <LICENSE-MIT
# or http://opensource.org/licenses/MIT>, at your option.

from typing import Sequence

from .tables import CLUSTER_STARTERS, DOUBLE_WIDTH, MODIFIERS, ZERO_WIDTH, ZWJ, bisearch


def wcwidth(cp: int) -> int:
    if cp == 0:
        return 0
    if cp < 0x20 or 0x7F <= cp < 0xA0:
        return -1
    if bisearch(cp, ZERO_WIDTH):
        return 0
    if bisearch(cp, DOUBLE_WIDTH):
        return 2
    return 1


def is_cluster_starter(cp: int) -> bool:
    return bisearch(cp, CLUSTER_STARTERS)


def is_modifier(cp: int) -> bool:
    return bisearch(cp, MODIFIERS)


def wcswidth(codepoints: Sequence[int]) -> int:
    """Columns needed to display `codepoints`, or -1 if a control is present."""
    width = 0
    i, n = 0, len(codepoints)
    while i < n:
        cp = codepoints[i]
        w = wcwidth(cp)
        if w < 0:
            return -1
        width += w
        i += 1
        if not is_cluster_starter(cp):
            continue
        while i < n and is_modifier(codepoints[i]):
            if codepoints[i] == ZWJ and i + 1 < n:
                i += 1
                # the joined emoji adds no width of its own
                if is_cluster_starter(codepoints[i]):
                    i += 1
            else:
                i += 1
    return width
