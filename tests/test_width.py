import pytest
from hypothesis import given
from hypothesis import strategies as st

from utfwidth.width import is_cluster_starter, is_modifier, wcswidth, wcwidth

FAMILY = "\U0001F468\u200d\U0001F469\u200d\U0001F467\u200d\U0001F466"
ASTRONAUT = "\U0001F469\U0001F3FC\u200d\U0001F680"

WIDTH_CASES = [
    (13, "Hello, World!"),
    (6, "R\u00e9sum\u00e9"),
    (6, "\U0001F602\U0001F602\U0001F602"),
    (0, ""),
    (2, ASTRONAUT),
    (4, "\U00010300\U0001030D\U00010313\U00010300"),
    (11, "𝕄𝕒𝕥𝕙𝕖𝕞𝕒𝕥𝕚𝕔𝕤"),
    (6, "\U0001F30D\U0001F30E\U0001F30F"),
    (2, FAMILY),
    (10, "𠔻𠕋𠖊𠖍𠖐"),
    (2, "𠮷"),
    (6, "𠀤𠀧𠁀"),
    (4, "𠊛好"),
    (6, "𪚥𪆷𪃹"),
    (6, "𪜈𪜋𪜌"),
    (7, "اَلْعَرَبِيَّةُ"),
    (6, "中国人"),
    (6, "\U0001F602\U0001F30E" + FAMILY),
]


def _cps(s):
    return [ord(c) for c in s]


@pytest.mark.parametrize(
    "cp, expected",
    [
        (0x00, 0),
        (0x01, -1),
        (0x0A, -1),
        (0x1F, -1),
        (0x20, 1),
        (0x41, 1),
        (0x7E, 1),
        (0x7F, -1),
        (0x9F, -1),
        (0xA0, 1),
        (0xAD, 1),  # soft hyphen
        (0x0301, 0),
        (0x1160, 0),
        (0x115F, 2),
        (0x200B, 0),
        (0x200D, 0),
        (0x2329, 2),
        (0x303F, 1),
        (0x3042, 2),
        (0x4E2D, 2),
        (0xAC00, 2),
        (0xD7A4, 1),
        (0xFE0F, 0),
        (0xFEFF, 0),
        (0xFF01, 2),
        (0xFF61, 1),
        (0x1F3FB, 0),
        (0x1F602, 2),
        (0x1FAFF, 2),
        (0x20BB7, 2),
        (0x2FFFE, 1),
        (0xE0041, 0),
        (0x10FFFF, 1),
    ],
)
def test_wcwidth(cp, expected):
    assert wcwidth(cp) == expected


@pytest.mark.parametrize("expected, s", WIDTH_CASES)
def test_wcswidth(expected, s):
    assert wcswidth(_cps(s)) == expected


def test_control_character_is_an_error():
    assert wcswidth(_cps("abc\x1bdef")) == -1
    assert wcswidth(_cps("\x85")) == -1


def test_nul_counts_zero_and_does_not_stop():
    assert wcswidth(_cps("ab\x00cd")) == 4


def test_zwj_without_following_emoji_is_skipped():
    # the ZWJ is consumed, the letter after it still counts
    assert wcswidth(_cps("\U0001F602\u200da")) == 3


def test_trailing_zwj():
    assert wcswidth(_cps("\U0001F602\u200d")) == 2


def test_skin_tone_and_vs16_after_starter():
    assert wcswidth(_cps("\U0001F44D\U0001F3FD")) == 2
    assert wcswidth(_cps("\u2764\ufe0f")) == 1


def test_zwj_after_plain_letter_does_not_join():
    # only a cluster starter opens a cluster
    assert wcswidth(_cps("a\u200d\U0001F602")) == 3


def test_tag_sequence_flag():
    flag = "\U0001F3F4\U000E0067\U000E0062\U000E0065\U000E006E\U000E0067\U000E007F"
    assert wcswidth(_cps(flag)) == 2


@pytest.mark.parametrize("cp", [0x2600, 0x27BF, 0x1F000, 0x1FAFF])
def test_cluster_starters(cp):
    assert is_cluster_starter(cp)


@pytest.mark.parametrize("cp", [0x25FF, 0x27C0, 0x1EFFF, 0x1FB00])
def test_not_cluster_starters(cp):
    assert not is_cluster_starter(cp)


@pytest.mark.parametrize("cp, expected", [(0x200D, True), (0xFE0F, True), (0xFE0E, False), (0x1F3FC, True), (0xE007F, True), (0xE0080, False)])
def test_modifiers(cp, expected):
    assert is_modifier(cp) is expected


@given(st.text(alphabet=st.characters(exclude_categories=("Cc", "Cs"))))
def test_width_non_negative_without_controls(s):
    assert wcswidth(_cps(s)) >= 0


@given(st.text())
def test_width_is_bounded(s):
    w = wcswidth(_cps(s))
    assert w == -1 or 0 <= w <= 2 * len(s)
