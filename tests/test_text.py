"""Tests for cell-width helpers."""

import pytest

from mdmarks.core import text as text_util


class TestWidth:
    def test_ascii(self):
        assert text_util.width("abc") == 3

    def test_missing_and_empty_measure_zero(self):
        assert text_util.width(None) == 0
        assert text_util.width("") == 0

    def test_wide_glyphs_count_two_cells(self):
        assert text_util.width("日本") == 4

    def test_box_drawing_is_narrow(self):
        assert text_util.width("├──┤") == 4


class TestPadding:
    def test_pad_left(self):
        assert text_util.pad(2, "x") == "  x"

    def test_negative_pad_is_empty(self):
        assert text_util.pad(-3) == ""

    def test_pad_to_matches_target_width(self):
        assert text_util.pad_to("[ ]", "☐") == "☐  "

    def test_pad_to_never_truncates(self):
        assert text_util.pad_to("x", "long") == "long"


@pytest.mark.parametrize(
    "line,col,index",
    [
        ("abc", 1, 1),
        ("aé b", 3, 2),
        ("日本語", 6, 2),
        ("abc", 99, 3),
    ],
)
def test_byte_to_char_index(line, col, index):
    assert text_util.byte_to_char_index(line, col) == index


def test_char_to_byte_index():
    assert text_util.char_to_byte_index("aé b", 2) == 3


def test_leading_spaces():
    assert text_util.leading_spaces("   - item") == 3
    assert text_util.leading_spaces("item") == 0
