"""Tests for the TextRange value type."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from textcontent.core.errors import InvalidArgumentError, OutOfRangeError
from textcontent.core.ranges import TextRange


def test_text_range_behaves_like_a_pair():
    text_range = TextRange(2, 5)

    start, end = text_range
    assert (start, end) == (2, 5)
    assert text_range[0] == 2 and text_range[1] == 5
    assert len(text_range) == 2
    assert text_range.length == 3
    assert text_range.to_tuple() == (2, 5)
    assert text_range.to_dict() == {"start": 2, "end": 5}
    assert repr(text_range) == "TextRange(2, 5)"


def test_text_range_rejects_reversed_and_negative_bounds():
    with pytest.raises(InvalidArgumentError):
        TextRange(4, 2)
    with pytest.raises(OutOfRangeError):
        TextRange(-1, 2)
    with pytest.raises(InvalidArgumentError):
        TextRange(True, 2)


@pytest.mark.parametrize(
    "value",
    [TextRange(1, 3), (1, 3), [1, 3], {"start": 1, "end": 3}, SimpleNamespace(start=1, end=3)],
)
def test_from_value_accepts_common_shapes(value):
    assert TextRange.from_value(value) == TextRange(1, 3)


@pytest.mark.parametrize("value", [None, "13", (1, 2, 3), {"start": 1}, object()])
def test_from_value_rejects_unsupported_shapes(value):
    with pytest.raises(InvalidArgumentError):
        TextRange.from_value(value)


def test_contains_offset_is_inclusive_at_both_ends():
    text_range = TextRange(2, 4)

    assert [offset for offset in range(7) if text_range.contains_offset(offset)] == [2, 3, 4]


def test_strict_intersection_ignores_touching_and_caret_ranges():
    text_range = TextRange(3, 6)

    assert text_range.intersects_strict(TextRange(5, 8))
    assert text_range.intersects_strict(TextRange(0, 9))
    assert not text_range.intersects_strict(TextRange(6, 8))
    assert not text_range.intersects_strict(TextRange(0, 3))
    assert not text_range.intersects_strict(TextRange(4, 4))


def test_shift_and_from_length():
    assert TextRange.from_length(3, 4) == TextRange(3, 7)
    assert TextRange(3, 7).shift(-3) == TextRange(0, 4)
    assert TextRange(0, 9).contains_range(TextRange(3, 6))
    assert TextRange(3, 3).is_caret
