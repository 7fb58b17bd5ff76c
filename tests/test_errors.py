"""Tests for the text content error hierarchy."""

from __future__ import annotations

import pytest

from textcontent.core.errors import (
    ErrorCode,
    InvalidArgumentError,
    OutOfRangeError,
    TextContentError,
    check_offset,
)


def test_invalid_argument_error_is_value_error():
    error = InvalidArgumentError(message="bad input", details={"field": "start"})

    assert isinstance(error, ValueError)
    assert isinstance(error, TextContentError)
    assert error.error_code == ErrorCode.INVALID_ARGUMENT
    assert str(error) == "[invalid_argument] bad input"
    assert error.to_dict() == {
        "error": "invalid_argument",
        "message": "bad input",
        "details": {"field": "start"},
    }


def test_out_of_range_error_serializes_offset_and_length():
    error = OutOfRangeError(message="too far", offset=12, length=9)

    assert isinstance(error, IndexError)
    payload = error.to_dict()
    assert payload["error"] == "out_of_range"
    assert payload["offset"] == 12
    assert payload["length"] == 9
    assert "details" not in payload


def test_check_offset_accepts_both_bounds():
    assert check_offset(0, 5) == 0
    assert check_offset(5, 5) == 5


@pytest.mark.parametrize("offset", [-1, 6])
def test_check_offset_rejects_values_outside_length(offset: int):
    with pytest.raises(OutOfRangeError) as excinfo:
        check_offset(offset, 5, label="caret")

    assert excinfo.value.offset == offset
    assert "caret" in excinfo.value.message
