"""Structured helpers for representing half-open text ranges."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Iterator

from .errors import InvalidArgumentError, OutOfRangeError


@dataclass(slots=True, frozen=True)
class TextRange(Sequence[int]):
    """Half-open ``[start, end)`` range of character offsets."""

    start: int
    end: int

    def __post_init__(self) -> None:
        start = self._coerce_index(self.start, "start")
        end = self._coerce_index(self.end, "end")
        if end < start:
            raise InvalidArgumentError(
                message=f"TextRange start {start} exceeds end {end}",
                details={"start": start, "end": end},
            )
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    @staticmethod
    def _coerce_index(value: Any, label: str) -> int:
        if isinstance(value, bool):
            raise InvalidArgumentError(message=f"TextRange {label} must be an integer")
        try:
            number = int(value)
        except (TypeError, ValueError) as exc:
            raise InvalidArgumentError(message=f"TextRange {label} must be an integer") from exc
        if number < 0:
            raise OutOfRangeError(message=f"TextRange {label} must not be negative, got {number}", offset=number)
        return number

    def __len__(self) -> int:
        return 2

    def __getitem__(self, index: int | slice) -> int | tuple[int, ...]:
        if isinstance(index, slice):
            return self.to_tuple()[index]
        if index == 0:
            return self.start
        if index == 1:
            return self.end
        raise IndexError("TextRange index out of range")

    def __iter__(self) -> Iterator[int]:
        yield self.start
        yield self.end

    def __repr__(self) -> str:
        return f"TextRange({self.start}, {self.end})"

    @property
    def length(self) -> int:
        """Return the width of the range."""

        return self.end - self.start

    @property
    def is_caret(self) -> bool:
        """Return ``True`` when the range collapses to a caret."""

        return self.start == self.end

    def to_tuple(self) -> tuple[int, int]:
        """Return the range as a ``(start, end)`` tuple."""

        return (self.start, self.end)

    def to_dict(self) -> dict[str, int]:
        return {"start": self.start, "end": self.end}

    def shift(self, delta: int) -> TextRange:
        """Return the range moved by ``delta`` characters."""

        return TextRange(self.start + delta, self.end + delta)

    def contains_offset(self, offset: int) -> bool:
        """Return ``True`` when ``offset`` lies in ``[start, end]`` (both ends inclusive)."""

        return self.start <= offset <= self.end

    def contains_range(self, other: TextRange) -> bool:
        return self.start <= other.start and other.end <= self.end

    def intersects_strict(self, other: TextRange) -> bool:
        """Return ``True`` when the ranges share at least one character.

        Ranges that merely touch, and caret ranges, never intersect.
        """

        return max(self.start, other.start) < min(self.end, other.end)

    @classmethod
    def from_length(cls, start: int, length: int) -> TextRange:
        """Return the range starting at ``start`` spanning ``length`` characters."""

        return cls(start, start + length)

    @classmethod
    def from_value(cls, value: Any) -> TextRange:
        """Coerce ``value`` into a :class:`TextRange`."""

        if isinstance(value, TextRange):
            return value
        if value is None:
            raise InvalidArgumentError(message="TextRange value is required")
        if isinstance(value, Mapping):
            start = value.get("start")
            end = value.get("end")
            if start is None or end is None:
                raise InvalidArgumentError(message="TextRange mappings require start and end keys")
            return cls(start, end)
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            seq = list(value)
            if len(seq) != 2:
                raise InvalidArgumentError(message="TextRange sequences must have exactly two entries")
            return cls(seq[0], seq[1])
        start = getattr(value, "start", None)
        end = getattr(value, "end", None)
        if start is not None and end is not None:
            return cls(start, end)
        raise InvalidArgumentError(message=f"Unsupported TextRange input: {type(value).__name__}")


__all__ = ["TextRange"]
