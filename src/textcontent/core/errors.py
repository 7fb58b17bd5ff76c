"""Standardized error types for text content operations.

Every public operation validates its arguments before doing any work, so a
raised error always leaves the receiver untouched. Errors carry a
machine-readable code and serialize to a dictionary for pipelines that report
failures instead of aborting.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class ErrorCode:
    """Constants for error codes carried by :class:`TextContentError`."""

    INVALID_ARGUMENT = "invalid_argument"
    OUT_OF_RANGE = "out_of_range"


@dataclass
class TextContentError(Exception):
    """Base exception class for all text content errors.

    Attributes:
        error_code: Machine-readable error identifier.
        message: Human-readable error description.
        details: Additional structured error information.
    """

    error_code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary for structured reporting."""
        result: dict[str, Any] = {
            "error": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = dict(self.details)
        return result

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


@dataclass
class InvalidArgumentError(TextContentError, ValueError):
    """Raised for malformed ranges, empty inputs or overlapping exclusions."""

    error_code: str = field(default=ErrorCode.INVALID_ARGUMENT)
    message: str = field(default="Invalid argument")
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class OutOfRangeError(TextContentError, IndexError):
    """Raised when an offset or range endpoint lies outside ``[0, length]``."""

    error_code: str = field(default=ErrorCode.OUT_OF_RANGE)
    message: str = field(default="Offset is out of range")
    details: dict[str, Any] = field(default_factory=dict)

    offset: int | None = field(default=None)
    length: int | None = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.offset is not None:
            result["offset"] = self.offset
        if self.length is not None:
            result["length"] = self.length
        return result


def check_offset(offset: int, length: int, *, label: str = "offset") -> int:
    """Return ``offset`` if it lies within ``[0, length]``, else raise."""

    if offset < 0 or offset > length:
        raise OutOfRangeError(
            message=f"{label} {offset} is outside [0, {length}]",
            offset=offset,
            length=length,
        )
    return offset


__all__ = [
    "ErrorCode",
    "TextContentError",
    "InvalidArgumentError",
    "OutOfRangeError",
    "check_offset",
]
