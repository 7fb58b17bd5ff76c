"""Batch exclusion engine.

Applies a sorted list of non-overlapping exclusions to a token stream in one
left-to-right pass. The result is the same as applying the exclusions one at a
time from the last to the first, which is what single-range operations on
:class:`~textcontent.content.text_content.TextContent` do.
"""

from __future__ import annotations

import logging
from bisect import bisect_right
from dataclasses import dataclass
from typing import Sequence

from ..core.errors import InvalidArgumentError, OutOfRangeError
from ..core.ranges import TextRange
from ..core.spans import Span
from .tokens import GapToken, TextToken, Token, hull, is_visible, normalize, source_span, visible_starts

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class Exclusion:
    """Content-local range to hide, or to hide and mark unknown."""

    start: int
    end: int
    mark_unknown: bool = False

    def __post_init__(self) -> None:
        if self.start < 0:
            raise OutOfRangeError(message=f"Exclusion start {self.start} is negative", offset=self.start)
        if self.end < self.start:
            raise InvalidArgumentError(
                message=f"Malformed exclusion [{self.start}, {self.end})",
                details={"start": self.start, "end": self.end},
            )

    @property
    def range(self) -> TextRange:
        return TextRange(self.start, self.end)

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    @classmethod
    def exclude(cls, value: object) -> Exclusion:
        """Return an exclusion removing ``value`` (anything :meth:`TextRange.from_value` accepts)."""

        text_range = TextRange.from_value(value)
        return cls(text_range.start, text_range.end, False)

    @classmethod
    def unknown(cls, value: object) -> Exclusion:
        """Return an exclusion replacing ``value`` with an unknown marker."""

        text_range = TextRange.from_value(value)
        return cls(text_range.start, text_range.end, True)


def validate_exclusions(exclusions: Sequence[Exclusion], length: int) -> None:
    """Raise unless ``exclusions`` are in bounds, sorted and pairwise non-overlapping."""

    previous: Exclusion | None = None
    for exclusion in exclusions:
        if exclusion.end > length:
            raise OutOfRangeError(
                message=f"Exclusion [{exclusion.start}, {exclusion.end}) exceeds content length {length}",
                offset=exclusion.end,
                length=length,
            )
        if previous is not None and exclusion.start < previous.end:
            raise InvalidArgumentError(
                message=f"Exclusions {previous.range!r} and {exclusion.range!r} overlap or are unsorted",
                details={"previous": previous.range.to_dict(), "current": exclusion.range.to_dict()},
            )
        previous = exclusion


def apply_exclusions(tokens: Sequence[Token], exclusions: Sequence[Exclusion]) -> tuple[Token, ...]:
    """Return the normalized token stream with every exclusion applied.

    ``exclusions`` must already be validated against the stream.
    """

    active = [item for item in exclusions if item.mark_unknown or not item.is_empty]
    if not active:
        return tuple(tokens)

    pieces = _split(tokens, sorted({offset for item in active for offset in (item.start, item.end)}))
    result: list[Token] = []
    index = 0
    for exclusion in active:
        if exclusion.is_empty:
            index = _copy_before(pieces, index, exclusion.start, result, keep_gaps_at_offset=False)
            result.append(GapToken(_marker_anchor(pieces, index), unknown=True))
            continue

        index = _copy_before(pieces, index, exclusion.start, result, keep_gaps_at_offset=True)
        marker_index = index
        removed: list[Token] = []
        while index < len(pieces) and pieces[index][0] < exclusion.end:
            removed.append(pieces[index][1])
            index += 1

        spans = [span for span in map(source_span, removed) if span is not None]
        unknown = exclusion.mark_unknown or any(isinstance(token, GapToken) and token.unknown for token in removed)
        if spans:
            result.append(GapToken(hull(spans), unknown))
        elif unknown:
            result.append(GapToken(_marker_anchor(pieces, marker_index), unknown=True))

    result.extend(token for _, token in pieces[index:])
    LOGGER.debug("Applied %d exclusions over %d tokens", len(active), len(tokens))
    return normalize(result)


def _split(tokens: Sequence[Token], cuts: list[int]) -> list[tuple[int, Token]]:
    """Split text tokens at every cut offset strictly inside them."""

    pieces: list[tuple[int, Token]] = []
    for start, token in zip(visible_starts(tokens), tokens):
        if not isinstance(token, TextToken):
            pieces.append((start, token))
            continue
        local = 0
        position = bisect_right(cuts, start)
        while position < len(cuts) and cuts[position] < start + token.length:
            cut = cuts[position] - start
            pieces.append((start + local, token.slice(local, cut)))
            local = cut
            position += 1
        pieces.append((start + local, token.slice(local, token.length) if local else token))
    return pieces


def _copy_before(
    pieces: list[tuple[int, Token]],
    index: int,
    offset: int,
    result: list[Token],
    *,
    keep_gaps_at_offset: bool,
) -> int:
    while index < len(pieces):
        start, token = pieces[index]
        if is_visible(token):
            if start >= offset:
                break
        elif start > offset or (start == offset and not keep_gaps_at_offset):
            break
        result.append(token)
        index += 1
    return index


def _marker_anchor(pieces: list[tuple[int, Token]], index: int) -> Span:
    """Return the empty source span for a marker inserted before ``pieces[index]``.

    The nearest source position on the left wins; only a marker at the very
    start of the content looks to the right.
    """

    for _, token in reversed(pieces[:index]):
        span = source_span(token)
        if span is not None:
            return span.point(span.end)
    for _, token in pieces[index:]:
        span = source_span(token)
        if span is not None:
            return span.point(span.start)
    raise InvalidArgumentError(message="Content has no source position to anchor a marker")  # pragma: no cover


__all__ = ["Exclusion", "apply_exclusions", "validate_exclusions"]
