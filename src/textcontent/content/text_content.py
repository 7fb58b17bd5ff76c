"""Immutable analysable view over spans of a source document."""

from __future__ import annotations

import logging
from bisect import bisect_left
from enum import Enum
from typing import Iterable, Iterator, Sequence

from ..core.errors import InvalidArgumentError, check_offset
from ..core.ranges import TextRange
from ..core.spans import Source, SourceProvider, Span, read_checked
from .exclusions import Exclusion, apply_exclusions, validate_exclusions
from .tokens import (
    GapToken,
    TextToken,
    Token,
    WhitespaceToken,
    normalize,
    source_span,
    token_text,
    visible_starts,
)

LOGGER = logging.getLogger(__name__)


class TextDomain(Enum):
    """Kind of text a content was extracted from."""

    COMMENTS = "comments"
    DOCUMENTATION = "documentation"
    LITERALS = "literals"
    PLAIN_TEXT = "plain_text"


class TextContent:
    """Derived view over one source, tracking hidden and unknown fragments.

    Instances are immutable: every transformation returns a new content and
    shares the unchanged token objects with its receiver. Visible offsets are
    offsets into ``str(content)``; source offsets are offsets into the backing
    document.
    """

    __slots__ = ("_domain", "_tokens", "_text", "_starts", "_unknown", "_source_id")

    def __init__(self, domain: TextDomain, tokens: Iterable[Token]) -> None:
        items = list(tokens)
        source_ids = {span.source_id for span in map(source_span, items) if span is not None}
        if len(source_ids) != 1:
            raise InvalidArgumentError(
                message="A text content must be backed by exactly one source",
                details={"sources": sorted(source_ids)},
            )
        self._domain = domain
        self._source_id = source_ids.pop()
        self._tokens = normalize(items)
        self._text = "".join(token_text(token) for token in self._tokens)
        self._starts = visible_starts(self._tokens)
        self._unknown = tuple(
            start
            for start, token in zip(self._starts, self._tokens)
            if isinstance(token, GapToken) and token.unknown
        )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def from_span(
        cls,
        source: SourceProvider,
        span: Span,
        domain: TextDomain = TextDomain.PLAIN_TEXT,
    ) -> TextContent:
        """Return a content showing exactly the characters of ``span``."""

        text = read_checked(source, span)
        if not text:
            return cls(domain, [GapToken(span)])
        return cls(domain, [TextToken(span, text)])

    @classmethod
    def from_source(cls, source: Source, domain: TextDomain = TextDomain.PLAIN_TEXT) -> TextContent:
        """Return a content covering the whole of ``source``."""

        return cls.from_span(source, source.span(), domain)

    @classmethod
    def join(cls, contents: Iterable[TextContent]) -> TextContent:
        """Concatenate ``contents`` without any separator."""

        items = list(contents)
        if not items:
            raise InvalidArgumentError(message="Cannot join an empty list of contents")
        if len(items) == 1:
            return items[0]
        domain = _common_domain(items)
        return cls(domain, [token for content in items for token in content._tokens])

    @classmethod
    def join_with_whitespace(
        cls,
        contents: Iterable[TextContent],
        whitespace: str = " ",
    ) -> TextContent | None:
        """Concatenate ``contents``, separating neighbours with ``whitespace``.

        No separator is added where the text on either side of a boundary is
        already whitespace or empty. Returns ``None`` when there is nothing to
        join.
        """

        items = list(contents)
        if not items:
            return None
        if len(items) == 1:
            return items[0]
        domain = _common_domain(items)
        separator = WhitespaceToken(whitespace)
        tokens: list[Token] = []
        previous_tail = ""
        inserted = 0
        for content in items:
            text = content._text
            if previous_tail and text and not previous_tail.isspace() and not text[0].isspace():
                tokens.append(separator)
                inserted += 1
            tokens.extend(content._tokens)
            if text:
                previous_tail = text[-1]
        LOGGER.debug("Joined %d contents with %d inferred separators", len(items), inserted)
        return cls(domain, tokens)

    # ------------------------------------------------------------------
    # Value protocol
    # ------------------------------------------------------------------
    @property
    def domain(self) -> TextDomain:
        return self._domain

    @property
    def source_id(self) -> str:
        return self._source_id

    @property
    def tokens(self) -> tuple[Token, ...]:
        """Return the canonical token stream."""

        return self._tokens

    @property
    def length(self) -> int:
        return len(self._text)

    @property
    def is_empty(self) -> bool:
        return not self._text

    def __len__(self) -> int:
        return len(self._text)

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"TextContent({self._domain.name}, {self._text!r})"

    def __getitem__(self, index: int | slice) -> str:
        return self._text[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self._text)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TextContent):
            return NotImplemented
        return self._domain is other._domain and self._tokens == other._tokens

    def __hash__(self) -> int:
        return hash((self._domain, self._tokens))

    # ------------------------------------------------------------------
    # Transformations
    # ------------------------------------------------------------------
    def exclude_range(self, text_range: TextRange | Sequence[int]) -> TextContent:
        """Return a copy with the visible characters of ``text_range`` removed."""

        return self.exclude_ranges([Exclusion.exclude(text_range)])

    def mark_unknown(self, text_range: TextRange | Sequence[int]) -> TextContent:
        """Return a copy with ``text_range`` replaced by an unknown marker."""

        return self.exclude_ranges([Exclusion.unknown(text_range)])

    def exclude_ranges(self, exclusions: Sequence[Exclusion]) -> TextContent:
        """Apply sorted, non-overlapping ``exclusions`` in a single pass."""

        items = list(exclusions)
        validate_exclusions(items, len(self._text))
        tokens = apply_exclusions(self._tokens, items)
        if tokens == self._tokens:
            return self
        return TextContent(self._domain, tokens)

    def trim_whitespace(self) -> TextContent:
        """Return a copy without leading and trailing whitespace."""

        length = len(self._text)
        stripped = self._text.strip()
        if not stripped:
            return self.exclude_range(TextRange(0, length))
        leading = length - len(self._text.lstrip())
        trailing = length - len(self._text.rstrip())
        return self.exclude_ranges(
            [Exclusion(0, leading), Exclusion(length - trailing, length)]
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def unknown_offsets(self) -> tuple[int, ...]:
        """Return the sorted visible offsets carrying an unknown marker."""

        return self._unknown

    def has_unknown_fragments_in(self, text_range: TextRange | Sequence[int]) -> bool:
        """Return ``True`` if an unknown marker lies in ``text_range``, ends included."""

        target = self._checked_range(text_range)
        position = bisect_left(self._unknown, target.start)
        return position < len(self._unknown) and self._unknown[position] <= target.end

    def intersects_range(self, file_range: TextRange | Sequence[int]) -> bool:
        """Return ``True`` if the source range shares a character with any visible text."""

        target = TextRange.from_value(file_range)
        return any(
            isinstance(token, TextToken) and token.span.range.intersects_strict(target)
            for token in self._tokens
        )

    def ranges_in_file(self) -> list[TextRange]:
        """Return the source ranges of the visible text, in content order."""

        return [token.span.range for token in self._tokens if isinstance(token, TextToken)]

    def text_offset_to_file(self, offset: int, lean_forward: bool = False) -> int:
        """Translate a visible offset into a source offset.

        When ``offset`` sits next to hidden material, ``lean_forward`` selects
        the source position after it instead of the one before it.
        """

        check_offset(offset, len(self._text))
        tokens, starts = self._tokens, self._starts
        index = bisect_left(starts, offset)
        left: Token | None = None
        if index > 0:
            left = tokens[index - 1]
            if isinstance(left, TextToken) and starts[index - 1] + left.length > offset:
                return left.span.start + offset - starts[index - 1]

        gaps: list[GapToken] = []
        while index < len(tokens) and tokens[index].length == 0:
            token = tokens[index]
            if isinstance(token, GapToken):
                gaps.append(token)
            index += 1
        right = tokens[index] if index < len(tokens) else None

        before: int | None = None
        if isinstance(left, TextToken):
            before = left.span.end
        elif gaps:
            before = gaps[0].anchor.start
        after: int | None = None
        if isinstance(right, TextToken):
            after = right.span.start
        elif gaps:
            after = gaps[-1].anchor.end

        first, second = (after, before) if lean_forward else (before, after)
        if first is not None:
            return first
        if second is not None:
            return second
        return self._nearest_source_offset(index)

    def text_range_to_file(self, text_range: TextRange | Sequence[int]) -> TextRange:
        """Translate a visible range into the source range it covers."""

        target = self._checked_range(text_range)
        if target.is_caret:
            offset = self.text_offset_to_file(target.start)
            return TextRange(offset, offset)
        start = self.text_offset_to_file(target.start, lean_forward=True)
        end = self.text_offset_to_file(target.end)
        return TextRange(min(start, end), max(start, end))

    def file_offset_to_text(self, offset: int) -> int | None:
        """Return the visible offset showing source ``offset``, if it is visible."""

        for start, token in zip(self._starts, self._tokens):
            if isinstance(token, TextToken) and token.span.start <= offset <= token.span.end:
                return start + offset - token.span.start
        return None

    def file_range_to_text(self, file_range: TextRange | Sequence[int]) -> TextRange | None:
        """Translate a source range into visible offsets, or ``None`` if it is hidden."""

        target = TextRange.from_value(file_range)
        start = self.file_offset_to_text(target.start)
        end = self.file_offset_to_text(target.end)
        if start is None or end is None or end < start:
            return None
        return TextRange(start, end)

    def render_unknown_markers(self, marker: str = "|") -> str:
        """Return the visible text with ``marker`` inserted at every unknown offset."""

        parts: list[str] = []
        cursor = 0
        for offset in self._unknown:
            parts.append(self._text[cursor:offset])
            parts.append(marker)
            cursor = offset
        parts.append(self._text[cursor:])
        return "".join(parts)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _checked_range(self, text_range: TextRange | Sequence[int]) -> TextRange:
        target = TextRange.from_value(text_range)
        check_offset(target.end, len(self._text), label="range end")
        return target

    def _nearest_source_offset(self, index: int) -> int:
        # Only synthetic separators touch this boundary; fall back to the
        # closest source position, preferring the left side.
        for token in reversed(self._tokens[:index]):
            span = source_span(token)
            if span is not None:
                return span.end
        for token in self._tokens[index:]:
            span = source_span(token)
            if span is not None:
                return span.start
        raise InvalidArgumentError(message="Content has no source position")  # pragma: no cover


def _common_domain(contents: Sequence[TextContent]) -> TextDomain:
    domains = {content.domain for content in contents}
    if len(domains) != 1:
        raise InvalidArgumentError(
            message="Cannot join contents from different text domains",
            details={"domains": sorted(domain.value for domain in domains)},
        )
    return domains.pop()


__all__ = ["TextContent", "TextDomain"]
