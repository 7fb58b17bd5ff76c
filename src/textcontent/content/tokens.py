"""Token stream backing a :class:`~textcontent.content.text_content.TextContent`.

A content is an ordered tuple of tokens. Three kinds exist and every consumer
dispatches over all of them:

``TextToken``
    Addressable characters read from a source span.
``GapToken``
    Zero visible characters. ``anchor`` is the source range skipped at that
    position so offsets on either side of it still translate; ``unknown``
    flags the position as opaque to analysis.
``WhitespaceToken``
    A single synthetic separator character with no backing source; dormant
    while only hidden material precedes it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Union

from ..core.errors import InvalidArgumentError
from ..core.spans import Span


@dataclass(slots=True, frozen=True)
class TextToken:
    """Visible characters backed by ``span``."""

    span: Span
    text: str

    def __post_init__(self) -> None:
        if len(self.text) != self.span.length:
            raise InvalidArgumentError(
                message=f"Token text of length {len(self.text)} does not fit {self.span!r}",
            )

    def __repr__(self) -> str:
        return f"TextToken({self.span!r}, {self.text!r})"

    @property
    def length(self) -> int:
        return len(self.text)

    def slice(self, start: int, end: int) -> TextToken:
        """Return the part of the token between token-local ``start`` and ``end``."""

        return TextToken(self.span.slice(start, end), self.text[start:end])


@dataclass(slots=True, frozen=True)
class GapToken:
    """Hidden source material occupying no visible width."""

    anchor: Span
    unknown: bool = False

    def __repr__(self) -> str:
        flag = ", unknown" if self.unknown else ""
        return f"GapToken({self.anchor!r}{flag})"

    @property
    def length(self) -> int:
        return 0

    @property
    def source_length(self) -> int:
        return self.anchor.length


@dataclass(slots=True, frozen=True)
class WhitespaceToken:
    """Synthetic separator inserted between joined contents.

    A separator is only shown after some text or unknown marker. With nothing
    but hidden material before it, it stays in the stream as a dormant,
    zero-width token so a marker inserted in front of it later revives it.
    """

    char: str = " "
    active: bool = True

    def __post_init__(self) -> None:
        if len(self.char) != 1 or not self.char.isspace():
            raise InvalidArgumentError(message=f"Separator must be one whitespace character, got {self.char!r}")

    @property
    def length(self) -> int:
        return 1 if self.active else 0


Token = Union[TextToken, GapToken, WhitespaceToken]


def token_text(token: Token) -> str:
    """Return the visible characters contributed by ``token``."""

    if isinstance(token, TextToken):
        return token.text
    if isinstance(token, WhitespaceToken):
        return token.char if token.active else ""
    if isinstance(token, GapToken):
        return ""
    raise TypeError(f"Unsupported token: {token!r}")


def is_visible(token: Token) -> bool:
    return token.length > 0


def source_span(token: Token) -> Span | None:
    """Return the source material behind ``token``, or ``None`` for synthetic tokens."""

    if isinstance(token, TextToken):
        return token.span
    if isinstance(token, GapToken):
        return token.anchor
    return None


def visible_starts(tokens: Sequence[Token]) -> list[int]:
    """Return the visible offset at which each token starts."""

    starts: list[int] = []
    offset = 0
    for token in tokens:
        starts.append(offset)
        offset += token.length
    return starts


def hull(spans: Iterable[Span]) -> Span:
    """Return the smallest span covering every span in ``spans``."""

    items = list(spans)
    if not items:
        raise InvalidArgumentError(message="Cannot compute the hull of no spans")
    first = items[0]
    return Span(first.source_id, min(span.start for span in items), max(span.end for span in items))


def normalize(tokens: Iterable[Token]) -> tuple[Token, ...]:
    """Return the canonical form of ``tokens``.

    Empty text tokens are dropped, known zero-width gaps are dropped while
    another token still anchors the content in its source, neighbouring gaps
    collapse into one, text tokens over contiguous spans are fused and every
    separator is re-evaluated as active or dormant.
    """

    items = [token for token in tokens if not (isinstance(token, TextToken) and not token.text)]
    anchored = [token for token in items if not _is_idle_gap(token)]
    if not any(source_span(token) is not None for token in anchored):
        idle = next((token for token in items if _is_idle_gap(token)), None)
        if idle is not None:
            anchored.insert(0, idle)

    merged: list[Token] = []
    run: list[TextToken] = []
    shown = False
    for token in anchored:
        if isinstance(token, TextToken):
            if run and not run[-1].span.is_adjacent_to(token.span):
                merged.append(_fuse(run))
                run = []
            run.append(token)
            shown = True
            continue
        if run:
            merged.append(_fuse(run))
            run = []
        if isinstance(token, WhitespaceToken):
            if token.active != shown:
                token = WhitespaceToken(token.char, active=shown)
            merged.append(token)
            continue
        shown = shown or token.unknown
        previous = merged[-1] if merged else None
        if isinstance(previous, GapToken):
            merged[-1] = GapToken(hull((previous.anchor, token.anchor)), previous.unknown or token.unknown)
        else:
            merged.append(token)
    if run:
        merged.append(_fuse(run))
    return tuple(merged)


def _is_idle_gap(token: Token) -> bool:
    return isinstance(token, GapToken) and not token.unknown and token.anchor.is_empty


def _fuse(run: list[TextToken]) -> TextToken:
    if len(run) == 1:
        return run[0]
    first, last = run[0], run[-1]
    return TextToken(Span(first.span.source_id, first.span.start, last.span.end), "".join(t.text for t in run))


__all__ = [
    "TextToken",
    "GapToken",
    "WhitespaceToken",
    "Token",
    "token_text",
    "is_visible",
    "source_span",
    "visible_starts",
    "hull",
    "normalize",
]
