"""Source documents and the spans that reference them."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Protocol, runtime_checkable

from ..utils import file_io
from .errors import InvalidArgumentError, OutOfRangeError
from .ranges import TextRange

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class Span:
    """Contiguous slice ``[start, end)`` of the source identified by ``source_id``."""

    source_id: str
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise OutOfRangeError(message=f"Span start {self.start} is negative", offset=self.start)
        if self.end < self.start:
            raise InvalidArgumentError(
                message=f"Malformed span [{self.start}, {self.end}) in {self.source_id!r}",
                details={"source_id": self.source_id, "start": self.start, "end": self.end},
            )

    def __repr__(self) -> str:
        return f"Span({self.source_id!r}, {self.start}, {self.end})"

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    @property
    def range(self) -> TextRange:
        """Return the source range covered by the span."""

        return TextRange(self.start, self.end)

    def slice(self, start: int, end: int) -> Span:
        """Return the sub-span between span-local offsets ``start`` and ``end``."""

        if start < 0 or end > self.length or end < start:
            raise InvalidArgumentError(
                message=f"Cannot slice [{start}, {end}) from a span of length {self.length}",
            )
        return Span(self.source_id, self.start + start, self.start + end)

    def point(self, offset: int) -> Span:
        """Return the empty span positioned at source ``offset``."""

        return Span(self.source_id, offset, offset)

    def is_adjacent_to(self, other: Span) -> bool:
        """Return ``True`` when ``other`` continues this span without a hole."""

        return self.source_id == other.source_id and self.end == other.start


@runtime_checkable
class SourceProvider(Protocol):
    """Read-only access to the characters of one or more source documents."""

    def source_length(self, source_id: str) -> int:  # pragma: no cover - Protocol placeholder
        """Return the number of characters in ``source_id``."""

    def read_span(self, source_id: str, start: int, end: int) -> str:  # pragma: no cover - Protocol placeholder
        """Return the characters of ``source_id`` between ``start`` and ``end``."""


def read_checked(provider: SourceProvider, span: Span) -> str:
    """Validate ``span`` against the provider's bounds and read its characters."""

    length = provider.source_length(span.source_id)
    if span.end > length:
        raise OutOfRangeError(
            message=f"Span [{span.start}, {span.end}) exceeds source {span.source_id!r} of length {length}",
            offset=span.end,
            length=length,
        )
    return provider.read_span(span.source_id, span.start, span.end)


@dataclass(slots=True, frozen=True)
class Source:
    """In-memory document that acts as its own :class:`SourceProvider`."""

    source_id: str
    text: str

    def __len__(self) -> int:
        return len(self.text)

    def source_length(self, source_id: str) -> int:
        self._check_id(source_id)
        return len(self.text)

    def read_span(self, source_id: str, start: int, end: int) -> str:
        self._check_id(source_id)
        return self.text[start:end]

    def span(self, start: int = 0, end: int | None = None) -> Span:
        """Return a span over this source; ``end`` defaults to the document end."""

        stop = len(self.text) if end is None else end
        if stop > len(self.text):
            raise OutOfRangeError(
                message=f"Span end {stop} exceeds source {self.source_id!r}",
                offset=stop,
                length=len(self.text),
            )
        return Span(self.source_id, start, stop)

    @classmethod
    def from_path(cls, path: Path | str, *, source_id: str | None = None) -> Source:
        """Load a source from disk with encoding detection and newline normalization."""

        target = Path(path)
        text = file_io.read_text(target)
        LOGGER.debug("Loaded source %s (%d chars)", target, len(text))
        return cls(source_id=source_id or str(target), text=text)

    def _check_id(self, source_id: str) -> None:
        if source_id != self.source_id:
            raise InvalidArgumentError(
                message=f"Source {self.source_id!r} cannot serve {source_id!r}",
                details={"source_id": source_id},
            )


@dataclass(slots=True)
class SourceRegistry:
    """Multi-document :class:`SourceProvider` keyed by source id."""

    _sources: dict[str, Source] = field(default_factory=dict)

    def add(self, source: Source) -> Source:
        self._sources[source.source_id] = source
        return source

    def get(self, source_id: str) -> Source:
        try:
            return self._sources[source_id]
        except KeyError as exc:
            raise InvalidArgumentError(
                message=f"Unknown source {source_id!r}",
                details={"source_id": source_id},
            ) from exc

    def __contains__(self, source_id: object) -> bool:
        return source_id in self._sources

    def __iter__(self) -> Iterator[Source]:
        return iter(self._sources.values())

    def __len__(self) -> int:
        return len(self._sources)

    def source_length(self, source_id: str) -> int:
        return len(self.get(source_id).text)

    def read_span(self, source_id: str, start: int, end: int) -> str:
        return self.get(source_id).text[start:end]


__all__ = ["Span", "SourceProvider", "Source", "SourceRegistry", "read_checked"]
