"""Pattern driven construction of :class:`TextContent` instances."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from re import Pattern

from ..core.errors import InvalidArgumentError
from ..core.spans import SourceProvider, Span
from .exclusions import Exclusion
from .text_content import TextContent, TextDomain

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class TextContentBuilder:
    """Immutable recipe describing which parts of a span to hide.

    Every configuration method returns a new builder, so partially configured
    builders can be shared and extended freely::

        builder = TextContentBuilder().removing_indents(" *").with_unknown(r"\\{@\\w+[^}]*\\}")
        content = builder.build(source, span, TextDomain.DOCUMENTATION)
    """

    excluded: tuple[Pattern[str], ...] = ()
    unknown: tuple[Pattern[str], ...] = ()
    indent_chars: str = ""
    line_suffix_chars: str = ""

    def excluding(self, pattern: str | Pattern[str]) -> TextContentBuilder:
        """Hide every match of ``pattern``."""

        return replace(self, excluded=self.excluded + (_compile(pattern),))

    def with_unknown(self, pattern: str | Pattern[str]) -> TextContentBuilder:
        """Replace every match of ``pattern`` with an unknown marker."""

        return replace(self, unknown=self.unknown + (_compile(pattern),))

    def removing_indents(self, chars: str) -> TextContentBuilder:
        """Hide runs of ``chars`` at the start of every line."""

        return replace(self, indent_chars=self.indent_chars + chars)

    def removing_line_suffixes(self, chars: str) -> TextContentBuilder:
        """Hide runs of ``chars`` right before every line break."""

        return replace(self, line_suffix_chars=self.line_suffix_chars + chars)

    def build(
        self,
        source: SourceProvider,
        span: Span | None = None,
        domain: TextDomain = TextDomain.PLAIN_TEXT,
    ) -> TextContent:
        """Read ``span`` from ``source`` and apply the configured exclusions.

        ``span`` defaults to the whole of ``source`` when it exposes a
        ``span()`` factory, as :class:`~textcontent.core.spans.Source` does.
        """

        if span is None:
            factory = getattr(source, "span", None)
            if not callable(factory):
                raise InvalidArgumentError(message="A span is required for this source provider")
            span = factory()
        content = TextContent.from_span(source, span, domain)
        text = str(content)
        ranges = self._collect(text)
        if not ranges:
            return content
        exclusions = _merge(ranges)
        LOGGER.debug("Builder produced %d exclusions for %s", len(exclusions), span)
        return content.exclude_ranges(exclusions)

    def _collect(self, text: str) -> list[Exclusion]:
        found: list[Exclusion] = []
        for patterns, unknown in ((self.excluded, False), (self.unknown, True)):
            for pattern in patterns:
                for match in pattern.finditer(text):
                    if match.end() > match.start():
                        found.append(Exclusion(match.start(), match.end(), unknown))
        if self.indent_chars:
            found.extend(_indent_runs(text, self.indent_chars))
        if self.line_suffix_chars:
            found.extend(_suffix_runs(text, self.line_suffix_chars))
        return found


def _compile(pattern: str | Pattern[str]) -> Pattern[str]:
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise InvalidArgumentError(
            message=f"Invalid pattern {pattern!r}: {exc}",
            details={"pattern": pattern},
        ) from exc


def _indent_runs(text: str, chars: str) -> list[Exclusion]:
    runs: list[Exclusion] = []
    line_start = 0
    while line_start <= len(text):
        cursor = line_start
        while cursor < len(text) and text[cursor] in chars and text[cursor] != "\n":
            cursor += 1
        if cursor > line_start:
            runs.append(Exclusion(line_start, cursor))
        newline = text.find("\n", line_start)
        if newline < 0:
            break
        line_start = newline + 1
    return runs


def _suffix_runs(text: str, chars: str) -> list[Exclusion]:
    runs: list[Exclusion] = []
    line_ends = [index for index, char in enumerate(text) if char == "\n"]
    line_ends.append(len(text))
    for line_end in line_ends:
        cursor = line_end
        while cursor > 0 and text[cursor - 1] in chars and text[cursor - 1] != "\n":
            cursor -= 1
        if cursor < line_end:
            runs.append(Exclusion(cursor, line_end))
    return runs


def _merge(ranges: list[Exclusion]) -> list[Exclusion]:
    """Sort ``ranges`` and fuse the overlapping ones; touching ranges stay apart."""

    ordered = sorted(ranges, key=lambda item: (item.start, item.end))
    merged: list[Exclusion] = [ordered[0]]
    for item in ordered[1:]:
        last = merged[-1]
        if item.start < last.end:
            merged[-1] = Exclusion(last.start, max(last.end, item.end), last.mark_unknown or item.mark_unknown)
        else:
            merged.append(item)
    return merged


__all__ = ["TextContentBuilder"]
