"""Analysable text views over source documents.

A :class:`TextContent` shows some spans of a source, hides others and marks
positions whose text is unknown, while every visible offset can still be
translated back into the document it came from.
"""

from .content.builder import TextContentBuilder
from .content.exclusions import Exclusion
from .content.text_content import TextContent, TextDomain
from .core.errors import InvalidArgumentError, OutOfRangeError, TextContentError
from .core.ranges import TextRange
from .core.spans import Source, SourceProvider, SourceRegistry, Span

__all__ = [
    "Exclusion",
    "InvalidArgumentError",
    "OutOfRangeError",
    "Source",
    "SourceProvider",
    "SourceRegistry",
    "Span",
    "TextContent",
    "TextContentBuilder",
    "TextContentError",
    "TextDomain",
    "TextRange",
]
