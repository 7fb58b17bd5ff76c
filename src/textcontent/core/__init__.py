"""Core value types shared by the content layer.

Ranges, source spans and the error hierarchy live here so the content
package never has to reach into anything heavier.
"""

from .errors import ErrorCode, InvalidArgumentError, OutOfRangeError, TextContentError
from .ranges import TextRange
from .spans import Source, SourceProvider, SourceRegistry, Span, read_checked

__all__ = [
    "ErrorCode",
    "InvalidArgumentError",
    "OutOfRangeError",
    "TextContentError",
    "TextRange",
    "Source",
    "SourceProvider",
    "SourceRegistry",
    "Span",
    "read_checked",
]
