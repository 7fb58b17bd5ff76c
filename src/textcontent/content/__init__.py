"""Text content views, their token stream and the exclusion engine."""

from .builder import TextContentBuilder
from .exclusions import Exclusion, apply_exclusions, validate_exclusions
from .text_content import TextContent, TextDomain
from .tokens import GapToken, TextToken, Token, WhitespaceToken

__all__ = [
    "TextContentBuilder",
    "Exclusion",
    "apply_exclusions",
    "validate_exclusions",
    "TextContent",
    "TextDomain",
    "GapToken",
    "TextToken",
    "Token",
    "WhitespaceToken",
]
