"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from textcontent.content.text_content import TextContent
from textcontent.core.spans import Source


@pytest.fixture
def abc_source() -> Source:
    return Source("doc.txt", "aaabbbccc")


@pytest.fixture
def abc_content(abc_source: Source) -> TextContent:
    return TextContent.from_source(abc_source)


@pytest.fixture
def fragments(abc_source: Source) -> list[TextContent]:
    """Three separately built contents over ``aaa``, ``bbb`` and ``ccc``."""

    return [TextContent.from_span(abc_source, abc_source.span(start, start + 3)) for start in (0, 3, 6)]
