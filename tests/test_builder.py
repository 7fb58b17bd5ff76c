"""Tests for pattern driven content construction."""

from __future__ import annotations

import re

import pytest

from textcontent.content.builder import TextContentBuilder
from textcontent.content.text_content import TextDomain
from textcontent.core.errors import InvalidArgumentError
from textcontent.core.ranges import TextRange
from textcontent.core.spans import Source, Span


DOC_COMMENT = "/**\n * Returns the {@link Foo} value.  \n * Never null.\n */"


def test_builder_without_rules_shows_the_whole_span():
    source = Source("a.txt", "plain text")

    content = TextContentBuilder().build(source)

    assert str(content) == "plain text"
    assert content.domain is TextDomain.PLAIN_TEXT


def test_configuration_returns_new_builders():
    base = TextContentBuilder()
    configured = base.excluding(r"\d+")

    assert base.excluded == ()
    assert len(configured.excluded) == 1
    assert configured.with_unknown(re.compile("x")).excluded == configured.excluded


def test_builder_strips_indents_suffixes_and_marks_inline_tags():
    source = Source("Foo.java", DOC_COMMENT)
    span = Span("Foo.java", 3, len(DOC_COMMENT) - 3)
    builder = (
        TextContentBuilder()
        .removing_indents(" *")
        .removing_line_suffixes(" ")
        .with_unknown(r"\{@\w+[^}]*\}")
    )

    content = builder.build(source, span, TextDomain.DOCUMENTATION)

    assert str(content) == "\nReturns the  value.\nNever null.\n"
    assert content.unknown_offsets() == (13,)
    assert content.domain is TextDomain.DOCUMENTATION
    assert content.text_offset_to_file(1, lean_forward=True) == DOC_COMMENT.index("Returns")


def test_overlapping_matches_merge_and_unknown_wins():
    source = Source("a.txt", "keep DROP-ME keep")
    builder = TextContentBuilder().excluding("DROP-ME").with_unknown("ME keep")

    content = builder.build(source)

    assert str(content) == "keep "
    assert content.render_unknown_markers() == "keep |"


def test_touching_matches_stay_separate():
    source = Source("a.txt", "abcd")
    builder = TextContentBuilder().excluding("ab").with_unknown("cd")

    content = builder.build(source)

    assert str(content) == ""
    assert content.unknown_offsets() == (0,)
    assert content.text_range_to_file((0, 0)) == TextRange(0, 0)


def test_empty_matches_are_ignored():
    source = Source("a.txt", "abc")

    content = TextContentBuilder().excluding("x*").build(source)

    assert str(content) == "abc"


def test_invalid_pattern_is_reported():
    with pytest.raises(InvalidArgumentError):
        TextContentBuilder().excluding("(")
