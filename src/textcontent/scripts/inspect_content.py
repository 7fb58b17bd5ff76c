"""CLI helper to inspect how a text content renders after exclusions."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from ..content.builder import TextContentBuilder
from ..content.text_content import TextContent
from ..core.errors import TextContentError
from ..core.spans import Source
from ..utils.logging import setup_logging


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Render a text content with its unknown fragments marked.")
    parser.add_argument(
        "--file",
        type=Path,
        help="Optional file to load. Reads stdin when omitted and --text not provided.",
    )
    parser.add_argument("--text", help="Inline text to inspect. Overrides --file when provided.")
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="REGEX",
        help="Hide every match of REGEX. May be repeated.",
    )
    parser.add_argument(
        "--unknown",
        action="append",
        default=[],
        metavar="REGEX",
        help="Replace every match of REGEX with an unknown marker. May be repeated.",
    )
    parser.add_argument("--indent-chars", default="", help="Characters to strip from the start of every line.")
    parser.add_argument("--marker", default="|", help="String printed at unknown positions.")
    parser.add_argument(
        "--offsets",
        action="store_true",
        help="Print the visible-to-source offset map after the rendered text.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log debug output to the console.")
    args = parser.parse_args(argv)

    if args.verbose:
        setup_logging(logging.DEBUG)

    source = _load_source(args.text, args.file)
    if source is None or not source.text:
        print("No input text provided.", file=sys.stderr)
        return 1

    try:
        builder = _build_builder(args.exclude, args.unknown, args.indent_chars)
        content = builder.build(source)
    except TextContentError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print(content.render_unknown_markers(args.marker))
    if args.offsets:
        for line in _offset_map(content):
            print(line)
    return 0


def _load_source(inline: str | None, path: Path | None) -> Source | None:
    if inline:
        return Source("<text>", inline)
    if path:
        return Source.from_path(path)
    data = sys.stdin.read()
    if not data:
        return None
    return Source("<stdin>", data)


def _build_builder(excluded: Sequence[str], unknown: Sequence[str], indent_chars: str) -> TextContentBuilder:
    builder = TextContentBuilder()
    for pattern in excluded:
        builder = builder.excluding(pattern)
    for pattern in unknown:
        builder = builder.with_unknown(pattern)
    if indent_chars:
        builder = builder.removing_indents(indent_chars)
    return builder


def _offset_map(content: TextContent) -> list[str]:
    lines = [f"length: {len(content)}", f"unknown: {list(content.unknown_offsets())}"]
    for offset in range(len(content) + 1):
        back = content.text_offset_to_file(offset)
        forward = content.text_offset_to_file(offset, lean_forward=True)
        shown = repr(content[offset]) if offset < len(content) else "<end>"
        lines.append(f"{offset:>5} {shown:<6} -> {back}" + (f" / {forward}" if forward != back else ""))
    return lines


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
