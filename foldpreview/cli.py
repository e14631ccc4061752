"""Command-line front door for foldpreview.

Parses CLI options, reads the fold's first line, collects highlight spans,
and prints the rendered fold summary row.
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path

from . import config
from .fold_text import DEFAULT_FILLER, render_fold_line
from .highlights import HIGHLIGHTERS, highlight_spans
from .render import chunks_to_ansi
from .source import (
    hidden_line_count,
    read_source_line,
    read_text,
    sanitize_terminal_text,
    split_source_lines,
)
from .theme import available_theme_names, resolve_theme


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _nonnegative_int(value: str) -> int:
    """argparse type for widths, where ``0`` is allowed."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _default_render_width() -> int:
    """Resolve default fold-row width from current terminal size."""
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.columns)


def render_fold_preview(
    path: Path,
    start: int,
    end: int,
    width: int,
    *,
    highlighter: str = "auto",
    filler: str = DEFAULT_FILLER,
    suffix_format: str | None = None,
    no_color: bool = False,
    theme_name: str | None = None,
) -> str:
    """Render the summary row for the fold ``start``..``end`` (1-based) of ``path``."""
    source = sanitize_terminal_text(read_text(path))
    line = read_source_line(split_source_lines(source), start)
    spans = highlight_spans(source, path, start, highlighter) if line is not None else []
    chunks = render_fold_line(
        line,
        spans,
        hidden_line_count(start, end),
        width,
        fallback=f"{start}: <unavailable>",
        filler=filler,
        suffix_format=suffix_format or config.load_suffix_format(),
    )
    return chunks_to_ansi(chunks, resolve_theme(theme_name, no_color=no_color))


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and print one fold preview row."""
    parser = argparse.ArgumentParser(
        description="Print the summary row of a folded source region with syntax highlighting."
    )
    parser.add_argument("path", help="Source file.")
    parser.add_argument("start", type=_positive_int, help="First line of the fold (1-based).")
    parser.add_argument("end", type=_positive_int, help="Last line of the fold (1-based).")
    parser.add_argument(
        "--width",
        type=_nonnegative_int,
        default=None,
        help="Row width in columns (default: terminal width).",
    )
    parser.add_argument(
        "--highlighter",
        choices=HIGHLIGHTERS,
        default=None,
        help="Highlight provider (default: config or auto).",
    )
    parser.add_argument("--filler", default=None, help="Single-column padding glyph.")
    parser.add_argument(
        "--suffix-format",
        default=None,
        help="Suffix template containing {count} (default: ' ... {count} lines ...').",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"Theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--save",
        action="store_true",
        help="Remember --highlighter, --filler, --suffix-format and --theme as defaults.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log highlighter decisions to stderr.")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    path = Path(args.path)
    if not path.is_file():
        raise SystemExit(f"Path not found: {path}")
    if args.end < args.start:
        raise SystemExit(f"Fold end {args.end} is before start {args.start}.")

    filler = args.filler if args.filler is not None else config.load_filler()
    if not config.is_valid_filler(filler):
        raise SystemExit(f"Filler must be one single-column character: {filler!r}")
    suffix_format = args.suffix_format if args.suffix_format is not None else config.load_suffix_format()
    if not config.is_valid_suffix_format(suffix_format):
        raise SystemExit(f"Suffix format must be printable and contain {{count}}: {suffix_format!r}")

    if args.save:
        if args.highlighter is not None:
            config.save_highlighter(args.highlighter)
        if args.filler is not None:
            config.save_filler(filler)
        if args.suffix_format is not None:
            config.save_suffix_format(suffix_format)
        if args.theme is not None:
            config.save_theme_name(args.theme)

    row = render_fold_preview(
        path,
        args.start,
        args.end,
        args.width if args.width is not None else _default_render_width(),
        highlighter=args.highlighter or config.load_highlighter(),
        filler=filler,
        suffix_format=suffix_format,
        no_color=args.no_color,
        theme_name=args.theme or config.load_theme_name(),
    )
    sys.stdout.write(row + "\n")
