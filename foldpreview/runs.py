"""Per-column style assignment and run merging.

Spans are applied in the order given; a later span overwrites earlier ones
on every column it covers, so nested captures reported outer-first end up
with the innermost tag.
"""

from __future__ import annotations

from typing import Iterable

from .types import DEFAULT_TAG, HighlightSpan, StyleRun


def column_tags(
    line: str,
    spans: Iterable[HighlightSpan],
    default_tag: str = DEFAULT_TAG,
) -> list[str]:
    """Return one style tag per character column of ``line``.

    Spans are clamped to the line; empty, inverted, or fully out-of-range
    spans are ignored.
    """
    n = len(line)
    tags = [default_tag] * n
    for span in spans:
        start = max(0, span.start)
        end = min(n, span.end)
        if start >= end:
            continue
        tags[start:end] = [span.tag] * (end - start)
    return tags


def merge_runs(tags: list[str]) -> list[StyleRun]:
    """Collapse adjacent equal tags into maximal runs."""
    runs: list[StyleRun] = []
    if not tags:
        return runs

    run_start = 0
    current = tags[0]
    for idx in range(1, len(tags)):
        if tags[idx] != current:
            runs.append(StyleRun(run_start, idx, current))
            run_start = idx
            current = tags[idx]
    runs.append(StyleRun(run_start, len(tags), current))
    return runs


def build_style_runs(
    line: str,
    spans: Iterable[HighlightSpan],
    default_tag: str = DEFAULT_TAG,
) -> list[StyleRun]:
    """Return contiguous style runs covering every column of ``line`` once."""
    return merge_runs(column_tags(line, spans, default_tag))
