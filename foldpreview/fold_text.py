"""Width-bounded, highlight-preserving summary line for a folded region.

The fold's first source line is split into style runs, fitted into the
columns left over after reserving the informational suffix, and followed by
the suffix and a filler pad up to the requested width.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from .runs import build_style_runs
from .types import DEFAULT_TAG, SUFFIX_TAG, Chunk, HighlightSpan, StyleRun
from .width import display_width, truncate_to_width

DEFAULT_SUFFIX_FORMAT = " ... {count} lines ..."
DEFAULT_FILLER = "."


def fold_suffix(line_count_hidden: int, suffix_format: str = DEFAULT_SUFFIX_FORMAT) -> str:
    """Return the informational suffix with the hidden line count embedded."""
    return suffix_format.format(count=line_count_hidden)


def _merge_adjacent(chunks: Iterable[Chunk]) -> list[Chunk]:
    """Drop empty chunks and join neighbours that share a tag."""
    merged: list[Chunk] = []
    for chunk in chunks:
        if not chunk.text:
            continue
        if merged and merged[-1].tag == chunk.tag:
            merged[-1] = Chunk(merged[-1].text + chunk.text, chunk.tag)
        else:
            merged.append(chunk)
    return merged


def _fit_runs(line: str, runs: Sequence[StyleRun], target_width: int) -> tuple[list[Chunk], int]:
    """Emit whole runs while they fit, then a truncated final run.

    Returns ``(chunks, used_width)``. Widths are measured at the run's real
    starting column so tab stops match what the terminal draws.
    """
    chunks: list[Chunk] = []
    used = 0
    if target_width <= 0:
        return chunks, used

    for run in runs:
        text = line[run.start : run.end]
        run_width = display_width(text, used)
        if used + run_width <= target_width:
            chunks.append(Chunk(text, run.tag))
            used += run_width
            continue

        clipped = truncate_to_width(text, target_width - used, used)
        if clipped:
            chunks.append(Chunk(clipped, run.tag))
            used += display_width(clipped, used)
        break

    assert 0 <= used <= target_width
    return chunks, used


def _fallback_chunks(fallback: str | Sequence[Chunk], default_tag: str) -> list[Chunk]:
    """Return the caller-supplied representation untouched."""
    if isinstance(fallback, str):
        return [Chunk(fallback, default_tag)] if fallback else []
    return list(fallback)


def render_fold_line(
    line: str | None,
    spans: Iterable[HighlightSpan],
    line_count_hidden: int,
    budget: int,
    *,
    fallback: str | Sequence[Chunk] = (),
    filler: str = DEFAULT_FILLER,
    suffix_format: str = DEFAULT_SUFFIX_FORMAT,
    default_tag: str = DEFAULT_TAG,
    suffix_tag: str = SUFFIX_TAG,
) -> list[Chunk]:
    """Render the summary row for a folded region.

    ``line`` is the first line of the fold; ``None`` means it could not be
    read and ``fallback`` is returned as-is. ``spans`` may overlap and be
    unsorted: later spans win on shared columns. The result holds the
    (possibly truncated) line prefix in its highlight runs, then the suffix
    in ``suffix_tag``, then ``filler`` padding in ``default_tag`` so the
    total width equals ``budget``.

    When the suffix alone is wider than ``budget`` it is still emitted in
    full and the result overflows; the suffix is never truncated.
    A filler that is not one column wide or a suffix format with tabs or
    other non-printable characters raises ``ValueError``.
    """
    if line is None:
        return _fallback_chunks(fallback, default_tag)
    if display_width(filler) != 1:
        raise ValueError(f"filler must be exactly one column wide: {filler!r}")
    if not suffix_format.isprintable():
        # The suffix is measured once, independent of the column it lands on.
        raise ValueError(f"suffix format must be printable: {suffix_format!r}")

    budget = max(0, budget)
    suffix = fold_suffix(line_count_hidden, suffix_format)
    suffix_width = display_width(suffix)
    target_prefix_width = budget - suffix_width

    runs = build_style_runs(line, spans, default_tag)
    chunks, used = _fit_runs(line, runs, target_prefix_width)

    chunks.append(Chunk(suffix, suffix_tag))
    used += suffix_width

    if used < budget:
        chunks.append(Chunk(filler * (budget - used), default_tag))
        used = budget

    if suffix_width <= budget:
        assert used == budget
    return _merge_adjacent(chunks)


def rendered_width(chunks: Iterable[Chunk]) -> int:
    """Return total display width of ``chunks`` drawn left to right."""
    used = 0
    for chunk in chunks:
        used += display_width(chunk.text, used)
    return used
