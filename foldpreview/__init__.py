"""Public package surface for foldpreview.

Exports the fold-row renderer and its datatypes, plus ``main`` for
programmatic CLI invocation.
"""

from __future__ import annotations

from .fold_text import fold_suffix, render_fold_line, rendered_width
from .types import DEFAULT_TAG, SUFFIX_TAG, Chunk, HighlightSpan, StyleRun


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = [
    "Chunk",
    "DEFAULT_TAG",
    "HighlightSpan",
    "SUFFIX_TAG",
    "StyleRun",
    "fold_suffix",
    "main",
    "render_fold_line",
    "rendered_width",
]
