"""Shared fold-preview datatypes."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_TAG = "UfoFoldedFg"
SUFFIX_TAG = "FoldedInfo"


@dataclass(frozen=True)
class HighlightSpan:
    """Half-open character column range ``[start, end)`` carrying a style tag."""

    start: int
    end: int
    tag: str


@dataclass(frozen=True)
class StyleRun:
    """Maximal contiguous column range sharing one style tag."""

    start: int
    end: int
    tag: str


@dataclass(frozen=True)
class Chunk:
    """One output unit: literal text paired with its style tag."""

    text: str
    tag: str
