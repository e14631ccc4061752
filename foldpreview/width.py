"""Terminal display-width measurement and width-safe truncation.

Measurement and truncation share ``char_display_width`` so a prefix cut by
``truncate_to_width`` always measures back within the requested columns.
"""

from __future__ import annotations

import unicodedata

TAB_STOP = 8


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks and other control
    characters consume no columns, and East Asian wide/fullwidth characters
    consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.category(ch) in {"Cc", "Cf"}:
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str, start_col: int = 0) -> int:
    """Return columns occupied by ``text`` when drawn starting at ``start_col``."""
    col = start_col
    for ch in text:
        col += char_display_width(ch, col)
    return col - start_col


def truncate_to_width(text: str, max_cols: int, start_col: int = 0) -> str:
    """Return the longest prefix of ``text`` fitting in ``max_cols`` columns.

    A glyph (wide character or tab) that would straddle the limit is dropped
    whole. Zero-width characters directly after the last kept glyph stay
    attached to it.
    """
    if max_cols <= 0 or not text:
        return ""

    used = 0
    end = 0
    for idx, ch in enumerate(text):
        w = char_display_width(ch, start_col + used)
        if used + w > max_cols:
            break
        used += w
        end = idx + 1
    return text[:end]
