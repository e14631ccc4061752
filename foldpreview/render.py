"""Turn rendered chunks into terminal text."""

from __future__ import annotations

from typing import Iterable

from .theme import FoldTheme
from .types import Chunk


def chunks_to_plain(chunks: Iterable[Chunk]) -> str:
    """Concatenate chunk texts without styling."""
    return "".join(chunk.text for chunk in chunks)


def chunks_to_ansi(chunks: Iterable[Chunk], theme: FoldTheme) -> str:
    """Wrap each chunk in its theme color, resetting after styled chunks."""
    out: list[str] = []
    for chunk in chunks:
        sgr = theme.sgr_for(chunk.tag)
        if sgr:
            out.append(f"{sgr}{chunk.text}{theme.reset}")
        else:
            out.append(chunk.text)
    return "".join(out)
