"""Source loading and fold-start line lookup.

Lines are numbered by ``\\n`` only, the way editors and Tree-sitter report
fold rows; a ``\\r`` before the newline belongs to the terminator.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Sequence

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_BARE_CR_RE = re.compile(r"\r(?!\n)")


def read_text(path: Path) -> str:
    """Return the text of the file holding the fold, newlines untouched.

    Bytes are decoded directly so ``\\r`` is not folded into ``\\n`` and line
    numbers match the editor. A UTF-8 BOM is dropped; anything that is not
    UTF-8 decodes as latin-1 so a fold row can always be drawn.
    """
    data = path.read_bytes()
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("latin-1")


def _escape_control(ch: str) -> str:
    code = ord(ch)
    if ch in "\n\r\t":
        return ch
    # C0 controls + DEL + C1 controls.
    if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
        return f"\\x{code:02x}"
    return ch


def sanitize_terminal_text(source: str) -> str:
    """Make source safe to echo inside a fold row.

    Control bytes, including a ``\\r`` that does not end a line, are spelled
    out as ``\\xNN`` so a preview can never ring the bell or move the cursor.
    Highlighting runs on the sanitized text, so span columns stay aligned
    with what is printed.
    """
    source = _BARE_CR_RE.sub(r"\\x0d", source)
    if _CONTROL_RE.search(source) is None:
        return source
    return "".join(_escape_control(ch) for ch in source)


def split_source_lines(source: str) -> list[str]:
    """Split source on ``\\n`` into lines without terminators.

    Unlike ``str.splitlines`` this does not break at ``\\u2028``, ``\\u2029``,
    form feeds, or a bare ``\\r``, so line numbers agree with the editor.
    """
    if not source:
        return []
    lines = source.split("\n")
    if source.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def read_source_line(lines: Sequence[str], lnum: int) -> str | None:
    """Return 1-based line ``lnum`` or ``None`` when it does not exist."""
    if lnum < 1 or lnum > len(lines):
        return None
    return lines[lnum - 1]


def hidden_line_count(lnum: int, end_lnum: int) -> int:
    """Count lines collapsed under a fold spanning ``lnum``..``end_lnum`` (1-based)."""
    return max(0, end_lnum - lnum)
