"""Highlight-span providers for a single source line.

Tries Tree-sitter first, then Pygments. Capture names follow the
``@group.subgroup`` convention so one theme table serves both providers.
Any provider failure degrades to the next provider, then to no spans.
"""

from __future__ import annotations

import importlib
import logging
import re
from functools import lru_cache
from pathlib import Path

from .types import HighlightSpan

logger = logging.getLogger(__name__)

HIGHLIGHTERS = ("auto", "treesitter", "pygments", "none")
_PROVIDERS_BY_HIGHLIGHTER: dict[str, tuple[str, ...]] = {
    "auto": ("treesitter", "pygments"),
    "treesitter": ("treesitter",),
    "pygments": ("pygments",),
    "none": (),
}

LANGUAGE_BY_SUFFIX: dict[str, str] = {
    ".py": "python",
    ".pyi": "python",
    ".js": "javascript",
    ".mjs": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".tsx": "tsx",
    ".go": "go",
    ".rs": "rust",
    ".java": "java",
    ".c": "c",
    ".h": "c",
    ".cc": "cpp",
    ".cpp": "cpp",
    ".hpp": "cpp",
    ".rb": "ruby",
    ".lua": "lua",
    ".sh": "bash",
}

GRAMMAR_PACKAGES = ("tree_sitter_languages", "tree_sitter_language_pack")
MISSING_PARSER_ERROR = (
    "Tree-sitter parser package not found. Install tree-sitter-languages or tree-sitter-language-pack."
)

FUNCTION_NODE_TYPES = {
    "function_definition",
    "function_declaration",
    "function_item",
    "method_definition",
    "method_declaration",
}
CALL_NODE_TYPES = {"call", "call_expression"}

NODE_CAPTURES: dict[str, str] = {
    "comment": "@comment",
    "line_comment": "@comment",
    "block_comment": "@comment",
    "string": "@string",
    "string_literal": "@string",
    "interpreted_string_literal": "@string",
    "raw_string_literal": "@string",
    "rune_literal": "@string",
    "char_literal": "@string",
    "integer": "@number",
    "float": "@number",
    "int_literal": "@number",
    "float_literal": "@number",
    "integer_literal": "@number",
    "number": "@number",
    "true": "@constant.builtin",
    "false": "@constant.builtin",
    "nil": "@constant.builtin",
    "none": "@constant.builtin",
    "null": "@constant.builtin",
    "primitive_type": "@type.builtin",
    "type_identifier": "@type",
    "field_identifier": "@property",
    "property_identifier": "@property",
    "package_identifier": "@module",
    "namespace_identifier": "@module",
    "identifier": "@variable",
}

_KEYWORD_RE = re.compile(r"[a-z_]+")


# --- Tree-sitter -----------------------------------------------------------


@lru_cache(maxsize=32)
def _load_parser(language_name: str):
    """Return ``(parser, error_message)`` for a fold's file language.

    Grammar packages are optional; the first one that imports wins. A missing
    grammar is not an error for fold rendering, the caller just falls back to
    Pygments spans.
    """
    first_error: str | None = None
    for package in GRAMMAR_PACKAGES:
        try:
            module = importlib.import_module(package)
        except ModuleNotFoundError:
            continue
        try:
            return module.get_parser(language_name), None
        except Exception as exc:
            if first_error is None:
                first_error = f"{package} has no usable {language_name} grammar: {exc}"
    return None, first_error or MISSING_PARSER_ERROR


def _same_node(a, b) -> bool:
    return b is not None and a.start_byte == b.start_byte and a.end_byte == b.end_byte


def _node_capture(node) -> str | None:
    """Map a Tree-sitter node to a capture name, or ``None`` to leave it unstyled."""
    node_type = node.type
    if not node.is_named:
        return "@keyword" if _KEYWORD_RE.fullmatch(node_type) else None

    parent = node.parent
    if parent is not None and node_type in {"identifier", "field_identifier", "property_identifier"}:
        if parent.type in FUNCTION_NODE_TYPES and _same_node(node, parent.child_by_field_name("name")):
            return "@function"
        if parent.type in CALL_NODE_TYPES and _same_node(node, parent.child_by_field_name("function")):
            return "@function.call"
    return NODE_CAPTURES.get(node_type)


def _char_col(line_bytes: bytes, byte_col: int) -> int:
    """Convert a UTF-8 byte column into a character column."""
    return len(line_bytes[:byte_col].decode("utf-8", errors="ignore"))


def treesitter_spans(source: str, path: Path, lnum: int) -> list[HighlightSpan]:
    """Collect capture spans for 1-based line ``lnum`` from a Tree-sitter parse.

    Nodes are visited in pre-order, so a node's span is registered after its
    ancestors' and wins on shared columns.
    """
    language_name = LANGUAGE_BY_SUFFIX.get(path.suffix.lower())
    if language_name is None:
        return []

    parser, error = _load_parser(language_name)
    if parser is None:
        logger.debug("tree-sitter unavailable for %s: %s", path, error)
        return []

    source_bytes = source.encode("utf-8")
    row = lnum - 1
    byte_lines = source_bytes.split(b"\n")
    if row < 0 or row >= len(byte_lines):
        return []
    line_bytes = byte_lines[row].rstrip(b"\r")

    try:
        tree = parser.parse(source_bytes)
    except Exception as exc:
        logger.debug("tree-sitter parse failed for %s: %s", path, exc)
        return []

    spans: list[HighlightSpan] = []
    stack = [tree.root_node]
    while stack:
        node = stack.pop()
        start_row, start_byte_col = node.start_point[0], node.start_point[1]
        end_row, end_byte_col = node.end_point[0], node.end_point[1]
        if start_row > row or end_row < row:
            continue

        tag = _node_capture(node)
        if tag is not None:
            start = _char_col(line_bytes, start_byte_col) if start_row == row else 0
            end = _char_col(line_bytes, end_byte_col) if end_row == row else _char_col(line_bytes, len(line_bytes))
            if start < end:
                spans.append(HighlightSpan(start, end, tag))

        stack.extend(reversed(node.children))
    return spans


# --- Pygments --------------------------------------------------------------


def _pygments_capture_table():
    from pygments.token import Comment, Keyword, Name, Number, Operator, Punctuation, String

    return (
        (Keyword.Type, "@type.builtin"),
        (Keyword.Constant, "@constant.builtin"),
        (Keyword.Namespace, "@keyword.import"),
        (Keyword, "@keyword"),
        (Name.Builtin, "@function.builtin"),
        (Name.Function, "@function"),
        (Name.Class, "@type"),
        (Name.Namespace, "@module"),
        (Name.Constant, "@constant"),
        (Name.Attribute, "@property"),
        (Name.Decorator, "@attribute"),
        (Name.Tag, "@tag"),
        (Name, "@variable"),
        (String, "@string"),
        (Number, "@number"),
        (Comment, "@comment"),
        (Operator.Word, "@keyword.operator"),
        (Operator, "@operator"),
        (Punctuation, "@punctuation"),
    )


def pygments_capture_name(token_type, table=None) -> str | None:
    """Map a Pygments token type to a capture name (most specific entry first)."""
    for parent, capture in table or _pygments_capture_table():
        if token_type in parent:
            return capture
    return None


def _line_bounds(source: str, lnum: int) -> tuple[int, int] | None:
    """Return ``(start_offset, end_offset)`` of ``\\n``-numbered line ``lnum``.

    The end offset excludes the newline and a ``\\r`` directly before it.
    """
    if lnum < 1:
        return None
    offset = 0
    for idx, raw_line in enumerate(source.split("\n"), start=1):
        if idx == lnum:
            if not raw_line and offset == len(source):
                return None
            body_len = len(raw_line) - 1 if raw_line.endswith("\r") else len(raw_line)
            return offset, offset + body_len
        offset += len(raw_line) + 1
    return None


def pygments_spans(source: str, path: Path, lnum: int) -> list[HighlightSpan]:
    """Collect token spans for 1-based line ``lnum`` using a Pygments lexer."""
    bounds = _line_bounds(source, lnum)
    if bounds is None:
        return []
    line_start, line_end = bounds

    try:
        from pygments.lexers import TextLexer, get_lexer_for_filename
    except ImportError:
        logger.debug("pygments unavailable")
        return []

    try:
        lexer = get_lexer_for_filename(path.name, source)
    except Exception:
        lexer = TextLexer()

    table = _pygments_capture_table()
    spans: list[HighlightSpan] = []
    try:
        for index, token_type, value in lexer.get_tokens_unprocessed(source):
            if index >= line_end:
                break
            start = max(index, line_start)
            end = min(index + len(value), line_end)
            if start >= end:
                continue
            tag = pygments_capture_name(token_type, table)
            if tag is not None:
                spans.append(HighlightSpan(start - line_start, end - line_start, tag))
    except Exception as exc:
        logger.debug("pygments lexing failed for %s: %s", path, exc)
        return []
    return spans


_PROVIDERS = {
    "treesitter": treesitter_spans,
    "pygments": pygments_spans,
}


def highlight_spans(source: str, path: Path, lnum: int, highlighter: str = "auto") -> list[HighlightSpan]:
    """Return spans for line ``lnum`` from the first provider that yields any.

    Unknown highlighter names behave like ``"auto"``.
    """
    provider_names = _PROVIDERS_BY_HIGHLIGHTER.get(highlighter, _PROVIDERS_BY_HIGHLIGHTER["auto"])
    for name in provider_names:
        spans = _PROVIDERS[name](source, path, lnum)
        if spans:
            logger.debug("%s provided %d spans for %s:%d", name, len(spans), path, lnum)
            return spans
    return []
