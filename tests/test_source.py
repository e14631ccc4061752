"""Tests for source loading and fold-start line lookup."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from foldpreview.source import (
    hidden_line_count,
    read_source_line,
    read_text,
    sanitize_terminal_text,
    split_source_lines,
)


class SourceLineTests(unittest.TestCase):
    def test_lookup_is_one_based_and_bounded(self) -> None:
        lines = split_source_lines("first\r\nsecond\n\nfourth")
        self.assertEqual(read_source_line(lines, 1), "first")
        self.assertEqual(read_source_line(lines, 3), "")
        self.assertEqual(read_source_line(lines, 4), "fourth")
        self.assertIsNone(read_source_line(lines, 0))
        self.assertIsNone(read_source_line(lines, 5))

    def test_lines_are_numbered_by_newline_only(self) -> None:
        source = "s = 'a\u2028b'\ndef foo():\r\n\x0c    pass\rx\n"
        lines = split_source_lines(source)
        self.assertEqual(lines, ["s = 'a\u2028b'", "def foo():", "\x0c    pass\rx"])
        self.assertEqual(read_source_line(lines, 2), "def foo():")
        self.assertEqual(split_source_lines(""), [])
        self.assertEqual(split_source_lines("a\n\n"), ["a", ""])

    def test_hidden_line_count(self) -> None:
        self.assertEqual(hidden_line_count(3, 10), 7)
        self.assertEqual(hidden_line_count(5, 5), 0)
        self.assertEqual(hidden_line_count(5, 2), 0)

    def test_sanitize_escapes_control_bytes_but_keeps_whitespace(self) -> None:
        self.assertEqual(sanitize_terminal_text("a\tb\x07c\x1b"), "a\tb\\x07c\\x1b")
        self.assertEqual(sanitize_terminal_text("plain"), "plain")

    def test_sanitize_escapes_bare_carriage_return_only(self) -> None:
        self.assertEqual(sanitize_terminal_text("a\rb\r\nc\n"), "a\\x0db\r\nc\n")

    def test_read_text_keeps_carriage_returns_and_drops_bom(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "crlf.py"
            path.write_bytes(b"\xef\xbb\xbfa\rb\r\nc\n")
            source = read_text(path)
            self.assertEqual(source, "a\rb\r\nc\n")
            self.assertEqual(split_source_lines(source), ["a\rb", "c"])

    def test_read_text_falls_back_to_latin1(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "latin.txt"
            path.write_bytes(b"caf\xe9\n")
            self.assertEqual(read_text(path), "café\n")


if __name__ == "__main__":
    unittest.main()
