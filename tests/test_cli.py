"""CLI tests for rendering one fold summary row from a file."""

from __future__ import annotations

import io
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from foldpreview import cli, config
from foldpreview.theme import hex_to_sgr

GO_SOURCE = "func Foo() {\n\treturn\n}\n"


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name)
        self.path = self.root / "main.go"
        self.path.write_text(GO_SOURCE, encoding="utf-8")
        patcher = mock.patch("foldpreview.config.CONFIG_PATH", self.root / "config.json")
        patcher.start()
        self.addCleanup(patcher.stop)

    def _run(self, *argv: str) -> str:
        with mock.patch("sys.stdout", new_callable=io.StringIO) as stdout:
            cli.main(list(argv))
        return stdout.getvalue()

    def test_plain_row_is_padded_to_width(self) -> None:
        output = self._run(str(self.path), "1", "3", "--width", "30", "--highlighter", "none", "--no-color")
        self.assertEqual(output, "func Foo() { ... 2 lines .....\n")

    def test_narrow_width_truncates_line_prefix(self) -> None:
        output = self._run(str(self.path), "1", "3", "--width", "20", "--highlighter", "none", "--no-color")
        self.assertEqual(output, "func ... 2 lines ...\n")

    def test_custom_filler(self) -> None:
        output = self._run(
            str(self.path), "1", "3", "--width", "30", "--highlighter", "none", "--no-color", "--filler", "-"
        )
        self.assertEqual(output, "func Foo() { ... 2 lines ...--\n")

    def test_unreadable_start_line_prints_fallback(self) -> None:
        output = self._run(str(self.path), "10", "12", "--width", "30", "--highlighter", "none", "--no-color")
        self.assertEqual(output, "10: <unavailable>\n")

    def test_color_output_uses_fold_info_color(self) -> None:
        output = self._run(str(self.path), "1", "3", "--width", "30", "--highlighter", "none")
        self.assertIn(hex_to_sgr("#928a79") + " ... 2 lines ...", output)

    def test_config_filler_is_used_when_flag_absent(self) -> None:
        (self.root / "config.json").write_text('{"filler": "~"}', encoding="utf-8")
        output = self._run(str(self.path), "1", "3", "--width", "30", "--highlighter", "none", "--no-color")
        self.assertEqual(output, "func Foo() { ... 2 lines ...~~\n")

    def test_line_separator_in_earlier_line_keeps_fold_row(self) -> None:
        path = self.root / "sep.py"
        path.write_text("s = 'a\u2028b'\ndef foo():\n    pass\n", encoding="utf-8")
        row = cli.render_fold_preview(path, 2, 3, 40, highlighter="none", no_color=True)
        self.assertEqual(row, "def foo(): ... 1 lines ..." + "." * 14)

    def test_suffix_format_flag(self) -> None:
        output = self._run(
            str(self.path), "1", "3", "--width", "20", "--highlighter", "none", "--no-color",
            "--suffix-format", " [{count}] ",
        )
        self.assertEqual(output, "func Foo() { [2] ...\n")

    def test_tab_in_suffix_format_exits(self) -> None:
        with self.assertRaises(SystemExit):
            self._run(str(self.path), "1", "3", "--suffix-format", "\t{count}")

    def test_save_remembers_given_options(self) -> None:
        self._run(
            str(self.path), "1", "3", "--width", "30", "--no-color", "--save",
            "--highlighter", "none", "--filler", "-", "--suffix-format", " <{count}> ",
        )
        self.assertEqual(config.load_highlighter(), "none")
        self.assertEqual(config.load_filler(), "-")
        self.assertEqual(config.load_suffix_format(), " <{count}> ")
        self.assertIsNone(config.load_theme_name())

        output = self._run(str(self.path), "1", "3", "--width", "20", "--no-color")
        self.assertEqual(output, "func Foo() { <2> ---\n")

    def test_options_are_not_saved_without_flag(self) -> None:
        self._run(str(self.path), "1", "3", "--width", "30", "--no-color", "--highlighter", "none", "--filler", "-")
        self.assertEqual(config.load_config(), {})

    def test_missing_path_exits(self) -> None:
        with self.assertRaises(SystemExit):
            self._run(str(self.root / "missing.go"), "1", "2")

    def test_end_before_start_exits(self) -> None:
        with self.assertRaises(SystemExit):
            self._run(str(self.path), "3", "1")

    def test_wide_filler_exits(self) -> None:
        with self.assertRaises(SystemExit):
            self._run(str(self.path), "1", "3", "--filler", "漢")

    def test_invalid_line_number_is_rejected_by_argparse(self) -> None:
        with mock.patch("sys.stderr", new_callable=io.StringIO):
            with self.assertRaises(SystemExit):
                self._run(str(self.path), "0", "3")


if __name__ == "__main__":
    unittest.main()
