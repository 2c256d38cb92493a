"""CLI argument handling and rendered-output tests for ``lazydired.cli.main``."""

from __future__ import annotations

import io
import json
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazydired import cli


class CliMainTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve() / "listing"
        self.root.mkdir()
        (self.root / "docs").mkdir()
        (self.root / "a.txt").write_text("abc", encoding="utf-8")
        (self.root / ".hidden").write_text("", encoding="utf-8")
        self.config_path = self.root.parent / "config.json"
        patcher = mock.patch("lazydired.runtime.config.CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _run(self, *argv: str, default_path: Path | None = None) -> str:
        out = io.StringIO()
        with mock.patch.object(sys, "argv", ["lazydired", *argv]), mock.patch.object(sys, "stdout", out):
            cli.main(default_path=default_path)
        return out.getvalue()

    def test_prints_plain_listing_when_not_a_tty(self) -> None:
        output = self._run(str(self.root), "--width", "100", "--ids", "numeric")
        lines = output.splitlines()

        self.assertEqual(lines[0], f"  Directory of {self.root}")
        self.assertEqual(lines[1], "   1 directory, 2 files, 3 bytes")
        self.assertTrue(lines[2].endswith("docs/"))
        self.assertNotIn("\033[", output)

    def test_defaults_to_given_default_path(self) -> None:
        previous_cwd = Path.cwd()
        try:
            os.chdir(self.root / "docs")
            output = self._run("--width", "80")
        finally:
            os.chdir(previous_cwd)

        self.assertIn(f"Directory of {self.root / 'docs'}", output)
        self.assertIn("empty", output)

    def test_pattern_argument_lists_matching_names(self) -> None:
        output = self._run(str(self.root / "*.txt"), "--details", "hide", "--width", "80")

        self.assertEqual(output.splitlines()[2], "  a.txt")
        self.assertNotIn("docs/", output)

    def test_display_options_are_applied(self) -> None:
        output = self._run(
            str(self.root),
            "--details",
            "show",
            "--ids",
            "numeric",
            "--time-format",
            "seconds",
            "--sort",
            "u-",
        )

        row = output.splitlines()[2]
        self.assertTrue(row.endswith("docs/"))
        self.assertRegex(row, r" \d{10}  docs/$")

    def test_save_persists_settings(self) -> None:
        self._run(str(self.root), "--time-format", "dos", "--human", "binary", "--save", "--width", "80")

        saved = json.loads(self.config_path.read_text(encoding="utf-8"))
        self.assertEqual(saved["time_format"], "dos")
        self.assertEqual(saved["size_mode"], "human_binary")

    def test_all_shows_system_files(self) -> None:
        (self.root / ".DS_Store").write_text("x", encoding="utf-8")

        default_output = self._run(str(self.root), "--width", "80")
        all_output = self._run(str(self.root), "-a", "--width", "80")

        self.assertNotIn(".DS_Store", default_output)
        self.assertIn("1 hidden file", default_output)
        self.assertIn(".DS_Store", all_output)

    def test_errors_exit_with_message(self) -> None:
        with self.assertRaises(SystemExit) as caught:
            self._run(str(self.root / "absent"))
        self.assertEqual(caught.exception.code, f"Path not found: {self.root / 'absent'}")

        with self.assertRaises(SystemExit) as caught:
            self._run(str(self.root), "--time-format", "weekly")
        self.assertEqual(caught.exception.code, "unknown time format: 'weekly'")


if __name__ == "__main__":
    unittest.main()
