"""Entry preview tests: file highlighting, placeholders and value previews."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from lazypicker.channels import Entry
from lazypicker.preview import (
    MAX_PREVIEW_BYTES,
    Preview,
    build_preview,
    clear_preview_cache,
    read_text,
    sanitize_terminal_text,
)


class FilePreviewTests(unittest.TestCase):
    def setUp(self) -> None:
        clear_preview_cache()
        self.addCleanup(clear_preview_cache)
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name)

    def write(self, name: str, data: bytes) -> Path:
        path = self.root / name
        path.write_bytes(data)
        return path

    def test_no_color_preview_keeps_plain_lines_with_expanded_tabs(self) -> None:
        path = self.write("demo.py", b"def f():\n\treturn 1\n")
        preview = build_preview(Entry("demo.py", path=path), no_color=True)
        self.assertEqual(preview, Preview("demo.py", ("def f():", "    return 1")))

    def test_highlighted_preview_contains_ansi_colors(self) -> None:
        path = self.write("demo.py", b"x = 1\n")
        preview = build_preview(Entry("demo.py", path=path))
        self.assertFalse(preview.is_placeholder)
        self.assertIn("\x1b[", "".join(preview.lines))

    def test_unknown_style_falls_back_to_default(self) -> None:
        path = self.write("demo.py", b"x = 1\n")
        preview = build_preview(Entry("demo.py", path=path), style="no-such-style")
        self.assertIn("\x1b[", "".join(preview.lines))

    def test_placeholders_for_binary_empty_missing_and_directory(self) -> None:
        binary = self.write("blob.bin", b"abc\x00def")
        empty = self.write("empty.txt", b"")
        missing = self.root / "missing.txt"
        subdir = self.root / "pkg"
        subdir.mkdir()

        cases = {
            binary: "(binary file)",
            empty: "(empty file)",
            subdir: "(directory)",
        }
        for path, text in cases.items():
            preview = build_preview(Entry(path.name, path=path))
            self.assertTrue(preview.is_placeholder)
            self.assertEqual(preview.lines, (text,))

        preview = build_preview(Entry(missing.name, path=missing))
        self.assertTrue(preview.is_placeholder)
        self.assertTrue(preview.lines[0].startswith("(unreadable: "))

    def test_file_control_bytes_are_escaped(self) -> None:
        path = self.write("log.txt", b"before\x1b[2Jafter\n")
        preview = build_preview(Entry("log.txt", path=path), no_color=True)
        self.assertEqual(preview.lines, ("before\\x1b[2Jafter",))

    def test_legacy_encoding_falls_back_to_latin1(self) -> None:
        path = self.write("legacy.txt", b"caf\xe9")
        self.assertEqual(read_text(path), "caf\xe9")

    def test_size_cap_splitting_a_character_keeps_utf8(self) -> None:
        text = "x" + "é" * (MAX_PREVIEW_BYTES // 2)
        path = self.write("big.txt", text.encode("utf-8"))
        self.assertGreater(path.stat().st_size, MAX_PREVIEW_BYTES)
        self.assertEqual(read_text(path), "x" + "é" * (MAX_PREVIEW_BYTES // 2 - 1))

    def test_invalid_utf8_inside_capped_file_still_falls_back(self) -> None:
        path = self.write("legacy_big.txt", b"caf\xe9 " + b"a" * MAX_PREVIEW_BYTES)
        self.assertTrue(read_text(path).startswith("caf\xe9 "))

    def test_previews_are_cached_per_entry(self) -> None:
        path = self.write("demo.txt", b"one\n")
        entry = Entry("demo.txt", path=path)
        first = build_preview(entry, no_color=True)
        self.assertIs(build_preview(entry, no_color=True), first)
        clear_preview_cache()
        self.assertIsNot(build_preview(entry, no_color=True), first)


class ValuePreviewTests(unittest.TestCase):
    def setUp(self) -> None:
        clear_preview_cache()
        self.addCleanup(clear_preview_cache)

    def test_entry_value_is_previewed_line_by_line(self) -> None:
        preview = build_preview(Entry("PATH", value="/usr/bin\n/bin"))
        self.assertEqual(preview, Preview("PATH", ("/usr/bin", "/bin")))

    def test_empty_value_gives_single_blank_line(self) -> None:
        self.assertEqual(build_preview(Entry("EMPTY", value="")).lines, ("",))

    def test_plain_name_previews_itself(self) -> None:
        preview = build_preview(Entry("not a file \x07 here"))
        self.assertEqual(preview.lines, ("not a file \\x07 here",))

    def test_sanitize_leaves_plain_text_alone(self) -> None:
        text = "tabs\tand newlines\n"
        self.assertIs(sanitize_terminal_text(text), text)


if __name__ == "__main__":
    unittest.main()
