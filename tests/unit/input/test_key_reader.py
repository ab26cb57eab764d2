"""Raw-key decoding tests.

Feeds bytes through a pipe and checks escape timing, arrow and tilde
sequences, control keys and multi-byte characters.
"""

from __future__ import annotations

import os
import time
import unittest

from lazypicker.keys import KeyReader


class KeyReaderTests(unittest.TestCase):
    def setUp(self) -> None:
        self.read_fd, self.write_fd = os.pipe()
        self.reader = KeyReader(self.read_fd)

    def tearDown(self) -> None:
        os.close(self.read_fd)
        if self.write_fd is not None:
            os.close(self.write_fd)

    def keys(self, data: bytes, count: int) -> list[str]:
        os.write(self.write_fd, data)
        return [self.reader.read_key(timeout_ms=20) for _ in range(count)]

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        os.write(self.write_fd, b"\x1b")
        started = time.monotonic()
        key = self.reader.read_key(timeout_ms=20)
        elapsed = time.monotonic() - started
        self.assertEqual(key, "ESC")
        self.assertLess(elapsed, 0.2)

    def test_arrow_and_ss3_sequences(self) -> None:
        self.assertEqual(
            self.keys(b"\x1b[A\x1b[B\x1bOC\x1b[D\x1b[H\x1bOF", 6),
            ["UP", "DOWN", "RIGHT", "LEFT", "HOME", "END"],
        )

    def test_tilde_sequences(self) -> None:
        self.assertEqual(
            self.keys(b"\x1b[3~\x1b[5~\x1b[6~\x1b[1~\x1b[4~\x1b[3;5~", 6),
            ["DELETE", "PAGE_UP", "PAGE_DOWN", "HOME", "END", "DELETE"],
        )

    def test_control_and_named_single_bytes(self) -> None:
        self.assertEqual(
            self.keys(b"\x0e\x10\x03\r\n\t\x7f\x00", 8),
            ["CTRL_N", "CTRL_P", "CTRL_C", "ENTER", "ENTER", "TAB", "BACKSPACE", "CTRL_SPACE"],
        )

    def test_alt_letter(self) -> None:
        self.assertEqual(self.keys(b"\x1bb", 1), ["ALT_B"])

    def test_escape_before_escape_keeps_following_sequence(self) -> None:
        self.assertEqual(self.keys(b"\x1b\x1b[B", 2), ["ESC", "DOWN"])

    def test_printable_and_multibyte_characters(self) -> None:
        self.assertEqual(self.keys("aé€".encode("utf-8"), 3), ["a", "é", "€"])

    def test_timeout_and_end_of_input_return_empty(self) -> None:
        self.assertEqual(self.reader.read_key(timeout_ms=5), "")
        os.close(self.write_fd)
        self.write_fd = None
        self.assertEqual(self.reader.read_key(timeout_ms=5), "")


if __name__ == "__main__":
    unittest.main()
