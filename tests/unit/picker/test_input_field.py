from __future__ import annotations

import unittest

from lazypicker.input_field import InputField


class InputFieldTests(unittest.TestCase):
    def test_insert_at_cursor(self) -> None:
        field = InputField("ac")
        field.go_to_prev_char()
        field.insert("b")
        self.assertEqual(field.value, "abc")
        self.assertEqual(field.cursor, 2)

    def test_delete_prev_char_at_start_is_noop(self) -> None:
        field = InputField("abc")
        field.go_to_start()
        self.assertFalse(field.delete_prev_char())
        self.assertEqual(field.value, "abc")

    def test_delete_prev_and_next_char(self) -> None:
        field = InputField("abcd")
        field.go_to_prev_char()
        self.assertTrue(field.delete_prev_char())
        self.assertEqual((field.value, field.cursor), ("abd", 2))
        self.assertTrue(field.delete_next_char())
        self.assertEqual((field.value, field.cursor), ("ab", 2))
        self.assertFalse(field.delete_next_char())

    def test_cursor_movement_is_clamped(self) -> None:
        field = InputField("xy")
        field.go_to_next_char()
        self.assertEqual(field.cursor, 2)
        field.go_to_start()
        field.go_to_prev_char()
        self.assertEqual(field.cursor, 0)
        field.go_to_end()
        self.assertEqual(field.cursor, 2)

    def test_reset_clears_value_and_cursor(self) -> None:
        field = InputField("query")
        field.reset()
        self.assertEqual((field.value, field.cursor), ("", 0))

    def test_visual_scroll_keeps_cursor_visible(self) -> None:
        field = InputField("abcdefghij")
        self.assertEqual(field.visual_scroll(4), 7)
        field.go_to_start()
        self.assertEqual(field.visual_scroll(4), 0)
        self.assertEqual(InputField("ab").visual_scroll(10), 0)


if __name__ == "__main__":
    unittest.main()
