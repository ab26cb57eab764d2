"""Single-line query input with a character cursor."""

from __future__ import annotations


class InputField:
    """Editable text value plus cursor position used by the query bar."""

    def __init__(self, value: str = "") -> None:
        self.value = value
        self.cursor = len(value)

    def __repr__(self) -> str:
        return f"InputField(value={self.value!r}, cursor={self.cursor!r})"

    def reset(self) -> None:
        self.value = ""
        self.cursor = 0

    def insert(self, text: str) -> None:
        """Insert ``text`` at the cursor and move the cursor past it."""
        if not text:
            return
        self.value = self.value[: self.cursor] + text + self.value[self.cursor :]
        self.cursor += len(text)

    def delete_prev_char(self) -> bool:
        """Backspace; return whether the value changed."""
        if self.cursor <= 0:
            return False
        self.value = self.value[: self.cursor - 1] + self.value[self.cursor :]
        self.cursor -= 1
        return True

    def delete_next_char(self) -> bool:
        """Delete the character under the cursor; return whether the value changed."""
        if self.cursor >= len(self.value):
            return False
        self.value = self.value[: self.cursor] + self.value[self.cursor + 1 :]
        return True

    def go_to_prev_char(self) -> None:
        self.cursor = max(0, self.cursor - 1)

    def go_to_next_char(self) -> None:
        self.cursor = min(len(self.value), self.cursor + 1)

    def go_to_start(self) -> None:
        self.cursor = 0

    def go_to_end(self) -> None:
        self.cursor = len(self.value)

    def visual_scroll(self, width: int) -> int:
        """Return the first character index to draw in a ``width``-column field.

        The cursor needs one spare column at the end of the field, so the value
        scrolls left once the cursor reaches the last visible column.
        """
        if width <= 0:
            return self.cursor
        return max(0, self.cursor - width + 1)
