"""Windowed selection engine for scrollable result lists.

Tracks an absolute selection into an externally owned item sequence plus the
highlighted row of a bounded viewport. Both cursors move together on every
navigation call so the window slides one row at a time instead of jumping.
"""

from __future__ import annotations

from .input_field import InputField


class Picker:
    """Absolute/relative cursor pair with optional inverted navigation.

    ``height`` arguments count the rows available below the first one, so a
    viewport holds ``height + 1`` rows. ``total_items`` is re-supplied on every
    navigation call because streamed results may change it between frames.
    """

    def __init__(self) -> None:
        self._selected: int | None = None
        self._relative_selected: int | None = None
        self.is_inverted = False
        self.input = InputField()

    def __repr__(self) -> str:
        return (
            f"Picker(selected={self._selected!r}, relative={self._relative_selected!r}, "
            f"inverted={self.is_inverted!r})"
        )

    def offset(self) -> int:
        """Index of the first visible item, derived from both cursors."""
        selected = self._selected or 0
        relative = self._relative_selected or 0
        return max(0, selected - relative)

    def inverted(self) -> Picker:
        """Flip navigation direction and return ``self`` for construction chains."""
        self.is_inverted = not self.is_inverted
        return self

    def reset_selection(self) -> None:
        """Snap both cursors back to the top of the list."""
        self._selected = 0
        self._relative_selected = 0

    def reset_input(self) -> None:
        self.input.reset()

    def selected(self) -> int | None:
        return self._selected

    def select(self, index: int | None) -> None:
        self._selected = index

    def relative_selected(self) -> int | None:
        return self._relative_selected

    def relative_select(self, index: int | None) -> None:
        self._relative_selected = index

    def select_next(self, total_items: int, height: int) -> None:
        """Move one entry "down" in the list's visual orientation.

        Navigation over an empty list is a no-op: both cursors are left as
        they are until the caller supplies at least one item.
        """
        if total_items <= 0:
            return
        if self.is_inverted:
            self._retreat(total_items, height)
        else:
            self._advance(total_items, height)

    def select_prev(self, total_items: int, height: int) -> None:
        """Move one entry "up" in the list's visual orientation.

        Same empty-list precondition as :meth:`select_next`.
        """
        if total_items <= 0:
            return
        if self.is_inverted:
            self._advance(total_items, height)
        else:
            self._retreat(total_items, height)

    def _advance(self, total_items: int, height: int) -> None:
        selected = self._selected or 0
        relative = self._relative_selected or 0
        self._selected = (selected + 1) % total_items
        self._relative_selected = min(relative + 1, height)
        if self._selected == 0:
            # Wrapped past the end: pin the window to the top.
            self._relative_selected = 0

    def _retreat(self, total_items: int, height: int) -> None:
        selected = self._selected or 0
        relative = self._relative_selected or 0
        self._selected = (selected + total_items - 1) % total_items
        # Capped at ``height`` in case the viewport shrank since the last call.
        self._relative_selected = min(max(relative - 1, 0), height)
        if self._selected == total_items - 1:
            # Wrapped before the start: pin the window to the bottom.
            self._relative_selected = height
