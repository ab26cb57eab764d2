"""UI modes and the actions keys can be bound to."""

from __future__ import annotations

from enum import Enum


class Mode(str, Enum):
    """Top-level interaction mode of the picker UI."""

    CHANNEL = "channel"
    GUIDE = "guide"
    SEND_TO_CHANNEL = "send_to_channel"


class Action(str, Enum):
    """Named operations dispatched from key bindings.

    Values double as the action names accepted in the ``keybindings`` config.
    """

    SELECT_NEXT_ENTRY = "select_next_entry"
    SELECT_PREV_ENTRY = "select_prev_entry"
    SCROLL_PREVIEW_HALF_PAGE_UP = "scroll_preview_half_page_up"
    SCROLL_PREVIEW_HALF_PAGE_DOWN = "scroll_preview_half_page_down"
    SELECT_ENTRY = "select_entry"
    SEND_TO_CHANNEL = "send_to_channel"
    TOGGLE_CHANNEL_SELECTION = "toggle_channel_selection"
    TOGGLE_HELP = "toggle_help"
    TOGGLE_PREVIEW = "toggle_preview"
    QUIT = "quit"
    DELETE_PREV_CHAR = "delete_prev_char"
    DELETE_NEXT_CHAR = "delete_next_char"
    GO_TO_PREV_CHAR = "go_to_prev_char"
    GO_TO_NEXT_CHAR = "go_to_next_char"
    GO_TO_INPUT_START = "go_to_input_start"
    GO_TO_INPUT_END = "go_to_input_end"
    CLEAR_INPUT = "clear_input"


INPUT_ACTIONS: frozenset[Action] = frozenset(
    {
        Action.DELETE_PREV_CHAR,
        Action.DELETE_NEXT_CHAR,
        Action.GO_TO_PREV_CHAR,
        Action.GO_TO_NEXT_CHAR,
        Action.GO_TO_INPUT_START,
        Action.GO_TO_INPUT_END,
        Action.CLEAR_INPUT,
    }
)


def parse_mode(name: object) -> Mode | None:
    """Return the mode named ``name`` or ``None`` when it is not a known mode."""
    if not isinstance(name, str):
        return None
    try:
        return Mode(name.strip().lower())
    except ValueError:
        return None


def parse_action(name: object) -> Action | None:
    """Return the action named ``name`` or ``None`` when it is not a known action."""
    if not isinstance(name, str):
        return None
    try:
        return Action(name.strip().lower())
    except ValueError:
        return None
