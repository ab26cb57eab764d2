"""Per-mode key bindings and key display names.

Bindings map decoded key tokens (see ``lazypicker.keys``) to actions.
Config overrides replace the default keys of each action they mention.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from .actions import INPUT_ACTIONS, Action, Mode, parse_action, parse_mode

logger = logging.getLogger(__name__)

Keymap = dict[str, Action]
Keybindings = dict[Mode, Keymap]


class MissingKeymapError(LookupError):
    """Raised when a mode has no keymap configured."""


KEY_DISPLAY_NAMES: dict[str, str] = {
    "UP": "↑",
    "DOWN": "↓",
    "LEFT": "←",
    "RIGHT": "→",
    "ENTER": "Enter",
    "ESC": "Esc",
    "TAB": "Tab",
    "BACKTAB": "Shift-Tab",
    "BACKSPACE": "Backspace",
    "DELETE": "Del",
    "HOME": "Home",
    "END": "End",
    "PAGE_UP": "PageUp",
    "PAGE_DOWN": "PageDown",
    " ": "Space",
}

_INPUT_BINDINGS: dict[Action, tuple[str, ...]] = {
    Action.DELETE_PREV_CHAR: ("BACKSPACE",),
    Action.DELETE_NEXT_CHAR: ("DELETE",),
    Action.GO_TO_PREV_CHAR: ("LEFT",),
    Action.GO_TO_NEXT_CHAR: ("RIGHT",),
    Action.GO_TO_INPUT_START: ("HOME", "CTRL_A"),
    Action.GO_TO_INPUT_END: ("END", "CTRL_E"),
    Action.CLEAR_INPUT: ("CTRL_U",),
}

_DEFAULT_BINDINGS: dict[Mode, dict[Action, tuple[str, ...]]] = {
    Mode.CHANNEL: {
        Action.SELECT_NEXT_ENTRY: ("DOWN", "CTRL_N"),
        Action.SELECT_PREV_ENTRY: ("UP", "CTRL_P"),
        Action.SCROLL_PREVIEW_HALF_PAGE_DOWN: ("PAGE_DOWN", "CTRL_D"),
        Action.SCROLL_PREVIEW_HALF_PAGE_UP: ("PAGE_UP", "CTRL_F"),
        Action.SELECT_ENTRY: ("ENTER",),
        Action.SEND_TO_CHANNEL: ("CTRL_S",),
        Action.TOGGLE_CHANNEL_SELECTION: ("CTRL_T",),
        Action.TOGGLE_HELP: ("CTRL_G",),
        Action.TOGGLE_PREVIEW: ("CTRL_O",),
        Action.QUIT: ("ESC", "CTRL_C"),
        **_INPUT_BINDINGS,
    },
    Mode.GUIDE: {
        Action.SELECT_NEXT_ENTRY: ("DOWN", "CTRL_N"),
        Action.SELECT_PREV_ENTRY: ("UP", "CTRL_P"),
        Action.SELECT_ENTRY: ("ENTER",),
        Action.TOGGLE_CHANNEL_SELECTION: ("CTRL_T",),
        Action.TOGGLE_HELP: ("CTRL_G",),
        Action.QUIT: ("ESC", "CTRL_C"),
        **_INPUT_BINDINGS,
    },
    Mode.SEND_TO_CHANNEL: {
        Action.SELECT_NEXT_ENTRY: ("DOWN", "CTRL_N"),
        Action.SELECT_PREV_ENTRY: ("UP", "CTRL_P"),
        Action.SCROLL_PREVIEW_HALF_PAGE_DOWN: ("PAGE_DOWN", "CTRL_D"),
        Action.SCROLL_PREVIEW_HALF_PAGE_UP: ("PAGE_UP", "CTRL_F"),
        Action.SELECT_ENTRY: ("ENTER",),
        Action.SEND_TO_CHANNEL: ("CTRL_S",),
        Action.TOGGLE_CHANNEL_SELECTION: ("CTRL_T",),
        Action.TOGGLE_HELP: ("CTRL_G",),
        Action.QUIT: ("ESC", "CTRL_C"),
        **_INPUT_BINDINGS,
    },
}


def _keymap_from_actions(actions: Mapping[Action, tuple[str, ...]]) -> Keymap:
    keymap: Keymap = {}
    for action, keys in actions.items():
        for key in keys:
            keymap[key] = action
    return keymap


def default_keybindings() -> Keybindings:
    """Return a fresh copy of the built-in bindings for every mode."""
    return {mode: _keymap_from_actions(actions) for mode, actions in _DEFAULT_BINDINGS.items()}


def apply_overrides(bindings: Keybindings, overrides: object) -> Keybindings:
    """Merge ``{mode: {action: [keys]}}`` overrides into ``bindings``.

    Each overridden action first loses its existing keys in that mode, so the
    config fully describes the keys for any action it lists. Unknown modes,
    unknown actions and non-string keys are skipped.
    """
    if not isinstance(overrides, dict):
        return bindings
    for raw_mode, raw_actions in overrides.items():
        mode = parse_mode(raw_mode)
        if mode is None or not isinstance(raw_actions, dict):
            logger.warning("ignoring keybindings for unknown mode %r", raw_mode)
            continue
        keymap = bindings.setdefault(mode, {})
        for raw_action, raw_keys in raw_actions.items():
            action = parse_action(raw_action)
            if action is None:
                logger.warning("ignoring keybinding for unknown action %r", raw_action)
                continue
            if isinstance(raw_keys, str):
                raw_keys = [raw_keys]
            if not isinstance(raw_keys, list):
                continue
            for key in [key for key, bound in keymap.items() if bound == action]:
                del keymap[key]
            for key in raw_keys:
                if isinstance(key, str) and key:
                    keymap[key] = action
    return bindings


def keymap_for_mode(bindings: Mapping[Mode, Keymap], mode: Mode) -> Keymap:
    """Return the keymap of ``mode`` or raise ``MissingKeymapError``."""
    keymap = bindings.get(mode)
    if keymap is None:
        raise MissingKeymapError(f"No keybindings found for mode {mode.value!r}")
    return keymap


def format_key(token: str) -> str:
    """Return a human-readable name for a decoded key token."""
    display = KEY_DISPLAY_NAMES.get(token)
    if display is not None:
        return display
    if token.startswith("CTRL_") and len(token) > len("CTRL_"):
        return f"Ctrl-{token[len('CTRL_'):].lower()}"
    if token.startswith("ALT_") and len(token) > len("ALT_"):
        return f"Alt-{token[len('ALT_'):].lower()}"
    return token


def keys_for_action(keymap: Mapping[str, Action], action: Action) -> list[str]:
    """Return display names of every key bound to ``action``, in keymap order."""
    return [format_key(key) for key, bound in keymap.items() if bound == action]


def is_input_action(action: Action) -> bool:
    return action in INPUT_ACTIONS
