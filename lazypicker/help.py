"""Help table built from the active keymap.

Rows pair an action-group label with the keys bound to it in the current
mode. Building is presentation-free; ``render_help_table`` applies a theme.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from .actions import Action, Mode
from .ansi import fit_ansi_line
from .keymap import Keybindings, Keymap, keymap_for_mode, keys_for_action
from .ui_theme import UITheme

NO_KEYBINDINGS = "No keybindings"
HELP_TITLE = "Keybindings"


@dataclass(frozen=True)
class HelpCell:
    """One table cell; ``style`` is ``"action"``, ``"key"`` or ``""``."""

    text: str
    style: str = ""


HelpRow = tuple[HelpCell, ...]


def build_cells_for_key_groups(group_name: str, key_groups: Sequence[Sequence[str]]) -> HelpRow:
    """Build the label and key cells for one help row.

    Each inner sequence holds the alternate keys of one action. Keys within a
    group are joined with ``", "`` and groups with ``" / "``; empty groups are
    skipped. A row without any key gets a plain ``No keybindings`` cell.
    """
    non_empty_groups = [keys for keys in key_groups if keys]
    if not non_empty_groups:
        return (HelpCell(group_name), HelpCell(NO_KEYBINDINGS))
    return (
        HelpCell(f"{group_name}: ", "action"),
        HelpCell(" / ".join(", ".join(keys) for keys in non_empty_groups), "key"),
    )


def _row(keymap: Keymap, group_name: str, *actions: Action) -> HelpRow:
    return build_cells_for_key_groups(group_name, [keys_for_action(keymap, action) for action in actions])


def build_help_table_for_channel(keymap: Keymap) -> list[HelpRow]:
    return [
        _row(keymap, "↕ Results navigation", Action.SELECT_PREV_ENTRY, Action.SELECT_NEXT_ENTRY),
        _row(
            keymap,
            "↕ Preview navigation",
            Action.SCROLL_PREVIEW_HALF_PAGE_UP,
            Action.SCROLL_PREVIEW_HALF_PAGE_DOWN,
        ),
        _row(keymap, "✓ Select entry", Action.SELECT_ENTRY),
        _row(keymap, "⇉ Send results to", Action.SEND_TO_CHANNEL),
        _row(keymap, "⨀ Switch channels", Action.TOGGLE_CHANNEL_SELECTION),
        _row(keymap, "⏼ Quit", Action.QUIT),
    ]


def build_help_table_for_channel_selection(keymap: Keymap) -> list[HelpRow]:
    return [
        _row(keymap, "↕ Results", Action.SELECT_PREV_ENTRY, Action.SELECT_NEXT_ENTRY),
        _row(keymap, "Select entry", Action.SELECT_ENTRY),
        _row(keymap, "Switch channels", Action.TOGGLE_CHANNEL_SELECTION),
        _row(keymap, "Quit", Action.QUIT),
    ]


def build_help_table(mode: Mode, bindings: Mapping[Mode, Keymap] | Keybindings) -> list[HelpRow]:
    """Return help rows for ``mode``.

    Raises ``MissingKeymapError`` when ``bindings`` has no keymap for ``mode``.
    """
    keymap = keymap_for_mode(bindings, mode)
    if mode is Mode.GUIDE:
        return build_help_table_for_channel_selection(keymap)
    return build_help_table_for_channel(keymap)


def _style_cell(cell: HelpCell, theme: UITheme) -> str:
    if cell.style == "action":
        color = theme.help_action
    elif cell.style == "key":
        color = theme.help_key
    else:
        color = ""
    if not color:
        return cell.text
    return f"{color}{cell.text}{theme.reset}"


def render_help_table(rows: Sequence[HelpRow], width: int, theme: UITheme) -> list[str]:
    """Lay rows out as two columns filling 1/3 and 2/3 of ``width``.

    The first line is a styled heading; every line is padded to ``width``.
    """
    if width <= 0:
        return []
    label_width = max(1, width // 3)
    keys_width = max(0, width - label_width)
    heading = f"{theme.help_heading}{HELP_TITLE}{theme.reset}" if theme.help_heading else HELP_TITLE
    lines = [fit_ansi_line(heading, width)]
    for row in rows:
        label = _style_cell(row[0], theme) if row else ""
        keys = _style_cell(row[1], theme) if len(row) > 1 else ""
        lines.append(fit_ansi_line(label, label_width) + fit_ansi_line(keys, keys_width))
    return lines
