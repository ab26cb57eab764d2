"""Persistent JSON config helpers.

Stores UI preferences, the last used channel, and keybinding overrides.
All access is lenient: malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir

from .keymap import Keybindings, apply_overrides, default_keybindings
from .preview import DEFAULT_STYLE

logger = logging.getLogger(__name__)

APP_NAME = "lazypicker"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
INPUT_BAR_POSITIONS = ("top", "bottom")


@dataclass
class Settings:
    """Effective UI settings after config and CLI flags are merged."""

    theme: str | None = None
    style: str = DEFAULT_STYLE
    no_color: bool = False
    input_bar_position: str = "top"
    show_preview: bool = True
    show_hidden: bool = False
    keybindings: Keybindings = field(default_factory=default_keybindings)

    @property
    def results_inverted(self) -> bool:
        """Results render bottom-to-top when the input bar sits below them."""
        return self.input_bar_position == "bottom"


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.debug("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored so a read-only config
    directory never breaks the picker.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.debug("cannot write config %s: %s", CONFIG_PATH, exc)


def _load_string(data: dict[str, object], key: str) -> str | None:
    value = data.get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _load_bool(data: dict[str, object], key: str, default: bool) -> bool:
    value = data.get(key)
    return value if isinstance(value, bool) else default


def load_input_bar_position(data: dict[str, object] | None = None) -> str:
    """Return ``"top"`` or ``"bottom"``; anything else falls back to ``"top"``."""
    value = _load_string(load_config() if data is None else data, "input_bar_position")
    if value is None or value.lower() not in INPUT_BAR_POSITIONS:
        return "top"
    return value.lower()


def load_last_channel() -> str | None:
    return _load_string(load_config(), "last_channel")


def save_last_channel(name: str) -> None:
    stripped = str(name).strip()
    if not stripped:
        return
    config = load_config()
    config["last_channel"] = stripped
    save_config(config)


def load_keybindings(data: dict[str, object] | None = None) -> Keybindings:
    """Return default keybindings merged with the config's ``keybindings`` object."""
    config = load_config() if data is None else data
    return apply_overrides(default_keybindings(), config.get("keybindings"))


def load_settings() -> Settings:
    """Read every UI setting from one config snapshot."""
    data = load_config()
    return Settings(
        theme=_load_string(data, "theme"),
        style=_load_string(data, "style") or DEFAULT_STYLE,
        input_bar_position=load_input_bar_position(data),
        show_preview=_load_bool(data, "show_preview", True),
        show_hidden=_load_bool(data, "show_hidden", False),
        keybindings=load_keybindings(data),
    )
