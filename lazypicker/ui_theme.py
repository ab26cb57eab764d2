"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes (results, input bar, help). Syntax
highlighting style for previews remains a separate setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    divider: str
    reset: str
    input_prompt: str
    input_text: str
    input_cursor: str
    counter: str
    spinner: str
    result_name: str
    result_selected: str
    result_pointer: str
    channel_name: str
    preview_title: str
    preview_empty: str
    help_heading: str
    help_action: str
    help_key: str


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reset="\033[0m",
    input_prompt="\033[1;38;5;81m",
    input_text="\033[38;5;252m",
    input_cursor="\033[7m",
    counter="\033[2;38;5;250m",
    spinner="\033[38;5;214m",
    result_name="\033[38;5;252m",
    result_selected="\033[1;48;5;236;38;5;229m",
    result_pointer="\033[1;38;5;81m",
    channel_name="\033[1;38;5;110m",
    preview_title="\033[1;38;5;45m",
    preview_empty="\033[2;38;5;250m",
    help_heading="\033[1;38;5;81m",
    help_action="\033[90m",
    help_key="\033[93m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    divider="\033[2;38;5;31m",
    reset="\033[0m",
    input_prompt="\033[1;38;5;45m",
    input_text="\033[38;5;153m",
    input_cursor="\033[7m",
    counter="\033[2;38;5;110m",
    spinner="\033[38;5;215m",
    result_name="\033[38;5;252m",
    result_selected="\033[1;48;5;24;38;5;153m",
    result_pointer="\033[1;38;5;39m",
    channel_name="\033[1;38;5;117m",
    preview_title="\033[1;38;5;39m",
    preview_empty="\033[2;38;5;110m",
    help_heading="\033[1;38;5;45m",
    help_action="\033[2;38;5;110m",
    help_key="\033[38;5;153m",
)

# Selected rows keep a reverse-video marker so the highlight survives --no-color.
PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reset="\033[0m",
    input_prompt="",
    input_text="",
    input_cursor="\033[7m",
    counter="",
    spinner="",
    result_name="",
    result_selected="\033[7m",
    result_pointer="",
    channel_name="",
    preview_title="",
    preview_empty="",
    help_heading="",
    help_action="",
    help_key="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    return tuple(_THEMES)


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
