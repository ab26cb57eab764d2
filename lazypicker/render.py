"""Frame composition for the picker screen.

Builds the input bar, the results window, the preview pane and the optional
help panel as a list of fixed-width ANSI lines. Rendering is side-effect
free; ``paint`` is the only function that writes to the terminal.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from .ansi import RESET, fit_ansi_line
from .channels import Channel, Entry
from .input_field import InputField
from .picker import Picker
from .preview import Preview
from .ui_theme import UITheme

SPINNER_FRAMES = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"
POINTER = "> "
DIVIDER = "│"
MIN_ROWS_FOR_HELP = 8


@dataclass(frozen=True)
class ViewportGeometry:
    """Screen split derived from terminal size and visible panels."""

    columns: int
    rows: int
    help_rows: int
    results_width: int
    preview_width: int

    @property
    def results_rows(self) -> int:
        return max(1, self.rows - 1 - self.help_rows)

    @property
    def height(self) -> int:
        """Rows below the first results row, as passed to picker navigation."""
        return self.results_rows - 1


def compute_geometry(columns: int, rows: int, *, show_preview: bool, help_lines: int = 0) -> ViewportGeometry:
    """Split a ``columns`` x ``rows`` terminal between results, preview and help."""
    columns = max(1, columns)
    rows = max(2, rows)
    help_rows = 0
    if help_lines > 0 and rows >= MIN_ROWS_FOR_HELP:
        help_rows = min(help_lines, rows // 2)
    if show_preview and columns >= 20:
        results_width = columns // 2
        preview_width = columns - results_width - len(DIVIDER)
    else:
        results_width = columns
        preview_width = 0
    return ViewportGeometry(columns, rows, help_rows, results_width, preview_width)


@dataclass(frozen=True)
class RenderContext:
    """Everything needed to draw one frame."""

    geometry: ViewportGeometry
    theme: UITheme
    picker: Picker
    channel: Channel
    label: str
    preview: Preview | None = None
    preview_scroll: int = 0
    help_lines: Sequence[str] = ()
    spinner_frame: int = 0
    channel_names: bool = False


def highlighted_row(picker: Picker) -> int | None:
    """Row of the results window holding the selected entry.

    The relative cursor may point past the selection when the list is shorter
    than the viewport, so the row never exceeds the selection itself.
    """
    selected = picker.selected()
    if selected is None:
        return None
    return min(picker.relative_selected() or 0, selected)


def render_input_bar(
    field: InputField,
    label: str,
    counter: str,
    width: int,
    theme: UITheme,
) -> str:
    """Return the query line with prompt, visible query slice, cursor and counter."""
    prompt = f"{label} > "
    counter_text = f" {counter}"
    field_width = max(1, width - len(prompt) - len(counter_text))
    scroll = field.visual_scroll(field_width)
    visible = field.value[scroll : scroll + field_width]
    cursor_col = field.cursor - scroll
    before = visible[:cursor_col]
    under = visible[cursor_col : cursor_col + 1] or " "
    after = visible[cursor_col + 1 :]
    query = (
        f"{theme.input_text}{before}{theme.reset}"
        f"{theme.input_cursor}{under}{theme.reset}"
        f"{theme.input_text}{after}{theme.reset}"
    )
    left = fit_ansi_line(f"{theme.input_prompt}{prompt}{theme.reset}{query}", width - len(counter_text))
    return fit_ansi_line(left + f"{theme.counter}{counter_text}{theme.reset}", width)


def render_results(
    picker: Picker,
    channel: Channel,
    rows: int,
    width: int,
    theme: UITheme,
    *,
    channel_names: bool = False,
) -> list[str]:
    """Return ``rows`` lines showing the window ``[offset, offset + rows)``.

    Inverted pickers draw the window bottom-to-top so the first entry sits on
    the last row. ``channel_names`` styles entries as channel names (guide and
    send-to lists).
    """
    entries: list[Entry] = channel.results(rows, picker.offset())
    selected_row = highlighted_row(picker)
    name_style = theme.channel_name if channel_names else theme.result_name
    pointer = POINTER
    if theme.result_pointer:
        pointer = f"{theme.result_pointer}{POINTER}{theme.reset}{theme.result_selected}"
    lines: list[str] = []
    for row_idx, entry in enumerate(entries):
        if row_idx == selected_row:
            text = f"{theme.result_selected}{pointer}{entry.name}" + " " * width
        else:
            text = f"  {name_style}{entry.name}{theme.reset}"
        lines.append(fit_ansi_line(text, width))
    blank = " " * width
    lines.extend(blank for _ in range(rows - len(lines)))
    if picker.is_inverted:
        lines.reverse()
    return lines


def render_preview(preview: Preview | None, scroll: int, rows: int, width: int, theme: UITheme) -> list[str]:
    """Return ``rows`` preview lines: a title row, then content from ``scroll``."""
    if width <= 0:
        return ["" for _ in range(rows)]
    if preview is None:
        return [" " * width for _ in range(rows)]
    lines = [fit_ansi_line(f"{theme.preview_title}{preview.title}{theme.reset}", width)]
    body_style = theme.preview_empty if preview.is_placeholder else ""
    start = max(0, min(scroll, max(0, len(preview.lines) - 1)))
    for text in preview.lines[start : start + max(0, rows - 1)]:
        lines.append(fit_ansi_line(f"{body_style}{text}{RESET}" if body_style else text, width))
    lines.extend(" " * width for _ in range(rows - len(lines)))
    return lines


def result_counter(channel: Channel, spinner_frame: int, theme: UITheme) -> str:
    counter = f"{channel.result_count()}/{channel.total_count()}"
    if channel.running():
        spinner = SPINNER_FRAMES[spinner_frame % len(SPINNER_FRAMES)]
        return f"{theme.spinner}{spinner}{theme.reset}{theme.counter} {counter}"
    return counter


def render_frame(context: RenderContext) -> list[str]:
    """Return exactly ``geometry.rows`` lines for one frame."""
    geometry = context.geometry
    theme = context.theme
    input_bar = render_input_bar(
        context.picker.input,
        context.label,
        result_counter(context.channel, context.spinner_frame, theme),
        geometry.columns,
        theme,
    )
    results = render_results(
        context.picker,
        context.channel,
        geometry.results_rows,
        geometry.results_width,
        theme,
        channel_names=context.channel_names,
    )
    if geometry.preview_width > 0:
        preview = render_preview(
            context.preview,
            context.preview_scroll,
            geometry.results_rows,
            geometry.preview_width,
            theme,
        )
        divider = f"{theme.divider}{DIVIDER}{theme.reset}" if theme.divider else DIVIDER
        body = [left + divider + right for left, right in zip(results, preview)]
    else:
        body = results

    if context.picker.is_inverted:
        lines = body + [input_bar]
    else:
        lines = [input_bar] + body

    help_lines = list(context.help_lines)[: geometry.help_rows]
    help_lines.extend(" " * geometry.columns for _ in range(geometry.help_rows - len(help_lines)))
    return lines + [fit_ansi_line(line, geometry.columns) for line in help_lines]


def paint(lines: Sequence[str], write: Callable[[str], None]) -> None:
    """Draw ``lines`` from the top-left corner in a single write."""
    out = [f"\033[{row + 1};1H{line}{RESET}" for row, line in enumerate(lines)]
    write("".join(out))
