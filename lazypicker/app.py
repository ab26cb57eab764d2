"""Interactive picker application.

Owns the active channel, the results and guide pickers, and the UI toggles.
Keys are mapped to actions through the current mode's keymap; every action
mutates state and marks the frame dirty so the loop repaints it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace

from .actions import Action, Mode
from .channels import (
    Channel,
    ChannelOptions,
    Entry,
    cli_channel_names,
    to_channel,
    transition_targets,
)
from .config import Settings, save_last_channel
from .help import build_help_table, render_help_table
from .keymap import is_input_action, keymap_for_mode
from .keys import KeyReader
from .picker import Picker
from .preview import Preview, build_preview
from .render import RenderContext, ViewportGeometry, compute_geometry, paint, render_frame
from .terminal import TerminalController
from .ui_theme import resolve_theme

logger = logging.getLogger(__name__)

FRAME_TIMEOUT_MS = 80
GUIDE_CHANNEL = "channels"


@dataclass(frozen=True)
class Outcome:
    """Result of a picker session; ``entry`` is ``None`` when the user quit."""

    entry: Entry | None


class PickerApp:
    """Picker UI state machine driven by key tokens."""

    def __init__(
        self,
        channel: Channel,
        settings: Settings,
        options: ChannelOptions | None = None,
        *,
        label: str | None = None,
        remember_channel: Callable[[str], None] = save_last_channel,
    ) -> None:
        self.settings = settings
        self.options = options if options is not None else ChannelOptions()
        self.theme = resolve_theme(settings.theme, no_color=settings.no_color)
        self.remember_channel = remember_channel
        self.mode = Mode.CHANNEL
        self.channel = channel
        self.label = label or channel.name
        self.results_picker = Picker()
        self.guide_picker = Picker()
        if settings.results_inverted:
            self.results_picker = self.results_picker.inverted()
            self.guide_picker = self.guide_picker.inverted()
        self.guide_channel: Channel | None = None
        self.show_help = False
        self.show_preview = settings.show_preview
        self.preview_scroll = 0
        self.columns = 80
        self.rows = 24
        self.spinner_frame = 0
        self.outcome: Outcome | None = None
        self.dirty = True
        self.channel.find("")

    @property
    def active_picker(self) -> Picker:
        return self.results_picker if self.mode is Mode.CHANNEL else self.guide_picker

    @property
    def active_channel(self) -> Channel:
        if self.mode is Mode.CHANNEL or self.guide_channel is None:
            return self.channel
        return self.guide_channel

    @property
    def active_label(self) -> str:
        if self.mode is Mode.GUIDE:
            return "channels"
        if self.mode is Mode.SEND_TO_CHANNEL:
            return "send to"
        return self.label

    def resize(self, columns: int, rows: int) -> None:
        if (columns, rows) != (self.columns, self.rows):
            self.columns = columns
            self.rows = rows
            self.dirty = True
            self.clamp_to_viewport()

    def help_lines(self) -> list[str]:
        if not self.show_help:
            return []
        rows = build_help_table(self.mode, self.settings.keybindings)
        return render_help_table(rows, self.columns, self.theme)

    def geometry(self) -> ViewportGeometry:
        return compute_geometry(
            self.columns,
            self.rows,
            show_preview=self.show_preview and self.mode is Mode.CHANNEL,
            help_lines=len(self.help_lines()),
        )

    def selected_entry(self) -> Entry | None:
        index = self.results_picker.selected()
        if index is None:
            return None
        return self.channel.get_result(index)

    def current_preview(self) -> Preview | None:
        if not self.show_preview or self.mode is not Mode.CHANNEL:
            return None
        entry = self.selected_entry()
        if entry is None:
            return None
        return build_preview(entry, self.settings.style, self.settings.no_color)

    def sync_selection(self) -> None:
        """Keep each picker's selection valid for its channel's current count."""
        pairs = [(self.results_picker, self.channel)]
        if self.guide_channel is not None:
            pairs.append((self.guide_picker, self.guide_channel))
        for picker, channel in pairs:
            count = channel.result_count()
            selected = picker.selected()
            if count > 0 and (selected is None or selected >= count):
                picker.reset_selection()
                self.dirty = True
        self.clamp_to_viewport()

    def clamp_to_viewport(self) -> None:
        """Cap relative cursors at the current viewport height.

        Called whenever the results area may have shrunk (resize, help panel)
        so the window derived from both cursors still contains the selection.
        """
        height = self.geometry().height
        for picker in (self.results_picker, self.guide_picker):
            relative = picker.relative_selected()
            if relative is not None and relative > height:
                picker.relative_select(height)
                self.dirty = True

    def tick(self) -> None:
        """Pull streamed results into the channels and advance the spinner."""
        if self.channel.refresh():
            self.dirty = True
        if self.guide_channel is not None and self.guide_channel.refresh():
            self.dirty = True
        if self.channel.running():
            self.spinner_frame += 1
            self.dirty = True
        self.sync_selection()

    def frame(self) -> list[str]:
        return render_frame(
            RenderContext(
                geometry=self.geometry(),
                theme=self.theme,
                picker=self.active_picker,
                channel=self.active_channel,
                label=self.active_label,
                preview=self.current_preview(),
                preview_scroll=self.preview_scroll,
                help_lines=self.help_lines(),
                spinner_frame=self.spinner_frame,
                channel_names=self.mode is not Mode.CHANNEL,
            )
        )

    def handle_key(self, key: str) -> bool:
        """Apply one key token; return whether it was handled."""
        keymap = keymap_for_mode(self.settings.keybindings, self.mode)
        action = keymap.get(key)
        if action is not None:
            self.handle_action(action)
            return True
        if len(key) == 1 and key.isprintable():
            self.active_picker.input.insert(key)
            self._query_changed()
            return True
        return False

    def handle_action(self, action: Action) -> None:
        self.dirty = True
        if is_input_action(action):
            self._edit_input(action)
            return
        picker = self.active_picker
        if action is Action.SELECT_NEXT_ENTRY:
            picker.select_next(self.active_channel.result_count(), self.geometry().height)
            self.preview_scroll = 0
        elif action is Action.SELECT_PREV_ENTRY:
            picker.select_prev(self.active_channel.result_count(), self.geometry().height)
            self.preview_scroll = 0
        elif action is Action.SCROLL_PREVIEW_HALF_PAGE_DOWN:
            self._scroll_preview(1)
        elif action is Action.SCROLL_PREVIEW_HALF_PAGE_UP:
            self._scroll_preview(-1)
        elif action is Action.SELECT_ENTRY:
            self._select_entry()
        elif action is Action.SEND_TO_CHANNEL:
            if self.mode is Mode.SEND_TO_CHANNEL:
                self.mode = Mode.CHANNEL
            elif self.mode is Mode.CHANNEL and self.channel.result_count() > 0:
                self._open_guide(Mode.SEND_TO_CHANNEL, transition_targets())
        elif action is Action.TOGGLE_CHANNEL_SELECTION:
            if self.mode is Mode.CHANNEL:
                self._open_guide(Mode.GUIDE, cli_channel_names())
            else:
                self.mode = Mode.CHANNEL
        elif action is Action.TOGGLE_HELP:
            self.show_help = not self.show_help
            self.clamp_to_viewport()
        elif action is Action.TOGGLE_PREVIEW:
            self.show_preview = not self.show_preview
        elif action is Action.QUIT:
            self.outcome = Outcome(None)

    def _edit_input(self, action: Action) -> None:
        field = self.active_picker.input
        changed = False
        if action is Action.DELETE_PREV_CHAR:
            changed = field.delete_prev_char()
        elif action is Action.DELETE_NEXT_CHAR:
            changed = field.delete_next_char()
        elif action is Action.GO_TO_PREV_CHAR:
            field.go_to_prev_char()
        elif action is Action.GO_TO_NEXT_CHAR:
            field.go_to_next_char()
        elif action is Action.GO_TO_INPUT_START:
            field.go_to_start()
        elif action is Action.GO_TO_INPUT_END:
            field.go_to_end()
        elif action is Action.CLEAR_INPUT:
            changed = bool(field.value)
            field.reset()
        if changed:
            self._query_changed()

    def _query_changed(self) -> None:
        picker = self.active_picker
        self.active_channel.find(picker.input.value)
        picker.reset_selection()
        self.preview_scroll = 0
        self.dirty = True

    def _scroll_preview(self, direction: int) -> None:
        preview = self.current_preview()
        if preview is None:
            return
        step = max(1, self.geometry().results_rows // 2)
        max_scroll = max(0, len(preview.lines) - 1)
        self.preview_scroll = max(0, min(max_scroll, self.preview_scroll + direction * step))

    def _open_guide(self, mode: Mode, names: tuple[str, ...]) -> None:
        if self.guide_channel is not None:
            self.guide_channel.shutdown()
        self.guide_channel = to_channel(GUIDE_CHANNEL, ChannelOptions(names=names), allow_excluded=True)
        self.guide_picker.reset_input()
        self.guide_picker.reset_selection()
        self.mode = mode

    def _guide_choice(self) -> str | None:
        if self.guide_channel is None:
            return None
        index = self.guide_picker.selected()
        entry = self.guide_channel.get_result(index) if index is not None else None
        return entry.name if entry is not None else None

    def _select_entry(self) -> None:
        if self.mode is Mode.CHANNEL:
            entry = self.selected_entry()
            if entry is not None:
                self.outcome = Outcome(entry)
            return
        choice = self._guide_choice()
        if choice is None:
            return
        if self.mode is Mode.GUIDE:
            self._replace_channel(to_channel(choice, self.options), choice)
            self.remember_channel(choice)
        else:
            entries = tuple(self.channel.all_results())
            options = replace(self.options, entries=entries)
            self._replace_channel(to_channel(choice, options, allow_excluded=True), choice)

    def _replace_channel(self, channel: Channel, label: str) -> None:
        logger.debug("switching channel %s -> %s", self.label, label)
        self.channel.shutdown()
        self.channel = channel
        self.label = label
        self.mode = Mode.CHANNEL
        self.results_picker.reset_input()
        self.results_picker.reset_selection()
        self.preview_scroll = 0
        self.channel.find("")

    def shutdown(self) -> None:
        self.channel.shutdown()
        if self.guide_channel is not None:
            self.guide_channel.shutdown()

    def run(self, terminal: TerminalController, reader: KeyReader) -> Outcome:
        """Drive the event loop until an entry is selected or the user quits."""
        try:
            with terminal.raw_mode():
                while self.outcome is None:
                    self.resize(*terminal.size())
                    self.tick()
                    if self.dirty:
                        paint(self.frame(), terminal.write)
                        self.dirty = False
                    key = reader.read_key(timeout_ms=FRAME_TIMEOUT_MS)
                    if key:
                        self.handle_key(key)
        finally:
            self.shutdown()
        return self.outcome
