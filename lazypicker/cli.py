"""Command-line front door for lazypicker.

Parses CLI options, merges them over the persisted settings, and builds the
starting channel. Then runs the interactive picker on the controlling tty
and prints the chosen entry to stdout.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import TextIO

from .app import PickerApp
from .channels import ChannelOptions, UnknownChannelError, cli_channel_names, default_channel_name, to_channel
from .config import Settings, load_last_channel, load_settings
from .keys import KeyReader
from .logs import configure_logging
from .terminal import TerminalController, open_tty
from .ui_theme import available_theme_names

logger = logging.getLogger(__name__)

STDIN_CHANNEL = "stdin"
EXIT_NO_SELECTION = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazypicker",
        description="Fuzzy-pick an entry from a channel (files, env, or piped lines).",
    )
    parser.add_argument(
        "channel",
        nargs="?",
        default=None,
        help=f"Channel to open ({', '.join(cli_channel_names())}). Defaults to the last used channel.",
    )
    parser.add_argument("--list-channels", action="store_true", help="Print available channels and exit.")
    parser.add_argument("--root", type=Path, default=None, help="Root directory for the files channel.")
    parser.add_argument("--hidden", action="store_true", help="Include hidden files.")
    parser.add_argument("--input-bottom", action="store_true", help="Put the input bar below the results.")
    parser.add_argument("--no-preview", action="store_true", help="Hide the preview pane.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--style", default=None, help="Pygments style name for previews.")
    parser.add_argument("--no-color", action="store_true", help="Disable colors.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write logs to this file.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return parser


def apply_cli_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Return ``settings`` with explicit command-line flags applied on top."""
    updates: dict[str, object] = {}
    if args.theme is not None:
        updates["theme"] = args.theme
    if args.style is not None:
        updates["style"] = args.style
    if args.no_color:
        updates["no_color"] = True
    if args.input_bottom:
        updates["input_bar_position"] = "bottom"
    if args.no_preview:
        updates["show_preview"] = False
    if args.hidden:
        updates["show_hidden"] = True
    return replace(settings, **updates)


def resolve_channel_name(requested: str | None, stdin_piped: bool) -> tuple[str, bool]:
    """Pick the channel to open; return ``(name, is_internal)``.

    Piped input wins when no channel is named. Otherwise the last used
    channel is reused when it is still registered.
    """
    if requested is not None:
        return requested, False
    if stdin_piped:
        return STDIN_CHANNEL, True
    last = load_last_channel()
    if last in cli_channel_names():
        return last, False
    return default_channel_name(), False


def main(argv: list[str] | None = None, stdin: TextIO | None = None) -> None:
    """Parse CLI arguments and run the picker.

    ``stdin`` exists for tests; by default piped ``sys.stdin`` feeds the
    stdin channel while keys are read from ``/dev/tty``.
    """
    args = build_parser().parse_args(argv)
    log_path = configure_logging(args.log_file, debug=args.debug)
    if log_path is not None:
        logger.info("logging to %s", log_path)

    if args.list_channels:
        sys.stdout.write("\n".join(cli_channel_names()) + "\n")
        return

    stream = stdin if stdin is not None else sys.stdin
    stdin_piped = stream is not None and not stream.isatty()
    settings = apply_cli_overrides(load_settings(), args)
    options = ChannelOptions(
        root=(args.root or Path.cwd()).resolve(),
        show_hidden=settings.show_hidden,
        stream=stream if stdin_piped else None,
    )
    name, internal = resolve_channel_name(args.channel, stdin_piped)
    logger.debug("opening channel %s", name)
    try:
        channel = to_channel(name, options, allow_excluded=internal)
    except UnknownChannelError as exc:
        raise SystemExit(f"lazypicker: {exc}") from exc

    app = PickerApp(channel, settings, options, label=name)
    try:
        with open_tty() as tty_fd:
            outcome = app.run(TerminalController(tty_fd), KeyReader(tty_fd))
    except OSError as exc:
        app.shutdown()
        raise SystemExit(f"lazypicker: cannot open terminal: {exc}") from exc

    if outcome.entry is None:
        raise SystemExit(EXIT_NO_SELECTION)
    sys.stdout.write(outcome.entry.name + "\n")


if __name__ == "__main__":
    main()
