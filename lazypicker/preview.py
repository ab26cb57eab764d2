"""Preview content for the selected entry.

File entries are read from disk and highlighted with Pygments; other entries
preview their value or name as plain text. Terminal control bytes are
escaped so previews cannot move the cursor or ring the bell.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import TextLexer, guess_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .channels import Entry

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "monokai"
MAX_PREVIEW_BYTES = 512 * 1024
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_FORMATTERS: dict[str, Terminal256Formatter] = {}
_PREVIEW_CACHE: dict[tuple[Entry, str, bool], Preview] = {}
_PREVIEW_CACHE_LIMIT = 64


@dataclass(frozen=True)
class Preview:
    title: str
    lines: tuple[str, ...]
    is_placeholder: bool = False


def read_text(path: Path) -> str:
    """Read ``path`` as UTF-8, falling back to latin-1 for legacy encodings.

    Only the first ``MAX_PREVIEW_BYTES`` are decoded. A multi-byte character
    split by that cut is dropped instead of forcing the latin-1 fallback.
    """
    raw = path.read_bytes()
    data = raw[:MAX_PREVIEW_BYTES]
    truncated = len(raw) > len(data)
    for encoding in ("utf-8", "utf-8-sig"):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError as exc:
            if not truncated or exc.start < len(data) - 3:
                continue
            try:
                return data[: exc.start].decode(encoding)
            except UnicodeDecodeError:
                continue
    return data.decode("latin-1")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", source)


def _formatter_for_style(style: str) -> Terminal256Formatter:
    formatter = _FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    try:
        get_style_by_name(style)
        formatter = Terminal256Formatter(style=style)
    except ClassNotFound:
        logger.debug("unknown pygments style %r, using %s", style, DEFAULT_STYLE)
        formatter = Terminal256Formatter(style=DEFAULT_STYLE)
    _FORMATTERS[style] = formatter
    return formatter


def highlight_source(source: str, path: Path, style: str = DEFAULT_STYLE) -> str:
    """Return ``source`` with ANSI colors for the language guessed from ``path``."""
    try:
        lexer = guess_lexer_for_filename(path.name, source)
    except ClassNotFound:
        lexer = TextLexer()
    return highlight(source, lexer, _formatter_for_style(style))


def _file_preview(path: Path, style: str, no_color: bool) -> Preview:
    title = path.name
    if path.is_dir():
        return Preview(title, ("(directory)",), is_placeholder=True)
    try:
        raw = read_text(path)
    except OSError as exc:
        logger.debug("cannot preview %s: %s", path, exc)
        return Preview(title, (f"(unreadable: {exc.strerror or exc})",), is_placeholder=True)
    if "\x00" in raw[:8192]:
        return Preview(title, ("(binary file)",), is_placeholder=True)
    source = sanitize_terminal_text(raw)
    if not source:
        return Preview(title, ("(empty file)",), is_placeholder=True)
    text = source if no_color else highlight_source(source, path, style)
    return Preview(title, tuple(text.expandtabs(4).splitlines()))


def _preview_path(entry: Entry) -> Path | None:
    if entry.path is not None:
        return entry.path
    candidate = Path(entry.name)
    try:
        return candidate if candidate.is_file() else None
    except OSError:
        return None


def build_preview(entry: Entry, style: str = DEFAULT_STYLE, no_color: bool = False) -> Preview:
    """Return the (cached) preview for ``entry``."""
    key = (entry, style, no_color)
    cached = _PREVIEW_CACHE.get(key)
    if cached is not None:
        return cached

    path = _preview_path(entry) if entry.value is None else None
    if path is not None:
        preview = _file_preview(path, style, no_color)
    elif entry.value is not None:
        preview = Preview(entry.name, tuple(sanitize_terminal_text(entry.value).splitlines() or ("",)))
    else:
        preview = Preview(entry.name, (sanitize_terminal_text(entry.name),))

    if len(_PREVIEW_CACHE) >= _PREVIEW_CACHE_LIMIT:
        _PREVIEW_CACHE.pop(next(iter(_PREVIEW_CACHE)))
    _PREVIEW_CACHE[key] = preview
    return preview


def clear_preview_cache() -> None:
    _PREVIEW_CACHE.clear()
