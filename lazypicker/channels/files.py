"""Project file channel fed by a background directory walk."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from .base import ChannelOptions, Entry, MatcherChannel
from .registry import channel


def to_project_relative(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def walk_project_files(root: Path, show_hidden: bool) -> Iterator[Path]:
    """Yield files below ``root`` in case-insensitive walk order.

    Hidden directories are pruned and hidden files skipped unless
    ``show_hidden`` is set.
    """
    for dirpath, dirnames, filenames in os.walk(root):
        base = Path(dirpath)
        if not show_hidden:
            dirnames[:] = [name for name in dirnames if not name.startswith(".")]
            filenames = [name for name in filenames if not name.startswith(".")]
        dirnames.sort(key=str.lower)
        filenames.sort(key=str.lower)
        for filename in filenames:
            path = base / filename
            if path.is_file():
                yield path


@channel()
class FilesChannel(MatcherChannel):
    """Files below a root directory, streamed in while the walk runs."""

    accepts_entries = True

    def __init__(
        self,
        root: Path,
        show_hidden: bool = False,
        entries: Iterable[Entry] | None = None,
    ) -> None:
        self.root = root.resolve()
        self.show_hidden = show_hidden
        super().__init__(entries or ())
        if entries is None:
            self.start_loader()

    @classmethod
    def from_options(cls, options: ChannelOptions) -> FilesChannel:
        if options.entries:
            return cls.from_entries(options.entries, options.root)
        return cls(options.root, show_hidden=options.show_hidden)

    @classmethod
    def from_entries(cls, entries: Iterable[Entry], root: Path) -> FilesChannel:
        """Build a channel restricted to entries that name existing files."""
        resolved_root = root.resolve()
        files: list[Entry] = []
        for entry in entries:
            path = entry.path if entry.path is not None else resolved_root / entry.name
            if path.is_file():
                files.append(Entry(name=to_project_relative(path, resolved_root), path=path))
        return cls(resolved_root, entries=files)

    def load(self) -> Iterator[Entry]:
        for path in walk_project_files(self.root, self.show_hidden):
            yield Entry(name=to_project_relative(path, self.root), path=path)
