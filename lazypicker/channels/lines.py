"""Channels over plain text lines: piped stdin and fixed entry lists."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TextIO

from .base import ChannelOptions, Entry, MatcherChannel
from .registry import channel


@channel(exclude_from_cli=True)
class StdinChannel(MatcherChannel):
    """Lines read from a text stream in the background; blank lines are skipped."""

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream
        super().__init__()
        self.start_loader()

    @classmethod
    def from_options(cls, options: ChannelOptions) -> StdinChannel:
        if options.stream is None:
            raise ValueError("stdin channel requires an input stream")
        return cls(options.stream)

    def load(self) -> Iterator[Entry]:
        for raw in self.stream:
            line = raw.rstrip("\r\n")
            if line.strip():
                yield Entry(name=line)


@channel(exclude_from_cli=True)
class LinesChannel(MatcherChannel):
    """Fixed list of entries, used as a target for sending results on."""

    accepts_entries = True

    @classmethod
    def from_options(cls, options: ChannelOptions) -> LinesChannel:
        return cls.from_entries(options.entries)

    @classmethod
    def from_entries(cls, entries: Iterable[Entry]) -> LinesChannel:
        return cls(Entry(name=entry.name, value=entry.value, path=entry.path) for entry in entries)


@channel(exclude_from_cli=True)
class ChannelsChannel(MatcherChannel):
    """Channel names listed while switching channels."""

    @classmethod
    def from_options(cls, options: ChannelOptions) -> ChannelsChannel:
        return cls(Entry(name=name) for name in options.names)
