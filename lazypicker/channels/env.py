"""Environment variable channel."""

from __future__ import annotations

import os
from collections.abc import Mapping

from .base import ChannelOptions, Entry, MatcherChannel
from .registry import channel


@channel()
class EnvChannel(MatcherChannel):
    """Environment variables by name, previewing their values."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        source = os.environ if environ is None else environ
        super().__init__(Entry(name=key, value=source[key]) for key in sorted(source))

    @classmethod
    def from_options(cls, options: ChannelOptions) -> EnvChannel:
        return cls()
