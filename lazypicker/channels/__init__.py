"""Data-source channels and their registry.

Importing this package registers the built-in channels; CLI-visible names
come out of ``cli_channel_names`` in registration order.
"""

from .base import Channel, ChannelOptions, Entry, MatcherChannel
from .files import FilesChannel
from .env import EnvChannel
from .lines import ChannelsChannel, LinesChannel, StdinChannel
from .registry import (
    UnknownChannelError,
    channel,
    channel_name_for_class,
    cli_channel_names,
    default_channel_name,
    to_channel,
    transition_targets,
)

__all__ = [
    "Channel",
    "ChannelOptions",
    "ChannelsChannel",
    "Entry",
    "EnvChannel",
    "FilesChannel",
    "LinesChannel",
    "MatcherChannel",
    "StdinChannel",
    "UnknownChannelError",
    "channel",
    "channel_name_for_class",
    "cli_channel_names",
    "default_channel_name",
    "to_channel",
    "transition_targets",
]
