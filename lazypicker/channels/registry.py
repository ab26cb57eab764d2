"""Channel registry mapping CLI names to channel classes.

Classes register through the ``channel`` decorator, which derives the CLI name
from the class name: ``GitRepoChannel`` becomes ``git-repo``. Channels
registered with ``exclude_from_cli=True`` exist for internal use only.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from .base import Channel, ChannelOptions

_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


class UnknownChannelError(ValueError):
    """Raised for channel names that are not registered or not CLI-visible."""

    def __init__(self, name: str, available: tuple[str, ...]) -> None:
        super().__init__(f"unknown channel {name!r} (available: {', '.join(available)})")
        self.name = name
        self.available = available


@dataclass(frozen=True)
class ChannelSpec:
    name: str
    channel_class: type[Channel]
    exclude_from_cli: bool = False


_REGISTRY: dict[str, ChannelSpec] = {}


def channel_name_for_class(class_name: str) -> str:
    """Return the kebab-case CLI name for a channel class name."""
    base = class_name[: -len("Channel")] if class_name.endswith("Channel") else class_name
    return _CAMEL_BOUNDARY_RE.sub("-", base or class_name).lower()


def channel(*, exclude_from_cli: bool = False) -> Callable[[type[Channel]], type[Channel]]:
    """Class decorator registering a channel under its derived name."""

    def register(cls: type[Channel]) -> type[Channel]:
        name = channel_name_for_class(cls.__name__)
        if name in _REGISTRY and _REGISTRY[name].channel_class is not cls:
            raise ValueError(f"channel name {name!r} already registered")
        cls.name = name
        _REGISTRY[name] = ChannelSpec(name=name, channel_class=cls, exclude_from_cli=exclude_from_cli)
        return cls

    return register


def cli_channel_names() -> tuple[str, ...]:
    """Return CLI-visible channel names in registration order."""
    return tuple(spec.name for spec in _REGISTRY.values() if not spec.exclude_from_cli)


def default_channel_name() -> str:
    names = cli_channel_names()
    if not names:
        raise LookupError("no CLI channels registered")
    return names[0]


def transition_targets() -> tuple[str, ...]:
    """Return names of channels that can be built from another channel's results."""
    return tuple(spec.name for spec in _REGISTRY.values() if spec.channel_class.accepts_entries)


def to_channel(name: str, options: ChannelOptions | None = None, *, allow_excluded: bool = False) -> Channel:
    """Build the channel registered as ``name``.

    Excluded channels are only reachable with ``allow_excluded=True``.
    """
    spec = _REGISTRY.get(name)
    if spec is None or (spec.exclude_from_cli and not allow_excluded):
        raise UnknownChannelError(name, cli_channel_names())
    return spec.channel_class.from_options(options if options is not None else ChannelOptions())
