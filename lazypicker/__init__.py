"""Public package surface for lazypicker.

Exports ``Picker`` (the windowed selection engine) and ``main`` for
programmatic CLI invocation.
"""

from __future__ import annotations

import logging

from .picker import Picker

logging.getLogger(__name__).addHandler(logging.NullHandler())


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = ["Picker", "main"]
