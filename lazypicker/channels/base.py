"""Channel primitives: entries, options, and the threaded matcher base.

A channel owns its candidate entries and the matches for the current query.
Loaders run in background threads and append candidates under a lock; the UI
thread picks up new candidates by calling ``refresh`` once per frame.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from ..fuzzy import rank_candidates

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Entry:
    """One selectable result.

    ``name`` is displayed and printed on selection, ``value`` is optional
    preview text, and ``path`` marks entries previewed from disk.
    """

    name: str
    value: str | None = None
    path: Path | None = None


@dataclass(frozen=True)
class ChannelOptions:
    """Construction options shared by every registered channel."""

    root: Path = field(default_factory=Path.cwd)
    show_hidden: bool = False
    stream: TextIO | None = None
    names: tuple[str, ...] = ()
    entries: tuple[Entry, ...] = ()


class Channel:
    """Interface consumed by the app and renderer."""

    name = "channel"
    accepts_entries = False

    @classmethod
    def from_options(cls, options: ChannelOptions) -> Channel:
        raise NotImplementedError

    def find(self, pattern: str) -> None:
        raise NotImplementedError

    def refresh(self) -> bool:
        """Pick up new candidates; return whether matches changed."""
        return False

    def results(self, num_entries: int, offset: int) -> list[Entry]:
        raise NotImplementedError

    def get_result(self, index: int) -> Entry | None:
        raise NotImplementedError

    def all_results(self) -> Sequence[Entry]:
        """Every current match, best-first."""
        return self.results(self.result_count(), 0)

    def result_count(self) -> int:
        raise NotImplementedError

    def total_count(self) -> int:
        raise NotImplementedError

    def running(self) -> bool:
        return False

    def shutdown(self) -> None:
        pass


class MatcherChannel(Channel):
    """Channel ranking a growing candidate list with the fuzzy scorer.

    Subclasses either pass entries up front or override ``load`` to yield them
    from a background thread started by ``start_loader``.
    """

    def __init__(self, entries: Iterable[Entry] = ()) -> None:
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._candidates: list[Entry] = list(entries)
        self._loader: threading.Thread | None = None
        self._snapshot: list[Entry] = []
        self._labels: list[str] = []
        self._matches: list[int] = []
        self._pattern = ""
        self._dirty = True
        self.refresh()

    def load(self) -> Iterable[Entry]:
        return ()

    def start_loader(self) -> None:
        """Run ``load`` in a daemon thread, appending entries as they arrive."""
        if self._loader is not None:
            return
        self._loader = threading.Thread(
            target=self._run_loader,
            name=f"lazypicker-{self.name}-loader",
            daemon=True,
        )
        self._loader.start()

    def _run_loader(self) -> None:
        loaded = 0
        try:
            for entry in self.load():
                if self._stop.is_set():
                    break
                with self._lock:
                    self._candidates.append(entry)
                loaded += 1
        except Exception:
            logger.exception("%s channel loader failed", self.name)
        logger.debug("%s channel loaded %d entries", self.name, loaded)

    def join_loader(self, timeout: float | None = None) -> None:
        if self._loader is not None:
            self._loader.join(timeout)

    def running(self) -> bool:
        return self._loader is not None and self._loader.is_alive()

    def shutdown(self) -> None:
        self._stop.set()

    def find(self, pattern: str) -> None:
        if pattern != self._pattern:
            self._pattern = pattern
            self._dirty = True
        self.refresh()

    def refresh(self) -> bool:
        with self._lock:
            grown = len(self._candidates) != len(self._snapshot)
            if grown:
                self._snapshot = list(self._candidates)
        if not grown and not self._dirty:
            return False
        if grown:
            self._labels = [entry.name for entry in self._snapshot]
        previous = self._matches
        self._matches = rank_candidates(self._pattern, self._labels)
        self._dirty = False
        return self._matches != previous

    def results(self, num_entries: int, offset: int) -> list[Entry]:
        start = max(0, offset)
        window = self._matches[start : start + max(0, num_entries)]
        return [self._snapshot[idx] for idx in window]

    def get_result(self, index: int) -> Entry | None:
        if not 0 <= index < len(self._matches):
            return None
        return self._snapshot[self._matches[index]]

    def result_count(self) -> int:
        return len(self._matches)

    def total_count(self) -> int:
        return len(self._snapshot)
