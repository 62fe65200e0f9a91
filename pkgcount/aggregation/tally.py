"""
Thread-safe occurrence counter keyed by import path.
"""

import threading
from typing import NamedTuple


class _Counter:
    """A single counter with its own lock."""

    __slots__ = ("_lock", "value")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.value = 0

    def add(self, n: int = 1) -> None:
        with self._lock:
            self.value += n

    def load(self) -> int:
        with self._lock:
            return self.value


class Tally:
    """
    Maps import path -> occurrence count, safe for concurrent increments.

    Two lock tiers: the structural lock guards insertion of new keys, each key's
    counter guards its own value. Increments of a key that already exists never
    touch the structural lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters: dict[str, _Counter] = {}

    def increment(self, path: str) -> None:
        counter = self._counters.get(path)
        if counter is None:
            with self._lock:
                # re-check: another worker may have inserted it meanwhile
                counter = self._counters.get(path)
                if counter is None:
                    counter = _Counter()
                    self._counters[path] = counter
        counter.add()

    def snapshot(self) -> dict[str, int]:
        """Point-in-time copy of all counts; safe to iterate without locks."""
        with self._lock:
            items = list(self._counters.items())
        return {path: counter.load() for path, counter in items}

    def __len__(self) -> int:
        return len(self._counters)

    def __repr__(self) -> str:
        return f"Tally({len(self)} packages)"


class TallyPair(NamedTuple):
    """Accumulator for a count run: index 0 internal, index 1 external."""
    internal: Tally
    external: Tally

    @classmethod
    def empty(cls) -> "TallyPair":
        return cls(Tally(), Tally())
