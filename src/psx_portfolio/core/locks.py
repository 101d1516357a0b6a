"""Per-symbol write serialization."""

import threading
from contextlib import contextmanager
from typing import Iterator


class SymbolLocks:
    """
    Registry of one lock per symbol.

    Writes that touch a holding hold the symbol's lock for the whole
    unit of work.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def _lock_for(self, symbol: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(symbol)
            if lock is None:
                lock = self._locks[symbol] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, symbol: str) -> Iterator[None]:
        """Hold the lock for ``symbol`` for the duration of the block."""
        lock = self._lock_for(symbol)
        with lock:
            yield


# Shared by every service instance in the process
_symbol_locks = SymbolLocks()


def get_symbol_locks() -> SymbolLocks:
    """Return the process-wide lock registry."""
    return _symbol_locks
