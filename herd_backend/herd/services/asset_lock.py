# herd/services/asset_lock.py

"""
PER-COW LOCK

Serializes reconcile/dispose for the same cow inside this process. Unrelated
cows never contend. Cross-process exclusion comes from select_for_update() on
the cow row (taken by the engine inside the transaction), with the DB unique
constraints as the final backstop.

Locks are reference-counted: an entry lives only while some thread holds or
waits on it, so the registry stays bounded by the number of cows in flight.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager


class _LockEntry:
    __slots__ = ("lock", "users")

    def __init__(self):
        self.lock = threading.RLock()
        self.users = 0


_registry_guard = threading.Lock()
_locks: dict[int, _LockEntry] = {}


def _acquire_entry(asset_id: int) -> _LockEntry:
    with _registry_guard:
        entry = _locks.get(asset_id)
        if entry is None:
            entry = _locks[asset_id] = _LockEntry()
        entry.users += 1
        return entry


def _release_entry(asset_id: int, entry: _LockEntry) -> None:
    with _registry_guard:
        entry.users -= 1
        if entry.users == 0:
            del _locks[asset_id]


def active_lock_count() -> int:
    with _registry_guard:
        return len(_locks)


@contextmanager
def asset_lock(asset_id: int):
    key = int(asset_id)
    entry = _acquire_entry(key)
    try:
        with entry.lock:
            yield
    finally:
        _release_entry(key, entry)
