"""Per-key asyncio locks.

Each account (points) or subject (verification codes) gets its own lock so
check-then-mutate sequences on one key never interleave, while unrelated keys
proceed concurrently. Single event loop only.

Locks are held weakly: an entry disappears as soon as no coroutine holds,
awaits or references its lock, so the map only ever contains keys in use.
"""

import asyncio
import weakref


class KeyedLocks:
    def __init__(self) -> None:
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def get(self, key: str) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    def __len__(self) -> int:
        return len(self._locks)
