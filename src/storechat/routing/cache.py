"""TTL cache of classified intents keyed by normalized message text."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from storechat.constants import INTENT_CACHE_TTL_SECONDS, Intent


def normalize_message(message: str) -> str:
    return message.lower().strip()


@dataclass(frozen=True)
class CacheEntry:
    intent: Intent
    timestamp: float


class IntentCache:
    """In-process intent cache.

    Entries are replaced, never mutated. A stale entry is dropped when
    it is read, and every write sweeps all stale entries.
    """

    def __init__(
        self,
        ttl_seconds: float = INTENT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, message: str) -> Intent | None:
        key = normalize_message(message)
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._is_stale(entry, self._clock()):
            del self._entries[key]
            return None
        return entry.intent

    def put(self, message: str, intent: Intent) -> None:
        now = self._clock()
        self.purge_expired(now)
        self._entries[normalize_message(message)] = CacheEntry(
            intent=intent, timestamp=now
        )

    def purge_expired(self, now: float | None = None) -> int:
        """Drop every stale entry; return how many were removed."""
        if now is None:
            now = self._clock()
        stale = [
            key
            for key, entry in self._entries.items()
            if self._is_stale(entry, now)
        ]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def _is_stale(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.timestamp >= self._ttl

    def delete(self, message: str) -> None:
        self._entries.pop(normalize_message(message), None)

    def __len__(self) -> int:
        return len(self._entries)
