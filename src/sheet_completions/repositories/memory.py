"""In-memory stores.

Process-local implementations of CacheStore and CredentialStore. Useful
for single-process embedding and as test doubles; the cache takes an
injectable clock so expiry can be simulated.
"""

import time
from collections.abc import Callable


class InMemoryCacheStore:
    """Dict-backed CacheStore with per-entry absolute expiry."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[str, float | None]] = {}

    def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    def put(self, key: str, value: str, ttl: int | None) -> None:
        expires_at = None if ttl is None else self._clock() + ttl
        self._entries[key] = (value, expires_at)

    def is_available(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None


class InMemoryCredentialStore:
    """Dict-backed CredentialStore."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values = dict(initial or {})

    def get(self, name: str) -> str | None:
        return self._values.get(name)

    def set(self, name: str, value: str) -> None:
        self._values[name] = value

    def delete(self, name: str) -> None:
        self._values.pop(name, None)
