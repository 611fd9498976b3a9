"""Cache storage protocol.

Defines the interface for a scoped key-value store with per-entry TTL
that the request cache writes completions to.

Implementations can include:
- In-memory dict (tests, single process)
- Redis (shared across processes and users)
- Any host-provided cache with get/put-with-ttl
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for cache storage backends.

    Any type that implements these methods satisfies the protocol, no
    explicit inheritance needed. Eviction under capacity pressure is the
    store's own business.
    """

    def get(self, key: str) -> str | None:
        """Return the cached value, or None if absent or expired."""
        ...

    def put(self, key: str, value: str, ttl: int | None) -> None:
        """Store a value.

        Args:
            key: Cache key
            value: Text to store
            ttl: Time-to-live in seconds, or None to never expire
        """
        ...

    def is_available(self) -> bool:
        """Check if the store can currently be used.

        Returns:
            True if available, False otherwise
        """
        ...
