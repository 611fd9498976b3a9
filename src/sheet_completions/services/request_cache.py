"""TTL-aware request cache over a scoped CacheStore."""

import logging
from enum import Enum

from sheet_completions.config import INDEFINITE
from sheet_completions.protocols import CacheStore

logger = logging.getLogger(__name__)


class CachePolicy(str, Enum):
    DISABLED = "disabled"
    TIMED = "timed"
    INDEFINITE = "indefinite"

    @classmethod
    def from_duration(cls, duration: int | None) -> "CachePolicy":
        if not duration:
            return cls.DISABLED
        if duration == INDEFINITE:
            return cls.INDEFINITE
        if duration < 0:
            raise ValueError(f"Cache duration must be positive, 0 or {INDEFINITE}, got {duration}")
        return cls.TIMED


def select_cache_store(*scopes: CacheStore | None) -> CacheStore | None:
    """Pick the first available scope, most specific first.

    Unavailable scopes (None, or is_available() False) are skipped rather
    than treated as errors.

    Example:
        ```python
        store = select_cache_store(document_store, shared_store, user_store)
        ```
    """
    for scope in scopes:
        if scope is None:
            continue
        if scope.is_available():
            return scope
        logger.debug("Cache scope %r unavailable, falling back", scope)
    logger.warning("No cache scope available, caching disabled")
    return None


class RequestCache:
    """Cache of completion text keyed by request digest.

    Policy is derived once from the configured duration:
    - 0 / None: disabled, get() always misses and put() does nothing
    - positive: entries expire ``duration`` seconds after put()
    - INDEFINITE (-1): entries never expire (store eviction aside)
    """

    def __init__(self, store: CacheStore | None, duration: int | None) -> None:
        self._store = store
        self._duration = duration
        self._policy = CachePolicy.from_duration(duration) if store is not None else CachePolicy.DISABLED

    @property
    def policy(self) -> CachePolicy:
        return self._policy

    @property
    def ttl(self) -> int | None:
        """TTL passed to the store, None for indefinite."""
        if self._policy is CachePolicy.TIMED:
            return self._duration
        return None

    @property
    def enabled(self) -> bool:
        return self._policy is not CachePolicy.DISABLED

    def get(self, key: str) -> str | None:
        """Return cached text, or None when absent or caching is disabled."""
        if not self.enabled:
            return None
        value = self._store.get(key)
        if value:
            logger.debug("Cache hit %s", key)
            return value
        logger.debug("Cache miss %s", key)
        return None

    def put(self, key: str, value: str) -> None:
        """Store non-empty text under the policy's TTL."""
        if not self.enabled or not value:
            return
        self._store.put(key, value, self.ttl)
