"""Redis implementation of CacheStore.

Entries are plain string keys under a per-scope prefix, e.g.
``sheet_completions:document:<id>:<digest>``. Expiry is delegated to Redis.
"""

import logging

import redis

from sheet_completions.config import Settings, get_redis_client, settings

logger = logging.getLogger(__name__)


class RedisCacheStore:
    """Redis implementation of a scoped completion cache.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        namespace: str | None = None,
    ) -> None:
        """Initialize the Redis cache store.

        Args:
            redis_client: Redis client instance. If None, creates default.
            namespace: Key prefix for this scope. Defaults to settings.
        """
        self._client = redis_client or get_redis_client()
        self._namespace = namespace or settings.cache_namespace

    @classmethod
    def create(
        cls,
        scope: str = "shared",
        config: Settings | None = None,
        redis_client: redis.Redis | None = None,
    ) -> "RedisCacheStore":
        """Factory method to create a store for one cache scope.

        Args:
            scope: Scope suffix, e.g. "shared", "user:<id>", "document:<id>"
            config: Settings for namespace and connection. If None, uses settings.
            redis_client: Shared client. If None, one is built from config.

        Returns:
            Configured RedisCacheStore
        """
        config = config or settings
        return cls(
            redis_client=redis_client or get_redis_client(config),
            namespace=f"{config.cache_namespace}:{scope}",
        )

    def _key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    def get(self, key: str) -> str | None:
        """Return the cached value, or None if absent, expired or Redis is down."""
        try:
            value = self._client.get(self._key(key))
        except redis.RedisError as e:
            logger.warning("Redis read failed in %s, treating as miss: %s", self._namespace, e)
            return None
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def put(self, key: str, value: str, ttl: int | None) -> None:
        """Store a value, with SET EX when a TTL is given. Dropped if Redis is down."""
        try:
            if ttl is None:
                self._client.set(self._key(key), value)
            else:
                self._client.set(self._key(key), value, ex=ttl)
        except redis.RedisError as e:
            logger.warning("Redis write failed in %s, entry not cached: %s", self._namespace, e)

    def is_available(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(self._client.ping())
        except redis.RedisError as e:
            logger.debug("Redis scope %s unavailable: %s", self._namespace, e)
            return False

    @property
    def namespace(self) -> str:
        """Get the key prefix of this scope."""
        return self._namespace

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
