"""Repository layer for external collaborators.

Concrete implementations of the protocols: cache stores, credential
stores and the HTTP transport. Any class implementing the required
methods satisfies the protocol; nothing here is inherited.
"""

from sheet_completions.protocols import CacheStore, CredentialStore, Transport

from .dotenv_credential_store import DotenvCredentialStore
from .httpx_transport import HttpxTransport
from .memory import InMemoryCacheStore, InMemoryCredentialStore
from .redis_cache_store import RedisCacheStore

__all__ = [
    "CacheStore",
    "CredentialStore",
    "Transport",
    "DotenvCredentialStore",
    "HttpxTransport",
    "InMemoryCacheStore",
    "InMemoryCredentialStore",
    "RedisCacheStore",
]
