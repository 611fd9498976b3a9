"""Protocol interfaces for swappable implementations.

Protocols use structural typing, so the pipeline can run against a live
host, Redis, or plain in-memory fakes in tests.

Usage:
    ```python
    from sheet_completions.protocols import CacheStore, CredentialStore, Transport

    store: CacheStore = RedisCacheStore.create()       # works
    store: CacheStore = InMemoryCacheStore()            # also works
    ```
"""

from .cache_store import CacheStore
from .credential_store import CredentialStore
from .transport import Transport

__all__ = [
    "CacheStore",
    "CredentialStore",
    "Transport",
]
