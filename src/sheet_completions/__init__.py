"""Sheet Completions - LLM chat completions as spreadsheet formulas.

This package provides a layered architecture for cached completions:

Layers:
    - protocols: Interface contracts (Transport, CacheStore, CredentialStore)
    - repositories: httpx transport, Redis/in-memory caches, credential stores
    - services: Request normalization, cache keys, request cache, batch mapping
    - handlers: Formula entry points (CHATGPT, CHATGPT3, CHATGPT4, ...)
    - dto: Completion API wire format
    - entities: Domain models (internal)

Usage:
    ```python
    from sheet_completions import SheetFunctions

    functions = SheetFunctions.create()
    functions.chatgpt("Summarize: " + text)
    functions.chatgpt([["a"], ["b"]])  # -> [["..."], ["..."]]
    ```
"""

from sheet_completions.config import INDEFINITE, Settings, get_settings, settings
from sheet_completions.entities import EMPTY, BatchResult, CompletionResult, Grid, NormalizedRequest, Scalar
from sheet_completions.errors import CompletionError, ConfigurationError, TransportError
from sheet_completions.handlers import SheetFunctions
from sheet_completions.protocols import CacheStore, CredentialStore, Transport
from sheet_completions.repositories import (
    DotenvCredentialStore,
    HttpxTransport,
    InMemoryCacheStore,
    InMemoryCredentialStore,
    RedisCacheStore,
)
from sheet_completions.services import BatchShapeMapper, CompletionService, RequestCache

__all__ = [
    # Configuration
    "INDEFINITE",
    "Settings",
    "get_settings",
    "settings",
    # Errors
    "CompletionError",
    "ConfigurationError",
    "TransportError",
    # Protocols (interfaces)
    "CacheStore",
    "CredentialStore",
    "Transport",
    # Services (business logic)
    "BatchShapeMapper",
    "CompletionService",
    "RequestCache",
    # Handlers (formulas)
    "SheetFunctions",
    # Repositories
    "DotenvCredentialStore",
    "HttpxTransport",
    "InMemoryCacheStore",
    "InMemoryCredentialStore",
    "RedisCacheStore",
    # Entities
    "EMPTY",
    "BatchResult",
    "CompletionResult",
    "Grid",
    "NormalizedRequest",
    "Scalar",
]
