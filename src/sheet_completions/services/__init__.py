"""Service layer containing the completion pipeline.

Services depend on protocols (Transport, CacheStore), never on concrete
repositories, so they run unchanged against fakes in tests.
"""

from .batch import BatchShapeMapper
from .cache_keys import derive_cache_key
from .completion_service import CompletionService
from .request_builder import build_request, clean_value
from .request_cache import CachePolicy, RequestCache, select_cache_store

__all__ = [
    "BatchShapeMapper",
    "CachePolicy",
    "CompletionService",
    "RequestCache",
    "build_request",
    "clean_value",
    "derive_cache_key",
    "select_cache_store",
]
