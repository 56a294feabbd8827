"""Cache backends, key layout and freshness checks."""

from .backends import (
    CacheBackend,
    CacheStats,
    MemoryCacheBackend,
    SQLiteCacheBackend,
    get_cache_backend,
    reset_cache_backend,
)
from .freshness import (
    FreshnessMode,
    ImportSourceLocator,
    SourceLocator,
    StaticSourceLocator,
    get_modified_time,
    is_cache_fresh,
)
from .keys import ABSENT_MARKER, MARKER_PREFIX, NAMESPACE, make_cache_key, make_marker_key

__all__ = [
    "CacheBackend",
    "CacheStats",
    "MemoryCacheBackend",
    "SQLiteCacheBackend",
    "get_cache_backend",
    "reset_cache_backend",
    "FreshnessMode",
    "SourceLocator",
    "ImportSourceLocator",
    "StaticSourceLocator",
    "get_modified_time",
    "is_cache_fresh",
    "NAMESPACE",
    "MARKER_PREFIX",
    "ABSENT_MARKER",
    "make_cache_key",
    "make_marker_key",
]
