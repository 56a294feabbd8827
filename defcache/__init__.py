"""Cached definition resolution with source-file freshness tracking."""

from .cache import (
    CacheBackend,
    FreshnessMode,
    ImportSourceLocator,
    MemoryCacheBackend,
    SourceLocator,
    SQLiteCacheBackend,
    StaticSourceLocator,
)
from .definitions import (
    AliasDefinition,
    ChainDefinitionSource,
    ClassDefinition,
    Definition,
    DefinitionSource,
    DictDefinitionSource,
    PropertyInjection,
    ValueDefinition,
)
from .definitions.cached_source import (
    CachedDefinitionSource,
    clear_cache_hit_status,
    get_cache_hit_status,
)

__all__ = [
    "CachedDefinitionSource",
    "get_cache_hit_status",
    "clear_cache_hit_status",
    "CacheBackend",
    "MemoryCacheBackend",
    "SQLiteCacheBackend",
    "FreshnessMode",
    "SourceLocator",
    "ImportSourceLocator",
    "StaticSourceLocator",
    "Definition",
    "ClassDefinition",
    "ValueDefinition",
    "AliasDefinition",
    "PropertyInjection",
    "DefinitionSource",
    "DictDefinitionSource",
    "ChainDefinitionSource",
]
