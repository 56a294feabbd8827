"""Transparent caching in front of a definition source.

Concurrent callers racing on the same uncached name may each resolve it
through the wrapped source and each write the backend; the backend's own
guarantees are all that apply. Callers needing at-most-once resolution per
name should serialize calls per key around ``resolve``.
"""

import time
from contextvars import ContextVar
from typing import Any, Callable, Optional, Union

from defcache.cache.backends import CacheBackend, get_cache_backend
from defcache.cache.freshness import (
    FreshnessMode,
    ImportSourceLocator,
    SourceLocator,
    is_cache_fresh,
)
from defcache.cache.keys import ABSENT_MARKER, NAMESPACE, make_cache_key, make_marker_key
from defcache.config.settings import settings
from defcache.logging import CacheOperation, log_cache_operation

from .models import Definition
from .sources import DefinitionSource

# Context variable to track cache hit status for observability
# None = not a cached call, True = cache hit, False = cache miss or stale entry
_cache_hit_status: ContextVar[Optional[bool]] = ContextVar("cache_hit_status", default=None)


def get_cache_hit_status() -> Optional[bool]:
    """Get the cache hit status from the current context.

    Returns:
        True if the last cached lookup was a cache hit,
        False if it was a cache miss or a stale entry,
        None if no cached lookup was made.
    """
    return _cache_hit_status.get()


def clear_cache_hit_status() -> None:
    """Clear the cache hit status in the current context."""
    _cache_hit_status.set(None)


class CachedDefinitionSource(DefinitionSource):
    """Caches the results of another definition source.

    Names that cannot be resolved are cached too, so failed lookups are not
    repeated. Definitions that report themselves as not cacheable are
    returned but never stored.

    In ``TRACK_FRESHNESS`` mode every write also records its time, and cache
    hits are discarded when the file declaring the name changed afterwards.
    Use ``TRUST_CACHE`` in production for better performance.

    Usage:
        source = CachedDefinitionSource(
            DictDefinitionSource([...]),
            MemoryCacheBackend(),
            mode=FreshnessMode.TRACK_FRESHNESS,
        )
        definition = source.resolve("app.services.Mailer")
    """

    def __init__(
        self,
        source: DefinitionSource,
        cache: CacheBackend,
        mode: Union[FreshnessMode, str] = FreshnessMode.TRUST_CACHE,
        locator: Optional[SourceLocator] = None,
        namespace: str = NAMESPACE,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize the cached source.

        Args:
            source: Source computing definitions on a cache miss
            cache: Backend holding cached definitions
            mode: Whether cache hits are checked against source file changes
            locator: Finds the file declaring a name (defaults to import paths)
            namespace: Prefix for cache keys
            clock: Returns the current POSIX timestamp, recorded on writes
        """
        self._source = source
        self._cache = cache
        self._mode = FreshnessMode(mode)
        self._locator = locator or ImportSourceLocator()
        self._namespace = namespace
        self._clock = clock

    @classmethod
    def from_settings(
        cls,
        source: DefinitionSource,
        locator: Optional[SourceLocator] = None,
    ) -> "CachedDefinitionSource":
        """Build a cached source using the configured backend, namespace and mode."""
        return cls(
            source,
            get_cache_backend(),
            mode=settings.freshness_mode,
            locator=locator,
            namespace=settings.cache_namespace,
        )

    def resolve(self, name: str) -> Optional[Definition]:
        key = make_cache_key(name, self._namespace)

        cached = self._fetch_from_cache(name, key)
        if cached is not None:
            _cache_hit_status.set(True)
            return None if cached == ABSENT_MARKER else cached

        _cache_hit_status.set(False)
        definition = self._source.resolve(name)

        if definition is None or definition.is_cacheable():
            self._save_to_cache(name, key, definition)
        else:
            log_cache_operation(CacheOperation.SKIP, name, key)

        return definition

    @property
    def source(self) -> DefinitionSource:
        return self._source

    @source.setter
    def source(self, source: DefinitionSource) -> None:
        self._source = source

    @property
    def cache(self) -> CacheBackend:
        return self._cache

    @cache.setter
    def cache(self, cache: CacheBackend) -> None:
        self._cache = cache

    @property
    def mode(self) -> FreshnessMode:
        return self._mode

    @mode.setter
    def mode(self, mode: Union[FreshnessMode, str]) -> None:
        self._mode = FreshnessMode(mode)

    @property
    def debug(self) -> bool:
        """True when changes in source files invalidate cached definitions."""
        return self._mode is FreshnessMode.TRACK_FRESHNESS

    @debug.setter
    def debug(self, debug: bool) -> None:
        self._mode = FreshnessMode.TRACK_FRESHNESS if debug else FreshnessMode.TRUST_CACHE

    @property
    def locator(self) -> SourceLocator:
        return self._locator

    @property
    def namespace(self) -> str:
        return self._namespace

    def _fetch_from_cache(self, name: str, key: str) -> Optional[Any]:
        """Fetch a cached value, or None on a miss or a stale entry."""
        cached = self._cache.fetch(key)
        if cached is None:
            log_cache_operation(CacheOperation.MISS, name, key)
            return None

        if self._mode is FreshnessMode.TRUST_CACHE or is_cache_fresh(
            name, make_marker_key(key), self._cache, self._locator
        ):
            log_cache_operation(CacheOperation.HIT, name, key, mode=self._mode.value)
            return cached

        log_cache_operation(CacheOperation.STALE, name, key)
        return None

    def _save_to_cache(self, name: str, key: str, definition: Optional[Definition]) -> None:
        """Store a definition, or the absence marker, and its write time when tracking."""
        self._cache.store(key, ABSENT_MARKER if definition is None else definition)

        written_at = None
        if self._mode is FreshnessMode.TRACK_FRESHNESS:
            written_at = self._clock()
            self._cache.store(make_marker_key(key), written_at)

        log_cache_operation(CacheOperation.STORE, name, key, written_at=written_at)
