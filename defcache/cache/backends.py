"""Cache backends: in-memory LRU and SQLite persistence."""

import json
import sqlite3
from abc import ABC, abstractmethod
from collections import OrderedDict
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Iterator, Optional

import structlog
from pydantic import BaseModel

from defcache.definitions.models import (
    Definition,
    definition_from_dict,
    definition_type_name,
)

logger = structlog.get_logger()


class CacheStats(BaseModel):
    """Cache statistics."""

    hits: int = 0
    misses: int = 0
    items: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate hit rate percentage."""
        total = self.hits + self.misses
        return (self.hits / total * 100) if total > 0 else 0.0


class CacheBackend(ABC):
    """Key/value store used to cache definitions.

    Backends give no ordering or transactional guarantees beyond
    last-write-wins visibility to later fetches from the same process.
    """

    @abstractmethod
    def fetch(self, key: str) -> Optional[Any]:
        """Get value from cache.

        Returns:
            Cached value or None if not found
        """

    @abstractmethod
    def store(self, key: str, value: Any) -> None:
        """Store value in cache, replacing any previous value."""


class MemoryCacheBackend(CacheBackend):
    """In-process LRU cache."""

    def __init__(self, max_items: int = 1000):
        """Initialize memory cache.

        Args:
            max_items: Maximum items kept (LRU eviction)
        """
        self._memory: OrderedDict[str, Any] = OrderedDict()
        self._max_items = max_items
        self._stats = CacheStats()

    def fetch(self, key: str) -> Optional[Any]:
        if key in self._memory:
            # Move to end (most recently used)
            self._memory.move_to_end(key)
            self._stats.hits += 1
            return self._memory[key]

        self._stats.misses += 1
        return None

    def store(self, key: str, value: Any) -> None:
        self._memory[key] = value
        self._memory.move_to_end(key)

        # Evict oldest if over limit
        while self._memory and len(self._memory) > self._max_items:
            evicted, _ = self._memory.popitem(last=False)
            logger.debug("Cache evict (memory)", key=evicted[:50])

    def clear(self) -> int:
        """Clear all entries.

        Returns:
            Number of entries cleared
        """
        count = len(self._memory)
        self._memory.clear()
        return count

    def get_stats(self) -> CacheStats:
        """Get cache statistics."""
        self._stats.items = len(self._memory)
        return self._stats.model_copy()


class SQLiteCacheBackend(CacheBackend):
    """Cache persisted in a SQLite file.

    Values are stored as JSON. Definitions are tagged with their qualified type name and
    rebuilt on fetch, so a cached definition survives a process restart.
    """

    def __init__(self, db_path: Path):
        """Initialize SQLite cache.

        Args:
            db_path: Path to SQLite database
        """
        self._db_path = Path(db_path)
        self._initialized = False
        self._stats = CacheStats()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection for one operation, committing on success."""
        db = sqlite3.connect(self._db_path)
        try:
            with db:
                yield db
        finally:
            db.close()

    def _ensure_initialized(self) -> None:
        """Ensure database is initialized."""
        if self._initialized:
            return

        self._db_path.parent.mkdir(parents=True, exist_ok=True)

        with self._connect() as db:
            db.execute("""
                CREATE TABLE IF NOT EXISTS cache_entries (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)

        self._initialized = True
        logger.debug("Cache database initialized", path=str(self._db_path))

    def fetch(self, key: str) -> Optional[Any]:
        self._ensure_initialized()

        with self._connect() as db:
            row = db.execute(
                "SELECT value FROM cache_entries WHERE key = ?", (key,)
            ).fetchone()

        if row is None:
            self._stats.misses += 1
            logger.debug("Cache miss (db)", key=key[:50])
            return None

        self._stats.hits += 1
        logger.debug("Cache hit (db)", key=key[:50])
        return self._deserialize(row[0])

    def store(self, key: str, value: Any) -> None:
        self._ensure_initialized()

        serialized = self._serialize(value)
        with self._connect() as db:
            db.execute(
                """
                INSERT OR REPLACE INTO cache_entries (key, value, created_at)
                VALUES (?, ?, ?)
                """,
                (key, serialized, datetime.now().isoformat()),
            )

        logger.debug("Cache set (db)", key=key[:50])

    def clear(self) -> int:
        """Clear all entries.

        Returns:
            Number of entries cleared
        """
        self._ensure_initialized()

        with self._connect() as db:
            cursor = db.execute("DELETE FROM cache_entries")
            count = cursor.rowcount

        logger.info("Cache cleared", path=str(self._db_path), count=count)
        return count

    def item_count(self) -> int:
        """Get count of items in SQLite database."""
        self._ensure_initialized()
        with self._connect() as db:
            row = db.execute("SELECT COUNT(*) FROM cache_entries").fetchone()
        return row[0] if row else 0

    def get_stats(self) -> CacheStats:
        """Get cache statistics."""
        self._stats.items = self.item_count()
        return self._stats.model_copy()

    def _serialize(self, value: Any) -> str:
        """Serialize value to JSON string."""
        return json.dumps(value, default=self._json_default)

    def _deserialize(self, value: str) -> Any:
        """Deserialize JSON string to value."""
        return json.loads(value, object_hook=self._object_hook)

    def _json_default(self, obj: Any) -> Any:
        """Default JSON serializer for definitions."""
        if isinstance(obj, Definition):
            return {
                "__definition__": definition_type_name(obj.__class__),
                "data": obj.model_dump(mode="json"),
            }
        raise TypeError(f"Object of type {obj.__class__.__name__} cannot be cached")

    def _object_hook(self, obj: dict[str, Any]) -> Any:
        if "__definition__" in obj:
            return definition_from_dict(obj["__definition__"], obj["data"])
        return obj


# Global cache backend instance
_cache_backend: Optional[CacheBackend] = None


def get_cache_backend() -> CacheBackend:
    """Get the global cache backend instance.

    Returns:
        CacheBackend selected by settings (creates if needed)

    Raises:
        ValueError: If settings name an unknown backend
    """
    global _cache_backend
    if _cache_backend is None:
        from defcache.config.settings import settings

        if settings.cache_backend == "memory":
            _cache_backend = MemoryCacheBackend(max_items=settings.cache_memory_max_items)
        elif settings.cache_backend == "sqlite":
            _cache_backend = SQLiteCacheBackend(db_path=settings.cache_path)
        else:
            raise ValueError(f"Unknown cache backend: {settings.cache_backend}")
    return _cache_backend


def reset_cache_backend() -> None:
    """Reset the global cache backend (for testing)."""
    global _cache_backend
    _cache_backend = None
