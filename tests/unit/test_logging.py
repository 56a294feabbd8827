"""Tests for structured cache logging."""

from structlog.testing import capture_logs

from defcache.cache.freshness import FreshnessMode
from defcache.definitions.cached_source import CachedDefinitionSource
from defcache.definitions.models import ClassDefinition, ValueDefinition
from defcache.definitions.sources import DictDefinitionSource
from defcache.logging import (
    CacheOperation,
    EventCategory,
    add_environment_context,
    log_cache_operation,
)


class TestLogCacheOperation:
    """Tests for cache operation events."""

    def test_event_fields(self):
        """Events carry the operation, name and key."""
        with capture_logs() as logs:
            log_cache_operation(CacheOperation.HIT, "A", "DI\\DefinitionA", mode="trust_cache")

        assert logs == [
            {
                "event": "cache_operation",
                "log_level": "debug",
                "category": "cache",
                "operation": "hit",
                "name": "A",
                "key": "DI\\DefinitionA",
                "mode": "trust_cache",
            }
        ]

    def test_only_cache_category_is_declared(self):
        """Only the categories that are actually emitted are declared."""
        assert [category.value for category in EventCategory] == ["cache"]

    def test_resolve_emits_operations(self, memory_cache):
        """A miss and store are logged, then a hit."""
        source = DictDefinitionSource(
            [ClassDefinition(name="A", class_name="A"), ValueDefinition(name="v", value=1)]
        )
        cached = CachedDefinitionSource(
            source, memory_cache, mode=FreshnessMode.TRACK_FRESHNESS, clock=lambda: 10.0
        )

        with capture_logs() as logs:
            cached.resolve("A")
            cached.resolve("A")
            cached.resolve("v")

        operations = [entry["operation"] for entry in logs if entry["event"] == "cache_operation"]
        assert operations == ["miss", "store", "hit", "miss", "skip"]

        store = next(entry for entry in logs if entry.get("operation") == "store")
        assert store["written_at"] == 10.0


class TestEnvironmentContext:
    """Tests for the environment processor."""

    def test_adds_environment(self):
        """The configured environment is added to every event."""
        event = add_environment_context(None, "info", {"event": "x"})

        assert "env" in event
