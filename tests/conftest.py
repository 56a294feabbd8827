"""Pytest configuration and shared fixtures."""

import os
from pathlib import Path

import pytest

from defcache.cache.backends import MemoryCacheBackend, SQLiteCacheBackend, reset_cache_backend
from defcache.definitions.cached_source import clear_cache_hit_status


@pytest.fixture(autouse=True)
def reset_cache_state():
    """Reset the global cache backend and hit status around each test."""
    reset_cache_backend()
    clear_cache_hit_status()
    yield
    reset_cache_backend()
    clear_cache_hit_status()


@pytest.fixture
def memory_cache() -> MemoryCacheBackend:
    """Provide a fresh in-memory cache for each test."""
    return MemoryCacheBackend(max_items=100)


@pytest.fixture
def sqlite_cache(tmp_path: Path) -> SQLiteCacheBackend:
    """Provide a SQLite cache in the test temp directory."""
    return SQLiteCacheBackend(db_path=tmp_path / "cache" / "definitions.db")


@pytest.fixture
def source_file(tmp_path: Path):
    """Create a source file and return a setter for its modification time."""
    path = tmp_path / "service.py"
    path.write_text("class Service:\n    pass\n")

    def _touch(modified_at: float) -> Path:
        os.utime(path, (modified_at, modified_at))
        return path

    return _touch
