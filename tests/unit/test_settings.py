"""Tests for settings validation."""

import pydantic
import pytest

from defcache.config.settings import Settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        """Test the memory backend and trusted cache are the defaults."""
        settings = Settings(_env_file=None)

        assert settings.cache_backend == "memory"
        assert settings.cache_memory_max_items == 1000
        assert settings.freshness_mode == "trust_cache"

    def test_negative_memory_capacity_rejected(self):
        """Test that a negative memory cache size fails validation."""
        with pytest.raises(pydantic.ValidationError):
            Settings(_env_file=None, cache_memory_max_items=-1)

    def test_capacity_from_environment(self, monkeypatch):
        """Test that the memory cache size is read from the environment."""
        monkeypatch.setenv("CACHE_MEMORY_MAX_ITEMS", "0")

        assert Settings(_env_file=None).cache_memory_max_items == 0
