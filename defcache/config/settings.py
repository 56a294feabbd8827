"""Configuration settings for the definition cache."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    environment: str = Field(
        default="development",
        description="Environment: 'development' or 'production'",
    )

    # Cache backend
    cache_backend: str = Field(
        default="memory",
        description="Cache backend: 'memory' or 'sqlite'",
    )
    cache_path: Path = Field(
        default=Path("data/definitions.db"), description="SQLite cache path"
    )
    cache_memory_max_items: int = Field(
        default=1000, ge=0, description="Max items in memory cache"
    )
    cache_namespace: str = Field(
        default="DI\\Definition",
        description="Prefix for cache keys, shared backends stay collision free",
    )

    # Freshness tracking
    freshness_mode: str = Field(
        default="trust_cache",
        description=(
            "'track_freshness' revalidates cached definitions against the "
            "modification time of their source file. Keep 'trust_cache' in production."
        ),
    )

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
