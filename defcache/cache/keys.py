"""Cache key layout for definitions."""

# Prefix for cache keys, avoids conflicts with other users of the same backend
NAMESPACE = "DI\\Definition"

# Prefix of the key holding the write time of a cache entry
MARKER_PREFIX = "[C]"

# Stored in place of None, which backends use to signal a miss
ABSENT_MARKER = "__definition_not_found__"


def make_cache_key(name: str, namespace: str = NAMESPACE) -> str:
    """Build the key a definition is cached under.

    Format: {namespace}{name}
    """
    return f"{namespace}{name}"


def make_marker_key(cache_key: str) -> str:
    """Build the key holding the write time of ``cache_key``.

    Format: [C]{cache_key}
    """
    return f"{MARKER_PREFIX}{cache_key}"
