"""Freshness checks for cached definitions.

When freshness tracking is on, a cached definition is trusted only if it was
written at or after the last modification of the file declaring its name.
This is a development convenience: timestamp resolution, clock skew and
definitions built from several files are not accounted for.
"""

import importlib
import inspect
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import structlog

from .backends import CacheBackend

logger = structlog.get_logger()


class FreshnessMode(str, Enum):
    """How cache hits are validated."""

    TRUST_CACHE = "trust_cache"
    TRACK_FRESHNESS = "track_freshness"


class SourceLocator(ABC):
    """Finds the file declaring a name."""

    @abstractmethod
    def locate(self, name: str) -> Optional[Path]:
        """Return the declaring file, or None when the name has no location."""


class ImportSourceLocator(SourceLocator):
    """Locates dotted import paths such as ``package.module.ClassName``."""

    def locate(self, name: str) -> Optional[Path]:
        obj = _import_object(name)
        if obj is None:
            return None

        try:
            return Path(inspect.getfile(obj))
        except (TypeError, OSError):
            # Built-in types and objects defined outside of a file
            logger.debug("No source file", name=name)
            return None


class StaticSourceLocator(SourceLocator):
    """Locations registered explicitly, keyed by name."""

    def __init__(self, locations: Optional[Mapping[str, Union[str, Path]]] = None):
        self._locations = {name: Path(path) for name, path in (locations or {}).items()}

    def register(self, name: str, path: Union[str, Path]) -> None:
        self._locations[name] = Path(path)

    def locate(self, name: str) -> Optional[Path]:
        return self._locations.get(name)


def _import_object(name: str) -> Any:
    """Import the longest module prefix of ``name`` and walk the remaining attributes.

    Returns None if nothing can be imported or the module or an attribute
    raises while loading.
    """
    parts = name.split(".")
    for index in range(len(parts), 0, -1):
        module_name = ".".join(parts[:index])
        try:
            obj = importlib.import_module(module_name)
        except (ImportError, TypeError, ValueError):
            continue
        except Exception as exc:
            # Module exists but its top-level code fails
            logger.debug("Cannot import module", name=name, module=module_name, error=str(exc))
            return None

        try:
            for attribute in parts[index:]:
                obj = getattr(obj, attribute)
        except AttributeError:
            return None
        except Exception as exc:
            logger.debug("Cannot read attribute", name=name, error=str(exc))
            return None
        return obj

    return None


def get_modified_time(path: Union[str, Path]) -> Optional[float]:
    """Get the last-modified timestamp of a file.

    Args:
        path: File to stat

    Returns:
        POSIX timestamp, or None if the file cannot be read
    """
    try:
        return Path(path).stat().st_mtime
    except OSError:
        logger.debug("Cannot stat source file", path=str(path))
        return None


def is_cache_fresh(
    name: str,
    marker_key: str,
    cache: CacheBackend,
    locator: SourceLocator,
) -> bool:
    """Check whether a cached definition is still up to date with its source file.

    Args:
        name: Looked-up definition name
        marker_key: Key holding the write time of the cached entry
        cache: Backend the entry and its marker live in
        locator: Finds the file declaring ``name``

    Returns:
        True if the entry was written at or after the file's last modification,
        or if there is no file to compare against
    """
    path = locator.locate(name)
    if path is None:
        return True

    modified_at = get_modified_time(path)
    if modified_at is None:
        return True

    written_at = cache.fetch(marker_key)
    if written_at is None:
        return False

    return written_at >= modified_at
