"""Definition source interface and simple in-memory sources."""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from .models import Definition


class DefinitionSource(ABC):
    """Abstract base class for anything that resolves names to definitions."""

    @abstractmethod
    def resolve(self, name: str) -> Optional[Definition]:
        """Resolve the definition for a name.

        Args:
            name: Entry name, usually the dotted import path of a class

        Returns:
            The definition, or None if the name cannot be resolved
        """


class DictDefinitionSource(DefinitionSource):
    """Definitions registered explicitly, keyed by name."""

    def __init__(self, definitions: Optional[Iterable[Definition]] = None):
        self._definitions: dict[str, Definition] = {}
        for definition in definitions or ():
            self.add_definition(definition)

    def add_definition(self, definition: Definition) -> None:
        """Register a definition, replacing any previous one with the same name."""
        self._definitions[definition.name] = definition

    def resolve(self, name: str) -> Optional[Definition]:
        return self._definitions.get(name)


class ChainDefinitionSource(DefinitionSource):
    """Asks each source in turn and returns the first definition found."""

    def __init__(self, sources: Iterable[DefinitionSource]):
        self._sources = list(sources)

    def resolve(self, name: str) -> Optional[Definition]:
        for source in self._sources:
            definition = source.resolve(name)
            if definition is not None:
                return definition
        return None
