"""Definition models and sources."""

from .models import (
    AliasDefinition,
    ClassDefinition,
    Definition,
    PropertyInjection,
    ValueDefinition,
    definition_from_dict,
    definition_type_name,
)
from .sources import ChainDefinitionSource, DefinitionSource, DictDefinitionSource

__all__ = [
    "Definition",
    "ClassDefinition",
    "ValueDefinition",
    "AliasDefinition",
    "PropertyInjection",
    "definition_from_dict",
    "definition_type_name",
    "DefinitionSource",
    "DictDefinitionSource",
    "ChainDefinitionSource",
]
