"""Definition models produced by definition sources."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

# Registry of concrete definition types by qualified class name, used to
# rebuild definitions read back from a persistent backend
DEFINITION_TYPES: dict[str, type["Definition"]] = {}


def definition_type_name(cls: type) -> str:
    """Tag identifying a definition type, unique across modules."""
    return f"{cls.__module__}.{cls.__qualname__}"


class Definition(BaseModel):
    """Resolved metadata describing how to build an entry."""

    model_config = ConfigDict(frozen=True)

    name: str

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        DEFINITION_TYPES[definition_type_name(cls)] = cls

    def is_cacheable(self) -> bool:
        """Whether the definition can be stored in a cache backend."""
        return True


class PropertyInjection(BaseModel):
    """A property filled with another container entry."""

    model_config = ConfigDict(frozen=True)

    property_name: str
    entry_name: str
    lazy: bool = False


class ClassDefinition(Definition):
    """Describes how to instantiate a class."""

    class_name: str
    constructor_parameters: tuple[str, ...] = ()
    property_injections: tuple[PropertyInjection, ...] = ()
    scope: Literal["singleton", "prototype"] = "singleton"
    lazy: bool = False


class ValueDefinition(Definition):
    """A value registered as-is.

    The value may be a callable or a live object, so it never goes to the cache.
    """

    value: Any = None

    def is_cacheable(self) -> bool:
        return False


class AliasDefinition(Definition):
    """Points at another entry."""

    target: str


def definition_from_dict(type_name: str, data: dict[str, Any]) -> Definition:
    """Rebuild a definition from its qualified type name and dumped fields.

    Raises:
        ValueError: If no definition type is registered under ``type_name``
    """
    definition_type = DEFINITION_TYPES.get(type_name)
    if definition_type is None:
        raise ValueError(f"Unknown definition type: {type_name}")
    return definition_type.model_validate(data)
