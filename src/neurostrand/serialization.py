"""
Tagged Serialization Module

A registry mapping stable type tags to classes, so that a persistence layer can
store and restore objects without knowing their field layout.

Every serialized object is a dictionary carrying its tag next to its field data:
    {"type": "strand", "data": {...}}

A class takes part by implementing 'to_dict()' and the classmethod 'from_dict()',
and by registering itself under a tag with the 'register' decorator.
"""

import json
from typing import Any, Callable, Type, TypeVar

from loguru import logger

T = TypeVar("T")

# type tag => class
_registry: dict[str, type] = {}


def register(tag: str) -> Callable[[Type[T]], Type[T]]:
    """Decorator registering a class under 'tag'.

    Raises:
        ValueError: if the tag is already taken by another class
    """

    def decorator(cls: Type[T]) -> Type[T]:
        existing = _registry.get(tag)
        if existing is not None and existing is not cls:
            raise ValueError(f"Type tag '{tag}' is already registered to {existing.__name__}")
        _registry[tag] = cls
        cls._type_tag = tag
        logger.debug("Registered {} under type tag '{}'", cls.__name__, tag)
        return cls

    return decorator


def registered_types() -> dict[str, type]:
    """Get all registered tags and their classes."""
    return _registry.copy()


def tag_of(obj: Any) -> str:
    """Return the type tag of an object of a registered class.

    Raises:
        TypeError: if the object's class is not registered
    """
    tag = getattr(type(obj), "_type_tag", None)
    if tag is None or _registry.get(tag) is not type(obj):
        raise TypeError(f"{type(obj).__name__} is not registered for serialization")
    return tag


def serialize(obj: Any) -> dict:
    return {"type": tag_of(obj), "data": obj.to_dict()}


def deserialize(payload: dict) -> Any:
    """Rebuild an object from its tagged dictionary.

    Raises:
        KeyError: if the payload's tag is unknown
    """
    tag = payload["type"]
    if tag not in _registry:
        raise KeyError(f"Unknown type tag '{tag}'")
    return _registry[tag].from_dict(payload["data"])


def dumps(obj: Any, **kwargs) -> str:
    return json.dumps(serialize(obj), **kwargs)


def loads(text: str) -> Any:
    return deserialize(json.loads(text))
