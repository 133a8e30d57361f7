"""Registry of serializers keyed by resource type."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from .base import Serializer

S = TypeVar("S", bound="type[Serializer]")


class SerializerRegistry:
    """Resolve resource type strings to serializer instances."""

    def __init__(self) -> None:
        self._classes: dict[str, type["Serializer"]] = {}
        self._instances: dict[str, "Serializer"] = {}

    def __contains__(self, type_: str) -> bool:
        return type_ in self._classes

    def register(self, serializer_class: S) -> S:
        """Register a serializer class; usable as a class decorator."""
        type_ = serializer_class.resource_type()
        if not type_:
            raise ValueError(f"{serializer_class.__name__} does not declare a resource type.")
        self._classes[type_] = serializer_class
        self._instances.pop(type_, None)
        return serializer_class

    def get(self, type_: str) -> "Serializer":
        """Return the serializer for ``type_``."""
        if type_ not in self._instances:
            try:
                serializer_class = self._classes[type_]
            except KeyError:
                raise LookupError(f"No serializer registered for type '{type_}'.") from None
            self._instances[type_] = serializer_class()
        return self._instances[type_]


registry = SerializerRegistry()
