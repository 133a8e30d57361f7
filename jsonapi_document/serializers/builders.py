"""Lazy relationship builders used by serializers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Mapping, Union

from jsonapi_document.core.collection import Collection
from jsonapi_document.core.element import Element
from jsonapi_document.core.relationship import Relationship
from jsonapi_document.core.resource import Resource

from .registry import SerializerRegistry, registry as default_registry

if TYPE_CHECKING:
    from .base import Serializer

SerializerRef = Union["Serializer", "type[Serializer]", str]


@dataclass(frozen=True)
class RelationshipBuilder:
    """Describe how to reach related data from a parent object.

    ``resolve`` maps the parent object to the related data. ``serializer``
    is a serializer instance, a serializer class, or a resource type looked
    up in ``registry`` when the relationship is built. ``links`` and ``meta``
    optionally map the parent object to the relationship's links and meta.
    """

    resolve: Callable[[Any], Any]
    serializer: SerializerRef
    registry: SerializerRegistry | None = None
    links: Callable[[Any], Mapping[str, Any]] | None = None
    meta: Callable[[Any], Mapping[str, Any]] | None = None

    def get_serializer(self) -> "Serializer":
        """Return the serializer for the related resources."""
        if isinstance(self.serializer, str):
            return (self.registry or default_registry).get(self.serializer)
        if isinstance(self.serializer, type):
            return self.serializer()
        return self.serializer

    def build(self, model: Any) -> Relationship:
        """Return the relationship for ``model``."""
        relationship = Relationship(self.build_data(self.resolve(model)))
        if self.links is not None:
            relationship.set_links(self.links(model))
        if self.meta is not None:
            relationship.set_meta(self.meta(model))
        return relationship

    def build_data(self, related: Any) -> Element | None:
        raise NotImplementedError


class HasOne(RelationshipBuilder):
    """To-one relationship; resolves to a single object or None."""

    def build_data(self, related: Any) -> Element | None:
        if related is None:
            return None
        return Resource(related, self.get_serializer())


class HasMany(RelationshipBuilder):
    """To-many relationship; resolves to an iterable of objects."""

    def build_data(self, related: Any) -> Element | None:
        return Collection(related or [], self.get_serializer())
