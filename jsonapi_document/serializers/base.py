"""Base serializer for JSON:API resources."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from jsonapi_document.core.relationship import Relationship

if TYPE_CHECKING:
    from .builders import RelationshipBuilder


class Serializer:
    """Map domain objects of one resource type to JSON:API members.

    Subclasses describe themselves with a nested ``Meta`` class::

        class ArticleSerializer(Serializer):
            class Meta:
                type_ = "articles"
                fields = ["title", "body"]
                relationships = {
                    "author": HasOne(attrgetter("author"), "people"),
                    "comments": HasMany(attrgetter("comments"), "comments"),
                }
    """

    class Meta:
        """Serializer metadata (type, model, fields, relationships)."""

        type_: str = ""
        model: Any = None
        fields: list[str] = []
        relationships: dict[str, "RelationshipBuilder"] = {}

    @classmethod
    def resource_type(cls) -> str:
        """Return the JSON:API type this serializer produces."""
        return getattr(cls.Meta, "type_", "")

    def get_type(self, model: Any) -> str:
        """Return the resource type for ``model``."""
        return self.resource_type()

    def get_id(self, model: Any) -> str:
        """Return the resource id as a string."""
        if isinstance(model, Mapping):
            value = model.get("id")
        else:
            value = getattr(model, "id", None)
        return "" if value is None else str(value)

    def get_attributes(self, model: Any, fields: set[str] | None = None) -> dict[str, Any]:
        """Return attributes, skipping any not in ``fields`` when it is given."""
        declared = getattr(self.Meta, "fields", None)
        if declared:
            names = [name for name in declared if name != "id"]
            if fields is not None:
                names = [name for name in names if name in fields]
            if isinstance(model, Mapping):
                return {name: model.get(name) for name in names}
            return {name: getattr(model, name) for name in names}

        if isinstance(model, Mapping):
            attrs = dict(model)
        elif hasattr(model, "__dict__"):
            attrs = dict(vars(model))
        else:
            return {}
        relationships = self.get_relationship_builders()
        attrs = {
            key: value
            for key, value in attrs.items()
            if not key.startswith("_") and key != "id" and key not in relationships
        }
        if fields is not None:
            attrs = {key: value for key, value in attrs.items() if key in fields}
        return attrs

    def get_links(self, model: Any) -> dict[str, Any]:
        """Return resource-level links (override in subclasses)."""
        return {}

    def get_meta(self, model: Any) -> dict[str, Any]:
        """Return resource-level meta (override in subclasses)."""
        return {}

    def get_relationship_builders(self) -> Mapping[str, "RelationshipBuilder"]:
        """Return the relationship builders keyed by relationship name."""
        return getattr(self.Meta, "relationships", {})

    def get_relationship(self, model: Any, name: str) -> Relationship | None:
        """Build the named relationship for ``model``, or None if not exposed."""
        builder = self.get_relationship_builders().get(name)
        if builder is None:
            return None
        return builder.build(model)
