"""Serializer deriving JSON:API members from SQLAlchemy mappings."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from sqlalchemy.inspection import inspect
from sqlalchemy.orm import RelationshipProperty
from sqlalchemy.orm.attributes import NO_VALUE

from .base import Serializer
from .builders import HasMany, HasOne, RelationshipBuilder

logger = logging.getLogger(__name__)


def _loaded_related(key: str, uselist: bool) -> Callable[[Any], Any]:
    """Return a resolver reading ``key`` without lazy loading on async sessions."""

    def resolve(instance: Any) -> Any:
        state = inspect(instance)
        if state.async_session is not None and state.attrs[key].loaded_value is NO_VALUE:
            logger.debug("Relationship %r not loaded on %r, rendering it empty", key, instance)
            return [] if uselist else None
        return getattr(instance, key)

    return resolve


class ModelSerializer(Serializer):
    """Serialize SQLAlchemy model instances.

    ``Meta.model`` is the mapped class. The resource type defaults to its
    table name, the id to its primary key, the attributes to its mapped
    columns other than primary and foreign keys, and the relationships to
    its mapped relationships, whose targets are looked up in the serializer
    registry by table name.
    """

    class Meta:
        """Serializer metadata (type, model, fields, relationships)."""

        type_: str = ""
        model: Any = None
        fields: list[str] = []
        relationships: dict[str, RelationshipBuilder] = {}

    @classmethod
    def resource_type(cls) -> str:
        type_ = getattr(cls.Meta, "type_", "")
        if type_:
            return type_
        model = getattr(cls.Meta, "model", None)
        return getattr(model, "__tablename__", "") if model is not None else ""

    def _mapper(self, model: Any = None) -> Any:
        target = getattr(self.Meta, "model", None) or model.__class__
        return inspect(target)

    def get_id(self, model: Any) -> str:
        mapper = self._mapper(model)
        values = [
            getattr(model, mapper.get_property_by_column(column).key)
            for column in mapper.primary_key
        ]
        if any(value is None for value in values):
            return ""
        return "-".join(str(value) for value in values)

    def get_attributes(self, model: Any, fields: set[str] | None = None) -> dict[str, Any]:
        mapper = self._mapper(model)
        declared = getattr(self.Meta, "fields", None)
        attributes: dict[str, Any] = {}
        for attr in mapper.column_attrs:
            column = attr.columns[0]
            if column.primary_key or column.foreign_keys:
                continue
            if declared and attr.key not in declared:
                continue
            if fields is not None and attr.key not in fields:
                continue
            attributes[attr.key] = getattr(model, attr.key)
        return attributes

    def get_relationship_builders(self) -> Mapping[str, RelationshipBuilder]:
        declared = getattr(self.Meta, "relationships", None)
        if declared:
            return declared
        model = getattr(self.Meta, "model", None)
        if model is None:
            return {}
        return self._derive_builders(inspect(model))

    def _derive_builders(self, mapper: Any) -> dict[str, RelationshipBuilder]:
        builders: dict[str, RelationshipBuilder] = {}
        for relationship in mapper.relationships:
            prop: RelationshipProperty = relationship
            target = prop.mapper.class_.__tablename__
            builder_class = HasMany if prop.uselist else HasOne
            builders[prop.key] = builder_class(_loaded_related(prop.key, prop.uselist), target)
        return builders
