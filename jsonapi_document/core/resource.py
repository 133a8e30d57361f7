"""Single resource element."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import TYPE_CHECKING, Any, Iterable, Mapping
from uuid import UUID

from .element import Element
from .relationship import Relationship
from .util import parse_relationship_paths

if TYPE_CHECKING:
    from jsonapi_document.serializers.base import Serializer

logger = logging.getLogger(__name__)


def normalize_fields(fields: Mapping[str, Iterable[str]] | None) -> dict[str, set[str]]:
    """Copy a sparse fieldset mapping, keeping empty sets as they are."""
    if not fields:
        return {}
    return {type_: set(names) for type_, names in fields.items()}


def _convert_datetimes(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {key: _convert_datetimes(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_convert_datetimes(item) for item in value]
    return value


class Resource(Element):
    """One domain object rendered through a serializer."""

    def __init__(self, data: Any, serializer: "Serializer") -> None:
        super().__init__()
        self.data = data
        self.serializer = serializer
        self.includes: list[str] = []
        self.fields: dict[str, set[str]] = {}
        self._relationships: dict[str, Relationship] | None = None
        self._merged_relationships: dict[str, Relationship] = {}

    def __repr__(self) -> str:
        return f"<Resource {self.type}:{self.id}>"

    @property
    def is_identifier(self) -> bool:
        """Return True when the wrapped data is a bare id rather than an object."""
        return isinstance(self.data, (str, int, UUID))

    @property
    def type(self) -> str:
        return self.serializer.get_type(self.data)

    @property
    def id(self) -> str:
        if self.is_identifier:
            return str(self.data)
        return self.serializer.get_id(self.data)

    @property
    def identifier(self) -> tuple[str, str]:
        """Return the ``(type, id)`` pair used to deduplicate resources."""
        return (self.type, self.id)

    def get_resources(self) -> list["Resource"]:
        return [self]

    def with_includes(self, paths: Iterable[str]) -> "Resource":
        self.includes = list(paths)
        self._relationships = None
        return self

    def with_fields(self, fields: Mapping[str, Iterable[str]] | None) -> "Resource":
        self.fields = normalize_fields(fields)
        return self

    def get_own_fields(self) -> set[str] | None:
        """Return the requested field names for this type, or None if unrestricted."""
        return self.fields.get(self.type)

    def filter_fields(self, values: Mapping[str, Any]) -> dict[str, Any]:
        """Drop members not requested by the sparse fieldset for this type."""
        requested = self.get_own_fields()
        if requested is None:
            return dict(values)
        return {key: value for key, value in values.items() if key in requested}

    def get_attributes(self) -> dict[str, Any]:
        """Return serialized attributes after sparse fieldset filtering."""
        attributes = self.serializer.get_attributes(self.data, self.get_own_fields())
        return _convert_datetimes(self.filter_fields(attributes or {}))

    def get_unfiltered_relationships(self) -> dict[str, Relationship]:
        """Build (once) the relationships requested through ``includes``."""
        if self._relationships is not None:
            return self._relationships

        relationships: dict[str, Relationship] = {}
        if not self.is_identifier:
            for name, nested in parse_relationship_paths(self.includes).items():
                relationship = self.serializer.get_relationship(self.data, name)
                if relationship is None:
                    logger.debug("%s has no relationship %r, ignoring", self.type, name)
                    continue
                if relationship.data is not None:
                    relationship.data.with_includes(nested).with_fields(self.fields)
                relationships[name] = relationship
        self._relationships = relationships
        return relationships

    def get_relationships(self) -> dict[str, Relationship]:
        """Return own and merged relationships after sparse fieldset filtering."""
        relationships = {**self._merged_relationships, **self.get_unfiltered_relationships()}
        return self.filter_fields(relationships)

    def merge(self, other: "Resource") -> None:
        """Adopt relationships that ``other`` resolved and this copy lacks."""
        own = self.get_unfiltered_relationships()
        for name, relationship in other.get_unfiltered_relationships().items():
            if name not in own and name not in self._merged_relationships:
                self._merged_relationships[name] = relationship

    def get_links(self) -> dict[str, Any]:
        links: dict[str, Any] = {}
        if not self.is_identifier:
            links.update(self.serializer.get_links(self.data) or {})
        links.update(self.links)
        return links

    def get_meta(self) -> dict[str, Any]:
        meta: dict[str, Any] = {}
        if not self.is_identifier:
            meta.update(self.serializer.get_meta(self.data) or {})
        meta.update(self.meta)
        return meta

    def to_identifier(self) -> dict[str, Any]:
        identifier: dict[str, Any] = {"type": self.type, "id": self.id}
        if self.meta:
            identifier["meta"] = dict(self.meta)
        return identifier

    def to_dict(self) -> dict[str, Any]:
        resource: dict[str, Any] = {"type": self.type, "id": self.id}
        if not self.is_identifier:
            attributes = self.get_attributes()
            if attributes:
                resource["attributes"] = attributes
        relationships = self.get_relationships()
        if relationships:
            resource["relationships"] = {
                name: relationship.to_dict() for name, relationship in relationships.items()
            }
        links = self.get_links()
        if links:
            resource["links"] = links
        meta = self.get_meta()
        if meta:
            resource["meta"] = meta
        return resource
