"""Collection element."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Mapping

from .element import Element
from .resource import Resource, normalize_fields

if TYPE_CHECKING:
    from jsonapi_document.serializers.base import Serializer


class Collection(Element):
    """Ordered resources sharing one serializer."""

    def __init__(self, data: Iterable[Any], serializer: "Serializer") -> None:
        super().__init__()
        self.resources = [
            item if isinstance(item, Resource) else Resource(item, serializer)
            for item in data
        ]

    def __len__(self) -> int:
        return len(self.resources)

    def get_resources(self) -> list[Resource]:
        return list(self.resources)

    def with_includes(self, paths: Iterable[str]) -> "Collection":
        paths = list(paths)
        for resource in self.resources:
            resource.with_includes(paths)
        return self

    def with_fields(self, fields: Mapping[str, Iterable[str]] | None) -> "Collection":
        fields = normalize_fields(fields)
        for resource in self.resources:
            resource.with_fields(fields)
        return self

    def to_dict(self) -> list[dict[str, Any]]:
        return [resource.to_dict() for resource in self.resources]

    def to_identifier(self) -> list[dict[str, Any]]:
        return [resource.to_identifier() for resource in self.resources]
