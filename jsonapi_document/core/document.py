"""JSON:API top-level document assembly."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from jsonapi_document.pagination import PaginationBase, StandardPagination
from jsonapi_document.schemas import JSONAPIDocument

from .collection import Collection
from .element import Element, LinksMixin, MetaMixin
from .resource import Resource

logger = logging.getLogger(__name__)

Identifier = tuple[str, str]


class Document(LinksMixin, MetaMixin):
    """Top-level JSON:API document around one primary element.

    The ``included`` member is computed on every render by walking the
    relationships requested on the primary element, so the same document can
    be rendered repeatedly.
    """

    pagination_class: type[PaginationBase] = StandardPagination

    def __init__(self, data: Element | None = None) -> None:
        self.data = data
        self.links: dict[str, Any] = {}
        self.meta: dict[str, Any] = {}
        self.errors: list[dict[str, Any]] = []
        self.jsonapi: dict[str, Any] = {}

    def set_data(self, data: Element | None) -> "Document":
        """Set the primary element."""
        self.data = data
        return self

    def set_errors(self, errors: Iterable[Mapping[str, Any]]) -> "Document":
        """Set the error objects."""
        self.errors = [dict(error) for error in errors]
        return self

    def set_jsonapi(self, jsonapi: Mapping[str, Any]) -> "Document":
        """Set the ``jsonapi`` object (version, meta)."""
        self.jsonapi = dict(jsonapi)
        return self

    def add_pagination_links(
        self,
        url: str,
        query_params: Mapping[str, Any],
        offset: int,
        limit: int,
        total: int | None = None,
    ) -> "Document":
        """Add ``first``/``prev``/``self``/``next``/``last`` links."""
        paginator = self.pagination_class()
        self.links.update(paginator.get_links(url, query_params, offset, limit, total))
        return self

    def get_included(self, element: Element) -> list[Resource]:
        """Return the distinct resources reachable through requested relationships."""
        primary = {resource.identifier for resource in element.get_resources()}
        included: dict[Identifier, Resource] = {}
        self._collect_included(element, primary, included)
        logger.debug("Resolved %d included resources", len(included))
        return list(included.values())

    def _collect_included(
        self,
        element: Element,
        primary: set[Identifier],
        included: dict[Identifier, Resource],
    ) -> None:
        for resource in element.get_resources():
            if resource.is_identifier:
                continue
            for relationship in resource.get_unfiltered_relationships().values():
                related = relationship.data
                if related is None:
                    continue
                for child in related.get_resources():
                    if child.is_identifier:
                        continue
                    key = child.identifier
                    if key in primary:
                        continue
                    existing = included.get(key)
                    if existing is None:
                        included[key] = child
                    elif existing is not child:
                        existing.merge(child)
                self._collect_included(related, primary, included)

    def to_dict(self) -> dict[str, Any]:
        """Render the document."""
        document: dict[str, Any] = {}

        links = dict(self.links)
        meta = dict(self.meta)
        if isinstance(self.data, Collection):
            links = {**self.data.links, **links}
            meta = {**self.data.meta, **meta}

        if links:
            document["links"] = links
        if self.data is not None:
            document["data"] = self.data.to_dict()
            included = self.get_included(self.data)
            if included:
                document["included"] = [resource.to_dict() for resource in included]
        if meta:
            document["meta"] = meta
        if self.errors:
            document["errors"] = [dict(error) for error in self.errors]
        if self.jsonapi:
            document["jsonapi"] = dict(self.jsonapi)
        return document

    def to_model(self) -> JSONAPIDocument:
        """Render the document and validate it against the pydantic schema."""
        return JSONAPIDocument.model_validate(self.to_dict())
