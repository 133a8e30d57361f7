"""Capabilities shared by resources, collections, relationships and documents."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Iterable, Mapping

if TYPE_CHECKING:
    from .resource import Resource


class LinksMixin:
    """Hold a ``links`` object."""

    links: dict[str, Any]

    def set_links(self, links: Mapping[str, Any]) -> "LinksMixin":
        """Replace the links object."""
        self.links = dict(links)
        return self

    def add_link(self, name: str, value: Any) -> "LinksMixin":
        """Add or replace a single link."""
        self.links[name] = value
        return self


class MetaMixin:
    """Hold a ``meta`` object."""

    meta: dict[str, Any]

    def set_meta(self, meta: Mapping[str, Any]) -> "MetaMixin":
        """Replace the meta object."""
        self.meta = dict(meta)
        return self

    def add_meta(self, name: str, value: Any) -> "MetaMixin":
        """Add or replace a single meta member."""
        self.meta[name] = value
        return self


class Element(LinksMixin, MetaMixin, ABC):
    """Primary data of a document: a single resource or a collection."""

    def __init__(self) -> None:
        self.links = {}
        self.meta = {}

    @abstractmethod
    def get_resources(self) -> list["Resource"]:
        """Return the resources this element represents."""

    @abstractmethod
    def to_dict(self) -> Any:
        """Return the full resource object(s)."""

    @abstractmethod
    def to_identifier(self) -> Any:
        """Return the resource identifier object(s)."""

    @abstractmethod
    def with_includes(self, paths: Iterable[str]) -> "Element":
        """Request relationship paths to be resolved."""

    @abstractmethod
    def with_fields(self, fields: Mapping[str, Iterable[str]] | None) -> "Element":
        """Restrict attributes and relationships per resource type."""
