"""JSON:API relationship objects."""

from __future__ import annotations

from typing import Any

from .element import Element, LinksMixin, MetaMixin


class Relationship(LinksMixin, MetaMixin):
    """Linkage from a resource to a related resource or collection.

    ``data`` is a :class:`Resource` for to-one relationships, a
    :class:`Collection` for to-many relationships, or ``None`` when a to-one
    relationship has no related object.
    """

    def __init__(self, data: Element | None = None) -> None:
        self.data = data
        self.links: dict[str, Any] = {}
        self.meta: dict[str, Any] = {}

    @property
    def is_empty(self) -> bool:
        """Return True when there is no related resource."""
        if self.data is None:
            return True
        return not self.data.get_resources()

    def to_dict(self) -> dict[str, Any]:
        """Return the relationship object with explicit linkage."""
        relationship: dict[str, Any] = {
            "data": self.data.to_identifier() if self.data is not None else None
        }
        if self.links:
            relationship["links"] = dict(self.links)
        if self.meta:
            relationship["meta"] = dict(self.meta)
        return relationship
