"""Core JSON:API document assembly."""

from .collection import Collection
from .document import Document
from .element import Element
from .errors import JSONAPIErrorBuilder
from .relationship import Relationship
from .resource import Resource
from .util import parse_relationship_paths

__all__ = [
    "Collection",
    "Document",
    "Element",
    "JSONAPIErrorBuilder",
    "Relationship",
    "Resource",
    "parse_relationship_paths",
]
