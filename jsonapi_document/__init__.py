"""JSON:API v1.1 document assembly and query parameter parsing."""

from .core.collection import Collection
from .core.document import Document
from .core.errors import JSONAPIErrorBuilder
from .core.relationship import Relationship
from .core.resource import Resource
from .exceptions import InvalidParameter, JSONAPIException
from .serializers import HasMany, HasOne, ModelSerializer, Serializer, SerializerRegistry, registry
from .utils.query_params import Parameters

__all__ = [
    "Collection",
    "Document",
    "HasMany",
    "HasOne",
    "InvalidParameter",
    "JSONAPIErrorBuilder",
    "JSONAPIException",
    "ModelSerializer",
    "Parameters",
    "Relationship",
    "Resource",
    "Serializer",
    "SerializerRegistry",
    "registry",
]
