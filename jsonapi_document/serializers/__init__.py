"""Serializers and relationship builders."""

from .base import Serializer
from .builders import HasMany, HasOne, RelationshipBuilder
from .model import ModelSerializer
from .registry import SerializerRegistry, registry

__all__ = [
    "HasMany",
    "HasOne",
    "ModelSerializer",
    "RelationshipBuilder",
    "Serializer",
    "SerializerRegistry",
    "registry",
]
