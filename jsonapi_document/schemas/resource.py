"""Pydantic schemas for rendered JSON:API v1.1 documents."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel


class JSONAPIResourceIdentifier(BaseModel):
    """Resource identifier object: type + id."""

    type: str
    id: str
    meta: Optional[Dict[str, Any]] = None


class JSONAPIRelationship(BaseModel):
    """Relationship object with resource linkage."""

    data: Optional[Union[JSONAPIResourceIdentifier, List[JSONAPIResourceIdentifier]]] = None
    links: Optional[Dict[str, Any]] = None
    meta: Optional[Dict[str, Any]] = None


class JSONAPIResource(BaseModel):
    """Resource object with attributes and relationships."""

    type: str
    id: Optional[str] = None
    attributes: Optional[Dict[str, Any]] = None
    relationships: Optional[Dict[str, JSONAPIRelationship]] = None
    links: Optional[Dict[str, Any]] = None
    meta: Optional[Dict[str, Any]] = None


class JSONAPIDocument(BaseModel):
    """Top-level JSON:API document."""

    data: Optional[Union[JSONAPIResource, List[JSONAPIResource]]] = None
    included: Optional[List[JSONAPIResource]] = None
    meta: Optional[Dict[str, Any]] = None
    links: Optional[Dict[str, Any]] = None
    errors: Optional[List[Dict[str, Any]]] = None
    jsonapi: Optional[Dict[str, Any]] = None


class JSONAPIErrorDocument(BaseModel):
    """Top-level JSON:API error document."""

    errors: List[Dict[str, Any]]
