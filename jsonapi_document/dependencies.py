"""FastAPI dependencies for JSON:API query parameters."""

from typing import Any, Callable, Iterable

from fastapi import Depends, Request

from jsonapi_document.utils.query_params import Parameters


def get_parameters(request: Request) -> Parameters:
    """Return the parsed query parameters of the current request."""
    return Parameters.from_request(request)


def include_paths(allowed: Iterable[str]) -> Callable[..., set[str]]:
    """Return a dependency yielding validated ``include`` paths."""
    allowed = frozenset(allowed)

    def dependency(params: Parameters = Depends(get_parameters)) -> set[str]:
        return params.get_include(allowed)

    return dependency


def sort_fields(allowed: Iterable[str]) -> Callable[..., dict[str, str]]:
    """Return a dependency yielding validated ``sort`` criteria."""
    allowed = frozenset(allowed)

    def dependency(params: Parameters = Depends(get_parameters)) -> dict[str, str]:
        return params.get_sort(allowed)

    return dependency


def page(max_limit: int | None = None) -> Callable[..., dict[str, Any]]:
    """Return a dependency yielding ``{"offset": ..., "limit": ...}``."""

    def dependency(params: Parameters = Depends(get_parameters)) -> dict[str, Any]:
        limit = params.get_limit(max_limit)
        return {"offset": params.get_offset(limit), "limit": limit}

    return dependency
