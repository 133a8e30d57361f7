"""Helpers for JSON:API query parameter parsing and validation."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any, Iterable, Mapping

from jsonapi_document.exceptions import InvalidParameter

if TYPE_CHECKING:
    from starlette.requests import Request

logger = logging.getLogger(__name__)

_FAMILY_KEY = re.compile(r"^([^\[\]]+)\[([^\[\]]*)\]$")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def nest_query_params(params: Mapping[str, Any]) -> dict[str, Any]:
    """Fold bracketed keys into nested mappings.

    ``{"page[size]": "20", "include": "author"}`` becomes
    ``{"page": {"size": "20"}, "include": "author"}``. Already nested
    mappings are copied as they are.
    """
    nested: dict[str, Any] = {}
    for key, value in params.items():
        match = _FAMILY_KEY.match(key)
        if match:
            family, member = match.groups()
            nested.setdefault(family, {})
            if isinstance(nested[family], dict):
                nested[family][member] = value
        elif isinstance(value, Mapping):
            nested.setdefault(key, {})
            if isinstance(nested[key], dict):
                nested[key].update(value)
        else:
            nested[key] = value
    return nested


def _split_csv(value: Any) -> list[str]:
    if isinstance(value, (list, tuple)):
        value = ",".join(str(item) for item in value)
    return [item for item in (part.strip() for part in str(value).split(",")) if item]


def _to_int(value: Any) -> int:
    """Parse the leading integer of a value: ``"20abc"`` -> 20, ``"abc"`` -> 0."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


class Parameters:
    """Parse and validate JSON:API query parameters.

    ``input`` is a mapping of query keys to string (or list of string)
    values. Both nested families (``{"page": {"size": "20"}}``) and bracketed
    keys (``{"page[size]": "20"}``) are accepted.
    """

    default_limit: int = 20

    def __init__(self, input: Mapping[str, Any] | None = None, *, default_limit: int | None = None) -> None:
        self.input = nest_query_params(input or {})
        if default_limit is not None:
            self.default_limit = default_limit

    @classmethod
    def from_request(cls, request: "Request") -> "Parameters":
        """Build parameters from a starlette/FastAPI request (usable with ``Depends``)."""
        return cls(request.query_params)

    def get_input(self, key: str, default: Any = None) -> Any:
        """Return a raw top-level parameter."""
        value = self.input.get(key)
        return default if value is None else value

    def get_page(self, key: str) -> Any:
        """Return a raw ``page[key]`` value, or None."""
        page = self.input.get("page")
        if not isinstance(page, Mapping):
            return None
        return page.get(key)

    def get_include(self, allowed: Iterable[str] = ()) -> set[str]:
        """Return requested include paths, all of which must be in ``allowed``."""
        value = self.get_input("include")
        if value is None:
            return set()
        includes = _split_csv(value)
        allowed = set(allowed)
        invalid = [path for path in includes if path not in allowed]
        if invalid:
            logger.debug("Rejected include paths %s", invalid)
            raise InvalidParameter(
                f"Invalid includes [{','.join(invalid)}]",
                parameter="include",
                invalid=invalid,
                allowed=allowed,
            )
        return set(includes)

    def get_fields(self) -> dict[str, set[str]]:
        """Return the sparse fieldsets as ``{type: {field, ...}}``.

        A type given with an empty value maps to an empty set, which
        suppresses every field of that type.
        """
        fields = self.get_input("fields")
        if not isinstance(fields, Mapping):
            return {}
        return {type_: set(_split_csv(value)) for type_, value in fields.items()}

    def get_sort(self, allowed: Iterable[str] = ()) -> dict[str, str]:
        """Return the sort criteria as an ordered ``{field: "asc" | "desc"}``.

        A repeated field keeps the position of its first occurrence and the
        direction of its last.
        """
        value = self.get_input("sort")
        if value is None:
            return {}
        sort: dict[str, str] = {}
        for field in _split_csv(value):
            if field.startswith("-"):
                sort[field[1:]] = "desc"
            else:
                sort[field] = "asc"

        allowed = set(allowed)
        invalid = [field for field in sort if field not in allowed]
        if invalid:
            logger.debug("Rejected sort fields %s", invalid)
            raise InvalidParameter(
                f"Invalid sort parameters [{','.join(invalid)}]",
                parameter="sort",
                invalid=invalid,
                allowed=allowed,
            )
        return sort

    def get_limit(self, max_limit: int | None = None) -> int:
        """Return the page size from ``page[limit]`` or ``page[size]``.

        Missing, zero or non-numeric values fall back to ``default_limit``.
        The result is clamped to ``max_limit`` and never negative.
        """
        limit = _to_int(self.get_page("limit")) or _to_int(self.get_page("size"))
        if not limit:
            limit = self.default_limit
        if max_limit is not None:
            limit = min(max_limit, limit)
        return max(0, limit)

    def get_offset(self, limit: int | None = None) -> int:
        """Return the offset from ``page[number]`` and ``limit``, or ``page[offset]``."""
        parameter = "page[offset]"
        number = _to_int(self.get_page("number")) if limit else 0
        if number > 1:
            parameter = "page[number]"
            offset = (number - 1) * limit
        else:
            offset = _to_int(self.get_page("offset"))

        if offset < 0:
            raise InvalidParameter(
                f"{parameter} must be >=0",
                parameter=parameter,
                invalid=[offset],
            )
        return offset

    def get_filter(self) -> Any:
        """Return the raw ``filter`` parameter, or None."""
        return self.get_input("filter")
