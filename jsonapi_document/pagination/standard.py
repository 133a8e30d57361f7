"""Offset and page-number pagination for JSON:API documents."""

from __future__ import annotations

from typing import Any, Mapping, Sequence
from urllib.parse import urlencode, urlsplit, urlunsplit

from jsonapi_document.utils.query_params import nest_query_params

from .base import PaginationBase


def encode_query(params: Mapping[str, Any]) -> str:
    """Encode nested query params back into ``family[key]=value`` pairs."""
    pairs: list[tuple[str, Any]] = []
    for key, value in params.items():
        if isinstance(value, Mapping):
            for sub_key, sub_value in value.items():
                pairs.append((f"{key}[{sub_key}]", _flatten_value(sub_value)))
        else:
            pairs.append((key, _flatten_value(value)))
    return urlencode(pairs, safe="[],")


def _flatten_value(value: Any) -> Any:
    if isinstance(value, (list, tuple, set)):
        return ",".join(str(item) for item in value)
    return value


class StandardPagination(PaginationBase):
    """``page[offset]``/``page[limit]`` pagination, with ``page[number]`` support.

    When the incoming query uses ``page[number]`` the generated links keep
    using page numbers (page 1 is left implicit) and the offset is snapped to
    a page boundary. Otherwise links carry ``page[offset]``, omitted for the
    first page. ``page[limit]`` and ``page[size]`` are only rewritten when the
    query already carries them.
    """

    def paginate_queryset(self, items: Sequence[Any], offset: int, limit: int) -> list[Any]:
        """Return ``limit`` items starting at ``offset``."""
        if offset < 0 or limit < 1:
            return list(items)
        return list(items[offset : offset + limit])

    def get_links(
        self,
        url: str,
        query_params: Mapping[str, Any],
        offset: int,
        limit: int,
        total: int | None = None,
    ) -> dict[str, str]:
        """Build ``first``/``prev``/``self``/``next``/``last`` links.

        ``url`` is the resource URL without a query string; ``query_params``
        are the request's query params, nested or with bracketed keys.
        """
        if limit < 1:
            raise ValueError("Pagination limit must be a positive integer.")

        params = nest_query_params(query_params)
        page = params.get("page")
        uses_number = isinstance(page, Mapping) and "number" in page
        if uses_number:
            offset = (offset // limit) * limit

        def build_url(page_offset: int) -> str:
            link_params = {
                key: dict(value) if isinstance(value, Mapping) else value
                for key, value in params.items()
            }
            link_page = link_params.get("page")
            if not isinstance(link_page, dict):
                link_page = {}
            if uses_number:
                number = page_offset // limit + 1
                if number > 1:
                    link_page["number"] = number
                else:
                    link_page.pop("number", None)
            elif page_offset > 0:
                link_page["offset"] = page_offset
            else:
                link_page.pop("offset", None)
            for key in ("limit", "size"):
                if key in link_page:
                    link_page[key] = limit
            if link_page:
                link_params["page"] = link_page
            else:
                link_params.pop("page", None)

            split = urlsplit(url)
            return urlunsplit(
                (split.scheme, split.netloc, split.path, encode_query(link_params), split.fragment)
            )

        links = {"first": build_url(0)}
        if offset > 0:
            links["prev"] = build_url(max(0, offset - limit))
        links["self"] = build_url(offset)
        if total is None or offset + limit < total:
            links["next"] = build_url(offset + limit)
        if total:
            links["last"] = build_url(((total - 1) // limit) * limit)
        return links

    def get_meta(self, *, total: int | None, offset: int, limit: int) -> dict[str, Any]:
        """Build pagination metadata with total, limit, and offset."""
        meta: dict[str, Any] = {"limit": limit, "offset": offset}
        if total is not None:
            meta["total"] = total
        return meta
