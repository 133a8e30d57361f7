"""Pagination base class for JSON:API links and meta."""

from typing import Any, Mapping, Sequence


class PaginationBase:
    """Define pagination API for JSON:API."""

    def paginate_queryset(self, items: Sequence[Any], offset: int, limit: int) -> list[Any]:
        """Return a paginated slice of items."""
        raise NotImplementedError

    def get_links(
        self,
        url: str,
        query_params: Mapping[str, Any],
        offset: int,
        limit: int,
        total: int | None = None,
    ) -> dict[str, str]:
        """Return JSON:API pagination links."""
        raise NotImplementedError

    def get_meta(self, *, total: int | None, offset: int, limit: int) -> dict[str, Any]:
        """Return JSON:API pagination metadata (total, limit, offset, etc.)."""
        raise NotImplementedError
