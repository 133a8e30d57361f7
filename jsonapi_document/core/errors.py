"""JSON:API error objects."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

ERROR_MEMBERS = ("id", "status", "code", "title", "detail", "source", "links", "meta")


class JSONAPIErrorBuilder:
    """Build JSON:API error objects and error documents."""

    def error_object(
        self,
        *,
        status: int | str | None = None,
        code: str | None = None,
        title: str | None = None,
        detail: str | None = None,
        source: Mapping[str, Any] | None = None,
        meta: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return a JSON:API error object; ``status`` is rendered as a string."""
        values = {
            "status": None if status is None else str(status),
            "code": code,
            "title": title,
            "detail": detail,
            "source": None if source is None else dict(source),
            "meta": None if meta is None else dict(meta),
        }
        error = {key: value for key, value in values.items() if value is not None}
        if not error:
            raise ValueError("Error object must include at least one field.")
        return error

    def error_document(self, errors: Iterable[Mapping[str, Any]]) -> dict[str, Any]:
        """Return a JSON:API document with an errors array."""
        return {
            "errors": [
                {key: error[key] for key in ERROR_MEMBERS if key in error} for error in errors
            ]
        }
