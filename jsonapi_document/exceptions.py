"""Exceptions raised by jsonapi_document."""

from __future__ import annotations

from typing import Any, Iterable


class JSONAPIException(Exception):
    """Base error that knows how to describe itself as a JSON:API error object."""

    status_code: int = 500
    code: str | None = None
    title: str | None = None

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail)
        self.detail = detail

    def error_object(self) -> dict[str, Any]:
        """Return the JSON:API error object for this exception."""
        error: dict[str, Any] = {"status": str(self.status_code)}
        for key in ("code", "title", "detail"):
            value = getattr(self, key)
            if value is not None:
                error[key] = value
        return error


class InvalidParameter(JSONAPIException):
    """A query parameter failed validation.

    ``parameter`` is the offending query key (``include``, ``sort``,
    ``page[offset]``), ``invalid`` the rejected values and ``allowed`` the
    whitelist it was checked against, if any.
    """

    status_code = 400
    code = "invalid_parameter"
    title = "Invalid Query Parameter"

    def __init__(
        self,
        detail: str,
        *,
        parameter: str,
        invalid: Iterable[Any] = (),
        allowed: Iterable[str] | None = None,
    ) -> None:
        super().__init__(detail)
        self.parameter = parameter
        self.invalid = list(invalid)
        self.allowed = None if allowed is None else sorted(allowed)

    def error_object(self) -> dict[str, Any]:
        error = super().error_object()
        error["source"] = {"parameter": self.parameter}
        return error
