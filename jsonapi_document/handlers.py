"""Map exceptions to JSON:API error responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from jsonapi_document.core.document import Document
from jsonapi_document.core.errors import JSONAPIErrorBuilder
from jsonapi_document.exceptions import InvalidParameter
from jsonapi_document.schemas import JSONAPIErrorDocument


@dataclass
class ResponseBag:
    """HTTP status and error objects produced for an exception."""

    status: int
    errors: list[dict[str, Any]] = field(default_factory=list)

    def to_document(self) -> Document:
        """Return an error document for this response."""
        return Document().set_errors(JSONAPIErrorBuilder().error_document(self.errors)["errors"])

    def to_model(self) -> JSONAPIErrorDocument:
        """Render the error document and validate it against the pydantic schema."""
        return JSONAPIErrorDocument.model_validate(self.to_document().to_dict())


class ExceptionHandler:
    """Turn one family of exceptions into a :class:`ResponseBag`."""

    def manages(self, exc: BaseException) -> bool:
        """Return True if this handler can handle ``exc``."""
        raise NotImplementedError

    def handle(self, exc: BaseException) -> ResponseBag:
        """Return the response for ``exc``."""
        raise NotImplementedError


class InvalidParameterHandler(ExceptionHandler):
    """Handle :class:`InvalidParameter` as a 400 pointing at the offending parameter."""

    def __init__(self) -> None:
        self.builder = JSONAPIErrorBuilder()

    def manages(self, exc: BaseException) -> bool:
        return isinstance(exc, InvalidParameter)

    def handle(self, exc: BaseException) -> ResponseBag:
        error = self.builder.error_object(
            status=400,
            code=exc.code,  # type: ignore[attr-defined]
            title=exc.title,  # type: ignore[attr-defined]
            detail=exc.detail,  # type: ignore[attr-defined]
            source={"parameter": exc.parameter},  # type: ignore[attr-defined]
        )
        return ResponseBag(400, [error])


class JSONAPIExceptionHandler(ExceptionHandler):
    """Handle any exception exposing ``status_code`` and ``error_object()``."""

    def manages(self, exc: BaseException) -> bool:
        return isinstance(getattr(exc, "status_code", None), int) and callable(
            getattr(exc, "error_object", None)
        )

    def handle(self, exc: BaseException) -> ResponseBag:
        return ResponseBag(exc.status_code, [exc.error_object()])  # type: ignore[attr-defined]


class FallbackHandler(ExceptionHandler):
    """Handle everything else as a 500; the message is only exposed in debug mode."""

    def __init__(self, debug: bool = False) -> None:
        self.debug = debug
        self.builder = JSONAPIErrorBuilder()

    def manages(self, exc: BaseException) -> bool:
        return True

    def handle(self, exc: BaseException) -> ResponseBag:
        error = self.builder.error_object(
            status=500,
            code="internal_server_error",
            title="Internal Server Error",
            detail=str(exc) if self.debug else None,
        )
        return ResponseBag(500, [error])


class ErrorHandler:
    """Dispatch exceptions to the first registered handler that manages them."""

    def __init__(self, handlers: Iterable[ExceptionHandler] | None = None) -> None:
        self.handlers: list[ExceptionHandler] = list(handlers or [])

    @classmethod
    def default(cls, *, debug: bool = False) -> "ErrorHandler":
        """Return a handler chain for JSON:API exceptions with a 500 fallback."""
        return cls(
            [InvalidParameterHandler(), JSONAPIExceptionHandler(), FallbackHandler(debug=debug)]
        )

    def register_handler(self, handler: ExceptionHandler) -> None:
        """Append a handler to the chain."""
        self.handlers.append(handler)

    def handle(self, exc: BaseException) -> ResponseBag:
        """Return the response of the first handler managing ``exc``."""
        for handler in self.handlers:
            if handler.manages(exc):
                return handler.handle(exc)
        raise RuntimeError(f"Exception handler for {type(exc).__name__} not found.") from exc
