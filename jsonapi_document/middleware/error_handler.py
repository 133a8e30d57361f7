"""JSON:API error handling middleware."""

import logging
from typing import Any, Iterable

from jsonapi_document.handlers import ErrorHandler, ExceptionHandler
from jsonapi_document.responses import JSONAPIResponse

logger = logging.getLogger(__name__)


class ErrorHandlerMiddleware:
    """Convert exceptions into JSON:API error documents."""

    def __init__(
        self,
        app: Any,
        *,
        debug: bool = False,
        handlers: Iterable[ExceptionHandler] | None = None,
    ) -> None:
        """Store the ASGI app and the exception handler chain."""
        self.app = app
        if handlers is None:
            self.error_handler = ErrorHandler.default(debug=debug)
        else:
            self.error_handler = ErrorHandler(handlers)

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        """Handle exceptions and serialize JSON:API error documents."""
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        try:
            await self.app(scope, receive, send)
        except Exception as exc:
            bag = self.error_handler.handle(exc)
            if bag.status >= 500:
                logger.exception("Unhandled error while serving %s", scope.get("path"))
            response = JSONAPIResponse(
                bag.to_model().model_dump(exclude_none=True), status_code=bag.status
            )
            await response(scope, receive, send)
