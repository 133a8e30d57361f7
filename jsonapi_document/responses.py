"""Starlette response rendering JSON:API documents."""

from typing import Any

from starlette.responses import JSONResponse

from jsonapi_document.core.document import Document

JSONAPI_MEDIA_TYPE = "application/vnd.api+json"


class JSONAPIResponse(JSONResponse):
    """JSON response with the JSON:API media type; accepts a :class:`Document`."""

    media_type = JSONAPI_MEDIA_TYPE

    def render(self, content: Any) -> bytes:
        if isinstance(content, Document):
            content = content.to_dict()
        return super().render(content)
