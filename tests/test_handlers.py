import pytest

from jsonapi_document import InvalidParameter, JSONAPIErrorBuilder, JSONAPIException
from jsonapi_document.handlers import (
    ErrorHandler,
    FallbackHandler,
    InvalidParameterHandler,
    JSONAPIExceptionHandler,
    ResponseBag,
)
from jsonapi_document.schemas import JSONAPIErrorDocument


class Conflict(JSONAPIException):
    status_code = 409
    title = "Conflict"


def test_invalid_parameter_maps_to_400():
    exc = InvalidParameter("Invalid includes [bogus]", parameter="include", invalid=["bogus"])
    bag = ErrorHandler.default().handle(exc)

    assert bag.status == 400
    assert bag.errors == [
        {
            "status": "400",
            "code": "invalid_parameter",
            "title": "Invalid Query Parameter",
            "detail": "Invalid includes [bogus]",
            "source": {"parameter": "include"},
        }
    ]
    assert bag.to_document().to_dict() == {"errors": bag.errors}


def test_custom_jsonapi_exception_uses_its_status():
    bag = ErrorHandler.default().handle(Conflict("Already exists"))

    assert bag.status == 409
    assert bag.errors == [{"status": "409", "title": "Conflict", "detail": "Already exists"}]


def test_duck_typed_exception_is_handled():
    class UpstreamError(Exception):
        status_code = 502

        def error_object(self):
            return {"status": "502", "title": "Bad Gateway"}

    assert JSONAPIExceptionHandler().manages(UpstreamError())
    assert ErrorHandler.default().handle(UpstreamError()).status == 502


def test_unknown_errors_do_not_leak_details():
    bag = ErrorHandler.default().handle(RuntimeError("database password is hunter2"))

    assert bag.status == 500
    assert bag.errors == [
        {"status": "500", "code": "internal_server_error", "title": "Internal Server Error"}
    ]


def test_debug_fallback_exposes_details():
    bag = FallbackHandler(debug=True).handle(RuntimeError("boom"))

    assert bag.errors[0]["detail"] == "boom"


def test_unmanaged_exception_raises():
    handler = ErrorHandler([JSONAPIExceptionHandler()])

    with pytest.raises(RuntimeError, match="KeyError"):
        handler.handle(KeyError("x"))

    handler.register_handler(FallbackHandler())
    assert handler.handle(KeyError("x")).status == 500


def test_error_builder():
    builder = JSONAPIErrorBuilder()

    assert builder.error_object(status=404, title="Not Found") == {"status": "404", "title": "Not Found"}
    assert builder.error_document([{"title": "x", "extra": 1}]) == {"errors": [{"title": "x"}]}
    with pytest.raises(ValueError):
        builder.error_object()


def test_invalid_parameter_handler_points_at_parameter():
    handler = InvalidParameterHandler()
    exc = InvalidParameter("Invalid sort parameters [secret]", parameter="sort", invalid=["secret"])

    assert handler.manages(exc)
    assert not handler.manages(Conflict("nope"))
    bag = handler.handle(exc)
    assert bag.status == 400
    assert bag.errors[0]["source"] == {"parameter": "sort"}
    assert bag.errors[0]["detail"] == "Invalid sort parameters [secret]"


def test_default_chain_prefers_invalid_parameter_handler():
    handlers = ErrorHandler.default().handlers

    assert isinstance(handlers[0], InvalidParameterHandler)
    assert isinstance(handlers[1], JSONAPIExceptionHandler)
    assert isinstance(handlers[-1], FallbackHandler)


def test_response_bag_validates_error_document():
    bag = ResponseBag(404, [{"status": "404", "title": "Not Found", "internal": "dropped"}])
    model = bag.to_model()

    assert isinstance(model, JSONAPIErrorDocument)
    assert model.errors == [{"status": "404", "title": "Not Found"}]
