"""Tests for the bridge error taxonomy."""

from miru.bridge.errors import (
    BridgeError,
    BridgeTransportError,
    InvalidArgumentsError,
    MalformedResponseError,
    SchemaMismatchError,
    UnknownCommandError,
)
from miru.utils.exceptions import ErrorCategory, MiruError, classify_exception


def test_bridge_error_message_uses_string_detail():
    exc = BridgeError("deleteCollection", "not found")
    assert exc.message == "not found"
    assert exc.code == "COMMAND_FAILED"
    assert exc.category == ErrorCategory.RECOVERABLE
    assert exc.details == {"command": "deleteCollection"}


def test_bridge_error_message_for_structured_detail():
    detail = {"kind": "Conflict", "field": "name"}
    exc = BridgeError("createCollection", detail)
    assert exc.message == 'Command "createCollection" failed'
    assert exc.detail is detail
    assert exc.to_dict() == {
        "error": "COMMAND_FAILED",
        "message": 'Command "createCollection" failed',
        "category": "recoverable",
        "details": {"command": "createCollection"},
        "detail": detail,
    }


def test_protocol_errors_are_bridge_errors_with_synthetic_detail():
    malformed = MalformedResponseError("ping", "ok result has no data")
    transport = BridgeTransportError("ping", "backend connection lost", data={"code": "CONNECTION_LOST"})
    assert isinstance(malformed, BridgeError)
    assert isinstance(transport, BridgeError)
    assert malformed.detail == {"code": "MALFORMED_RESPONSE", "message": "ok result has no data"}
    assert transport.detail == {
        "code": "TRANSPORT_ERROR",
        "message": "backend connection lost",
        "data": {"code": "CONNECTION_LOST"},
    }
    assert classify_exception(transport) == ("TRANSPORT_ERROR", ErrorCategory.RETRYABLE, True)
    assert classify_exception(malformed) == ("MALFORMED_RESPONSE", ErrorCategory.FATAL, False)


def test_schema_mismatch_errors_are_type_errors_not_bridge_errors():
    for exc in (UnknownCommandError("nope"), InvalidArgumentsError("x", "bad")):
        assert isinstance(exc, SchemaMismatchError)
        assert isinstance(exc, TypeError)
        assert isinstance(exc, MiruError)
        assert not isinstance(exc, BridgeError)
        assert exc.category == ErrorCategory.VALIDATION


def test_invalid_arguments_error_details():
    exc = InvalidArgumentsError("double", "type mismatch for value", [{"param": "value", "errors": []}])
    assert exc.command == "double"
    assert exc.details == {"command": "double", "errors": [{"param": "value", "errors": []}]}
    assert str(exc) == "[INVALID_ARGUMENTS] invalid arguments for double: type mismatch for value"
