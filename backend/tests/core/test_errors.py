"""Error Hierarchy - codes, statuses and response bodies."""

from brc20_api.core.errors import (
    ErrorCategory, ErrorSeverity, LedgerApiError, NotFoundError, StoreError,
    ValidationError,
)


def test_validation_error_body_names_field():
    exc = ValidationError("limit must be between 1 and 60, got 0", "limit")
    body = exc.to_response()
    assert exc.http_status == 400
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert body["error"]["category"] == ErrorCategory.VALIDATION.value
    assert body["error"]["details"] == [
        {"field": "limit", "message": "limit must be between 1 and 60, got 0"},
    ]


def test_not_found_body_is_fixed_for_every_resource():
    token = NotFoundError("token", "zzzz")
    supply = NotFoundError("supply", "ordi")
    assert token.to_response() == supply.to_response() == {"error": "Not Found"}
    assert token.severity is ErrorSeverity.INFO
    assert supply.resource == "supply"


def test_not_found_body_is_not_shared_state():
    body = NotFoundError("token", "zzzz").to_response()
    body["error"] = "changed"
    assert NotFoundError("token", "zzzz").to_response() == {"error": "Not Found"}


def test_store_error_is_service_unavailable():
    exc = StoreError("timeout", "get_tokens")
    assert isinstance(exc, LedgerApiError)
    assert exc.http_status == 503
    assert exc.operation == "get_tokens"
    assert exc.message == "Ledger store get_tokens failed: timeout"
