from types import SimpleNamespace

import httpx
import pytest

from store_connectors.core.exceptions import ApiError, TransportError
from store_connectors.swell.schema import HttpMethod, TransportResponse
from store_connectors.swell.transformers import (
    format_message,
    normalize_code,
    normalize_headers,
    transform_error,
    transform_request,
    transform_response,
)


# ---------------- transform_request ----------------

class TestTransformRequest:

    def test_missing_data_becomes_none(self):
        request = transform_request("get", "/x")
        assert request.method == HttpMethod.GET
        assert request.url == "/x"
        assert request.data is None

    def test_data_passed_through(self):
        assert transform_request("get", "/x", {}).data == {}
        assert transform_request(HttpMethod.POST, "/x", {"name": "foo"}).data == {"name": "foo"}

    def test_url_objects_are_stringified(self):
        assert transform_request("get", httpx.URL("/products/1")).url == "/products/1"

    def test_none_url_becomes_empty_string(self):
        assert transform_request("delete", None).url == ""

    def test_unsupported_method(self):
        with pytest.raises(ValueError):
            transform_request("patch", "/x")


# ---------------- transform_response ----------------

def test_transform_response_keeps_data_headers_status():
    response = TransportResponse(
        data={"id": 1},
        headers=httpx.Headers({"X-Request-Id": "abc"}),
        status=201,
        status_text="Created",
    )

    normalized = transform_response(response)

    assert normalized.data == {"id": 1}
    assert normalized.status == 201
    assert normalized.headers == {"x-request-id": "abc"}
    assert type(normalized.headers) is dict
    assert not hasattr(normalized, "status_text")


# ---------------- transform_error ----------------

class TestTransformError:

    def test_error_response(self):
        response = TransportResponse(
            data="Internal Server Error\n",
            headers={"x-request-id": "abc"},
            status=500,
            status_text="Internal Server Error",
        )
        error = transform_error(TransportError("HTTP 500", response=response))

        assert isinstance(error, ApiError)
        assert error.code == "INTERNAL_SERVER_ERROR"
        assert error.message == "Internal Server Error"
        assert error.status == 500
        assert error.headers == {"x-request-id": "abc"}

    def test_structured_body_is_kept(self):
        response = TransportResponse(data={"error": "invalid"}, status=400, status_text="Bad Request")
        error = transform_error(TransportError("HTTP 400", response=response))

        assert error.message == {"error": "invalid"}
        assert error.code == "BAD_REQUEST"

    def test_response_wins_over_request(self):
        response = TransportResponse(data="gone", status=410, status_text="Gone")
        error = transform_error(TransportError("HTTP 410", request=object(), response=response))

        assert error.code == "GONE"
        assert error.status == 410

    def test_no_response(self):
        error = transform_error(TransportError("Connection refused", code="ConnectError", request=object()))

        assert error.code == "NO_RESPONSE"
        assert error.message == "No response from server"
        assert error.status is None
        assert error.headers == {}

    def test_request_never_sent(self):
        error = transform_error(TransportError("timeout of 0ms exceeded", code="ECONNABORTED"))

        assert error.code == "ECONNABORTED"
        assert error.message == "timeout of 0ms exceeded"
        assert error.status is None

    def test_duck_typed_error(self):
        error = transform_error(SimpleNamespace(code="conn aborted", message="aborted"))

        assert error.code == "CONN_ABORTED"
        assert error.message == "aborted"

    def test_plain_exception(self):
        error = transform_error(ValueError("boom"))

        assert error.code == "ERROR"
        assert error.message == "boom"

    def test_httpx_error_without_request(self):
        # httpx lève RuntimeError sur `.request` non renseignée
        error = transform_error(httpx.ConnectError("Connection refused"))

        assert error.code == "ERROR"
        assert error.status is None


# ---------------- Utilitaires ----------------

@pytest.mark.parametrize("code, expected", [
    ("Not Found", "NOT_FOUND"),
    ("Internal Server Error", "INTERNAL_SERVER_ERROR"),
    ("timeout", "TIMEOUT"),
    ("", "ERROR"),
    (None, "ERROR"),
    (404, "ERROR"),
])
def test_normalize_code(code, expected):
    assert normalize_code(code) == expected


def test_format_message():
    assert format_message("  Not found\n") == "Not found"
    assert format_message({"error": "x"}) == {"error": "x"}
    assert format_message(None) is None


class TestNormalizeHeaders:

    def test_empty(self):
        assert normalize_headers(None) == {}
        assert normalize_headers({}) == {}

    def test_httpx_headers_become_plain_dict(self):
        headers = httpx.Headers([
            ("Content-Type", "application/json"),
            ("Set-Cookie", "a=1"),
            ("Set-Cookie", "b=2"),
        ])

        normalized = normalize_headers(headers)

        assert type(normalized) is dict
        assert normalized == {"content-type": "application/json", "set-cookie": ["a=1", "b=2"]}

    def test_mapping_is_copied(self):
        headers = {"x-total": "10", "vary": ("Accept", "Origin")}

        normalized = normalize_headers(headers)

        assert normalized == {"x-total": "10", "vary": ["Accept", "Origin"]}
        assert normalized is not headers

    def test_idempotent(self):
        headers = httpx.Headers([("Set-Cookie", "a=1"), ("Set-Cookie", "b=2"), ("X-Id", "1")])

        once = normalize_headers(headers)
        assert normalize_headers(once) == once
