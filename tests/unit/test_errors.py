import httpx
import pytest

from vercel_blob._core import map_blob_error
from vercel_blob.errors import (
    BlobAccessError,
    BlobBadRequestError,
    BlobErrorCode,
    BlobInvalidInputError,
    BlobNotAuthenticatedError,
    BlobNotFoundError,
    BlobStoreNotFoundError,
    BlobStoreSuspendedError,
    BlobUnknownError,
)


def _response(status: int, **kwargs) -> httpx.Response:
    return httpx.Response(status, request=httpx.Request("GET", "https://blob.test/"), **kwargs)


class TestMapBlobError:
    @pytest.mark.parametrize(
        ("code", "error_cls"),
        [
            ("store_suspended", BlobStoreSuspendedError),
            ("forbidden", BlobAccessError),
            ("not_found", BlobNotFoundError),
            ("store_not_found", BlobStoreNotFoundError),
            ("bad_request", BlobBadRequestError),
        ],
    )
    def test_known_codes(self, code: str, error_cls: type) -> None:
        error = map_blob_error(_response(400, json={"error": {"code": code, "message": "m"}}))
        assert type(error) is error_cls
        assert error.code == BlobErrorCode(code)

    def test_unknown_code_keeps_message(self) -> None:
        error = map_blob_error(_response(418, json={"error": {"code": "teapot", "message": "hi"}}))
        assert isinstance(error, BlobUnknownError)
        assert error.status_code == 418
        assert error.detail == "hi"

    def test_server_error_uses_reason_phrase(self) -> None:
        error = map_blob_error(_response(502, json={"error": {"code": "forbidden"}}))
        assert isinstance(error, BlobUnknownError)
        assert error.message == (
            "Unknown error, please visit https://vercel.com/help (502): Bad Gateway"
        )

    @pytest.mark.parametrize(
        "kwargs",
        [{"text": "not json"}, {"json": {"error": "flat"}}, {"json": ["list"]}, {"json": {}}],
    )
    def test_malformed_body(self, kwargs: dict) -> None:
        error = map_blob_error(_response(400, **kwargs))
        assert isinstance(error, BlobUnknownError)
        assert error.detail == "Bad Request"


class TestErrorMessages:
    def test_messages(self) -> None:
        assert BlobNotAuthenticatedError().message == (
            "No authentication token. Expected environment variable "
            "BLOB_READ_WRITE_TOKEN to contain a token"
        )
        assert BlobBadRequestError("oops").message == "Invalid request: oops"
        assert BlobInvalidInputError("pathname").message == "pathname is required"
        assert str(BlobNotFoundError()) == "The requested blob does not exist"

    def test_codes_are_closed_set(self) -> None:
        assert {code.value for code in BlobErrorCode} == {
            "not_authenticated",
            "bad_request",
            "forbidden",
            "store_not_found",
            "store_suspended",
            "not_found",
            "invalid_input",
            "unknown_error",
        }
