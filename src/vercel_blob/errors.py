"""Typed errors raised by the blob clients.

Every error the library raises on its own account is a :class:`BlobError`
carrying one of the codes in :class:`BlobErrorCode`. Transport failures
(connection errors, timeouts, cancellation) are raised by httpx/asyncio as-is.
"""

from __future__ import annotations

from enum import Enum


class BlobErrorCode(str, Enum):
    NOT_AUTHENTICATED = "not_authenticated"
    BAD_REQUEST = "bad_request"
    FORBIDDEN = "forbidden"
    STORE_NOT_FOUND = "store_not_found"
    STORE_SUSPENDED = "store_suspended"
    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"
    UNKNOWN_ERROR = "unknown_error"


class BlobError(Exception):
    """Base class for all blob errors."""

    code: BlobErrorCode = BlobErrorCode.UNKNOWN_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class BlobNotAuthenticatedError(BlobError):
    code = BlobErrorCode.NOT_AUTHENTICATED

    def __init__(self) -> None:
        super().__init__(
            "No authentication token. Expected environment variable "
            "BLOB_READ_WRITE_TOKEN to contain a token"
        )


class BlobBadRequestError(BlobError):
    code = BlobErrorCode.BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(f"Invalid request: {message}")


class BlobAccessError(BlobError):
    code = BlobErrorCode.FORBIDDEN

    def __init__(self) -> None:
        super().__init__("Access denied, please provide a valid token for this resource")


class BlobStoreNotFoundError(BlobError):
    code = BlobErrorCode.STORE_NOT_FOUND

    def __init__(self) -> None:
        super().__init__("The requested store does not exist")


class BlobStoreSuspendedError(BlobError):
    code = BlobErrorCode.STORE_SUSPENDED

    def __init__(self) -> None:
        super().__init__("The requested store has been suspended")


class BlobNotFoundError(BlobError):
    code = BlobErrorCode.NOT_FOUND

    def __init__(self) -> None:
        super().__init__("The requested blob does not exist")


class BlobInvalidInputError(BlobError):
    """Raised before any request is sent when an argument is unusable."""

    code = BlobErrorCode.INVALID_INPUT

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"{field} is required")


class BlobUnknownError(BlobError):
    """Catch-all for unrecognised server codes, 5xx responses and bad bodies."""

    code = BlobErrorCode.UNKNOWN_ERROR

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.detail = message
        super().__init__(
            f"Unknown error, please visit https://vercel.com/help ({status_code}): {message}"
        )


__all__ = [
    "BlobErrorCode",
    "BlobError",
    "BlobNotAuthenticatedError",
    "BlobBadRequestError",
    "BlobAccessError",
    "BlobStoreNotFoundError",
    "BlobStoreSuspendedError",
    "BlobNotFoundError",
    "BlobInvalidInputError",
    "BlobUnknownError",
]
