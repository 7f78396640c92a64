"""Python client for the Vercel Blob storage API."""

from .auth import EnvTokenProvider, TokenProvider
from .client import AsyncBlobClient, BlobClient
from .client_token import (
    ClientTokenOptions,
    generate_client_token,
    get_payload_from_client_token,
)
from .config import DEFAULT_API_VERSION, DEFAULT_BASE_URL, BlobClientConfig
from .errors import (
    BlobAccessError,
    BlobBadRequestError,
    BlobError,
    BlobErrorCode,
    BlobInvalidInputError,
    BlobNotAuthenticatedError,
    BlobNotFoundError,
    BlobStoreNotFoundError,
    BlobStoreSuspendedError,
    BlobUnknownError,
)
from .multipart import MULTIPART_THRESHOLD
from .types import (
    ByteRange,
    HeadBlobResult,
    ListBlobItem,
    ListBlobResult,
    MultipartPart,
    PutBlobResult,
)
from .utils import get_download_url

__all__ = [
    # clients
    "BlobClient",
    "AsyncBlobClient",
    "BlobClientConfig",
    "DEFAULT_BASE_URL",
    "DEFAULT_API_VERSION",
    "MULTIPART_THRESHOLD",
    # auth
    "TokenProvider",
    "EnvTokenProvider",
    "ClientTokenOptions",
    "generate_client_token",
    "get_payload_from_client_token",
    # errors
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
    # types
    "ByteRange",
    "HeadBlobResult",
    "ListBlobItem",
    "ListBlobResult",
    "MultipartPart",
    "PutBlobResult",
    "get_download_url",
]
