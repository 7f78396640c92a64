"""Shared HTTP infrastructure for the blob clients."""

from .clients import DEFAULT_TIMEOUT, create_base_async_client, create_base_client
from .iter_coroutine import iter_coroutine
from .transport import (
    AsyncTransport,
    BaseTransport,
    BlockingTransport,
    JSONBody,
    RawBody,
    RequestBody,
)

__all__ = [
    "DEFAULT_TIMEOUT",
    "iter_coroutine",
    "BaseTransport",
    "BlockingTransport",
    "AsyncTransport",
    "JSONBody",
    "RawBody",
    "RequestBody",
    "create_base_client",
    "create_base_async_client",
]
