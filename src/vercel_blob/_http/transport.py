"""HTTP transport implementations for the blocking and async blob clients."""

from __future__ import annotations

import abc
from collections.abc import AsyncIterable, Iterable
from dataclasses import dataclass
from typing import Any

import httpx


@dataclass(frozen=True, slots=True)
class JSONBody:
    """JSON request body - httpx sets Content-Type to application/json."""

    data: Any


@dataclass(frozen=True, slots=True)
class RawBody:
    """Raw request body: bytes or an iterable of byte chunks."""

    content: bytes | Iterable[bytes] | AsyncIterable[bytes]


RequestBody = JSONBody | RawBody | None


def _request_kwargs(
    *,
    params: dict[str, Any] | None,
    body: RequestBody,
    headers: dict[str, str] | None,
    timeout: float | None,
) -> dict[str, Any]:
    kwargs: dict[str, Any] = {"headers": headers or {}}
    if params:
        kwargs["params"] = params
    if isinstance(body, JSONBody):
        kwargs["json"] = body.data
    elif isinstance(body, RawBody):
        kwargs["content"] = body.content
    if timeout is not None:
        kwargs["timeout"] = httpx.Timeout(timeout)
    return kwargs


class BaseTransport(abc.ABC):
    """Abstract base class for HTTP transports."""

    @abc.abstractmethod
    async def send(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        body: RequestBody = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """Send an HTTP request to an absolute URL and return the response."""
        ...

    @abc.abstractmethod
    def close(self) -> None:
        """Close any underlying resources."""
        ...

    async def aclose(self) -> None:
        self.close()


class BlockingTransport(BaseTransport):
    """
    Synchronous HTTP transport over a shared, pooled httpx.Client.

    ``send`` is declared async but never awaits, so the request core can be
    executed via iter_coroutine().
    """

    def __init__(self, client: httpx.Client, *, owns_client: bool = True) -> None:
        self._client = client
        self._owns_client = owns_client

    async def send(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        body: RequestBody = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """Send a synchronous HTTP request (wrapped as async for iter_coroutine)."""
        kwargs = _request_kwargs(params=params, body=body, headers=headers, timeout=timeout)
        return self._client.request(method, url, **kwargs)

    def close(self) -> None:
        """Close the underlying HTTP client if this transport created it."""
        if self._owns_client:
            self._client.close()


class AsyncTransport(BaseTransport):
    """Asynchronous HTTP transport over a shared, pooled httpx.AsyncClient."""

    def __init__(self, client: httpx.AsyncClient, *, owns_client: bool = True) -> None:
        self._client = client
        self._owns_client = owns_client

    async def send(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        body: RequestBody = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """Send an asynchronous HTTP request."""
        kwargs = _request_kwargs(params=params, body=body, headers=headers, timeout=timeout)
        return await self._client.request(method, url, **kwargs)

    def close(self) -> None:
        """Async clients must be closed with aclose()."""
        raise RuntimeError("AsyncTransport must be closed with aclose()")

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


__all__ = [
    "BaseTransport",
    "BlockingTransport",
    "AsyncTransport",
    "JSONBody",
    "RawBody",
    "RequestBody",
]
