from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, TypeVar

import anyio.to_thread
import httpx

from ._http import (
    AsyncTransport,
    BaseTransport,
    BlockingTransport,
    JSONBody,
    RawBody,
    create_base_async_client,
    create_base_client,
)
from .auth import resolve_token
from .config import BlobClientConfig
from .errors import (
    BlobAccessError,
    BlobBadRequestError,
    BlobError,
    BlobInvalidInputError,
    BlobNotFoundError,
    BlobStoreNotFoundError,
    BlobStoreSuspendedError,
    BlobUnknownError,
)
from .multipart import MULTIPART_THRESHOLD, MultipartUploader, PartIterFn, iter_parts_blocking
from .types import (
    Access,
    ByteRange,
    HeadBlobResult,
    ListBlobItem,
    ListBlobResult,
    PutBlobResult,
)
from .utils import (
    STREAM_CHUNK_SIZE,
    aiter_body_chunks,
    coerce_byte_range,
    create_put_headers,
    debug,
    get_download_url,
    iter_body_chunks,
    normalize_delete_urls,
    parse_datetime,
    probe_body_length,
    read_full,
    validate_pathname,
)

_T = TypeVar("_T")

PUT_BODY_OBJECT_ERROR = (
    "Body must be a string, buffer or stream. "
    "You sent a plain object, double check what you're trying to upload."
)

_ERRORS_BY_CODE: dict[str, Callable[[str], BlobError]] = {
    "store_suspended": lambda _message: BlobStoreSuspendedError(),
    "forbidden": lambda _message: BlobAccessError(),
    "not_found": lambda _message: BlobNotFoundError(),
    "store_not_found": lambda _message: BlobStoreNotFoundError(),
    "bad_request": BlobBadRequestError,
}


def map_blob_error(response: httpx.Response) -> BlobError:
    """Translate a non-success response into a BlobError.

    5xx responses are not guaranteed to carry the JSON error envelope, so
    their body is never read.
    """
    status = response.status_code
    if status >= 500:
        return BlobUnknownError(status, response.reason_phrase)

    try:
        error = response.json()["error"]
        code = error.get("code") or ""
        message = error.get("message") or ""
    except (ValueError, KeyError, TypeError, AttributeError):
        return BlobUnknownError(status, response.reason_phrase)

    factory = _ERRORS_BY_CODE.get(code)
    if factory is None:
        return BlobUnknownError(status, message)
    return factory(message)


def decode_blob_response(response: httpx.Response, builder: Callable[[Any], _T]) -> _T:
    try:
        return builder(response.json())
    except (ValueError, KeyError, TypeError, AttributeError) as exc:
        raise BlobUnknownError(response.status_code, "invalid response body") from exc


def build_put_blob_result(raw: dict[str, Any]) -> PutBlobResult:
    return PutBlobResult(
        url=raw["url"],
        pathname=raw["pathname"],
        content_type=raw.get("contentType", ""),
        content_disposition=raw.get("contentDisposition", ""),
        download_url=raw.get("downloadUrl") or get_download_url(raw["url"]),
    )


def build_head_blob_result(raw: dict[str, Any]) -> HeadBlobResult:
    return HeadBlobResult(
        url=raw["url"],
        download_url=raw.get("downloadUrl") or get_download_url(raw["url"]),
        pathname=raw["pathname"],
        size=int(raw["size"]),
        uploaded_at=parse_datetime(raw["uploadedAt"]),
        content_type=raw.get("contentType", ""),
        content_disposition=raw.get("contentDisposition", ""),
        cache_control=raw.get("cacheControl", ""),
    )


def build_list_blob_result(raw: dict[str, Any]) -> ListBlobResult:
    blobs = [
        ListBlobItem(
            url=blob["url"],
            download_url=blob.get("downloadUrl") or get_download_url(blob["url"]),
            pathname=blob["pathname"],
            size=int(blob["size"]),
            uploaded_at=parse_datetime(blob["uploadedAt"]),
        )
        for blob in raw.get("blobs") or []
    ]
    return ListBlobResult(
        blobs=blobs,
        cursor=raw.get("cursor") or None,
        has_more=bool(raw.get("hasMore", False)),
        folders=raw.get("folders"),
    )


def build_list_params(
    *,
    limit: int | None = None,
    prefix: str | None = None,
    cursor: str | None = None,
    mode: str | None = None,
) -> dict[str, Any]:
    params: dict[str, Any] = {}
    if limit is not None:
        if limit <= 0:
            raise BlobInvalidInputError("limit", "limit must be a positive integer")
        params["limit"] = int(limit)
    if prefix:
        params["prefix"] = prefix
    if cursor:
        params["cursor"] = cursor
    if mode:
        if mode not in ("expanded", "folded"):
            raise BlobInvalidInputError("mode", 'mode must be "expanded" or "folded"')
        params["mode"] = mode
    return params


def resolve_page_limit(batch_size: int | None, limit: int | None, yielded: int) -> int | None:
    """Page size for the next list call, or 0 once ``limit`` items were yielded."""
    if limit is None:
        return batch_size
    remaining = limit - yielded
    if remaining <= 0:
        return 0
    if batch_size is None or batch_size > remaining:
        return remaining
    return batch_size


class BlobRequestClient:
    """Attach version and authorization headers and map failed responses."""

    def __init__(self, *, transport: BaseTransport, config: BlobClientConfig) -> None:
        self._transport = transport
        self._config = config

    @property
    def config(self) -> BlobClientConfig:
        return self._config

    @property
    def transport(self) -> BaseTransport:
        return self._transport

    async def request(
        self,
        method: str,
        url: str,
        *,
        operation: str,
        pathname: str,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        body: JSONBody | RawBody | None = None,
        timeout: float | None = None,
        not_found_on_404: bool = False,
    ) -> httpx.Response:
        # No token, no request.
        token = await resolve_token(self._config.token_provider, operation, pathname)
        final_headers = {
            "x-api-version": self._config.api_version,
            "authorization": f"Bearer {token}",
        }
        if headers:
            final_headers.update(headers)

        debug(f"{method} {url}", operation)
        response = await self._transport.send(
            method,
            url,
            params=params,
            body=body,
            headers=final_headers,
            timeout=timeout,
        )
        if response.is_success:
            return response

        debug(f"{method} {url} failed", response.status_code)
        if not_found_on_404 and response.status_code == 404:
            raise BlobNotFoundError()
        raise map_blob_error(response)


class BaseBlobOpsClient:
    """Blob operations written once as coroutines.

    Subclasses choose the transport and how request bodies are read; the
    blocking variant never suspends and is driven by iter_coroutine().
    """

    def __init__(
        self,
        *,
        transport: BaseTransport,
        config: BlobClientConfig,
        iter_parts: PartIterFn,
    ) -> None:
        self._config = config
        self._request_client = BlobRequestClient(transport=transport, config=config)
        self._multipart = MultipartUploader(self._request_client, iter_parts=iter_parts)

    @property
    def config(self) -> BlobClientConfig:
        return self._config

    async def _read_body(self, body: Any, length: int) -> bytes:
        raise NotImplementedError

    def _stream_body(self, body: Any) -> Any:
        raise NotImplementedError

    def _validate_body(self, body: Any) -> None:
        if body is None:
            raise BlobInvalidInputError("body")
        if isinstance(body, dict):
            raise BlobInvalidInputError("body", PUT_BODY_OBJECT_ERROR)
        if not (
            isinstance(body, (str, bytes, bytearray, memoryview))
            or hasattr(body, "read")
            or hasattr(body, "__iter__")
            or hasattr(body, "__aiter__")
        ):
            raise BlobInvalidInputError("body", PUT_BODY_OBJECT_ERROR)

    async def _prepare_content(self, body: Any, length: int | None) -> Any:
        if isinstance(body, str):
            return body.encode("utf-8")
        if isinstance(body, (bytes, bytearray, memoryview)):
            return bytes(body)
        if length is not None and hasattr(body, "read"):
            return await self._read_body(body, length)
        return self._stream_body(body)

    async def list_objects(
        self,
        *,
        limit: int | None = None,
        prefix: str | None = None,
        cursor: str | None = None,
        mode: str | None = None,
        timeout: float | None = None,
    ) -> ListBlobResult:
        params = build_list_params(limit=limit, prefix=prefix, cursor=cursor, mode=mode)
        response = await self._request_client.request(
            "GET",
            self._config.api_url(""),
            operation="list",
            pathname="",
            params=params,
            timeout=timeout,
        )
        return decode_blob_response(response, build_list_blob_result)

    async def put_blob(
        self,
        pathname: str,
        body: Any,
        *,
        access: Access = "public",
        content_type: str | None = None,
        add_random_suffix: bool = False,
        cache_control_max_age: int | None = None,
        timeout: float | None = None,
    ) -> PutBlobResult:
        validate_pathname(pathname)
        self._validate_body(body)
        headers = dict(
            create_put_headers(
                access=access,
                content_type=content_type,
                add_random_suffix=add_random_suffix,
                cache_control_max_age=cache_control_max_age,
            )
        )

        length = probe_body_length(body)
        if length is not None and length > MULTIPART_THRESHOLD:
            debug(f"uploading {pathname} in parts", length)
            response = await self._multipart.upload(
                pathname, body, headers=headers, timeout=timeout
            )
            return decode_blob_response(response, build_put_blob_result)

        response = await self._request_client.request(
            "PUT",
            self._config.api_url(pathname),
            operation="put",
            pathname=pathname,
            headers=headers,
            body=RawBody(await self._prepare_content(body, length)),
            timeout=timeout,
        )
        return decode_blob_response(response, build_put_blob_result)

    async def head_blob(self, pathname: str, *, timeout: float | None = None) -> HeadBlobResult:
        validate_pathname(pathname)
        response = await self._request_client.request(
            "GET",
            self._config.api_url(pathname),
            operation="head",
            pathname=pathname,
            timeout=timeout,
            not_found_on_404=True,
        )
        return decode_blob_response(response, build_head_blob_result)

    async def delete_blob(
        self,
        url_or_urls: str | Iterable[str],
        *,
        timeout: float | None = None,
    ) -> None:
        urls = normalize_delete_urls(url_or_urls)
        if not urls:
            return
        await self._request_client.request(
            "POST",
            self._config.api_url("delete"),
            operation="delete",
            pathname=urls[0],
            body=JSONBody({"urls": urls}),
            timeout=timeout,
        )

    async def copy_blob(
        self,
        from_url: str,
        to_pathname: str,
        *,
        access: Access = "public",
        content_type: str | None = None,
        add_random_suffix: bool = False,
        cache_control_max_age: int | None = None,
        timeout: float | None = None,
    ) -> PutBlobResult:
        validate_pathname(from_url, "from_url")
        validate_pathname(to_pathname, "to_pathname")
        headers = dict(
            create_put_headers(
                access=access,
                content_type=content_type,
                add_random_suffix=add_random_suffix,
                cache_control_max_age=cache_control_max_age,
            )
        )
        response = await self._request_client.request(
            "PUT",
            self._config.api_url(to_pathname),
            operation="put",
            pathname=to_pathname,
            headers=headers,
            params={"fromUrl": from_url},
            timeout=timeout,
        )
        return decode_blob_response(response, build_put_blob_result)

    async def download_blob(
        self,
        url: str,
        *,
        byte_range: ByteRange | tuple[int, int] | None = None,
        timeout: float | None = None,
    ) -> bytes:
        validate_pathname(url, "url")
        resolved_range = coerce_byte_range(byte_range)
        headers = {"range": resolved_range.header_value()} if resolved_range else None
        response = await self._request_client.request(
            "GET",
            url,
            operation="download",
            pathname=url,
            headers=headers,
            timeout=timeout,
        )
        return response.content


class SyncBlobOpsClient(BaseBlobOpsClient):
    def __init__(
        self, *, config: BlobClientConfig, http_client: httpx.Client | None = None
    ) -> None:
        self._transport = BlockingTransport(
            http_client or create_base_client(timeout=config.timeout),
            owns_client=http_client is None,
        )
        super().__init__(
            transport=self._transport,
            config=config,
            iter_parts=iter_parts_blocking,
        )

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> SyncBlobOpsClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _validate_body(self, body: Any) -> None:
        super()._validate_body(body)
        if hasattr(body, "__aiter__"):
            raise BlobInvalidInputError(
                "body", "async iterables are only supported by AsyncBlobClient"
            )

    async def _read_body(self, body: Any, length: int) -> bytes:
        return read_full(body, length)

    def _stream_body(self, body: Any) -> Any:
        return iter_body_chunks(body, STREAM_CHUNK_SIZE)


class AsyncBlobOpsClient(BaseBlobOpsClient):
    def __init__(
        self, *, config: BlobClientConfig, http_client: httpx.AsyncClient | None = None
    ) -> None:
        self._transport = AsyncTransport(
            http_client or create_base_async_client(timeout=config.timeout),
            owns_client=http_client is None,
        )
        super().__init__(
            transport=self._transport,
            config=config,
            iter_parts=aiter_body_chunks,
        )

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def __aenter__(self) -> AsyncBlobOpsClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def _read_body(self, body: Any, length: int) -> bytes:
        return await anyio.to_thread.run_sync(read_full, body, length)

    def _stream_body(self, body: Any) -> Any:
        return aiter_body_chunks(body, STREAM_CHUNK_SIZE)


__all__ = [
    "AsyncBlobOpsClient",
    "BaseBlobOpsClient",
    "BlobRequestClient",
    "SyncBlobOpsClient",
    "build_head_blob_result",
    "build_list_blob_result",
    "build_list_params",
    "build_put_blob_result",
    "decode_blob_response",
    "map_blob_error",
    "resolve_page_limit",
]
