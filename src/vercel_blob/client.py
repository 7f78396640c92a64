from __future__ import annotations

from collections.abc import AsyncIterator, Iterable, Iterator
from typing import Any

import httpx

from ._core import AsyncBlobOpsClient, SyncBlobOpsClient, resolve_page_limit
from ._http import iter_coroutine
from .auth import EnvTokenProvider, TokenProvider
from .config import BlobClientConfig
from .errors import BlobError, BlobInvalidInputError
from .types import Access, ByteRange, HeadBlobResult, ListBlobItem, ListBlobResult, PutBlobResult


def _resolve_config(
    token: str | None,
    token_provider: TokenProvider | None,
    base_url: str | None,
    api_version: str | None,
    timeout: float | None,
) -> BlobClientConfig:
    if token is not None and token_provider is not None:
        raise BlobInvalidInputError("token", "Pass either token or token_provider, not both")
    if token is not None:
        token_provider = EnvTokenProvider(token)
    return BlobClientConfig.resolve(
        base_url=base_url,
        api_version=api_version,
        timeout=timeout,
        token_provider=token_provider,
    )


class BlobClient:
    """Blocking client for the blob store.

    Without a token or token provider, each request reads
    ``BLOB_READ_WRITE_TOKEN``. Token providers must return ``str`` here;
    awaitable providers need :class:`AsyncBlobClient`.
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        token_provider: TokenProvider | None = None,
        base_url: str | None = None,
        api_version: str | None = None,
        timeout: float | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._config = _resolve_config(token, token_provider, base_url, api_version, timeout)
        self._ops = SyncBlobOpsClient(config=self._config, http_client=http_client)
        self._closed = False

    @property
    def config(self) -> BlobClientConfig:
        return self._config

    def _ensure_open(self) -> SyncBlobOpsClient:
        if self._closed:
            raise BlobError("Client is closed")
        return self._ops

    def list_objects(
        self,
        *,
        limit: int | None = None,
        prefix: str | None = None,
        cursor: str | None = None,
        mode: str | None = None,
        timeout: float | None = None,
    ) -> ListBlobResult:
        return iter_coroutine(
            self._ensure_open().list_objects(
                limit=limit, prefix=prefix, cursor=cursor, mode=mode, timeout=timeout
            )
        )

    def iter_objects(
        self,
        *,
        prefix: str | None = None,
        mode: str | None = None,
        batch_size: int | None = None,
        limit: int | None = None,
        cursor: str | None = None,
        timeout: float | None = None,
    ) -> Iterator[ListBlobItem]:
        """Yield blobs page by page, following the cursor until the listing ends."""
        next_cursor = cursor
        yielded = 0
        while True:
            page_limit = resolve_page_limit(batch_size, limit, yielded)
            if page_limit == 0:
                return
            page = self.list_objects(
                limit=page_limit, prefix=prefix, cursor=next_cursor, mode=mode, timeout=timeout
            )
            for item in page.blobs:
                yield item
                yielded += 1
                if limit is not None and yielded >= limit:
                    return
            if not page.has_more or not page.cursor:
                return
            next_cursor = page.cursor

    def put(
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
        """Upload ``body`` to ``pathname``.

        Bodies longer than the multipart threshold (5 MiB) whose length can be
        determined are sent as a sequential multipart upload.
        """
        return iter_coroutine(
            self._ensure_open().put_blob(
                pathname,
                body,
                access=access,
                content_type=content_type,
                add_random_suffix=add_random_suffix,
                cache_control_max_age=cache_control_max_age,
                timeout=timeout,
            )
        )

    def head(self, pathname: str, *, timeout: float | None = None) -> HeadBlobResult:
        return iter_coroutine(self._ensure_open().head_blob(pathname, timeout=timeout))

    def delete(self, url_or_urls: str | Iterable[str], *, timeout: float | None = None) -> None:
        iter_coroutine(self._ensure_open().delete_blob(url_or_urls, timeout=timeout))

    def copy(
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
        return iter_coroutine(
            self._ensure_open().copy_blob(
                from_url,
                to_pathname,
                access=access,
                content_type=content_type,
                add_random_suffix=add_random_suffix,
                cache_control_max_age=cache_control_max_age,
                timeout=timeout,
            )
        )

    def download(
        self,
        url: str,
        *,
        byte_range: ByteRange | tuple[int, int] | None = None,
        timeout: float | None = None,
    ) -> bytes:
        return iter_coroutine(
            self._ensure_open().download_blob(url, byte_range=byte_range, timeout=timeout)
        )

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._ops.close()

    def __enter__(self) -> BlobClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


class AsyncBlobClient:
    """Awaitable client for the blob store.

    Cancelling the awaiting task aborts the in-flight request; a multipart
    upload cut short this way is not cleaned up remotely.
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        token_provider: TokenProvider | None = None,
        base_url: str | None = None,
        api_version: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = _resolve_config(token, token_provider, base_url, api_version, timeout)
        self._ops = AsyncBlobOpsClient(config=self._config, http_client=http_client)
        self._closed = False

    @property
    def config(self) -> BlobClientConfig:
        return self._config

    def _ensure_open(self) -> AsyncBlobOpsClient:
        if self._closed:
            raise BlobError("Client is closed")
        return self._ops

    async def list_objects(
        self,
        *,
        limit: int | None = None,
        prefix: str | None = None,
        cursor: str | None = None,
        mode: str | None = None,
        timeout: float | None = None,
    ) -> ListBlobResult:
        return await self._ensure_open().list_objects(
            limit=limit, prefix=prefix, cursor=cursor, mode=mode, timeout=timeout
        )

    async def iter_objects(
        self,
        *,
        prefix: str | None = None,
        mode: str | None = None,
        batch_size: int | None = None,
        limit: int | None = None,
        cursor: str | None = None,
        timeout: float | None = None,
    ) -> AsyncIterator[ListBlobItem]:
        next_cursor = cursor
        yielded = 0
        while True:
            page_limit = resolve_page_limit(batch_size, limit, yielded)
            if page_limit == 0:
                return
            page = await self.list_objects(
                limit=page_limit, prefix=prefix, cursor=next_cursor, mode=mode, timeout=timeout
            )
            for item in page.blobs:
                yield item
                yielded += 1
                if limit is not None and yielded >= limit:
                    return
            if not page.has_more or not page.cursor:
                return
            next_cursor = page.cursor

    async def put(
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
        return await self._ensure_open().put_blob(
            pathname,
            body,
            access=access,
            content_type=content_type,
            add_random_suffix=add_random_suffix,
            cache_control_max_age=cache_control_max_age,
            timeout=timeout,
        )

    async def head(self, pathname: str, *, timeout: float | None = None) -> HeadBlobResult:
        return await self._ensure_open().head_blob(pathname, timeout=timeout)

    async def delete(
        self, url_or_urls: str | Iterable[str], *, timeout: float | None = None
    ) -> None:
        await self._ensure_open().delete_blob(url_or_urls, timeout=timeout)

    async def copy(
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
        return await self._ensure_open().copy_blob(
            from_url,
            to_pathname,
            access=access,
            content_type=content_type,
            add_random_suffix=add_random_suffix,
            cache_control_max_age=cache_control_max_age,
            timeout=timeout,
        )

    async def download(
        self,
        url: str,
        *,
        byte_range: ByteRange | tuple[int, int] | None = None,
        timeout: float | None = None,
    ) -> bytes:
        return await self._ensure_open().download_blob(
            url, byte_range=byte_range, timeout=timeout
        )

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._ops.aclose()

    async def __aenter__(self) -> AsyncBlobClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()


__all__ = ["BlobClient", "AsyncBlobClient"]
