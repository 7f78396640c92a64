"""Three-phase multipart upload: create, upload parts, complete.

Parts are uploaded one at a time, in order. The session only lives for the
duration of one ``upload`` call; the first failed request aborts it and the
collected parts are dropped. There is no resume and no remote abort call.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx

from ._http import JSONBody, RawBody
from .errors import BlobUnknownError
from .types import MultipartPart
from .utils import debug, iter_body_chunks

if TYPE_CHECKING:
    from ._core import BlobRequestClient

MULTIPART_THRESHOLD = 5 * 1024 * 1024  # 5 MiB; also the size of every part but the last

PartIterFn = Callable[[Any, int], AsyncIterator[bytes]]


@dataclass(frozen=True, slots=True)
class MultipartUploadSession:
    upload_id: str
    key: str
    pathname: str


async def iter_parts_blocking(body: Any, part_size: int) -> AsyncIterator[bytes]:
    # Never suspends, so it can run under iter_coroutine.
    for chunk in iter_body_chunks(body, part_size):
        yield chunk


def get_part_etag(response: httpx.Response) -> str:
    etag = response.headers.get("etag")
    if etag:
        return etag
    try:
        etag = response.json().get("etag")
    except (ValueError, AttributeError):
        etag = None
    if not etag:
        raise BlobUnknownError(response.status_code, "multipart upload part returned no ETag")
    return str(etag)


class MultipartUploader:
    def __init__(
        self,
        request_client: BlobRequestClient,
        *,
        iter_parts: PartIterFn = iter_parts_blocking,
        part_size: int = MULTIPART_THRESHOLD,
    ) -> None:
        self._request_client = request_client
        self._iter_parts = iter_parts
        self._part_size = part_size

    @property
    def _mpu_url(self) -> str:
        return self._request_client.config.api_url("mpu")

    async def create(
        self,
        pathname: str,
        headers: dict[str, str],
        *,
        timeout: float | None = None,
    ) -> MultipartUploadSession:
        response = await self._request_client.request(
            "POST",
            self._mpu_url,
            operation="put",
            pathname=pathname,
            headers={**headers, "x-mpu-action": "create"},
            params={"pathname": pathname},
            timeout=timeout,
        )
        try:
            data = response.json()
            upload_id, key = str(data["uploadId"]), str(data["key"])
        except (ValueError, KeyError, TypeError) as exc:
            raise BlobUnknownError(response.status_code, "invalid response body") from exc
        debug(f"created multipart upload for {pathname}", upload_id)
        return MultipartUploadSession(upload_id=upload_id, key=key, pathname=pathname)

    async def upload_part(
        self,
        session: MultipartUploadSession,
        part_number: int,
        content: bytes,
        *,
        timeout: float | None = None,
    ) -> MultipartPart:
        response = await self._request_client.request(
            "PUT",
            self._mpu_url,
            operation="put",
            pathname=session.pathname,
            headers={
                "x-mpu-action": "upload",
                "x-mpu-upload-id": session.upload_id,
                "x-mpu-key": quote(session.key, safe=""),
                "x-mpu-part-number": str(part_number),
            },
            params={"pathname": session.pathname},
            body=RawBody(content),
            timeout=timeout,
        )
        part = MultipartPart(part_number=part_number, etag=get_part_etag(response))
        debug(f"uploaded part {part_number} of {session.pathname}", len(content))
        return part

    async def complete(
        self,
        session: MultipartUploadSession,
        parts: list[MultipartPart],
        *,
        timeout: float | None = None,
    ) -> httpx.Response:
        return await self._request_client.request(
            "POST",
            self._mpu_url,
            operation="put",
            pathname=session.pathname,
            headers={
                "x-mpu-action": "complete",
                "x-mpu-upload-id": session.upload_id,
                "x-mpu-key": quote(session.key, safe=""),
            },
            params={"pathname": session.pathname},
            body=JSONBody(
                {
                    "uploadId": session.upload_id,
                    "key": session.key,
                    "parts": [part.to_dict() for part in parts],
                }
            ),
            timeout=timeout,
        )

    async def upload(
        self,
        pathname: str,
        body: Any,
        *,
        headers: dict[str, str],
        timeout: float | None = None,
    ) -> httpx.Response:
        """Upload ``body`` as parts of ``part_size`` bytes and return the complete response."""
        session = await self.create(pathname, headers, timeout=timeout)
        parts: list[MultipartPart] = []
        part_number = 1
        async for chunk in self._iter_parts(body, self._part_size):
            parts.append(await self.upload_part(session, part_number, chunk, timeout=timeout))
            part_number += 1
        return await self.complete(session, parts, timeout=timeout)


__all__ = [
    "MULTIPART_THRESHOLD",
    "MultipartUploadSession",
    "MultipartUploader",
    "get_part_etag",
    "iter_parts_blocking",
]
