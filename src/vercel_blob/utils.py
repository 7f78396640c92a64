from __future__ import annotations

import os
from collections.abc import AsyncIterator, Iterable, Iterator
from datetime import datetime
from typing import Any, Protocol, TypedDict
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

import anyio.to_thread

from .errors import BlobInvalidInputError, BlobUnknownError
from .types import Access, ByteRange

STREAM_CHUNK_SIZE = 64 * 1024


def debug(message: str, *args: Any) -> None:
    debug_env = os.getenv("DEBUG", "") or os.getenv("NEXT_PUBLIC_DEBUG", "")
    if "blob" in debug_env:
        print(f"vercel-blob: {message}", *args)


class SupportsRead(Protocol):
    def read(self, size: int = -1) -> bytes:  # pragma: no cover - Protocol
        ...


def validate_pathname(pathname: str, field: str = "pathname") -> str:
    if not pathname:
        raise BlobInvalidInputError(field)
    return pathname


def validate_access(access: str) -> Access:
    if access not in ("public", "private"):
        raise BlobInvalidInputError("access", 'access must be "public" or "private"')
    return access  # type: ignore[return-value]


# TypedDict with real HTTP header keys. Use functional syntax to allow hyphens.
PutHeaders = TypedDict(
    "PutHeaders",
    {
        "x-add-random-suffix": str,
        "x-content-type": str,
        "x-cache-control-max-age": str,
        "x-access": str,
    },
    total=False,
)


def create_put_headers(
    *,
    access: Access = "public",
    content_type: str | None = None,
    add_random_suffix: bool = False,
    cache_control_max_age: int | None = None,
) -> PutHeaders:
    headers: PutHeaders = {
        "x-add-random-suffix": "1" if add_random_suffix else "0",
        "x-access": validate_access(access),
    }
    if content_type:
        headers["x-content-type"] = content_type
    if cache_control_max_age is not None:
        if cache_control_max_age < 0:
            raise BlobInvalidInputError(
                "cache_control_max_age", "cache_control_max_age must not be negative"
            )
        headers["x-cache-control-max-age"] = str(int(cache_control_max_age))
    return headers


def probe_body_length(body: Any) -> int | None:
    """Return the number of bytes left in ``body``, or None when unknowable.

    Bytes-like and ``str`` bodies report their encoded length. File-like
    objects report the distance from their current position to the end and
    are left where they were. Anything else (pipes, generators) is unknown.
    """
    if isinstance(body, str):
        return len(body.encode("utf-8"))
    if isinstance(body, (bytes, bytearray, memoryview)):
        return memoryview(body).nbytes
    seekable = getattr(body, "seekable", None)
    if callable(seekable) and hasattr(body, "tell") and hasattr(body, "seek"):
        if not seekable():
            return None
        pos = body.tell()
        end = body.seek(0, os.SEEK_END)
        body.seek(pos)
        return max(int(end - pos), 0)
    return None


def read_full(source: SupportsRead, size: int) -> bytes:
    """Read up to ``size`` bytes, retrying short reads until EOF.

    Returns fewer than ``size`` bytes only at end of stream. An ``OSError``
    from the source aborts with BlobUnknownError instead of being mistaken for
    end of stream.
    """
    buffer = bytearray()
    while len(buffer) < size:
        try:
            chunk = source.read(size - len(buffer))
        except OSError as exc:
            raise BlobUnknownError(0, f"failed to read upload body: {exc}") from exc
        if not chunk:
            break
        buffer.extend(chunk if isinstance(chunk, (bytes, bytearray)) else bytes(chunk))
    return bytes(buffer)


def iter_body_chunks(body: Any, chunk_size: int) -> Iterator[bytes]:
    """Yield ``body`` as chunks of exactly ``chunk_size`` bytes; the last may be short.

    Empty chunks are never yielded.
    """
    if isinstance(body, str):
        body = body.encode("utf-8")
    if isinstance(body, (bytes, bytearray, memoryview)):
        view = memoryview(body)
        for offset in range(0, view.nbytes, chunk_size):
            yield bytes(view[offset : offset + chunk_size])
        return
    if hasattr(body, "read"):
        while True:
            chunk = read_full(body, chunk_size)
            if chunk:
                yield chunk
            if len(chunk) < chunk_size:
                return
    # Iterable[bytes]
    buffer = bytearray()
    for piece in body:
        buffer.extend(piece)
        while len(buffer) >= chunk_size:
            yield bytes(buffer[:chunk_size])
            del buffer[:chunk_size]
    if buffer:
        yield bytes(buffer)


async def aiter_body_chunks(body: Any, chunk_size: int) -> AsyncIterator[bytes]:
    """Async counterpart of iter_body_chunks.

    File-like reads run in a worker thread so they do not block the event
    loop. Async iterables of bytes are accepted as well.
    """
    if hasattr(body, "__aiter__"):
        buffer = bytearray()
        async for piece in body:
            buffer.extend(piece)
            while len(buffer) >= chunk_size:
                yield bytes(buffer[:chunk_size])
                del buffer[:chunk_size]
        if buffer:
            yield bytes(buffer)
        return
    if hasattr(body, "read") and not isinstance(body, (bytes, bytearray, memoryview, str)):
        while True:
            chunk = await anyio.to_thread.run_sync(read_full, body, chunk_size)
            if chunk:
                yield chunk
            if len(chunk) < chunk_size:
                return
    for chunk in iter_body_chunks(body, chunk_size):
        yield chunk


def normalize_delete_urls(url_or_urls: str | Iterable[str]) -> list[str]:
    if isinstance(url_or_urls, str):
        urls = [url_or_urls]
    else:
        urls = [str(url) for url in url_or_urls]
    for url in urls:
        validate_pathname(url, "url")
    return urls


def coerce_byte_range(byte_range: ByteRange | tuple[int, int] | None) -> ByteRange | None:
    if byte_range is None:
        return None
    if not isinstance(byte_range, ByteRange):
        start, end = byte_range
        byte_range = ByteRange(int(start), int(end))
    if byte_range.start < 0 or byte_range.end < byte_range.start:
        raise BlobInvalidInputError(
            "byte_range", f"invalid byte range {byte_range.start}-{byte_range.end}"
        )
    return byte_range


def parse_datetime(value: str | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    # API returns ISO timestamps with a trailing Z
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def get_download_url(blob_url: str) -> str:
    parsed = urlparse(blob_url)
    q = dict(parse_qsl(parsed.query))
    q["download"] = "1"
    return urlunparse(
        (
            parsed.scheme,
            parsed.netloc,
            parsed.path,
            parsed.params,
            urlencode(q),
            parsed.fragment,
        )
    )
