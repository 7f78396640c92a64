from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal

Access = Literal["public", "private"]


@dataclass(slots=True)
class PutBlobResult:
    url: str
    pathname: str
    content_type: str
    content_disposition: str
    download_url: str


@dataclass(slots=True)
class HeadBlobResult:
    url: str
    download_url: str
    pathname: str
    size: int
    uploaded_at: datetime
    content_type: str
    content_disposition: str
    cache_control: str


@dataclass(slots=True)
class ListBlobItem:
    url: str
    download_url: str
    pathname: str
    size: int
    uploaded_at: datetime


@dataclass(slots=True)
class ListBlobResult:
    blobs: list[ListBlobItem]
    cursor: str | None
    has_more: bool
    folders: list[str] | None = None


@dataclass(frozen=True, slots=True)
class ByteRange:
    """Inclusive byte range for partial downloads."""

    start: int
    end: int

    def header_value(self) -> str:
        return f"bytes={self.start}-{self.end}"


@dataclass(frozen=True, slots=True)
class MultipartPart:
    part_number: int
    etag: str

    def to_dict(self) -> dict[str, Any]:
        return {"etag": self.etag, "partNumber": self.part_number}


__all__ = [
    "Access",
    "PutBlobResult",
    "HeadBlobResult",
    "ListBlobItem",
    "ListBlobResult",
    "ByteRange",
    "MultipartPart",
]
