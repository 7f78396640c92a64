"""Client configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from ._http import DEFAULT_TIMEOUT
from .auth import TokenProvider

DEFAULT_BASE_URL = "https://blob.vercel-storage.com"
DEFAULT_API_VERSION = "9"


def get_base_url_from_env() -> str:
    return (
        os.getenv("VERCEL_BLOB_API_URL")
        or os.getenv("NEXT_PUBLIC_VERCEL_BLOB_API_URL")
        or DEFAULT_BASE_URL
    )


def get_api_version_from_env() -> str:
    return os.getenv("VERCEL_BLOB_API_VERSION") or DEFAULT_API_VERSION


@dataclass
class BlobClientConfig:
    """Settings shared by every request a client sends."""

    base_url: str = DEFAULT_BASE_URL
    api_version: str = DEFAULT_API_VERSION
    timeout: float = DEFAULT_TIMEOUT
    token_provider: TokenProvider | None = None

    @classmethod
    def resolve(
        cls,
        *,
        base_url: str | None = None,
        api_version: str | None = None,
        timeout: float | None = None,
        token_provider: TokenProvider | None = None,
    ) -> BlobClientConfig:
        """Explicit arguments win over environment variables, which win over defaults."""
        return cls(
            base_url=base_url or get_base_url_from_env(),
            api_version=str(api_version or get_api_version_from_env()),
            timeout=timeout if timeout is not None else DEFAULT_TIMEOUT,
            token_provider=token_provider,
        )

    def api_url(self, pathname: str = "") -> str:
        return f"{self.base_url.rstrip('/')}/{pathname.lstrip('/')}"


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_API_VERSION",
    "BlobClientConfig",
    "get_api_version_from_env",
    "get_base_url_from_env",
]
