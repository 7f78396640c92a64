"""Bearer token resolution.

A token provider lets code running outside Vercel fetch short-lived tokens
from its own backend. The operation (``list``, ``put``, ``head``, ``delete``,
``download``) and the pathname are passed along so the provider can scope the
token. For ``delete`` and ``download`` the pathname is the blob URL.
"""

from __future__ import annotations

import inspect
import os
from collections.abc import Awaitable
from typing import Protocol, cast, runtime_checkable

from .errors import BlobNotAuthenticatedError

TOKEN_ENV_VAR = "BLOB_READ_WRITE_TOKEN"


@runtime_checkable
class TokenProvider(Protocol):
    def get_token(self, operation: str, pathname: str) -> str | Awaitable[str]:
        """Return a bearer token allowed to perform ``operation`` on ``pathname``."""
        ...


class EnvTokenProvider:
    """Serve a fixed token, or the one in ``BLOB_READ_WRITE_TOKEN``."""

    def __init__(self, token: str | None = None) -> None:
        self._token = token

    @classmethod
    def from_env(cls, env_var: str) -> EnvTokenProvider:
        """Capture the token held by ``env_var`` now; raise if it is unset."""
        token = os.getenv(env_var)
        if token is None:
            raise BlobNotAuthenticatedError()
        return cls(token)

    def get_token(self, operation: str, pathname: str) -> str:
        token = self._token or os.getenv(TOKEN_ENV_VAR)
        if not token:
            raise BlobNotAuthenticatedError()
        return token


async def resolve_token(
    provider: TokenProvider | None, operation: str, pathname: str
) -> str:
    if provider is not None:
        token = provider.get_token(operation, pathname)
        if inspect.isawaitable(token):
            token = await cast(Awaitable[str], token)
    else:
        token = os.getenv(TOKEN_ENV_VAR)
    if not token:
        raise BlobNotAuthenticatedError()
    return cast(str, token)


__all__ = ["TOKEN_ENV_VAR", "TokenProvider", "EnvTokenProvider", "resolve_token"]
