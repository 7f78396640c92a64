"""Factory functions for the pooled httpx clients used by the transports."""

from __future__ import annotations

import httpx

DEFAULT_TIMEOUT = 60.0


def create_base_client(timeout: float | None = None) -> httpx.Client:
    """Create a sync httpx client with basic configuration (no auth).

    Authorization is resolved per request by the blob request core, so the
    client itself carries no credentials. It is shared across calls and pools
    connections.

    Args:
        timeout: Request timeout in seconds. Defaults to DEFAULT_TIMEOUT.
    """
    effective_timeout = timeout if timeout is not None else DEFAULT_TIMEOUT
    return httpx.Client(timeout=httpx.Timeout(effective_timeout))


def create_base_async_client(timeout: float | None = None) -> httpx.AsyncClient:
    """Create an async httpx client with basic configuration (no auth).

    Args:
        timeout: Request timeout in seconds. Defaults to DEFAULT_TIMEOUT.
    """
    effective_timeout = timeout if timeout is not None else DEFAULT_TIMEOUT
    return httpx.AsyncClient(timeout=httpx.Timeout(effective_timeout))


__all__ = ["DEFAULT_TIMEOUT", "create_base_client", "create_base_async_client"]
