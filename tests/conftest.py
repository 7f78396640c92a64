"""Shared fixtures for all tests."""

from collections.abc import Generator

import pytest


@pytest.fixture
def mock_env_clear(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Clear all blob-related environment variables for testing.

    This ensures tests don't accidentally use real credentials or endpoints
    from the environment.
    """
    env_vars_to_clear = [
        "BLOB_READ_WRITE_TOKEN",
        "VERCEL_BLOB_API_URL",
        "NEXT_PUBLIC_VERCEL_BLOB_API_URL",
        "VERCEL_BLOB_API_VERSION",
        "DEBUG",
        "NEXT_PUBLIC_DEBUG",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    yield


@pytest.fixture
def mock_blob_token() -> str:
    """Mock blob storage token for testing."""
    return "vercel_blob_rw_test_token_123456789"

