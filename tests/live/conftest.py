"""Fixtures for live API tests.

These tests require real API credentials set via environment variables:
- BLOB_READ_WRITE_TOKEN: Blob storage read/write token
"""

import os
import time
import uuid
from collections.abc import Generator

import pytest

from vercel_blob import BlobClient, BlobError


@pytest.fixture
def blob_token() -> str:
    """Get Blob storage token from environment."""
    token = os.getenv("BLOB_READ_WRITE_TOKEN")
    if not token:
        pytest.skip("BLOB_READ_WRITE_TOKEN environment variable not set")
    return token


@pytest.fixture
def unique_blob_path() -> str:
    """Generate a unique blob path for testing.

    Format: test/{timestamp}-{uuid}/file.txt
    """
    timestamp = int(time.time())
    unique_id = uuid.uuid4().hex[:8]
    return f"test/{timestamp}-{unique_id}/file.txt"


class CleanupRegistry:
    """Registry for blob URLs that need cleanup after tests."""

    def __init__(self) -> None:
        self._urls: list[str] = []

    def register(self, url: str) -> None:
        self._urls.append(url)

    @property
    def urls(self) -> list[str]:
        return list(self._urls)


@pytest.fixture
def cleanup_registry(blob_token: str) -> Generator[CleanupRegistry, None, None]:
    """Fixture providing a registry of blobs deleted after the test.

    Usage:
        def test_create_blob(cleanup_registry, blob_client):
            result = blob_client.put("test.txt", b"data")
            cleanup_registry.register(result.url)
    """
    registry = CleanupRegistry()
    yield registry

    if registry.urls:
        with BlobClient(token=blob_token) as client:
            try:
                client.delete(registry.urls)
            except BlobError:
                pass  # Best effort cleanup


@pytest.fixture
def blob_client(blob_token: str) -> Generator[BlobClient, None, None]:
    with BlobClient(token=blob_token) as client:
        yield client
