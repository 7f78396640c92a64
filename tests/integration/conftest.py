"""Fixtures for integration tests using respx mocking."""

import pytest

BLOB_API_BASE = "https://blob.vercel-storage.com"
PUBLIC_BLOB_BASE = "https://store123.public.blob.vercel-storage.com"


@pytest.fixture
def mock_blob_put_response() -> dict:
    """Mock response for blob put operation."""
    return {
        "url": f"{PUBLIC_BLOB_BASE}/test.txt",
        "downloadUrl": f"{PUBLIC_BLOB_BASE}/test.txt?download=1",
        "pathname": "test.txt",
        "contentType": "text/plain",
        "contentDisposition": 'inline; filename="test.txt"',
    }


@pytest.fixture
def mock_blob_head_response() -> dict:
    """Mock response for blob head operation."""
    return {
        "url": f"{PUBLIC_BLOB_BASE}/test.txt",
        "downloadUrl": f"{PUBLIC_BLOB_BASE}/test.txt?download=1",
        "pathname": "test.txt",
        "contentType": "text/plain",
        "contentDisposition": 'inline; filename="test.txt"',
        "size": 13,
        "uploadedAt": "2024-01-15T10:30:00.000Z",
        "cacheControl": "max-age=31536000",
    }


@pytest.fixture
def mock_blob_list_response() -> dict:
    """Mock response for blob list operation."""
    return {
        "blobs": [
            {
                "url": f"{PUBLIC_BLOB_BASE}/file1.txt",
                "downloadUrl": f"{PUBLIC_BLOB_BASE}/file1.txt?download=1",
                "pathname": "file1.txt",
                "size": 100,
                "uploadedAt": "2024-01-15T10:30:00.000Z",
            },
            {
                "url": f"{PUBLIC_BLOB_BASE}/file2.txt",
                "pathname": "file2.txt",
                "size": 200,
                "uploadedAt": "2024-01-15T10:31:00.000Z",
            },
        ],
        "cursor": None,
        "hasMore": False,
    }


@pytest.fixture
def mock_blob_list_response_paginated() -> dict:
    """Mock response for the first page of a paginated listing."""
    return {
        "blobs": [
            {
                "url": f"{PUBLIC_BLOB_BASE}/page1.txt",
                "downloadUrl": f"{PUBLIC_BLOB_BASE}/page1.txt?download=1",
                "pathname": "page1.txt",
                "size": 50,
                "uploadedAt": "2024-01-15T10:30:00.000Z",
            },
        ],
        "cursor": "abc",
        "hasMore": True,
        "folders": ["docs/"],
    }


@pytest.fixture
def mock_blob_copy_response() -> dict:
    """Mock response for blob copy operation."""
    return {
        "url": f"{PUBLIC_BLOB_BASE}/copied.txt",
        "downloadUrl": f"{PUBLIC_BLOB_BASE}/copied.txt?download=1",
        "pathname": "copied.txt",
        "contentType": "text/plain",
        "contentDisposition": 'inline; filename="copied.txt"',
    }
