"""Tests for request body support in HTTP transports."""

import json

import pytest
import respx
from httpx import Response

from vercel_blob._http import (
    AsyncTransport,
    BlockingTransport,
    JSONBody,
    RawBody,
    create_base_async_client,
    create_base_client,
    iter_coroutine,
)

BASE_URL = "https://upload.example.com"


class TestRawBodySupport:
    """Test that RawBody content is passed through transport unchanged."""

    @respx.mock
    def test_sync_raw_body_iterable(self):
        """BlockingTransport should forward iterable bodies without JSON encoding."""
        expected = b"chunk-1chunk-2"

        def handler(request):
            payload = b"".join(request.stream)
            assert payload == expected
            return Response(200, json={"ok": True})

        route = respx.post(f"{BASE_URL}/upload").mock(side_effect=handler)

        transport = BlockingTransport(create_base_client(timeout=30.0))
        try:
            body = RawBody(iter([b"chunk-1", b"chunk-2"]))
            response = iter_coroutine(transport.send("POST", f"{BASE_URL}/upload", body=body))
            assert response.status_code == 200
            assert route.called
        finally:
            transport.close()

    @respx.mock
    @pytest.mark.asyncio
    async def test_async_raw_body_async_iterable(self):
        """AsyncTransport should forward async iterable bodies without JSON encoding."""
        expected = b"part-apart-b"

        async def chunks():
            yield b"part-a"
            yield b"part-b"

        async def handler(request):
            body = b""
            async for chunk in request.stream:
                body += chunk
            assert body == expected
            return Response(200, json={"ok": True})

        route = respx.post(f"{BASE_URL}/upload").mock(side_effect=handler)

        transport = AsyncTransport(create_base_async_client(timeout=30.0))
        try:
            response = await transport.send("POST", f"{BASE_URL}/upload", body=RawBody(chunks()))
            assert response.status_code == 200
            assert route.called
        finally:
            await transport.aclose()


class TestTransportRequestShape:
    """Test params, JSON bodies and ownership in the transports."""

    @respx.mock
    def test_sync_json_body_and_params(self):
        route = respx.post(f"{BASE_URL}/delete").mock(return_value=Response(200))

        transport = BlockingTransport(create_base_client())
        try:
            iter_coroutine(
                transport.send(
                    "POST",
                    f"{BASE_URL}/delete",
                    params={"pathname": "a.txt"},
                    body=JSONBody({"urls": ["a"]}),
                    headers={"x-test": "1"},
                    timeout=5.0,
                )
            )
        finally:
            transport.close()

        request = route.calls.last.request
        assert json.loads(request.content) == {"urls": ["a"]}
        assert request.headers["content-type"] == "application/json"
        assert request.headers["x-test"] == "1"
        assert request.url.params["pathname"] == "a.txt"

    def test_async_transport_requires_aclose(self):
        transport = AsyncTransport(create_base_async_client())
        with pytest.raises(RuntimeError):
            transport.close()

    def test_borrowed_client_stays_open(self):
        client = create_base_client()
        try:
            BlockingTransport(client, owns_client=False).close()
            assert not client.is_closed
        finally:
            client.close()
