from __future__ import annotations

import json

import httpx
import pytest

from gembot.config import SessionConfig
from gembot.errors import TransportError
from gembot.transport import HttpTransport

ENDPOINT = "https://example.test/v1beta/models/test:generateContent"


def _transport(handler, *, api_key: str | None = "secret") -> HttpTransport:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpTransport(ENDPOINT, api_key=api_key, client=client)


@pytest.mark.asyncio
async def test_send_posts_json_payload_with_key() -> None:
    recorded: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        recorded["method"] = request.method
        recorded["url"] = request.url
        recorded["content_type"] = request.headers["content-type"]
        recorded["json"] = json.loads(request.content.decode("utf-8"))
        return httpx.Response(200, json={"candidates": []})

    payload = {"contents": [{"role": "user", "parts": [{"text": "Hello"}]}]}
    body = await _transport(handler).send(payload)

    assert body == {"candidates": []}
    assert recorded["method"] == "POST"
    assert recorded["content_type"] == "application/json"
    assert recorded["json"] == payload
    url = recorded["url"]
    assert isinstance(url, httpx.URL)
    assert url.path == "/v1beta/models/test:generateContent"
    assert url.params["key"] == "secret"


@pytest.mark.asyncio
async def test_send_without_key_omits_query() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert "key" not in request.url.params
        return httpx.Response(200, json={})

    assert await _transport(handler, api_key=None).send({"contents": []}) == {}


@pytest.mark.asyncio
async def test_http_error_carries_status_and_service_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": {"message": "backend exploded"}})

    with pytest.raises(TransportError) as exc_info:
        await _transport(handler).send({"contents": []})

    assert exc_info.value.status == 500
    assert exc_info.value.message == "API error: 500 Internal Server Error - backend exploded"


@pytest.mark.asyncio
async def test_http_error_without_json_body_uses_unknown_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="<html>down</html>")

    with pytest.raises(TransportError) as exc_info:
        await _transport(handler).send({"contents": []})

    assert exc_info.value.status == 503
    assert exc_info.value.message.endswith("- Unknown error")


@pytest.mark.asyncio
async def test_malformed_success_body_is_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="{not json")

    with pytest.raises(TransportError) as exc_info:
        await _transport(handler).send({"contents": []})

    assert exc_info.value.status == 200
    assert "invalid json response" in exc_info.value.message


@pytest.mark.asyncio
async def test_network_failure_has_no_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError) as exc_info:
        await _transport(handler).send({"contents": []})

    assert exc_info.value.status is None
    assert "connection refused" in exc_info.value.message


def test_from_config_reads_endpoint_and_key() -> None:
    config = SessionConfig(service_endpoint=ENDPOINT, api_key="k", timeout_seconds=5)
    transport = HttpTransport.from_config(config)

    assert transport.endpoint == ENDPOINT
    assert transport._api_key == "k"
    assert transport._timeout_seconds == 5


@pytest.mark.asyncio
async def test_http_error_with_binary_body_keeps_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, content=b"\x80\x81 bad gateway")

    with pytest.raises(TransportError) as exc_info:
        await _transport(handler).send({"contents": []})

    assert exc_info.value.status == 502
    assert exc_info.value.message == "API error: 502 Bad Gateway - Unknown error"


@pytest.mark.asyncio
async def test_success_with_binary_body_is_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"\x80")

    with pytest.raises(TransportError) as exc_info:
        await _transport(handler).send({"contents": []})

    assert exc_info.value.status == 200
    assert "invalid json response" in exc_info.value.message
