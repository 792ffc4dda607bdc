"""HTTP transport for the generation service."""

from __future__ import annotations

from typing import Any, Protocol

import httpx
from loguru import logger

from gembot.config import SessionConfig
from gembot.errors import TransportError
from gembot.types import WirePayload

USER_AGENT = "gembot/0.1"


class Transport(Protocol):
    """Minimal async contract for sending one generation request."""

    async def send(self, payload: WirePayload) -> Any: ...


class HttpTransport:
    """POST a payload to the generateContent endpoint and return the parsed body."""

    def __init__(
        self,
        endpoint: str,
        *,
        api_key: str | None = None,
        timeout_seconds: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._api_key = api_key
        self._timeout_seconds = timeout_seconds
        self._client = client

    @classmethod
    def from_config(cls, config: SessionConfig) -> HttpTransport:
        return cls(
            config.service_endpoint,
            api_key=config.api_key,
            timeout_seconds=config.timeout_seconds,
        )

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def send(self, payload: WirePayload) -> Any:
        if self._client is not None:
            return await self._post(self._client, payload)
        async with httpx.AsyncClient(timeout=self._timeout_seconds) as client:
            return await self._post(client, payload)

    async def _post(self, client: httpx.AsyncClient, payload: WirePayload) -> Any:
        params = {"key": self._api_key} if self._api_key else None
        try:
            response = await client.post(
                self._endpoint,
                params=params,
                json=payload,
                headers={"Content-Type": "application/json", "User-Agent": USER_AGENT},
            )
        except httpx.TimeoutException as exc:
            raise TransportError(f"request timed out: {exc!s}") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"request failed: {exc!s}") from exc

        logger.debug("transport.response status={} bytes={}", response.status_code, len(response.content))
        if not response.is_success:
            detail = _error_detail(response)
            raise TransportError(
                f"API error: {response.status_code} {response.reason_phrase} - {detail}",
                status=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(f"invalid json response: {exc!s}", status=response.status_code) from exc


def _error_detail(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return "Unknown error"
    error = data.get("error") if isinstance(data, dict) else None
    message = error.get("message") if isinstance(error, dict) else None
    if isinstance(message, str) and message:
        return message
    return "Unknown error"
