"""Identity bootstrap for display purposes."""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from hashlib import md5
from typing import TypeAlias

from loguru import logger

from gembot.types import Subscription

SHORT_ID_LENGTH = 8

IdentityResolver: TypeAlias = Callable[[str | None], Awaitable[str]]
IdentityListener: TypeAlias = Callable[["Identity"], None]


@dataclass(frozen=True)
class Identity:
    """Opaque user identity."""

    uid: str
    fallback: bool = False

    def short(self) -> str:
        return f"{self.uid[:SHORT_ID_LENGTH]}..."


async def token_resolver(token: str | None) -> str:
    """Derive a stable opaque id from a custom identity token."""
    if not token:
        raise ValueError("identity token is empty")
    return md5(token.encode("utf-8")).hexdigest()  # noqa: S324


class IdentityProvider:
    """Resolve one identity and publish it to subscribers.

    The resolver stands in for a remote sign-in. When it is missing or fails
    a random local identity is used, so ``bootstrap`` always ends with an
    identity.
    """

    def __init__(self, resolver: IdentityResolver | None = None, *, token: str | None = None) -> None:
        self._resolver = resolver
        self._token = token
        self._identity: Identity | None = None
        self._listeners: list[IdentityListener] = []
        self._lock = asyncio.Lock()

    def current(self) -> Identity | None:
        return self._identity

    def subscribe(self, listener: IdentityListener) -> Subscription:
        self._listeners.append(listener)
        if self._identity is not None:
            listener(self._identity)
        return Subscription(lambda: self._listeners.remove(listener))

    async def bootstrap(self) -> Identity:
        async with self._lock:
            if self._identity is not None:
                return self._identity
            self._identity = await self._resolve()
        logger.info("identity.ready uid={} fallback={}", self._identity.short(), self._identity.fallback)
        for listener in list(self._listeners):
            try:
                listener(self._identity)
            except Exception:
                logger.exception("identity.listener.error")
        return self._identity

    async def _resolve(self) -> Identity:
        if self._resolver is None:
            return _fallback_identity()
        try:
            uid = await self._resolver(self._token)
        except Exception as exc:
            logger.warning("identity.resolve.error error={}", exc)
            return _fallback_identity()
        if not uid:
            return _fallback_identity()
        return Identity(uid)


def _fallback_identity() -> Identity:
    return Identity(str(uuid.uuid4()), fallback=True)
