"""Conversation session controller."""

from __future__ import annotations

import uuid
from collections.abc import Callable
from contextvars import ContextVar
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TypeAlias

from loguru import logger

from gembot.codec import decode_response, encode_transcript
from gembot.config import SessionConfig
from gembot.errors import DecodeError, TransportError
from gembot.transcript import Transcript
from gembot.transport import HttpTransport, Transport
from gembot.types import Subscription, Turn

_session_context: ContextVar[str] = ContextVar("session")


def current_session() -> str:
    """Get the id of the session currently talking to the service."""
    return _session_context.get("-")


class Outcome(StrEnum):
    IDLE = "idle"
    OK = "ok"
    SOFT_FAILURE = "soft_failure"
    TRANSPORT_ERROR = "transport_error"
    DECODE_ERROR = "decode_error"


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of session state handed to renderers."""

    transcript: Transcript
    busy: bool
    pending_input: str
    last_outcome: Outcome


@dataclass
class SessionState:
    transcript: Transcript = field(default_factory=Transcript)
    busy: bool = False
    pending_input: str = ""
    last_outcome: Outcome = Outcome.IDLE


SessionListener: TypeAlias = Callable[[SessionSnapshot], None]


class SessionController:
    """Own one transcript and run submit -> send -> decode -> append cycles.

    ``busy`` is the only guard: while a request is in flight every further
    submission is dropped, so at most one encoded transcript is ever pending.
    """

    def __init__(
        self,
        config: SessionConfig,
        transport: Transport | None = None,
        *,
        session_id: str | None = None,
    ) -> None:
        self._config = config
        self._transport = transport if transport is not None else HttpTransport.from_config(config)
        self._state = SessionState()
        self._listeners: list[SessionListener] = []
        self.session_id = session_id or uuid.uuid4().hex[:8]

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def busy(self) -> bool:
        return self._state.busy

    @property
    def transcript(self) -> Transcript:
        return self._state.transcript

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            transcript=self._state.transcript,
            busy=self._state.busy,
            pending_input=self._state.pending_input,
            last_outcome=self._state.last_outcome,
        )

    def subscribe(self, listener: SessionListener) -> Subscription:
        self._listeners.append(listener)
        return Subscription(lambda: self._listeners.remove(listener))

    def set_pending_input(self, text: str) -> None:
        if self._state.pending_input == text:
            return
        self._state.pending_input = text
        self._notify()

    async def submit(self, text: str | None = None) -> Turn | None:
        """Submit ``text`` (or the pending input) and return the model turn appended for it.

        Returns ``None`` without touching state when the text is blank or a
        request is already in flight.
        """
        if text is None:
            text = self._state.pending_input
        if self._state.busy:
            logger.debug("session.submit.rejected reason=busy")
            return None
        if not text.strip():
            return None

        self._state.transcript = self._state.transcript.append(Turn.user(text))
        self._state.busy = True
        self._state.pending_input = ""
        self._notify()

        token = _session_context.set(self.session_id)
        try:
            reply, outcome = await self._exchange(self._state.transcript)
            self._state.transcript = self._state.transcript.append(reply)
            self._state.last_outcome = outcome
            logger.info("session.turn.finish outcome={} turns={}", outcome, len(self._state.transcript))
        finally:
            self._state.busy = False
            _session_context.reset(token)
        self._notify()
        return reply

    async def _exchange(self, transcript: Transcript) -> tuple[Turn, Outcome]:
        payload = encode_transcript(transcript)
        logger.info("session.request turns={}", len(payload["contents"]))
        try:
            raw = await self._transport.send(payload)
            result = decode_response(raw)
        except TransportError as exc:
            logger.error("session.transport.error status={} message={}", exc.status, exc.message)
            return Turn.model(f"Error: {exc.message}"), Outcome.TRANSPORT_ERROR
        except DecodeError as exc:
            logger.error("session.decode.error message={}", exc)
            return Turn.model(f"Error: {exc!s}"), Outcome.DECODE_ERROR
        except Exception as exc:
            logger.exception("session.transport.unexpected")
            return Turn.model(f"Error: {exc!s}"), Outcome.TRANSPORT_ERROR

        if result.soft_failure is not None:
            return result.turn, Outcome.SOFT_FAILURE
        return result.turn, Outcome.OK

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("session.listener.error")
