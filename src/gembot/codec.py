"""Wire codec for the generateContent API."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from loguru import logger

from gembot.errors import DecodeError
from gembot.transcript import Transcript
from gembot.types import Turn, WirePayload

SOFT_FAILURE_TEXT = "Sorry, I couldn't generate a response."


@dataclass(frozen=True)
class DecodeResult:
    """Decoded model turn, plus the reason when it is the apology placeholder."""

    turn: Turn
    soft_failure: str | None = None

    @property
    def ok(self) -> bool:
        return self.soft_failure is None


def encode_transcript(transcript: Transcript) -> WirePayload:
    """Render the whole transcript as a request body, one content block per turn."""

    return {
        "contents": [
            {
                "role": turn.role.value,
                "parts": [{"text": turn.text}],
            }
            for turn in transcript
        ]
    }


def decode_response(raw: Any) -> DecodeResult:
    """Extract the first candidate's first text part.

    Raises ``DecodeError`` when ``raw`` is not a response object at all. A
    response object lacking any level of the expected structure yields the
    apology turn instead.
    """

    body = _coerce_body(raw)
    text, reason = _first_text(body)
    if reason is not None:
        logger.warning("codec.decode.soft_failure reason={} response={}", reason, body)
        return DecodeResult(Turn.model(SOFT_FAILURE_TEXT), soft_failure=reason)
    return DecodeResult(Turn.model(text))


def _coerce_body(raw: Any) -> Mapping[str, Any]:
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise DecodeError(f"invalid json response: {exc!s}") from exc
    if raw is None:
        raise DecodeError("empty response")
    if not isinstance(raw, Mapping):
        raise DecodeError(f"unexpected response type: {type(raw).__name__}")
    return raw


def _first_text(body: Mapping[str, Any]) -> tuple[str, str | None]:
    candidates = body.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return "", "missing candidates"
    candidate = candidates[0]
    content = candidate.get("content") if isinstance(candidate, Mapping) else None
    if not isinstance(content, Mapping):
        return "", "missing content"
    parts = content.get("parts")
    if not isinstance(parts, list) or not parts:
        return "", "missing parts"
    part = parts[0]
    text = part.get("text") if isinstance(part, Mapping) else None
    if not isinstance(text, str) or not text:
        return "", "missing text"
    return text, None
