"""Shared conversation dataclasses."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, TypeAlias

WirePayload: TypeAlias = dict[str, Any]


class Speaker(StrEnum):
    USER = "user"
    MODEL = "model"


@dataclass(frozen=True)
class Turn:
    """One message in the conversation."""

    role: Speaker
    text: str

    @classmethod
    def user(cls, text: str) -> Turn:
        return cls(Speaker.USER, text)

    @classmethod
    def model(cls, text: str) -> Turn:
        return cls(Speaker.MODEL, text)


@dataclass
class Subscription:
    """Handle returned by ``subscribe``; ``cancel`` detaches the listener."""

    _cancel: Callable[[], None] = field(repr=False)
    cancelled: bool = False

    def cancel(self) -> None:
        if self.cancelled:
            return
        self.cancelled = True
        self._cancel()
