"""Loguru sinks for the chat and one-shot front ends."""

from __future__ import annotations

import sys
from logging import Handler
from typing import Literal

import loguru
from loguru import logger
from rich import get_console
from rich.logging import RichHandler

LogProfile = Literal["default", "chat"]

# RichHandler prints level and time itself, so the chat format carries only the session tag.
_FORMATS: dict[LogProfile, str] = {
    "chat": "[{extra[session]}] {message}",
    "default": "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<7} | session={extra[session]} | {name}:{line} | {message}",
}
_active_profile: LogProfile | None = None


def _tag_session(record: loguru.Record) -> None:
    from gembot.session import current_session

    record["extra"]["session"] = current_session()


def _chat_sink() -> Handler:
    return RichHandler(
        console=get_console(),
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )


def configure_logging(*, profile: LogProfile = "default", level: str = "INFO") -> None:
    """Route loguru records to stderr, or through rich while the chat prompt is active.

    ``level`` comes from ``Settings.log_level``. Calling again with the active
    profile is a no-op.
    """
    global _active_profile
    if profile == _active_profile:
        return

    logger.remove()
    logger.configure(patcher=_tag_session)
    sink = _chat_sink() if profile == "chat" else sys.stderr
    logger.add(sink, level=level.upper(), format=_FORMATS[profile], backtrace=False, diagnose=False)
    _active_profile = profile
