"""Interactive chat loop for Gembot."""

from __future__ import annotations

import asyncio
import contextlib
from functools import partial

from gembot.identity import IdentityProvider
from gembot.session import Outcome, SessionController, SessionSnapshot
from gembot.types import Speaker

from .render import Renderer

QUIT_COMMANDS = frozenset({"quit", "exit", "q"})
FAILED_OUTCOMES = frozenset({Outcome.TRANSPORT_ERROR, Outcome.DECODE_ERROR})


class TranscriptFollower:
    """Render turns the renderer has not shown yet."""

    def __init__(self, renderer: Renderer, *, echo_user: bool = False) -> None:
        self._renderer = renderer
        self._echo_user = echo_user
        self._seen = 0

    def __call__(self, snapshot: SessionSnapshot) -> None:
        turns = snapshot.transcript[self._seen :]
        self._seen = len(snapshot.transcript)
        for index, turn in enumerate(turns, start=1):
            if turn.role == Speaker.USER:
                if self._echo_user:
                    self._renderer.user_message(turn.text)
                continue
            is_latest = index == len(turns)
            failed = is_latest and snapshot.last_outcome in FAILED_OUTCOMES
            self._renderer.model_message(turn.text, failed=failed)


async def run_chat(controller: SessionController, identity: IdentityProvider, renderer: Renderer) -> None:
    renderer.welcome()
    renderer.usage_info(controller.config.service_endpoint)
    renderer.empty_state()

    follower = controller.subscribe(TranscriptFollower(renderer))
    identity_subscription = identity.subscribe(renderer.identity)
    bootstrap = asyncio.create_task(identity.bootstrap())
    try:
        await _run_input_loop(controller, renderer)
    finally:
        follower.cancel()
        identity_subscription.cancel()
        if not bootstrap.done():
            bootstrap.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await bootstrap


async def ask_once(controller: SessionController, renderer: Renderer, message: str) -> Outcome:
    follower = controller.subscribe(TranscriptFollower(renderer))
    try:
        with renderer.thinking():
            await controller.submit(message)
    finally:
        follower.cancel()
    return controller.snapshot().last_outcome


async def _run_input_loop(controller: SessionController, renderer: Renderer) -> None:
    stop = partial(renderer.info, "Goodbye!")
    while True:
        try:
            user_input = await renderer.get_user_input()
        except (KeyboardInterrupt, EOFError):
            stop()
            return
        if user_input.strip().casefold() in QUIT_COMMANDS:
            stop()
            return
        controller.set_pending_input(user_input)
        with renderer.thinking():
            await controller.submit()
