"""Typer entrypoint for Gembot."""

from __future__ import annotations

import asyncio

import typer

from gembot.config import Settings, get_settings
from gembot.errors import ApiKeyNotConfiguredError
from gembot.identity import IdentityProvider, token_resolver
from gembot.logging_utils import configure_logging
from gembot.session import SessionController

from .live import FAILED_OUTCOMES, ask_once, run_chat
from .render import create_cli_renderer

app = typer.Typer(name="gembot", help="Chat with Gemini from your terminal.", add_completion=False)


def build_session(settings: Settings) -> SessionController:
    """Build a session controller for the configured endpoint."""
    settings.require_api_key()
    return SessionController(settings.session_config())


def build_identity(settings: Settings) -> IdentityProvider:
    if settings.identity_token:
        return IdentityProvider(token_resolver, token=settings.identity_token)
    return IdentityProvider()


@app.command()
def chat(
    model: str | None = typer.Option(None, "--model", "-m", help="Model name"),
    api_key: str | None = typer.Option(None, "--api-key", help="API key, overrides GEMBOT_API_KEY"),
) -> None:
    """Start an interactive chat."""

    settings = get_settings(model=model, api_key=api_key)
    configure_logging(profile="chat", level=settings.log_level)
    renderer = create_cli_renderer()
    try:
        controller = build_session(settings)
    except ApiKeyNotConfiguredError as exc:
        renderer.error(str(exc))
        raise typer.Exit(1) from exc

    asyncio.run(run_chat(controller, build_identity(settings), renderer))


@app.command()
def ask(
    message: str = typer.Argument(..., help="Message to send"),
    model: str | None = typer.Option(None, "--model", "-m", help="Model name"),
    api_key: str | None = typer.Option(None, "--api-key", help="API key, overrides GEMBOT_API_KEY"),
) -> None:
    """Send one message and print the reply."""

    settings = get_settings(model=model, api_key=api_key)
    configure_logging(profile="default", level=settings.log_level)
    renderer = create_cli_renderer()
    try:
        controller = build_session(settings)
    except ApiKeyNotConfiguredError as exc:
        renderer.error(str(exc))
        raise typer.Exit(1) from exc

    if not message.strip():
        renderer.error("message is empty")
        raise typer.Exit(2)

    outcome = asyncio.run(ask_once(controller, renderer, message))
    if outcome in FAILED_OUTCOMES:
        raise typer.Exit(1)
