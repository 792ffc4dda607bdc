"""CLI renderer for Gembot."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from prompt_toolkit import PromptSession
from prompt_toolkit.patch_stdout import patch_stdout
from rich.console import Console
from rich.markup import escape

from gembot.identity import Identity


class Renderer:
    """CLI renderer using Rich for terminal output."""

    def __init__(self, console: Console | None = None) -> None:
        self.console: Console = console or Console()
        self._prompt_session: PromptSession[str] | None = None
        self._print_lock = threading.Lock()

    def info(self, message: str) -> None:
        """Render an info message."""
        self._print(message)

    def error(self, message: str) -> None:
        """Render an error message."""
        self._print(f"[bold red]Error:[/bold red] {escape(message)}")

    def welcome(self, message: str = "[bold blue]Gemini Bot[/bold blue]") -> None:
        """Render welcome message."""
        self._print(message)

    def empty_state(self) -> None:
        self._print("Start a conversation with Gemini Bot!")
        self._print("[dim]Type a message below and hit enter. 'quit' leaves the chat.[/dim]")

    def usage_info(self, endpoint: str) -> None:
        self._print(f"[bold]Endpoint:[/bold] [magenta]{escape(endpoint)}[/magenta]")

    def identity(self, identity: Identity) -> None:
        self._print(f"[dim]User ID: {escape(identity.short())}[/dim]")

    def user_message(self, message: str) -> None:
        """Render user message."""
        self._print(f"[bold cyan]You:[/bold cyan] {escape(message)}")

    def model_message(self, message: str, *, failed: bool = False) -> None:
        """Render a model turn, in red when it reports a failure."""
        if failed:
            self._print(f"[bold yellow]Gemini:[/bold yellow] [red]{escape(message)}[/red]")
            return
        self._print(f"[bold yellow]Gemini:[/bold yellow] {escape(message)}")

    @contextmanager
    def thinking(self) -> Iterator[None]:
        with self.console.status("[dim]Gemini is thinking...[/dim]", spinner="dots"):
            yield

    async def get_user_input(self) -> str:
        """Prompt user for input."""
        if self._prompt_session is None:
            self._prompt_session = PromptSession()
        with patch_stdout(raw=True):
            return await self._prompt_session.prompt_async("> ")

    def _print(self, message: str) -> None:
        with self._print_lock:
            self.console.print(message)


def create_cli_renderer() -> Renderer:
    """Create and return a Renderer instance."""
    return Renderer()
