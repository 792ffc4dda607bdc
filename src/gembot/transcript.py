"""Append-only conversation transcript."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import overload

from gembot.types import Turn


class Transcript:
    """Immutable ordered sequence of turns.

    ``append`` never touches the receiver: it returns a new transcript, so any
    reference a renderer is holding keeps describing what it already showed.
    """

    __slots__ = ("_turns",)

    def __init__(self, turns: Iterable[Turn] = ()) -> None:
        self._turns: tuple[Turn, ...] = tuple(turns)

    def append(self, turn: Turn) -> Transcript:
        return Transcript((*self._turns, turn))

    @property
    def turns(self) -> tuple[Turn, ...]:
        return self._turns

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[Turn]:
        return iter(self._turns)

    @overload
    def __getitem__(self, index: int) -> Turn: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Turn, ...]: ...

    def __getitem__(self, index: int | slice) -> Turn | tuple[Turn, ...]:
        return self._turns[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Transcript):
            return self._turns == other._turns
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._turns)

    def __repr__(self) -> str:
        return f"Transcript({list(self._turns)!r})"
