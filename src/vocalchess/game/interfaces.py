"""Abstract interfaces for the game layer.

The voice session depends on plain callbacks; ``IGameController`` is the
shape the host window binds those callbacks to.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vocalchess.voice.commands import CastleSide, Square


class IllegalMoveError(ValueError):
    """The rule engine rejected a syntactically valid move."""


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def new_game(self, fen: str | None = None) -> None:
        """Set up a new game."""

    @abstractmethod
    def submit_move(self, source: Square, target: Square) -> str:
        """Apply a move and return its SAN.

        Raises:
            IllegalMoveError: the move is not legal in the current position.
        """

    @abstractmethod
    def castle(self, side: CastleSide) -> str:
        """Castle the side to move. Raises :class:`IllegalMoveError`."""

    @abstractmethod
    def undo_move(self) -> bool:
        """Undo the last move. Returns True on success."""
