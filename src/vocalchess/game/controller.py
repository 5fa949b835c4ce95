"""GameController — applies voice and button commands to a python-chess board.

Move legality, game-over detection and history all come from
``chess.Board``; this class only adapts squares to ``chess.Move`` objects
and notifies listeners.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

import chess

from vocalchess.game.interfaces import IGameController, IllegalMoveError
from vocalchess.i18n import t
from vocalchess.voice.commands import CastleSide, Square

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[str, "GameController"], None]  # san, controller
GameOverCallback = Callable[[str], None]  # status text
PositionCallback = Callable[["GameController"], None]

_KING_FILE = 4  # e
_CASTLE_TARGET_FILE: dict[CastleSide, int] = {
    CastleSide.KINGSIDE: 6,  # g
    CastleSide.QUEENSIDE: 2,  # c
}


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_undo: list[PositionCallback] = field(default_factory=list)
    on_new_game: list[PositionCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


def _to_chess_square(square: Square) -> chess.Square:
    return chess.parse_square(square.name)


def _color_name(color: chess.Color) -> str:
    s = t()
    return s.color_white if color == chess.WHITE else s.color_black


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Owns the board, validates moves and notifies listeners.

    Methods are meant to be called from the UI thread only.
    """

    __slots__ = ("_board", "events")

    def __init__(self, fen: str | None = None) -> None:
        self._board = chess.Board(fen) if fen else chess.Board()
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def board(self) -> chess.Board:
        """A copy of the current board."""
        return self._board.copy()

    @property
    def fen(self) -> str:
        return self._board.fen()

    @property
    def is_game_over(self) -> bool:
        return self._board.is_game_over()

    @property
    def has_moves(self) -> bool:
        return bool(self._board.move_stack)

    @property
    def winner(self) -> str | None:
        """Display name of the winning side, if the game ended decisively."""
        outcome = self._board.outcome()
        if outcome is None or outcome.winner is None:
            return None
        return _color_name(outcome.winner)

    def move_history(self) -> list[str]:
        """SAN of every move played so far."""
        replay = self._board.root()
        history: list[str] = []
        for move in self._board.move_stack:
            history.append(replay.san(move))
            replay.push(move)
        return history

    def status_text(self) -> str:
        s = t()
        board = self._board
        to_move = _color_name(board.turn)
        if board.is_checkmate():
            return s.status_checkmate.format(color=_color_name(not board.turn))
        if board.is_stalemate():
            return s.status_stalemate
        if board.is_game_over():
            return s.status_draw
        if board.is_check():
            return s.status_check.format(color=to_move)
        return s.status_to_move.format(color=to_move)

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(self, fen: str | None = None) -> None:
        self._board = chess.Board(fen) if fen else chess.Board()
        for cb in self.events.on_new_game:
            cb(self)

    def submit_move(self, source: Square, target: Square) -> str:
        from_sq = _to_chess_square(source)
        to_sq = _to_chess_square(target)
        move = self._legal_move(from_sq, to_sq)
        if move is None:
            raise IllegalMoveError(f"Illegal move: {source}{target}")
        return self._apply(move)

    def castle(self, side: CastleSide) -> str:
        rank = 0 if self._board.turn == chess.WHITE else 7
        move = chess.Move(
            chess.square(_KING_FILE, rank),
            chess.square(_CASTLE_TARGET_FILE[side], rank),
        )
        if (
            self._board.is_game_over()
            or not self._board.is_castling(move)
            or not self._board.is_legal(move)
        ):
            raise IllegalMoveError(f"Cannot castle {side}")
        return self._apply(move)

    def undo_move(self) -> bool:
        if not self._board.move_stack:
            return False
        self._board.pop()
        for cb in self.events.on_undo:
            cb(self)
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _legal_move(self, from_sq: chess.Square, to_sq: chess.Square) -> chess.Move | None:
        """Plain move if legal, otherwise the queen promotion if legal."""
        if self._board.is_game_over():
            return None
        for promotion in (None, chess.QUEEN):
            move = chess.Move(from_sq, to_sq, promotion=promotion)
            if self._board.is_legal(move):
                return move
        return None

    def _apply(self, move: chess.Move) -> str:
        san = self._board.san(move)
        self._board.push(move)
        _LOGGER.info("Played %s (%s)", san, move.uci())

        for cb in self.events.on_move:
            cb(san, self)

        if self._board.is_game_over():
            status = self.status_text()
            for cb in self.events.on_game_over:
                cb(status)
        return san
