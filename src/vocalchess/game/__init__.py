"""Game layer — rule engine adapter behind the voice callbacks.

Quick start::

    from vocalchess.game import GameController
    from vocalchess.voice.commands import Square

    ctrl = GameController()
    ctrl.submit_move(Square.parse("e2"), Square.parse("e4"))
"""

from vocalchess.game.controller import GameController, GameEvents
from vocalchess.game.interfaces import IGameController, IllegalMoveError

__all__ = [
    "GameController",
    "GameEvents",
    "IGameController",
    "IllegalMoveError",
]
