"""Voice layer — transcript parsing and the continuous listening session.

Quick start::

    from vocalchess.voice import VoiceSession, parse

    parse("e two to e four")   # MoveCommand(e2, e4)

    session = VoiceSession(
        recognizer_factory=create_recognizer,
        speaker=QtSpeaker(),
        on_move=controller.submit_move,
        on_new_game=controller.new_game,
        on_undo=controller.undo_move,
        on_castle=controller.castle,
    )
    session.toggle()
"""

from vocalchess.voice.commands import (
    CastleCommand,
    CastleSide,
    Command,
    MoveCommand,
    NewGameCommand,
    Square,
    UndoCommand,
)
from vocalchess.voice.interfaces import (
    RecognitionEvents,
    Recognizer,
    RecognizerBusyError,
    RecognizerConfig,
    Speaker,
)
from vocalchess.voice.parser import normalize_square, parse
from vocalchess.voice.session import SessionState, SessionStatus, VoiceSession, transition

__all__ = [
    # Commands
    "CastleCommand",
    "CastleSide",
    "Command",
    "MoveCommand",
    "NewGameCommand",
    "Square",
    "UndoCommand",
    # Parsing
    "normalize_square",
    "parse",
    # Capabilities
    "RecognitionEvents",
    "Recognizer",
    "RecognizerBusyError",
    "RecognizerConfig",
    "Speaker",
    # Session
    "SessionState",
    "SessionStatus",
    "VoiceSession",
    "transition",
]
