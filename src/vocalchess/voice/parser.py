"""Transcript → command parsing.

Speech recognizers are sloppy with chess coordinates: ranks come back as
number words ("e four"), homophones ("e for") or run together with the file
("e2e4").  :func:`parse` tries a fixed list of matchers in order and returns
the first command produced::

    >>> parse("e2 to e4")
    MoveCommand(source=Square(file='e', rank=2), target=Square(file='e', rank=4))
    >>> parse("castle long")
    CastleCommand(side=<CastleSide.QUEENSIDE: 2>)
    >>> parse("banana") is None
    True
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from vocalchess.voice.commands import (
    FILES,
    CastleCommand,
    CastleSide,
    Command,
    MoveCommand,
    NewGameCommand,
    Square,
    UndoCommand,
)

_LOGGER = logging.getLogger(__name__)

Matcher = Callable[[str], Command | None]

_RANK_WORDS: dict[str, int] = {
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "for": 4,  # homophone
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
}

_SQUARE_RE = re.compile(r"[a-h][1-8]", re.IGNORECASE)
_CONNECTOR_RE = re.compile(r"to|two|too")
_WHITESPACE_RE = re.compile(r"\s+")
_COMPACT_RE = re.compile(r"([a-h][1-8])([a-h][1-8])([qrbn])?")
_NEW_GAME_RE = re.compile(r"\b(?:new\s*game|reset)\b", re.IGNORECASE)
_UNDO_RE = re.compile(r"\b(?:undo|take\s*back)\b", re.IGNORECASE)
_CASTLE_RE = re.compile(r"castle|castling", re.IGNORECASE)
_QUEENSIDE_RE = re.compile(r"queen|long", re.IGNORECASE)
_SPOKEN_MOVE_RE = re.compile(
    r"([a-h]\s*[1-8])\s*(?:to|two|too)?\s*([a-h]\s*[1-8])", re.IGNORECASE
)


def normalize_square(token: str) -> Square | None:
    """Decode a spoken square token, or ``None`` if it is not a square.

    Accepts ``e4`` / ``E 4`` directly, and a file letter followed by a rank
    word: ``efour``, ``efor``.
    """
    cleaned = _WHITESPACE_RE.sub("", token).lower()
    if _SQUARE_RE.fullmatch(cleaned):
        return Square.parse(cleaned)

    if not cleaned or cleaned[0] not in FILES:
        return None
    rank = _RANK_WORDS.get(cleaned[1:])
    if rank is None:
        return None
    return Square(cleaned[0], rank)


# ── Matchers (tried in order) ────────────────────────────────────────────────


def match_compact(text: str) -> Command | None:
    """``e2e4``, ``e2 to e4``, ``a7a8q`` once connectors and spaces are gone."""
    clean = _CONNECTOR_RE.sub("", text.lower())
    clean = _WHITESPACE_RE.sub("", clean)
    m = _COMPACT_RE.fullmatch(clean)
    if m is None:
        return None
    return MoveCommand(Square.parse(m.group(1)), Square.parse(m.group(2)))


def match_lifecycle(text: str) -> Command | None:
    if _NEW_GAME_RE.search(text):
        return NewGameCommand()
    if _UNDO_RE.search(text):
        return UndoCommand()
    return None


def match_castle(text: str) -> Command | None:
    if not _CASTLE_RE.search(text):
        return None
    if _QUEENSIDE_RE.search(text):
        return CastleCommand(CastleSide.QUEENSIDE)
    return CastleCommand(CastleSide.KINGSIDE)


def match_spoken_move(text: str) -> Command | None:
    """``e 2 to e 4`` with spaces inside the coordinates."""
    m = _SPOKEN_MOVE_RE.search(text)
    if m is None:
        return None
    source = normalize_square(m.group(1))
    target = normalize_square(m.group(2))
    if source is None or target is None:
        return None
    return MoveCommand(source, target)


def _take_square(tokens: list[str], start: int) -> tuple[Square, int] | None:
    """Read one square at *start*, as ``efour`` or as the pair ``e four``."""
    if start >= len(tokens):
        return None
    square = normalize_square(tokens[start])
    if square is not None:
        return square, start + 1
    if start + 1 < len(tokens):
        square = normalize_square(tokens[start] + tokens[start + 1])
        if square is not None:
            return square, start + 2
    return None


def match_move_keyword(text: str) -> Command | None:
    """``move e4 e5`` / ``move e two e four``: two squares after ``move``."""
    tokens = text.lower().split()
    if "move" not in tokens:
        return None
    idx = tokens.index("move")
    if len(tokens) < idx + 3:
        return None

    first = _take_square(tokens, idx + 1)
    if first is None:
        return None
    source, nxt = first
    second = _take_square(tokens, nxt)
    if second is None:
        return None
    return MoveCommand(source, second[0])


MATCHERS: tuple[Matcher, ...] = (
    match_compact,
    match_lifecycle,
    match_castle,
    match_spoken_move,
    match_move_keyword,
)


def parse(text: str) -> Command | None:
    """Turn a transcript into a command; ``None`` when nothing matches."""
    text = text.strip()
    for matcher in MATCHERS:
        command = matcher(text)
        if command is not None:
            return command
    _LOGGER.debug("No command in %r", text)
    return None
