"""Voice command value objects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TypeAlias

FILES = "abcdefgh"
RANKS = "12345678"


@dataclass(frozen=True, slots=True)
class Square:
    """Board coordinate: file letter a–h and rank 1–8."""

    file: str
    rank: int

    def __post_init__(self) -> None:
        if self.file not in FILES or not 1 <= self.rank <= 8:
            raise ValueError(f"Invalid square: {self.file!r}{self.rank!r}")

    def __str__(self) -> str:
        return f"{self.file}{self.rank}"

    @property
    def name(self) -> str:
        """Canonical text form, e.g. ``e4``."""
        return str(self)

    @classmethod
    def parse(cls, name: str) -> Square:
        """Parse a square name, e.g. ``'E4'`` → ``Square('e', 4)``."""
        name = name.lower()
        if len(name) != 2 or name[0] not in FILES or name[1] not in RANKS:
            raise ValueError(f"Invalid square name: {name!r}")
        return cls(name[0], int(name[1]))


class CastleSide(IntEnum):
    KINGSIDE = auto()
    QUEENSIDE = auto()

    def __str__(self) -> str:
        return self.name.lower()


# ── Command variants ─────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class MoveCommand:
    """Move a piece; promotion is always to a queen."""

    source: Square
    target: Square


@dataclass(frozen=True, slots=True)
class NewGameCommand:
    pass


@dataclass(frozen=True, slots=True)
class UndoCommand:
    pass


@dataclass(frozen=True, slots=True)
class CastleCommand:
    side: CastleSide = CastleSide.KINGSIDE


Command: TypeAlias = MoveCommand | NewGameCommand | UndoCommand | CastleCommand
