"""User-facing strings (spoken notices and UI labels).

Usage::

    from vocalchess.i18n import t

    speaker.speak(t().voice_move_played.format(source="e2", target="e4"))
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Strings:
    # ── Spoken feedback ──────────────────────────────────────────────────
    voice_welcome: str
    voice_invalid_format: str
    voice_move_played: str  # "Move {source} to {target} played."
    voice_new_game: str
    voice_undo: str
    voice_nothing_to_undo: str
    voice_castled: str  # "Castled {side}."
    voice_castle_unavailable: str
    voice_illegal_move: str  # "Illegal move: {source} to {target}."
    voice_illegal_castle: str  # "Cannot castle {side}."
    voice_error: str

    # ── VoicePanel ───────────────────────────────────────────────────────
    voice_header: str
    voice_status_idle: str
    voice_status_ready: str
    voice_status_listening: str
    voice_status_processing: str
    voice_status_error: str
    voice_status_unsupported: str
    voice_last_command: str
    voice_last_command_hint: str
    voice_tips_header: str
    voice_tips: tuple[str, ...]

    # ── MainWindow ───────────────────────────────────────────────────────
    window_title: str
    window_subtitle: str
    btn_new_game: str
    btn_undo: str
    moves_header: str
    moves_empty: str
    board_header: str
    game_over_title: str
    game_over_winner: str  # "Winner: {color}"
    game_over_play_again: str

    # ── Game status ──────────────────────────────────────────────────────
    color_white: str
    color_black: str
    status_checkmate: str  # "Checkmate — {color} wins"
    status_stalemate: str
    status_draw: str
    status_check: str  # "{color} is in check"
    status_to_move: str  # "{color} to move"


_EN = Strings(
    voice_welcome="Welcome to vocal chess. Start by making your move.",
    voice_invalid_format="Invalid format.",
    voice_move_played="Move {source} to {target} played.",
    voice_new_game="New game started.",
    voice_undo="Move undone.",
    voice_nothing_to_undo="Nothing to undo.",
    voice_castled="Castled {side}.",
    voice_castle_unavailable="Castling is not available.",
    voice_illegal_move="Illegal move: {source} to {target}.",
    voice_illegal_castle="Cannot castle {side}.",
    voice_error="An error occurred.",
    voice_header="Voice Control",
    voice_status_idle="Starting...",
    voice_status_ready="Tap to speak",
    voice_status_listening="Listening...",
    voice_status_processing="Processing...",
    voice_status_error="Error – retry",
    voice_status_unsupported="Not supported",
    voice_last_command="Last command",
    voice_last_command_hint="Say something like: “e2 to e4”",
    voice_tips_header="Try saying:",
    voice_tips=(
        "“e2 to e4”",
        "“move g one f three”",
        "“castle kingside” / “castle queenside”",
        "“undo” or “new game”",
    ),
    window_title="Vocal chess",
    window_subtitle="Play chess. Speak your moves.",
    btn_new_game="New Game",
    btn_undo="Undo",
    moves_header="Moves",
    moves_empty="No moves yet. Start the game!",
    board_header="Board",
    game_over_title="Game Over",
    game_over_winner="Winner: {color}",
    game_over_play_again="Start a new game?",
    color_white="White",
    color_black="Black",
    status_checkmate="Checkmate — {color} wins",
    status_stalemate="Stalemate",
    status_draw="Draw",
    status_check="{color} is in check",
    status_to_move="{color} to move",
)

_current: Strings = _EN


def t() -> Strings:
    """Return the active strings."""
    return _current
