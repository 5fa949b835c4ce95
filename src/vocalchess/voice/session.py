"""Continuous listening session.

The recognizer only ever captures one utterance per round; the session
fakes continuous listening by starting a new round every time one ends
while the user still wants to listen.

Session logic is split in two:

* :func:`transition` — a pure ``(state, event) -> (state, effects)``
  function holding every rule of the state machine.
* :class:`VoiceSession` — owns the recognizer, feeds it events and
  executes the returned effects (recognizer calls, speech, callbacks).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from enum import IntEnum, auto
from typing import TypeAlias

from vocalchess.game.interfaces import IllegalMoveError
from vocalchess.i18n import t
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
    ERROR_NO_SPEECH,
    Recognizer,
    RecognizerBusyError,
    RecognizerConfig,
    RecognizerFactory,
    Speaker,
)
from vocalchess.voice.parser import parse

_LOGGER = logging.getLogger(__name__)


class SessionStatus(IntEnum):
    """Finite-state-machine states of a listening session."""

    IDLE = auto()  # capability not checked yet
    READY = auto()
    LISTENING = auto()
    PROCESSING = auto()  # display only; never entered by the session itself
    ERROR = auto()
    UNSUPPORTED = auto()


@dataclass(frozen=True, slots=True)
class SessionState:
    status: SessionStatus = SessionStatus.IDLE
    listening_intent: bool = False
    castling_enabled: bool = False
    is_closed: bool = False


# ── Events ───────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class CapabilityChecked:
    supported: bool


@dataclass(frozen=True, slots=True)
class StartRequested:
    pass


@dataclass(frozen=True, slots=True)
class StopRequested:
    pass


@dataclass(frozen=True, slots=True)
class RoundStarted:
    pass


@dataclass(frozen=True, slots=True)
class TranscriptReceived:
    transcript: str


@dataclass(frozen=True, slots=True)
class RecognitionFailed:
    code: str


@dataclass(frozen=True, slots=True)
class RoundEnded:
    pass


@dataclass(frozen=True, slots=True)
class ShutdownRequested:
    pass


SessionEvent: TypeAlias = (
    CapabilityChecked
    | StartRequested
    | StopRequested
    | RoundStarted
    | TranscriptReceived
    | RecognitionFailed
    | RoundEnded
    | ShutdownRequested
)


# ── Effects ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class StartRecognizer:
    pass


@dataclass(frozen=True, slots=True)
class StopRecognizer:
    pass


@dataclass(frozen=True, slots=True)
class AbortRecognizer:
    pass


@dataclass(frozen=True, slots=True)
class Speak:
    text: str


@dataclass(frozen=True, slots=True)
class PublishTranscript:
    transcript: str


@dataclass(frozen=True, slots=True)
class DispatchCommand:
    command: Command


Effect: TypeAlias = (
    StartRecognizer
    | StopRecognizer
    | AbortRecognizer
    | Speak
    | PublishTranscript
    | DispatchCommand
)

Transition: TypeAlias = tuple[SessionState, list[Effect]]


# ── Pure state machine ───────────────────────────────────────────────────────


def confirmation_for(command: Command) -> str:
    """Spoken confirmation once *command* has been applied."""
    s = t()
    if isinstance(command, MoveCommand):
        return s.voice_move_played.format(source=command.source, target=command.target)
    if isinstance(command, NewGameCommand):
        return s.voice_new_game
    if isinstance(command, UndoCommand):
        return s.voice_undo
    return s.voice_castled.format(side=command.side)


def rejection_for(command: Command) -> str:
    """Spoken notice when the game refuses *command* as illegal."""
    s = t()
    if isinstance(command, CastleCommand):
        return s.voice_illegal_castle.format(side=command.side)
    if isinstance(command, MoveCommand):
        return s.voice_illegal_move.format(source=command.source, target=command.target)
    return s.voice_error


def _on_transcript(state: SessionState, transcript: str) -> Transition:
    effects: list[Effect] = [PublishTranscript(transcript)]
    command = parse(transcript)
    if command is None:
        effects.append(Speak(t().voice_invalid_format))
    elif isinstance(command, CastleCommand) and not state.castling_enabled:
        effects.append(Speak(t().voice_castle_unavailable))
    else:
        effects.append(DispatchCommand(command))
        effects.append(Speak(confirmation_for(command)))
    return state, effects


def transition(state: SessionState, event: SessionEvent) -> Transition:
    """Apply *event* to *state*; return the new state and effects to run."""
    if state.is_closed:
        return state, []

    if isinstance(event, ShutdownRequested):
        closed = replace(state, listening_intent=False, is_closed=True)
        return closed, [AbortRecognizer()]

    status = state.status

    if isinstance(event, CapabilityChecked):
        if status != SessionStatus.IDLE:
            return state, []
        if not event.supported:
            return replace(state, status=SessionStatus.UNSUPPORTED), []
        return (
            replace(state, status=SessionStatus.READY),
            [Speak(t().voice_welcome)],
        )

    if status in (SessionStatus.IDLE, SessionStatus.UNSUPPORTED):
        return state, []

    if isinstance(event, StartRequested):
        if status == SessionStatus.LISTENING and state.listening_intent:
            return state, []
        return replace(state, listening_intent=True), [StartRecognizer()]

    if isinstance(event, StopRequested):
        if not state.listening_intent and status != SessionStatus.LISTENING:
            return state, []
        return replace(state, listening_intent=False), [StopRecognizer()]

    if isinstance(event, RoundStarted):
        return replace(state, status=SessionStatus.LISTENING), []

    if isinstance(event, TranscriptReceived):
        return _on_transcript(state, event.transcript)

    if isinstance(event, RecognitionFailed):
        if event.code == ERROR_NO_SPEECH:
            return replace(state, status=SessionStatus.READY), []
        return (
            replace(state, status=SessionStatus.ERROR, listening_intent=False),
            [Speak(t().voice_error)],
        )

    if isinstance(event, RoundEnded):
        # Intent is cleared on errors, so it is only set again here after
        # an explicit retry.
        if state.listening_intent:
            return state, [StartRecognizer()]
        if status == SessionStatus.ERROR:
            return state, []
        return replace(state, status=SessionStatus.READY), []

    return state, []


# ── Session controller ───────────────────────────────────────────────────────


class VoiceSession:
    """Owns the recognizer and turns its events into game commands.

    Args:
        recognizer_factory: Builds the platform recognizer, or returns
            ``None`` when speech recognition is unavailable.
        speaker: Spoken feedback output.
        on_move: ``(source, target) -> object``; may raise
            :class:`IllegalMoveError`.
        on_new_game: Start a fresh game.
        on_undo: Take back the last move; returning ``False`` means there
            was nothing to take back.
        on_castle: ``(side) -> object``; castling by voice is refused when
            omitted.
        on_status_changed: Observer for :attr:`status`.
        on_transcript: Observer for :attr:`last_transcript`.
    """

    __slots__ = (
        "__weakref__",
        "_recognizer",
        "_speaker",
        "_on_move",
        "_on_new_game",
        "_on_undo",
        "_on_castle",
        "_on_status_changed",
        "_on_transcript",
        "_state",
        "_last_transcript",
    )

    def __init__(
        self,
        *,
        recognizer_factory: RecognizerFactory,
        speaker: Speaker,
        on_move: Callable[[Square, Square], object],
        on_new_game: Callable[[], object],
        on_undo: Callable[[], object],
        on_castle: Callable[[CastleSide], object] | None = None,
        on_status_changed: Callable[[SessionStatus], None] | None = None,
        on_transcript: Callable[[str], None] | None = None,
        config: RecognizerConfig | None = None,
    ) -> None:
        self._speaker = speaker
        self._on_move = on_move
        self._on_new_game = on_new_game
        self._on_undo = on_undo
        self._on_castle = on_castle
        self._on_status_changed = on_status_changed
        self._on_transcript = on_transcript
        self._state = SessionState(castling_enabled=on_castle is not None)
        self._last_transcript = ""

        self._recognizer: Recognizer | None = recognizer_factory(
            config or RecognizerConfig()
        )
        if self._recognizer is not None:
            events = self._recognizer.events
            events.on_start.append(lambda: self.handle(RoundStarted()))
            events.on_end.append(lambda: self.handle(RoundEnded()))
            events.on_result.append(lambda text: self.handle(TranscriptReceived(text)))
            events.on_error.append(lambda code: self.handle(RecognitionFailed(code)))
        else:
            _LOGGER.warning("Speech recognition is not supported on this system")
        self.handle(CapabilityChecked(supported=self._recognizer is not None))

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def status(self) -> SessionStatus:
        return self._state.status

    @property
    def listening_intent(self) -> bool:
        return self._state.listening_intent

    @property
    def last_transcript(self) -> str:
        return self._last_transcript

    @property
    def is_supported(self) -> bool:
        return self._state.status != SessionStatus.UNSUPPORTED

    # ── User actions ─────────────────────────────────────────────────────

    def start(self) -> None:
        self.handle(StartRequested())

    def stop(self) -> None:
        self.handle(StopRequested())

    def toggle(self) -> None:
        """Mic button: stop while listening, otherwise (re)start."""
        if self._state.status == SessionStatus.LISTENING:
            self.stop()
        else:
            self.start()

    def shutdown(self) -> None:
        """Release the recognizer; later events are ignored."""
        self.handle(ShutdownRequested())

    # ── Event handling ───────────────────────────────────────────────────

    def handle(self, event: SessionEvent) -> None:
        """Run *event* through the state machine and execute its effects."""
        previous = self._state.status
        self._state, effects = transition(self._state, event)
        if self._state.status != previous:
            _LOGGER.debug("Voice status %s -> %s", previous.name, self._state.status.name)
            if self._on_status_changed is not None:
                self._on_status_changed(self._state.status)
        self._run_effects(effects)

    def _run_effects(self, effects: Sequence[Effect]) -> None:
        for effect in effects:
            if isinstance(effect, DispatchCommand):
                try:
                    outcome = self._dispatch(effect.command)
                except IllegalMoveError as exc:
                    _LOGGER.info("Rejected voice command: %s", exc)
                    self._speaker.speak(rejection_for(effect.command))
                    return
                if isinstance(effect.command, UndoCommand) and outcome is False:
                    self._speaker.speak(t().voice_nothing_to_undo)
                    return
            elif isinstance(effect, Speak):
                self._speaker.speak(effect.text)
            elif isinstance(effect, PublishTranscript):
                _LOGGER.info("Transcript: %r", effect.transcript)
                self._last_transcript = effect.transcript
                if self._on_transcript is not None:
                    self._on_transcript(effect.transcript)
            elif isinstance(effect, StartRecognizer):
                self._start_recognizer()
            elif isinstance(effect, StopRecognizer):
                if self._recognizer is not None:
                    self._recognizer.stop()
            elif isinstance(effect, AbortRecognizer):
                if self._recognizer is not None:
                    self._recognizer.abort()

    def _start_recognizer(self) -> None:
        if self._recognizer is None:
            return
        try:
            self._recognizer.start()
        except RecognizerBusyError:
            # The round in flight will still deliver its result.
            _LOGGER.debug("Recognizer already started")

    def _dispatch(self, command: Command) -> object:
        if isinstance(command, MoveCommand):
            return self._on_move(command.source, command.target)
        if isinstance(command, NewGameCommand):
            return self._on_new_game()
        if isinstance(command, UndoCommand):
            return self._on_undo()
        if self._on_castle is not None:
            return self._on_castle(command.side)
        return None
