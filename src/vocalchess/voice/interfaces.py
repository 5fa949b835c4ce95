"""Interfaces for the platform speech capabilities.

The listening session depends on these protocols only, so tests can drive
it with a fake recognizer that emits scripted events.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

# Error codes reported through ``RecognitionEvents.on_error``.
ERROR_NO_SPEECH = "no-speech"
ERROR_NO_MATCH = "no-match"
ERROR_NETWORK = "network"
ERROR_AUDIO_CAPTURE = "audio-capture"


class RecognizerBusyError(RuntimeError):
    """``start()`` was called while a recognition round is in flight."""


@dataclass(frozen=True)
class RecognizerConfig:
    """Recognition settings.

    The session always runs single-utterance rounds; continuous listening
    is achieved by restarting after every round.

    Args:
        language: BCP-47 tag passed to the transcription service.
        listen_timeout_s: Silence allowed before a round fails with
            ``no-speech``.
        phrase_time_limit_s: Longest utterance captured per round.
        ambient_noise_s: Calibration time before each round (0 disables).
        poll_interval_s: Silence slice between checks for a cancelled round.
        request_timeout_s: Transcription request timeout; expiry reports
            ``network``.
    """

    continuous: bool = False
    language: str = "en-US"
    interim_results: bool = False
    max_alternatives: int = 1
    listen_timeout_s: float = 6.0
    phrase_time_limit_s: float = 4.0
    ambient_noise_s: float = 0.3
    poll_interval_s: float = 0.25
    request_timeout_s: float = 5.0


@dataclass
class RecognitionEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_start: list[Callable[[], None]] = field(default_factory=list)
    on_end: list[Callable[[], None]] = field(default_factory=list)
    on_result: list[Callable[[str], None]] = field(default_factory=list)
    on_error: list[Callable[[str], None]] = field(default_factory=list)

    def clear(self) -> None:
        self.on_start.clear()
        self.on_end.clear()
        self.on_result.clear()
        self.on_error.clear()


class Recognizer(Protocol):
    """Single-utterance speech recognizer.

    ``start``/``stop``/``abort`` are fire-and-forget; their effects arrive
    later through :attr:`events` in start → result/error → end order.
    """

    events: RecognitionEvents

    def start(self) -> None:
        """Begin a round. Raises :class:`RecognizerBusyError` if one is active."""

    def stop(self) -> None:
        """Finish the active round; no-op when idle."""

    def abort(self) -> None:
        """Cancel the active round and release the capture resource."""


RecognizerFactory = Callable[[RecognizerConfig], "Recognizer | None"]


class Speaker(Protocol):
    """Fire-and-forget speech output."""

    def speak(self, text: str) -> None: ...
