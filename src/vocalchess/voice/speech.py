"""Spoken feedback using Qt text-to-speech."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QLocale
from PyQt6.QtTextToSpeech import QTextToSpeech

_LOGGER = logging.getLogger(__name__)


class QtSpeaker:
    """Speaks notices through the platform speech engine.

    A new notice replaces the one still being spoken.
    """

    def __init__(self, locale: str = "en-US", rate: float = 0.0) -> None:
        self._enabled = True
        self._volume = 0.8
        self._tts = QTextToSpeech()
        self._tts.setLocale(QLocale(locale.replace("-", "_")))
        self._tts.setRate(max(-1.0, min(1.0, rate)))
        self._tts.setVolume(self._volume)

    # ── Public API ────────────────────────────────────────────────────────

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled
        if not enabled:
            self._tts.stop()

    def set_volume(self, volume: int) -> None:
        """Set volume in range 0–100."""
        self._volume = max(0, min(100, volume)) / 100.0
        self._tts.setVolume(self._volume)

    def speak(self, text: str) -> None:
        _LOGGER.debug("Speaking: %s", text)
        if not self._enabled or not text:
            return
        self._tts.say(text)
