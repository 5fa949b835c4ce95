"""Tests for Qt text-to-speech feedback."""

from __future__ import annotations

import pytest

pytest.importorskip("PyQt6.QtTextToSpeech")

from vocalchess.voice.speech import QtSpeaker  # noqa: E402


def test_volume_is_clamped(qapp) -> None:
    del qapp
    speaker = QtSpeaker()
    speaker.set_volume(150)
    assert speaker._volume == 1.0
    speaker.set_volume(-5)
    assert speaker._volume == 0.0


def test_disabled_speaker_stays_quiet(qapp, monkeypatch: pytest.MonkeyPatch) -> None:
    del qapp
    speaker = QtSpeaker()
    said: list[str] = []
    monkeypatch.setattr(speaker, "_tts", _RecordingEngine(said))

    speaker.set_enabled(False)
    speaker.speak("Move e2 to e4 played.")
    speaker.set_enabled(True)
    speaker.speak("")
    speaker.speak("Move undone.")

    assert said == ["Move undone."]


class _RecordingEngine:
    def __init__(self, said: list[str]) -> None:
        self._said = said

    def say(self, text: str) -> None:
        self._said.append(text)

    def stop(self) -> None:
        pass

    def setVolume(self, _volume: float) -> None:
        pass
