"""Tests for the speech_recognition worker and its Qt wrapper."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

import pytest
import speech_recognition as sr
from PyQt6.QtCore import QObject
from PyQt6.QtTest import QSignalSpy, QTest

from vocalchess.voice import recognizer as recognizer_module
from vocalchess.voice.interfaces import (
    RecognitionEvents,
    RecognizerBusyError,
    RecognizerConfig,
)
from vocalchess.voice.recognizer import (
    QtSpeechRecognizer,
    RecognitionWorker,
    _RecognitionBridge,
    create_recognizer,
    microphone_available,
    wait_for_detached_threads,
)


class _FakeMicrophone:
    def __enter__(self) -> _FakeMicrophone:
        return self

    def __exit__(self, *_exc: object) -> None:
        return None


class _ScriptedRecognizer:
    """Stands in for ``sr.Recognizer``; returns or raises a fixed outcome."""

    def __init__(
        self,
        outcome: object,
        on_listen=None,
        gate: threading.Event | None = None,
    ) -> None:
        self._outcome = outcome
        self._on_listen = on_listen
        self._gate = gate
        self.languages: list[str] = []
        self.calibrated = 0
        self.listens = 0

    def adjust_for_ambient_noise(self, _source: object, duration: float = 1.0) -> None:
        del duration
        self.calibrated += 1

    def listen(self, _source: object, timeout=None, phrase_time_limit=None) -> bytes:
        del timeout, phrase_time_limit
        self.listens += 1
        if self._gate is not None:
            self._gate.wait(2.0)
        if self._on_listen is not None:
            self._on_listen()
        if isinstance(self._outcome, sr.WaitTimeoutError):
            raise self._outcome
        return b"audio"

    def recognize_google(self, _audio: object, language: str = "en-US") -> str:
        self.languages.append(language)
        if isinstance(self._outcome, Exception):
            raise self._outcome
        return str(self._outcome)


def _worker(outcome: object, config: RecognizerConfig | None = None) -> RecognitionWorker:
    return RecognitionWorker(
        config or RecognizerConfig(),
        recognizer=_ScriptedRecognizer(outcome),  # type: ignore[arg-type]
        microphone_factory=_FakeMicrophone,
    )


class _Spies:
    def __init__(self, worker: RecognitionWorker) -> None:
        self.started = QSignalSpy(worker.round_started)
        self.results = QSignalSpy(worker.round_result)
        self.errors = QSignalSpy(worker.round_error)
        self.ended = QSignalSpy(worker.round_ended)


class _SilentRecognizer:
    """Never hears a phrase; each listen slice times out."""

    def __init__(self, entered: threading.Event) -> None:
        self._entered = entered

    def adjust_for_ambient_noise(self, _source: object, duration: float = 1.0) -> None:
        del duration

    def listen(self, _source: object, timeout=None, phrase_time_limit=None) -> bytes:
        del phrase_time_limit
        self._entered.set()
        time.sleep(timeout)
        raise sr.WaitTimeoutError("silence")


class _BlockedRecognizer:
    """Holds the capture until released, ignoring the poll timeout."""

    def __init__(self, entered: threading.Event, release: threading.Event) -> None:
        self._entered = entered
        self._release = release

    def adjust_for_ambient_noise(self, _source: object, duration: float = 1.0) -> None:
        del duration

    def listen(self, _source: object, timeout=None, phrase_time_limit=None) -> bytes:
        del timeout, phrase_time_limit
        self._entered.set()
        self._release.wait(5.0)
        raise sr.WaitTimeoutError("silence")


def _pump_until(predicate: Callable[[], bool], timeout_ms: int = 2000) -> None:
    deadline = time.monotonic() + timeout_ms / 1000
    while not predicate():
        assert time.monotonic() < deadline, "condition not reached in time"
        QTest.qWait(10)


class TestRecognitionWorker:
    def test_result_round(self) -> None:
        worker = _worker("  e2 to e4 ")
        spies = _Spies(worker)

        worker.listen_once()

        assert len(spies.started) == 1
        assert len(spies.results) == 1
        assert spies.results[0][0] == "e2 to e4"
        assert len(spies.errors) == 0
        assert len(spies.ended) == 1

    def test_language_and_calibration(self) -> None:
        scripted = _ScriptedRecognizer("undo")
        worker = RecognitionWorker(
            RecognizerConfig(language="en-GB", ambient_noise_s=0.0),
            recognizer=scripted,  # type: ignore[arg-type]
            microphone_factory=_FakeMicrophone,
        )
        worker.listen_once()
        assert scripted.languages == ["en-GB"]
        assert scripted.calibrated == 0

    @pytest.mark.parametrize(
        ("exc", "code"),
        [
            (sr.WaitTimeoutError("timeout"), "no-speech"),
            (sr.UnknownValueError(), "no-match"),
            (sr.RequestError("offline"), "network"),
            (OSError("no device"), "audio-capture"),
        ],
    )
    def test_error_codes(self, exc: Exception, code: str) -> None:
        worker = _worker(exc)
        spies = _Spies(worker)

        worker.listen_once()

        assert len(spies.errors) == 1
        assert spies.errors[0][0] == code
        assert len(spies.results) == 0
        assert len(spies.ended) == 1

    def test_empty_transcript_not_emitted(self) -> None:
        worker = _worker("   ")
        spies = _Spies(worker)
        worker.listen_once()
        assert len(spies.results) == 0
        assert len(spies.ended) == 1

    def test_cancel_discards_result(self) -> None:
        worker = RecognitionWorker(RecognizerConfig(), microphone_factory=_FakeMicrophone)
        scripted = _ScriptedRecognizer("e2e4", on_listen=worker.cancel)
        worker._recognizer = scripted  # type: ignore[assignment]
        spies = _Spies(worker)

        worker.listen_once()

        assert len(spies.results) == 0
        assert len(spies.errors) == 0
        assert len(spies.ended) == 1
        assert scripted.languages == []

    def test_silence_is_polled_until_timeout(self) -> None:
        scripted = _ScriptedRecognizer(sr.WaitTimeoutError("silence"))
        worker = RecognitionWorker(
            RecognizerConfig(listen_timeout_s=1.0, poll_interval_s=0.25),
            recognizer=scripted,  # type: ignore[arg-type]
            microphone_factory=_FakeMicrophone,
        )
        spies = _Spies(worker)

        worker.listen_once()

        assert scripted.listens == 4
        assert len(spies.errors) == 1
        assert spies.errors[0][0] == "no-speech"

    def test_cancel_during_silence_ends_round_quietly(self) -> None:
        worker = RecognitionWorker(RecognizerConfig(), microphone_factory=_FakeMicrophone)
        scripted = _ScriptedRecognizer(sr.WaitTimeoutError("silence"), on_listen=worker.cancel)
        worker._recognizer = scripted  # type: ignore[assignment]
        spies = _Spies(worker)

        worker.listen_once()

        assert scripted.listens == 1
        assert len(spies.errors) == 0
        assert len(spies.results) == 0
        assert len(spies.ended) == 1

    def test_cancel_before_round_is_kept(self) -> None:
        worker = _worker("e2e4")
        spies = _Spies(worker)

        worker.cancel()
        worker.listen_once()
        assert len(spies.results) == 0

        worker.reset()
        worker.listen_once()
        assert len(spies.results) == 1

    def test_request_timeout_applied(self) -> None:
        scripted = _ScriptedRecognizer("undo")
        RecognitionWorker(
            RecognizerConfig(request_timeout_s=3.0),
            recognizer=scripted,  # type: ignore[arg-type]
            microphone_factory=_FakeMicrophone,
        )
        assert scripted.operation_timeout == 3.0


class TestRecognitionBridge:
    def test_forwards_in_order(self) -> None:
        events = RecognitionEvents()
        seen: list[str] = []
        events.on_start.append(lambda: seen.append("start"))
        events.on_result.append(lambda text: seen.append(f"result:{text}"))
        events.on_error.append(lambda code: seen.append(f"error:{code}"))
        events.on_end.append(lambda: seen.append("end"))
        bridge = _RecognitionBridge(events)
        bridge.is_active = True

        bridge.on_started()
        bridge.on_result("undo")
        bridge.on_error("network")
        bridge.on_ended()

        assert seen == ["start", "result:undo", "error:network", "end"]
        assert not bridge.is_active

    def test_end_handler_may_restart(self) -> None:
        events = RecognitionEvents()
        bridge = _RecognitionBridge(events)
        bridge.is_active = True
        states: list[bool] = []
        events.on_end.append(lambda: states.append(bridge.is_active))
        bridge.on_ended()
        assert states == [False]


class TestQtSpeechRecognizer:
    def test_second_start_is_busy(self, qapp) -> None:
        del qapp
        rec = QtSpeechRecognizer(RecognizerConfig(), worker=_worker("e2e4"))
        try:
            rec.start()
            assert rec.is_active
            with pytest.raises(RecognizerBusyError):
                rec.start()
        finally:
            rec.abort()

    def test_stop_when_idle_is_noop(self, qapp) -> None:
        del qapp
        rec = QtSpeechRecognizer(RecognizerConfig(), worker=_worker("e2e4"))
        try:
            rec.stop()
            assert not rec.is_active
        finally:
            rec.abort()

    def test_abort_is_final(self, qapp) -> None:
        del qapp
        rec = QtSpeechRecognizer(RecognizerConfig(), worker=_worker("e2e4"))
        rec.events.on_start.append(lambda: None)
        rec.abort()
        rec.abort()
        assert rec.events.on_start == []
        with pytest.raises(RecognizerBusyError):
            rec.start()

    def test_stop_right_after_start_discards_result(self, qapp) -> None:
        del qapp
        gate = threading.Event()
        worker = RecognitionWorker(
            RecognizerConfig(),
            recognizer=_ScriptedRecognizer("e2 to e4", gate=gate),  # type: ignore[arg-type]
            microphone_factory=_FakeMicrophone,
        )
        rec = QtSpeechRecognizer(RecognizerConfig(), worker=worker)
        results: list[str] = []
        rec.events.on_result.append(results.append)
        try:
            rec.start()
            rec.stop()
            gate.set()
            _pump_until(lambda: not rec.is_active)
            assert results == []

            rec.start()
            _pump_until(lambda: not rec.is_active)
            assert results == ["e2 to e4"]
        finally:
            rec.abort()

    def test_abort_interrupts_silent_capture(self, qapp) -> None:
        del qapp
        entered = threading.Event()
        worker = RecognitionWorker(
            RecognizerConfig(listen_timeout_s=30.0, poll_interval_s=0.05),
            recognizer=_SilentRecognizer(entered),  # type: ignore[arg-type]
            microphone_factory=_FakeMicrophone,
        )
        rec = QtSpeechRecognizer(RecognizerConfig(), worker=worker)
        rec.start()
        assert entered.wait(2.0)

        started = time.monotonic()
        rec.abort()

        assert not rec.thread.isRunning()
        assert time.monotonic() - started < 1.0

    def test_abort_detaches_blocked_thread(self, qapp) -> None:
        del qapp
        entered = threading.Event()
        release = threading.Event()
        window = QObject()
        worker = RecognitionWorker(
            RecognizerConfig(),
            recognizer=_BlockedRecognizer(entered, release),  # type: ignore[arg-type]
            microphone_factory=_FakeMicrophone,
        )
        rec = QtSpeechRecognizer(RecognizerConfig(), worker=worker, parent=window)
        rec.start()
        assert entered.wait(2.0)

        rec.abort()

        thread = rec.thread
        assert thread.isRunning()
        assert thread.parent() is None
        assert recognizer_module._DETACHED

        release.set()
        wait_for_detached_threads()
        assert thread.isFinished()
        assert recognizer_module._DETACHED == []


class TestCapability:
    def test_microphone_available(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(
            sr.Microphone, "list_microphone_names", staticmethod(lambda: ["Mic"])
        )
        assert microphone_available()

    def test_no_devices(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(
            sr.Microphone, "list_microphone_names", staticmethod(lambda: [])
        )
        assert not microphone_available()

    def test_missing_pyaudio(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def _raise() -> list[str]:
            raise AttributeError("Could not find PyAudio")

        monkeypatch.setattr(sr.Microphone, "list_microphone_names", staticmethod(_raise))
        assert not microphone_available()

    def test_factory_returns_none_without_microphone(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(recognizer_module, "microphone_available", lambda: False)
        assert create_recognizer(RecognizerConfig()) is None
