"""Microphone recognizer running ``speech_recognition`` in a Qt worker thread.

Capture blocks for a whole utterance, so each round runs on a dedicated
``QThread``.  Worker signals reach the UI thread through a queued bridge,
which forwards them to :class:`RecognitionEvents` handlers in
start → result/error → end order.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

import speech_recognition as sr
from PyQt6 import sip
from PyQt6.QtCore import QObject, QThread, pyqtSignal, pyqtSlot

from vocalchess.voice.interfaces import (
    ERROR_AUDIO_CAPTURE,
    ERROR_NETWORK,
    ERROR_NO_MATCH,
    ERROR_NO_SPEECH,
    RecognitionEvents,
    RecognizerBusyError,
    RecognizerConfig,
)

_LOGGER = logging.getLogger(__name__)

MicrophoneFactory = Callable[[], Any]


class RecognitionWorker(QObject):
    """Thread-affine worker that captures and transcribes one utterance."""

    round_started = pyqtSignal()
    round_result = pyqtSignal(str)
    round_error = pyqtSignal(str)
    round_ended = pyqtSignal()

    __slots__ = ("_config", "_recognizer", "_microphone_factory", "_cancel_event")

    def __init__(
        self,
        config: RecognizerConfig,
        *,
        recognizer: sr.Recognizer | None = None,
        microphone_factory: MicrophoneFactory = sr.Microphone,
    ) -> None:
        super().__init__()
        self._config = config
        self._recognizer = recognizer or sr.Recognizer()
        self._microphone_factory = microphone_factory
        self._cancel_event = threading.Event()
        self._recognizer.operation_timeout = config.request_timeout_s

    @pyqtSlot()
    def listen_once(self) -> None:
        """Run a single recognition round and emit its events.

        The cancel flag is not cleared here: a stop issued between
        :meth:`reset` and the start of the round still applies.
        """
        self.round_started.emit()
        try:
            transcript = self._capture()
        except sr.WaitTimeoutError:
            self.round_error.emit(ERROR_NO_SPEECH)
        except sr.UnknownValueError:
            self.round_error.emit(ERROR_NO_MATCH)
        except sr.RequestError as exc:
            _LOGGER.warning("Transcription request failed: %s", exc)
            self.round_error.emit(ERROR_NETWORK)
        except OSError as exc:
            _LOGGER.warning("Microphone capture failed: %s", exc)
            self.round_error.emit(ERROR_AUDIO_CAPTURE)
        else:
            if not self._cancel_event.is_set() and transcript:
                self.round_result.emit(transcript)
        finally:
            self.round_ended.emit()

    def reset(self) -> None:
        """Arm the worker for the next round (called before it is queued)."""
        self._cancel_event.clear()

    def cancel(self) -> None:
        """Discard the result of the round in flight (thread-safe)."""
        self._cancel_event.set()

    def _capture(self) -> str:
        cfg = self._config
        with self._microphone_factory() as source:
            if cfg.ambient_noise_s > 0:
                self._recognizer.adjust_for_ambient_noise(
                    source, duration=cfg.ambient_noise_s
                )
            audio = self._listen(source)
        if audio is None or self._cancel_event.is_set():
            return ""
        # show_all=False returns only the best alternative.
        result = self._recognizer.recognize_google(audio, language=cfg.language)
        return str(result).strip()

    def _listen(self, source: Any) -> Any:
        """Wait for a phrase in short slices; ``None`` once cancelled."""
        cfg = self._config
        waited = 0.0
        while not self._cancel_event.is_set():
            try:
                return self._recognizer.listen(
                    source,
                    timeout=cfg.poll_interval_s,
                    phrase_time_limit=cfg.phrase_time_limit_s,
                )
            except sr.WaitTimeoutError:
                waited += cfg.poll_interval_s
                if waited >= cfg.listen_timeout_s:
                    raise
        return None


class _RecognitionBridge(QObject):
    """Lives on the UI thread; receives worker signals with queued delivery."""

    listen_requested = pyqtSignal()

    __slots__ = ("_events", "is_active")

    def __init__(self, events: RecognitionEvents, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._events = events
        self.is_active = False

    @pyqtSlot()
    def on_started(self) -> None:
        for cb in list(self._events.on_start):
            cb()

    @pyqtSlot(str)
    def on_result(self, transcript: str) -> None:
        for cb in list(self._events.on_result):
            cb(transcript)

    @pyqtSlot(str)
    def on_error(self, code: str) -> None:
        for cb in list(self._events.on_error):
            cb(code)

    @pyqtSlot()
    def on_ended(self) -> None:
        # Cleared first so an end handler may start the next round.
        self.is_active = False
        for cb in list(self._events.on_end):
            cb()


class QtSpeechRecognizer:
    """:class:`~vocalchess.voice.interfaces.Recognizer` backed by a microphone."""

    _SHUTDOWN_WAIT_MS = 500

    __slots__ = ("events", "_bridge", "_thread", "_worker", "_is_closed")

    def __init__(
        self,
        config: RecognizerConfig,
        *,
        worker: RecognitionWorker | None = None,
        parent: QObject | None = None,
    ) -> None:
        self.events = RecognitionEvents()
        self._bridge = _RecognitionBridge(self.events, parent)
        self._thread = QThread(parent)
        self._worker = worker or RecognitionWorker(config)
        self._is_closed = False

        self._worker.moveToThread(self._thread)
        self._bridge.listen_requested.connect(self._worker.listen_once)
        self._worker.round_started.connect(self._bridge.on_started)
        self._worker.round_result.connect(self._bridge.on_result)
        self._worker.round_error.connect(self._bridge.on_error)
        self._worker.round_ended.connect(self._bridge.on_ended)
        self._thread.start()

    @property
    def is_active(self) -> bool:
        return self._bridge.is_active

    @property
    def thread(self) -> QThread:
        return self._thread

    def start(self) -> None:
        if self._is_closed:
            raise RecognizerBusyError("Recognizer has been aborted")
        if self._bridge.is_active:
            raise RecognizerBusyError("Recognition already started")
        self._bridge.is_active = True
        self._worker.reset()
        self._bridge.listen_requested.emit()

    def stop(self) -> None:
        if not self._bridge.is_active:
            return
        self._worker.cancel()

    def abort(self) -> None:
        if self._is_closed:
            return
        self._is_closed = True
        self._worker.cancel()
        self.events.clear()
        self._thread.quit()
        if not self._thread.wait(self._SHUTDOWN_WAIT_MS):
            _LOGGER.warning(
                "Recognition thread still busy after %d ms; detaching it",
                self._SHUTDOWN_WAIT_MS,
            )
            _detach(self._thread, self._worker)


# Threads still finishing a blocking capture after abort. Unparented so the
# window cannot destroy them while running; joined by wait_for_detached_threads.
_DETACHED: list[tuple[QThread, RecognitionWorker]] = []


def _detach(thread: QThread, worker: RecognitionWorker) -> None:
    _DETACHED[:] = [
        (t, w) for t, w in _DETACHED if not sip.isdeleted(t) and t.isRunning()
    ]
    thread.setParent(None)
    thread.finished.connect(worker.deleteLater)
    thread.finished.connect(thread.deleteLater)
    _DETACHED.append((thread, worker))


def wait_for_detached_threads(timeout_ms: int = 10_000) -> None:
    """Block until detached recognition threads finish (call before exit)."""
    while _DETACHED:
        thread, _worker = _DETACHED.pop()
        if sip.isdeleted(thread):
            continue
        if not thread.wait(timeout_ms):
            _LOGGER.error("Recognition thread did not finish within %d ms", timeout_ms)


def microphone_available() -> bool:
    """Whether a microphone can be opened (PyAudio installed, device present)."""
    try:
        names = sr.Microphone.list_microphone_names()
    except (AttributeError, OSError) as exc:
        _LOGGER.warning("Microphone unavailable: %s", exc)
        return False
    return bool(names)


def create_recognizer(
    config: RecognizerConfig,
    parent: QObject | None = None,
) -> QtSpeechRecognizer | None:
    """Recognizer factory for :class:`~vocalchess.voice.session.VoiceSession`."""
    if not microphone_available():
        return None
    return QtSpeechRecognizer(config, parent=parent)
