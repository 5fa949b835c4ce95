"""VoicePanel — mic toggle, session status and last heard command."""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from vocalchess.i18n import t
from vocalchess.voice.session import SessionStatus

_DOT_COLORS: dict[SessionStatus, str] = {
    SessionStatus.IDLE: "#777777",
    SessionStatus.READY: "#3a7d44",
    SessionStatus.LISTENING: "#d9534f",
    SessionStatus.PROCESSING: "#e0a030",
    SessionStatus.ERROR: "#8b2020",
    SessionStatus.UNSUPPORTED: "#555555",
}


def status_label(status: SessionStatus) -> str:
    s = t()
    return {
        SessionStatus.IDLE: s.voice_status_idle,
        SessionStatus.READY: s.voice_status_ready,
        SessionStatus.LISTENING: s.voice_status_listening,
        SessionStatus.PROCESSING: s.voice_status_processing,
        SessionStatus.ERROR: s.voice_status_error,
        SessionStatus.UNSUPPORTED: s.voice_status_unsupported,
    }[status]


class VoicePanel(QWidget):
    """Mic button plus the observable state of a voice session."""

    toggle_clicked = pyqtSignal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._status = SessionStatus.IDLE
        self._setup_ui()
        self.set_status(SessionStatus.IDLE)
        self.set_last_command("")

    def _setup_ui(self) -> None:
        s = t()
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(6)

        header = QLabel(s.voice_header)
        header.setFont(QFont("Adwaita Sans", 12, QFont.Weight.Bold))
        layout.addWidget(header)

        row = QHBoxLayout()
        self._btn_mic = QPushButton()
        self._btn_mic.setFont(QFont("Adwaita Sans", 18))
        self._btn_mic.setFixedSize(56, 56)
        self._btn_mic.clicked.connect(self.toggle_clicked)
        row.addWidget(self._btn_mic)

        self._dot = QLabel()
        self._dot.setFixedSize(10, 10)
        row.addWidget(self._dot)

        self._status_label = QLabel()
        row.addWidget(self._status_label, 1)
        layout.addLayout(row)

        caption = QLabel(s.voice_last_command)
        caption.setStyleSheet("color: #999999;")
        layout.addWidget(caption)

        self._last_command = QLabel()
        self._last_command.setWordWrap(True)
        self._last_command.setTextInteractionFlags(
            Qt.TextInteractionFlag.TextSelectableByMouse
        )
        layout.addWidget(self._last_command)

        tips = QLabel(
            f"<b>{s.voice_tips_header}</b><ul>"
            + "".join(f"<li>{tip}</li>" for tip in s.voice_tips)
            + "</ul>"
        )
        tips.setTextFormat(Qt.TextFormat.RichText)
        layout.addWidget(tips)
        layout.addStretch()

    # ── Public API ────────────────────────────────────────────────────────

    @property
    def status_text(self) -> str:
        return self._status_label.text()

    @property
    def last_command_text(self) -> str:
        return self._last_command.text()

    @property
    def is_toggle_enabled(self) -> bool:
        return self._btn_mic.isEnabled()

    def set_status(self, status: SessionStatus) -> None:
        self._status = status
        listening = status == SessionStatus.LISTENING
        self._btn_mic.setText("🛑" if listening else "🎙")
        self._btn_mic.setEnabled(status != SessionStatus.UNSUPPORTED)
        self._btn_mic.setStyleSheet(
            "QPushButton { border-radius: 28px; background-color: #8b2020; }"
            if listening
            else "QPushButton { border-radius: 28px; }"
        )
        self._dot.setStyleSheet(
            f"background-color: {_DOT_COLORS[status]}; border-radius: 5px;"
        )
        self._status_label.setText(status_label(status))

    def set_last_command(self, transcript: str) -> None:
        self._last_command.setText(transcript or t().voice_last_command_hint)
