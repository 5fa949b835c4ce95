"""MainWindow — board status, move list and the voice control panel."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QCloseEvent, QFont
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from vocalchess.game.controller import GameController
from vocalchess.i18n import t
from vocalchess.settings import AppSettings
from vocalchess.ui.panels.move_panel import MovePanel
from vocalchess.ui.panels.voice_panel import VoicePanel
from vocalchess.ui.styles.theme import BOARD_FONT_FAMILY
from vocalchess.voice.interfaces import (
    Recognizer,
    RecognizerConfig,
    RecognizerFactory,
    Speaker,
)
from vocalchess.voice.session import VoiceSession

_LOGGER = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main application window.

    Args:
        settings: User settings; defaults are used when omitted.
        recognizer_factory: Overrides the microphone recognizer.
        speaker: Overrides Qt text-to-speech output.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        recognizer_factory: RecognizerFactory | None = None,
        speaker: Speaker | None = None,
    ) -> None:
        super().__init__()
        s = t()
        self.setWindowTitle(s.window_title)
        self.setMinimumSize(760, 560)

        self._settings = settings or AppSettings()
        self._controller = GameController()
        self._speaker = speaker or self._create_speaker()

        self._setup_ui()
        self._connect_signals()
        self._connect_game_events()

        self._voice_session = VoiceSession(
            recognizer_factory=recognizer_factory or self._create_recognizer,
            speaker=self._speaker,
            on_move=self._controller.submit_move,
            on_new_game=self._controller.new_game,
            on_undo=self._controller.undo_move,
            on_castle=self._controller.castle,
            on_status_changed=self._voice_panel.set_status,
            on_transcript=self._voice_panel.set_last_command,
            config=self._settings.recognizer,
        )
        self._voice_panel.set_status(self._voice_session.status)
        self._sync_game_view()

    # ── Collaborators ────────────────────────────────────────────────────

    def _create_speaker(self) -> Speaker:
        from vocalchess.voice.speech import QtSpeaker

        s = self._settings
        speaker = QtSpeaker(locale=s.recognizer.language, rate=s.speech_rate)
        speaker.set_enabled(s.speech_enabled)
        speaker.set_volume(s.speech_volume)
        return speaker

    def _create_recognizer(self, config: RecognizerConfig) -> Recognizer | None:
        from vocalchess.voice.recognizer import create_recognizer

        return create_recognizer(config, parent=self)

    # ── UI setup ─────────────────────────────────────────────────────────

    def _setup_ui(self) -> None:
        s = t()
        central = QWidget()
        self.setCentralWidget(central)
        root = QVBoxLayout(central)
        root.setContentsMargins(12, 12, 12, 12)
        root.setSpacing(10)

        # Header
        header = QHBoxLayout()
        titles = QVBoxLayout()
        title = QLabel(s.window_title)
        title.setObjectName("appTitle")
        titles.addWidget(title)
        subtitle = QLabel(s.window_subtitle)
        subtitle.setObjectName("appSubtitle")
        titles.addWidget(subtitle)
        header.addLayout(titles, 1)

        self._btn_new = QPushButton(s.btn_new_game)
        header.addWidget(self._btn_new)
        self._btn_undo = QPushButton(s.btn_undo)
        header.addWidget(self._btn_undo)
        root.addLayout(header)

        body = QHBoxLayout()
        body.setSpacing(10)

        # Board (left)
        board_col = QVBoxLayout()
        board_header = QHBoxLayout()
        board_title = QLabel(s.board_header)
        board_title.setFont(QFont("Adwaita Sans", 12, QFont.Weight.Bold))
        board_header.addWidget(board_title, 1)
        self._status_badge = QLabel()
        self._status_badge.setObjectName("statusBadge")
        board_header.addWidget(self._status_badge)
        board_col.addLayout(board_header)

        self._board_text = QLabel()
        self._board_text.setObjectName("boardText")
        self._board_text.setFont(QFont(BOARD_FONT_FAMILY, 22))
        self._board_text.setAlignment(Qt.AlignmentFlag.AlignCenter)
        board_col.addWidget(self._board_text, 1)
        body.addLayout(board_col, 3)

        # Right panel
        right = QVBoxLayout()
        right.setSpacing(6)
        self._voice_panel = VoicePanel()
        right.addWidget(self._voice_panel)
        self._move_panel = MovePanel()
        right.addWidget(self._move_panel, 1)

        right_widget = QWidget()
        right_widget.setLayout(right)
        right_widget.setFixedWidth(300)
        body.addWidget(right_widget)
        root.addLayout(body, 1)

    def _connect_signals(self) -> None:
        self._btn_new.clicked.connect(self._on_new_game_clicked)
        self._btn_undo.clicked.connect(self._on_undo_clicked)
        self._voice_panel.toggle_clicked.connect(self._on_voice_toggle)

    def _connect_game_events(self) -> None:
        events = self._controller.events
        events.on_move.append(self._on_game_move)
        events.on_undo.append(self._on_game_changed)
        events.on_new_game.append(self._on_game_reset)
        events.on_game_over.append(self._on_game_over)

    def _disconnect_game_events(self) -> None:
        events = self._controller.events
        events.on_move.clear()
        events.on_undo.clear()
        events.on_new_game.clear()
        events.on_game_over.clear()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def controller(self) -> GameController:
        return self._controller

    @property
    def voice_session(self) -> VoiceSession:
        return self._voice_session

    @property
    def voice_panel(self) -> VoicePanel:
        return self._voice_panel

    @property
    def move_panel(self) -> MovePanel:
        return self._move_panel

    @property
    def status_text(self) -> str:
        return self._status_badge.text()

    # ── Slots ────────────────────────────────────────────────────────────

    def _on_voice_toggle(self) -> None:
        self._voice_session.toggle()

    def _on_new_game_clicked(self) -> None:
        self._controller.new_game()

    def _on_undo_clicked(self) -> None:
        self._controller.undo_move()

    def _on_game_move(self, _san: str, _controller: GameController) -> None:
        self._sync_game_view()

    def _on_game_changed(self, _controller: GameController) -> None:
        self._sync_game_view()

    def _on_game_reset(self, _controller: GameController) -> None:
        self._voice_panel.set_last_command("")
        self._sync_game_view()

    def _on_game_over(self, status: str) -> None:
        _LOGGER.info("Game over: %s", status)
        # Let the voice command in progress finish first.
        QTimer.singleShot(0, lambda: self._show_game_over_dialog(status))

    def _show_game_over_dialog(self, status: str) -> None:
        s = t()
        lines = [status]
        winner = self._controller.winner
        if winner:
            lines.append(s.game_over_winner.format(color=winner))
        lines.append(s.game_over_play_again)
        answer = QMessageBox.question(self, s.game_over_title, "\n".join(lines))
        if answer == QMessageBox.StandardButton.Yes:
            self._controller.new_game()

    # ── View sync ────────────────────────────────────────────────────────

    def _sync_game_view(self) -> None:
        ctrl = self._controller
        self._board_text.setText(ctrl.board.unicode(empty_square="·"))
        self._status_badge.setText(ctrl.status_text())
        self._move_panel.set_moves(ctrl.move_history())
        self._btn_undo.setEnabled(ctrl.has_moves and not ctrl.is_game_over)

    def closeEvent(self, event: QCloseEvent | None) -> None:
        self._voice_session.shutdown()
        self._disconnect_game_events()
        super().closeEvent(event)
