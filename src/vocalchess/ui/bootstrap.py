"""Qt application bootstrap helpers."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from vocalchess.settings import AppSettings

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QApplication

_LOGGER = logging.getLogger(__name__)
_LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    """Route library and app logs to stderr at *level*."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        _LOGGER.warning("Unknown log level %r, using INFO", level)
        numeric = logging.INFO
    logging.basicConfig(level=numeric, format=_LOG_FORMAT)


def _configure_application(app: QApplication) -> None:
    """Apply app-wide settings and theme."""
    from vocalchess.ui.styles.theme import APP_STYLE

    app.setApplicationName("Vocal chess")
    app.setStyle("Fusion")
    app.setStyleSheet(APP_STYLE)


def run_application(
    argv: list[str] | None = None,
    settings: AppSettings | None = None,
) -> int:
    """Create and run the main Qt application."""
    from PyQt6.QtWidgets import QApplication

    from vocalchess.ui.main_window import MainWindow
    from vocalchess.voice.recognizer import wait_for_detached_threads

    settings = settings or AppSettings()
    configure_logging(settings.log_level)

    app = QApplication(sys.argv if argv is None else argv)
    _configure_application(app)

    window = MainWindow(settings)
    window.show()

    code = app.exec()
    wait_for_detached_threads()
    return code
