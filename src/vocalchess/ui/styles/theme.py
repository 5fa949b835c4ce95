"""QSS styles for Vocal chess."""

from __future__ import annotations

BOARD_FONT_FAMILY = "DejaVu Sans Mono"

APP_STYLE = """
QMainWindow {
    background: #1f1f1f;
}

QLabel {
    color: #e0e0e0;
    font-family: "Adwaita Sans", "Helvetica Neue", sans-serif;
}

QLabel#appTitle {
    font-size: 22px;
    font-weight: bold;
}
QLabel#appSubtitle {
    color: #999999;
}
QLabel#statusBadge {
    background: #2f2f2f;
    border: 1px solid #3c3c3c;
    border-radius: 9px;
    padding: 2px 10px;
}
QLabel#boardText {
    background: #262626;
    border: 1px solid #3c3c3c;
    border-radius: 6px;
    padding: 8px;
    font-size: 26px;
}

QListWidget {
    background: #1e1e1e;
    color: #d4d4d4;
    border: 1px solid #3c3c3c;
    font-family: "Adwaita Sans", "Consolas", monospace;
    font-size: 13px;
}

QPushButton {
    background: #3c3c3c;
    color: #e0e0e0;
    border: 1px solid #555;
    border-radius: 4px;
    padding: 6px 14px;
    font-size: 13px;
}
QPushButton:hover {
    background: #505050;
}
QPushButton:pressed {
    background: #264f78;
}
QPushButton:disabled {
    color: #666;
    background: #2b2b2b;
}
"""
