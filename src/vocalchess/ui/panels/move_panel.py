"""MovePanel — numbered move list in SAN notation."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QLabel, QListWidget, QVBoxLayout, QWidget

from vocalchess.i18n import t


def format_rows(sans: list[str]) -> list[str]:
    """Pair plies into ``"1. e4 e5"`` rows."""
    rows: list[str] = []
    for idx in range(0, len(sans), 2):
        pair = sans[idx : idx + 2]
        rows.append(f"{idx // 2 + 1}. " + "  ".join(pair))
    return rows


class MovePanel(QWidget):
    """Displays the game's move history."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._setup_ui()
        self.set_moves([])

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)

        header = QLabel(t().moves_header)
        header.setFont(QFont("Adwaita Sans", 12, QFont.Weight.Bold))
        header.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(header)

        self._empty = QLabel(t().moves_empty)
        self._empty.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._empty.setStyleSheet("color: #999999;")
        layout.addWidget(self._empty)

        self._list = QListWidget()
        self._list.setAlternatingRowColors(True)
        self._list.setSelectionMode(QListWidget.SelectionMode.NoSelection)
        self._list.setFont(QFont("AdwaitaMono Nerd Font", 12))
        layout.addWidget(self._list)

    def row_count(self) -> int:
        return self._list.count()

    def row_text(self, row: int) -> str:
        item = self._list.item(row)
        return item.text() if item is not None else ""

    def set_moves(self, sans: list[str]) -> None:
        self._list.clear()
        self._list.addItems(format_rows(sans))
        self._empty.setVisible(not sans)
        self._list.scrollToBottom()
