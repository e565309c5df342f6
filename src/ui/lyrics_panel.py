# ui/lyrics_panel.py
from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QFrame, QLabel, QPlainTextEdit, QStackedWidget, QVBoxLayout

from core.utils import scroll_offset

NO_LYRICS_TEXT = "No embedded lyrics found. Click Edit Lyrics to add."


class LyricsPanel(QFrame):
    """
    Read-only lyrics shown next to the transport controls. While playing,
    the scroll position follows playback progress linearly.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("LyricsPanel")
        self.setFixedSize(360, 120)

        root = QVBoxLayout(self)
        root.setContentsMargins(12, 12, 12, 12)

        self.stack = QStackedWidget()
        root.addWidget(self.stack)

        self.msg = QLabel(NO_LYRICS_TEXT)
        self.msg.setWordWrap(True)
        self.msg.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        self.msg.setObjectName("NoLyrics")
        self.stack.addWidget(self.msg)

        self.text = QPlainTextEdit()
        self.text.setReadOnly(True)
        self.text.setFrameShape(QFrame.NoFrame)
        self.text.setVerticalScrollBarPolicy(Qt.ScrollBarAsNeeded)
        self.stack.addWidget(self.text)

        self.setStyleSheet("""
        QFrame#LyricsPanel {
            background: #080808;
            border: 1px solid #111111;
            border-radius: 8px;
        }
        QPlainTextEdit {
            background: transparent;
            color: rgba(255, 255, 255, 0.95);
        }
        QLabel#NoLyrics { color: rgba(255, 255, 255, 0.6); }
        """)

        self.set_lyrics(None)

    def set_lyrics(self, lyrics: Optional[str]):
        if lyrics:
            self.text.setPlainText(lyrics)
            self.text.verticalScrollBar().setValue(0)
            self.stack.setCurrentWidget(self.text)
        else:
            self.text.clear()
            self.stack.setCurrentWidget(self.msg)

    def scroll_range(self) -> int:
        sb = self.text.verticalScrollBar()
        return max(0, sb.maximum() - sb.minimum())

    def apply_scroll_fraction(self, fraction: float):
        if self.stack.currentWidget() is not self.text:
            return
        sb = self.text.verticalScrollBar()
        rng = self.scroll_range()
        if rng <= 0:
            return
        sb.setValue(sb.minimum() + scroll_offset(fraction, rng))

    def scroll_value(self) -> int:
        sb = self.text.verticalScrollBar()
        return sb.value() - sb.minimum()
