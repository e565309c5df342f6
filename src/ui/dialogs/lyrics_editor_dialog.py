from __future__ import annotations

from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QPlainTextEdit
)


class LyricsEditorDialog(QDialog):
    """
    Modal editor for the current track's lyrics draft.
    Visibility follows controller.editorOpenChanged; the draft is pushed to
    the controller on every edit.
    """
    def __init__(self, controller, parent=None):
        super().__init__(parent)
        self.controller = controller
        self.setWindowTitle("Edit Lyrics")
        self.setModal(True)
        self.resize(520, 360)

        root = QVBoxLayout(self)
        root.setContentsMargins(18, 18, 18, 18)
        root.setSpacing(8)

        header = QHBoxLayout()
        self.title = QLabel("Edit Lyrics")
        self.title.setStyleSheet("font-weight: 700;")
        header.addWidget(self.title, 1)

        self.btn_fetch = QPushButton("Find Online")
        self.btn_fetch.setToolTip("Look up lyrics on LRCLIB")
        header.addWidget(self.btn_fetch)
        root.addLayout(header)

        self.editor = QPlainTextEdit()
        self.editor.setPlaceholderText("Type or paste lyrics…")
        root.addWidget(self.editor, 1)

        buttons = QHBoxLayout()
        buttons.addStretch(1)
        self.btn_cancel = QPushButton("Cancel")
        self.btn_save = QPushButton("Save")
        self.btn_save.setObjectName("BtnSave")
        self.btn_save.setDefault(True)
        buttons.addWidget(self.btn_cancel)
        buttons.addWidget(self.btn_save)
        root.addLayout(buttons)

        self.setStyleSheet("""
        QDialog { background: #0f1113; color: #ffffff; }
        QPlainTextEdit {
            background: #0b0c0d;
            color: #ffffff;
            padding: 12px;
            border-radius: 8px;
            border: 1px solid #121314;
        }
        QPushButton {
            padding: 8px 12px;
            background: #1e1f22;
            border: none;
            border-radius: 8px;
            color: #ffffff;
        }
        QPushButton#BtnSave { background: #2a9d8f; color: #000000; }
        """)

        self.editor.textChanged.connect(self._on_text_changed)
        self.btn_save.clicked.connect(self.controller.save_lyrics)
        self.btn_cancel.clicked.connect(self.controller.close_editor)
        self.btn_fetch.clicked.connect(self.controller.fetch_lyrics_online)

        self.controller.draftChanged.connect(self._on_draft_changed)
        self.controller.editorOpenChanged.connect(self._on_editor_open_changed)

    def _on_text_changed(self):
        self.controller.set_draft(self.editor.toPlainText())

    def _on_draft_changed(self, text: str):
        if text == self.editor.toPlainText():
            return
        self.editor.blockSignals(True)
        self.editor.setPlainText(text)
        self.editor.blockSignals(False)

    def _on_editor_open_changed(self, is_open: bool):
        if is_open:
            track = self.controller.current_track()
            self.title.setText(f"Edit Lyrics: {track.title}" if track else "Edit Lyrics")
            self._on_draft_changed(self.controller.editor.draft)
            self.show()
            self.raise_()
            self.activateWindow()
        elif self.isVisible():
            self.hide()

    def reject(self):
        # Esc / window close behave like Cancel
        self.controller.close_editor()
        super().reject()
