from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QMessageBox
)
from PySide6.QtGui import QShortcut, QKeySequence
import logging

from ui.player_bar import PlayerBar
from ui.widgets.track_list_widget import TrackListWidget
from ui.widgets.toast import ToastManager, normalize_kind
from ui.dialogs.lyrics_editor_dialog import LyricsEditorDialog

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, app_state, controller):
        super().__init__()
        self.setWindowTitle("Arkia")
        self.resize(1200, 820)
        self.app_state = app_state
        self.controller = controller

        # --- Shortcuts ---
        QShortcut(QKeySequence("Space"), self, activated=self.controller.toggle_play)
        QShortcut(QKeySequence("Ctrl+O"), self, activated=self.controller.add_files)
        QShortcut(QKeySequence("Ctrl+L"), self, activated=self.controller.toggle_lyrics_visible)
        QShortcut(QKeySequence("Return"), self, activated=self._play_selected)
        QShortcut(QKeySequence("Enter"), self, activated=self._play_selected)

        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        outer = QVBoxLayout(self.central_widget)
        outer.setContentsMargins(0, 0, 0, 0)
        outer.setSpacing(0)

        body = QHBoxLayout()
        body.setContentsMargins(0, 0, 0, 0)
        body.setSpacing(0)

        # --- Left sidebar ---
        self.sidebar = QWidget()
        self.sidebar.setObjectName("Sidebar")
        self.sidebar.setFixedWidth(230)
        side = QVBoxLayout(self.sidebar)
        side.setContentsMargins(24, 24, 24, 24)

        brand = QLabel("ARKIA")
        brand.setObjectName("Brand")
        side.addWidget(brand)
        side.addSpacing(18)

        self.btn_add = QPushButton("Add Music Files")
        self.btn_add.setObjectName("BtnAdd")
        self.btn_add.clicked.connect(self.controller.add_files)
        side.addWidget(self.btn_add)
        side.addSpacing(28)

        library = QLabel("Library")
        library.setObjectName("LibraryLabel")
        side.addWidget(library)
        side.addStretch(1)

        body.addWidget(self.sidebar)

        # --- Main area ---
        main = QWidget()
        main_layout = QVBoxLayout(main)
        main_layout.setContentsMargins(28, 28, 28, 28)
        main_layout.setSpacing(16)

        header = QLabel("Songs")
        header.setObjectName("SongsHeader")
        main_layout.addWidget(header)

        self.track_list = TrackListWidget(self.controller)
        main_layout.addWidget(self.track_list, 1)

        body.addWidget(main, 1)
        outer.addLayout(body, 1)

        # --- Bottom player ---
        self.player_bar = PlayerBar(self.controller, self)
        outer.addWidget(self.player_bar)

        self.lyrics_editor = LyricsEditorDialog(self.controller, self)

        self.toasts = ToastManager(self)
        self.app_state.notification.connect(self._on_notify)
        self.controller.alertRequested.connect(self._on_alert)

        self.setStyleSheet("""
            QMainWindow, QWidget { background: #0f1113; color: #ffffff; }
            QWidget#Sidebar {
                background: #0b0c0d;
                border-right: 1px solid #121314;
            }
            QLabel#Brand { font-weight: 700; letter-spacing: 1px; }
            QLabel#LibraryLabel { color: rgba(255, 255, 255, 0.65); }
            QLabel#SongsHeader { font-size: 20px; font-weight: 700; }
            QPushButton#BtnAdd {
                padding: 10px 12px;
                background: #1e1f22;
                color: #ffffff;
                border-radius: 8px;
                border: none;
            }
            QPushButton#BtnAdd:hover { background: #26282c; }
            """)

        self.show_queued_notifications()

    # ------------------ notifications ------------------
    def _on_notify(self, n):
        msg = getattr(n, "message", "") or ""
        if not msg:
            return
        self.toasts.show_toast(msg, notify_type=normalize_kind(n.notify_type), timeout_ms=3000)

    def show_queued_notifications(self):
        for n in self.app_state.queued_notifications:
            self._on_notify(n)
        self.app_state.queued_notifications.clear()

    def _on_alert(self, title: str, message: str):
        QMessageBox.warning(self, title, message)

    # ------------------ helpers ------------------
    def _play_selected(self):
        if self.lyrics_editor.isVisible():
            return
        row = self.track_list.selected_row()
        if row is not None:
            self.controller.play_index(row)

    def closeEvent(self, event):
        logger.debug("Main window closing")
        self.controller.shutdown()
        super().closeEvent(event)
