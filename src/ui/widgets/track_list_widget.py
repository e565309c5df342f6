# ui/track_list_widget.py
from __future__ import annotations

from PySide6.QtCore import Signal, Qt, QItemSelectionModel
from PySide6.QtWidgets import QWidget, QVBoxLayout, QTableView, QMenu, QHeaderView

from ui.models.track_table_model import TrackTableModel


class TrackListWidget(QWidget):
    playRequested = Signal(int)   # row index

    def __init__(self, controller, parent=None):
        super().__init__(parent)
        self.controller = controller

        self.table = QTableView()
        self.model = TrackTableModel(controller.tracks)
        self.table.setModel(self.model)

        self.table.setSelectionBehavior(QTableView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QTableView.SelectionMode.SingleSelection)
        self.table.setEditTriggers(QTableView.EditTrigger.NoEditTriggers)
        self.table.verticalHeader().setVisible(False)
        self.table.verticalHeader().setDefaultSectionSize(28)
        self.table.setShowGrid(False)
        self.table.setAlternatingRowColors(True)
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.Stretch)
        self.table.setColumnWidth(1, 220)
        self.table.setColumnWidth(2, 70)
        self.table.setObjectName("TrackTable")

        self._apply_styles()

        # Double click -> play
        self.table.doubleClicked.connect(self._on_double_click)

        self.table.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.table.customContextMenuRequested.connect(self._on_context_menu)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.table)

        self.controller.tracksChanged.connect(self.refresh)
        self.controller.trackUpdated.connect(self.model.refresh_row)
        self.controller.currentTrackChanged.connect(self._on_current_changed)
        self.playRequested.connect(self.controller.play_index)

    # -------------------------
    # External API
    # -------------------------
    def refresh(self):
        self.model.set_tracks(self.controller.tracks)

    def selected_row(self) -> int | None:
        idx = self.table.currentIndex()
        if not idx.isValid():
            return None
        return idx.row()

    def set_now_playing(self, row: int | None):
        self.model.set_current(row)
        if row is None:
            self.table.clearSelection()
            return

        idx = self.model.index(row, 0)
        sm = self.table.selectionModel()
        if sm is None:
            return
        sm.setCurrentIndex(idx, QItemSelectionModel.ClearAndSelect | QItemSelectionModel.Rows)
        self.table.scrollTo(idx, QTableView.ScrollHint.EnsureVisible)

    # -------------------------
    # UI Events
    # -------------------------
    def _on_current_changed(self, _track):
        self.set_now_playing(self.controller.playback.current_index)

    def _on_double_click(self, index):
        if not index.isValid():
            return
        self.playRequested.emit(index.row())

    def _on_context_menu(self, pos):
        idx = self.table.indexAt(pos)
        if not idx.isValid():
            return
        row = idx.row()

        menu = QMenu(self)
        act_play = menu.addAction("Play")

        chosen = menu.exec(self.table.viewport().mapToGlobal(pos))
        if chosen == act_play:
            self.playRequested.emit(row)

    def _apply_styles(self):
        self.setStyleSheet("""
        QTableView#TrackTable {
            background-color: #0f1113;
            alternate-background-color: #0b0c0d;
            border: none;
            color: #ffffff;
            selection-background-color: rgba(42, 157, 143, 0.25);
            selection-color: #ffffff;
        }

        QHeaderView::section {
            background-color: #0f1113;
            color: rgba(255, 255, 255, 0.65);
            padding: 4px 6px;
            border: none;
            border-bottom: 1px solid #1a1b1c;
            font-size: 11px;
        }

        QTableView::item {
            padding: 4px 6px;
        }
        """)
