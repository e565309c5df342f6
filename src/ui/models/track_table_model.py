# ui/track_table_model.py
from __future__ import annotations
from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex
from PySide6.QtGui import QFont

HEADERS = ["Title", "Artist", "Lyrics"]


class TrackTableModel(QAbstractTableModel):
    """View over the controller's track list (append-only)."""

    def __init__(self, tracks=None):
        super().__init__()
        self._rows = list(tracks or [])
        self._current: int | None = None

    def set_tracks(self, tracks):
        tracks = list(tracks)
        old = len(self._rows)
        if len(tracks) > old and tracks[:old] == self._rows:
            self.beginInsertRows(QModelIndex(), old, len(tracks) - 1)
            self._rows = tracks
            self.endInsertRows()
            return
        self.beginResetModel()
        self._rows = tracks
        self.endResetModel()

    def refresh_row(self, row: int):
        if 0 <= row < len(self._rows):
            self.dataChanged.emit(self.index(row, 0), self.index(row, len(HEADERS) - 1))

    def set_current(self, row: int | None):
        previous, self._current = self._current, row
        for r in (previous, row):
            if r is not None:
                self.refresh_row(r)

    def rowCount(self, parent=QModelIndex()) -> int:
        return 0 if parent.isValid() else len(self._rows)

    def columnCount(self, parent=QModelIndex()) -> int:
        return len(HEADERS)

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole or orientation != Qt.Horizontal:
            return None
        return HEADERS[section]

    def data(self, index: QModelIndex, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        track = self._rows[index.row()]
        col = index.column()

        if role == Qt.DisplayRole:
            if col == 0:
                return track.title
            if col == 1:
                return track.artist
            if col == 2:
                return "Yes" if track.lyrics else ""
        if role == Qt.FontRole and index.row() == self._current:
            font = QFont()
            font.setBold(True)
            return font
        if role == Qt.UserRole:
            return track
        return None

    def track_at(self, row: int):
        if row < 0 or row >= len(self._rows):
            return None
        return self._rows[row]
