# src/player/player.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from PySide6.QtCore import QObject, Signal, QBuffer, QByteArray, QIODevice, QUrl
from PySide6.QtMultimedia import QMediaPlayer, QAudioOutput

from core.models import AudioData

logger = logging.getLogger(__name__)


class PlaybackError(RuntimeError):
    pass


@dataclass
class _PendingLoad:
    audio: AudioData
    buffer: QBuffer
    # what the previous source was doing, restored if the new one is rejected
    was_playing: bool
    position_ms: int


class Player(QObject):
    """
    The single media element of the app. Sources are in-memory buffers, so a
    loaded track does not depend on the file staying readable.
    Positions and durations are reported in seconds.

    `load()` only hands the bytes to the backend. The source becomes current
    when the backend accepts it (`loaded`); if it is rejected, the previous
    source is put back and `loadFailed` is emitted.
    """
    loaded = Signal(object)             # AudioData
    loadFailed = Signal(object, str)    # AudioData, message
    positionChanged = Signal(float)     # seconds
    durationChanged = Signal(float)     # seconds
    ended = Signal()
    errorOccurred = Signal(str)

    def __init__(self, volume: float = 0.7, parent=None):
        super().__init__(parent)

        self.source: AudioData | None = None
        self._buffer: QBuffer | None = None
        self._pending: _PendingLoad | None = None

        self.audio = QAudioOutput(self)
        self.media = QMediaPlayer(self)
        self.media.setAudioOutput(self.audio)
        self.set_volume(volume)

        self.media.positionChanged.connect(self._on_qt_position)
        self.media.durationChanged.connect(self._on_qt_duration)
        self.media.mediaStatusChanged.connect(self._on_qt_media_status)
        self.media.errorOccurred.connect(self._on_qt_error)

    # ----------------------------
    # Qt handlers
    # ----------------------------

    def _on_qt_position(self, ms: int) -> None:
        if self._pending is not None:
            return
        self.positionChanged.emit(ms / 1000.0)

    def _on_qt_duration(self, ms: int) -> None:
        if self._pending is not None:
            return
        self.durationChanged.emit(ms / 1000.0)

    def _on_qt_media_status(self, status: QMediaPlayer.MediaStatus) -> None:
        if self._pending is not None:
            if status in (QMediaPlayer.LoadedMedia, QMediaPlayer.BufferingMedia, QMediaPlayer.BufferedMedia):
                self._commit_pending()
            elif status == QMediaPlayer.InvalidMedia:
                self._reject_pending(self.media.errorString() or "Invalid media")
            return

        if status == QMediaPlayer.EndOfMedia:
            self.ended.emit()

    def _on_qt_error(self, error, message: str) -> None:
        if error == QMediaPlayer.NoError:
            return
        if self._pending is not None:
            self._reject_pending(message or str(error))
            return
        self.errorOccurred.emit(message or str(error))

    def _commit_pending(self) -> None:
        pending, self._pending = self._pending, None
        self._release_buffer()
        self._buffer = pending.buffer
        self.source = pending.audio
        logger.debug("Source ready: %s", pending.audio.file_path)
        self.loaded.emit(pending.audio)

    def _reject_pending(self, message: str) -> None:
        pending, self._pending = self._pending, None
        pending.buffer.close()
        pending.buffer.deleteLater()
        logger.warning("Backend rejected %s: %s", pending.audio.file_path, message)

        if self.source is not None and self._buffer is not None:
            self._buffer.seek(0)
            self.media.setSourceDevice(self._buffer, QUrl.fromLocalFile(self.source.file_path))
            self.media.setPosition(pending.position_ms)
            if pending.was_playing:
                self.media.play()
        else:
            self.media.setSource(QUrl())

        self.loadFailed.emit(pending.audio, message)

    # ----------------------------
    # Public API
    # ----------------------------

    def load(self, audio: AudioData) -> None:
        """
        Hand `audio` to the backend. Raises PlaybackError if the bytes cannot
        even be buffered; decoding problems are reported through `loadFailed`.
        """
        if not audio.data:
            raise PlaybackError(f"No audio data in {audio.file_path}")

        buffer = QBuffer(self)
        buffer.setData(QByteArray(audio.data))
        if not buffer.open(QIODevice.ReadOnly):
            buffer.deleteLater()
            raise PlaybackError(f"Cannot open audio buffer for {audio.file_path}")

        superseded = self._pending
        if superseded is not None:
            # the committed source's state was captured by the first load
            was_playing, position_ms = superseded.was_playing, superseded.position_ms
        else:
            was_playing = self.media.playbackState() == QMediaPlayer.PlayingState
            position_ms = self.media.position()

        self._pending = _PendingLoad(audio, buffer, was_playing, position_ms)
        logger.debug("Loading %s (%s, %d bytes)", audio.file_path, audio.mime_type, len(audio.data))
        # the url is only a hint for the backend (extension / mime sniffing)
        self.media.setSourceDevice(buffer, QUrl.fromLocalFile(audio.file_path))

        if superseded is not None:
            superseded.buffer.close()
            superseded.buffer.deleteLater()

    def has_source(self) -> bool:
        return self.source is not None

    def play(self) -> None:
        if not self.has_source():
            raise PlaybackError("No source loaded")
        self.media.play()

    def pause(self) -> None:
        self.media.pause()

    def seek(self, seconds: float) -> float:
        """Move to `seconds`, clamped to the media bounds. Returns the new position."""
        pos = float(seconds) if math.isfinite(seconds) else 0.0
        pos = max(0.0, pos)
        dur = self.duration()
        if dur > 0:
            pos = min(pos, dur)
        self.media.setPosition(int(pos * 1000))
        return pos

    def set_volume(self, volume_0_to_1: float) -> None:
        v = min(1.0, max(0.0, float(volume_0_to_1)))
        self.audio.setVolume(v)

    def duration(self) -> float:
        return self.media.duration() / 1000.0

    def close(self) -> None:
        if self._pending is not None:
            self._pending.buffer.close()
            self._pending.buffer.deleteLater()
            self._pending = None
        self.media.stop()
        self.media.setSource(QUrl())
        self._release_buffer()
        self.source = None

    def _release_buffer(self) -> None:
        if self._buffer is not None:
            self._buffer.close()
            self._buffer.deleteLater()
            self._buffer = None
