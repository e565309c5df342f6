# core/controller.py
from __future__ import annotations

import logging
import math
import os

from PySide6.QtCore import QObject, Signal

from core.models import UNKNOWN_ARTIST, LyricsEditorState, PlaybackState, Track
from core.utils import scroll_fraction

logger = logging.getLogger(__name__)


def read_metadata_batch(bridge, paths: list[str]) -> list[tuple[str, object]]:
    return [(p, bridge.read_metadata(p)) for p in paths]


class PlayerController(QObject):
    """
    Playback and lyrics state of the window.

    Owns the track list, PlaybackState and LyricsEditorState. Bridge calls go
    through `runner.submit(fn, *args, on_result=..., on_error=...)`; results
    arrive on the GUI thread. Player events only update local state.
    """
    tracksChanged = Signal()              # list grew
    trackUpdated = Signal(int)            # row whose fields changed
    currentTrackChanged = Signal(object)  # Track | None
    playingChanged = Signal(bool)
    positionChanged = Signal(float)
    durationChanged = Signal(float)
    lyricsVisibilityChanged = Signal(bool)
    editorOpenChanged = Signal(bool)
    draftChanged = Signal(str)
    lyricsScrollChanged = Signal(float)   # 0..1
    alertRequested = Signal(str, str)     # title, message

    def __init__(self, app_state, bridge, player, runner, parent=None):
        super().__init__(parent)
        self.app_state = app_state
        self.bridge = bridge
        self.player = player
        self.runner = runner

        self.tracks: list[Track] = []
        self.playback = PlaybackState()
        self.editor = LyricsEditorState()

        self._play_generation = 0
        self._pending_load: tuple | None = None   # (generation, index, AudioData)
        self._subscriptions: list[tuple] = []
        self._closed = False
        self._subscribe()

    # ------------------ subscriptions ------------------
    def _subscribe(self):
        if self.player is None:
            return
        pairs = (
            (self.player.positionChanged, self._on_player_position),
            (self.player.durationChanged, self._on_player_duration),
            (self.player.ended, self._on_player_ended),
            (self.player.errorOccurred, self._on_player_error),
            (self.player.loaded, self._on_media_loaded),
            (self.player.loadFailed, self._on_media_load_failed),
        )
        for signal, slot in pairs:
            signal.connect(slot)
            self._subscriptions.append((signal, slot))

    def shutdown(self):
        """Drop every player subscription and release the media source."""
        if self._closed:
            return
        self._closed = True

        while self._subscriptions:
            signal, slot = self._subscriptions.pop()
            try:
                signal.disconnect(slot)
            except (RuntimeError, TypeError) as e:
                logger.debug("Subscription already gone: %s", e)

        self._pending_load = None
        if self.player is not None:
            self.player.close()
        self._set_playing(False)

    # ------------------ queries ------------------
    def current_track(self) -> Track | None:
        idx = self.playback.current_index
        if idx is None:
            return None
        return self.tracks[idx]

    def has_source(self) -> bool:
        return self.player is not None and self.player.has_source()

    def remaining(self) -> float:
        dur = self.playback.duration
        if not dur or not math.isfinite(dur):
            return 0.0
        return max(0.0, dur - (self.playback.position or 0.0))

    # ------------------ import ------------------
    def add_files(self):
        try:
            paths = self.bridge.open_audio_files()
        except Exception:
            logger.exception("Open audio files dialog failed")
            return

        if not paths:
            logger.debug("File selection cancelled")
            return

        paths = list(paths)
        self.runner.submit(
            read_metadata_batch, self.bridge, paths,
            on_result=self._on_metadata_read,
            on_error=lambda e: logger.error("Reading metadata failed: %s", e, exc_info=e),
        )

    def _on_metadata_read(self, pairs):
        items = []
        for path, meta in pairs:
            items.append(Track(
                file_path=path,
                title=(getattr(meta, "title", None) or os.path.basename(path)),
                artist=(getattr(meta, "artist", None) or UNKNOWN_ARTIST),
                lyrics=getattr(meta, "lyrics", None),
            ))
        if not items:
            return
        self.tracks.extend(items)
        logger.info("Imported %d track(s)", len(items))
        self.tracksChanged.emit()

    # ------------------ transport ------------------
    def play_index(self, index):
        if not isinstance(index, int) or not 0 <= index < len(self.tracks):
            logger.warning("play_index: no track at %r", index)
            return

        track = self.tracks[index]
        self._play_generation += 1
        generation = self._play_generation

        self.runner.submit(
            self.bridge.read_file_data, track.file_path,
            on_result=lambda audio: self._on_audio_ready(generation, index, audio),
            on_error=lambda e: self._on_audio_failed(generation, track, e),
        )

    def _on_audio_ready(self, generation: int, index: int, audio):
        if generation != self._play_generation:
            logger.debug("Dropping stale playback response for %s", audio.file_path)
            return
        if self.player is None:
            logger.error("No audio player available, cannot play %s", audio.file_path)
            return

        # state is committed once the player reports the source as loaded
        self._pending_load = (generation, index, audio)
        try:
            self.player.load(audio)
        except Exception:
            self._pending_load = None
            logger.exception("playIndex error for %s", audio.file_path)

    def _on_media_loaded(self, audio):
        pending = self._pending_load
        if pending is None or pending[2] is not audio:
            logger.debug("Ignoring load of %s", audio.file_path)
            return
        self._pending_load = None
        generation, index, _audio = pending
        if generation != self._play_generation:
            return

        try:
            self.player.play()
        except Exception:
            logger.exception("playIndex error for %s", audio.file_path)
            return

        track = self.tracks[index]
        self.playback.current_index = index
        self.playback.position = 0.0
        self.playback.duration = self.player.duration() or 0.0
        self.editor = LyricsEditorState(draft=track.lyrics or "")

        self.currentTrackChanged.emit(track)
        self._set_playing(True)
        self.positionChanged.emit(self.playback.position)
        self.durationChanged.emit(self.playback.duration)
        self.draftChanged.emit(self.editor.draft)
        self.editorOpenChanged.emit(False)
        self.lyricsVisibilityChanged.emit(False)

    def _on_media_load_failed(self, audio, message: str):
        pending = self._pending_load
        if pending is None or pending[2] is not audio:
            return
        self._pending_load = None
        logger.error("playIndex error for %s: %s", audio.file_path, message)

    def _on_audio_failed(self, generation: int, track: Track, error):
        if generation != self._play_generation:
            logger.debug("Ignoring stale failure for %s", track.file_path)
            return
        logger.error("playIndex error for %s: %s", track.file_path, error, exc_info=error)

    def toggle_play(self):
        if not self.has_source():
            return
        if self.playback.playing:
            self.player.pause()
            self._set_playing(False)
            return
        try:
            self.player.play()
        except Exception:
            logger.exception("play failed")
            return
        self._set_playing(True)

    def seek(self, value: float):
        if not self.has_source():
            return
        pos = self.player.seek(float(value))
        self.playback.position = pos
        self.positionChanged.emit(pos)
        self._emit_scroll()

    def _set_playing(self, playing: bool):
        if self.playback.playing == playing:
            return
        self.playback.playing = playing
        self.playingChanged.emit(playing)

    # ------------------ player events ------------------
    def _on_player_position(self, seconds: float):
        self.playback.position = seconds or 0.0
        self.positionChanged.emit(self.playback.position)
        self._emit_scroll()

    def _on_player_duration(self, seconds: float):
        self.playback.duration = seconds or 0.0
        self.durationChanged.emit(self.playback.duration)
        self._emit_scroll()

    def _on_player_ended(self):
        self._set_playing(False)

    def _on_player_error(self, message: str):
        logger.error("Media error: %s", message)
        self._set_playing(False)

    # ------------------ lyrics ------------------
    def _emit_scroll(self):
        if not self.editor.visible:
            return
        fraction = scroll_fraction(self.playback.position, self.playback.duration)
        if fraction is None:
            return
        self.lyricsScrollChanged.emit(fraction)

    def toggle_lyrics_visible(self):
        self.set_lyrics_visible(not self.editor.visible)

    def set_lyrics_visible(self, visible: bool):
        visible = bool(visible)
        if self.editor.visible == visible:
            return
        self.editor.visible = visible
        self.lyricsVisibilityChanged.emit(visible)
        self._emit_scroll()

    def open_editor(self):
        track = self.current_track()
        if track is None:
            return
        self.editor.draft = track.lyrics or ""
        self.editor.editor_open = True
        self.draftChanged.emit(self.editor.draft)
        self.editorOpenChanged.emit(True)

    def close_editor(self):
        if not self.editor.editor_open:
            return
        self.editor.editor_open = False
        self.editorOpenChanged.emit(False)

    def set_draft(self, text: str):
        if text == self.editor.draft:
            return
        self.editor.draft = text
        self.draftChanged.emit(text)

    def save_lyrics(self):
        index = self.playback.current_index
        if index is None:
            logger.warning("save_lyrics: no current track")
            return

        track = self.tracks[index]
        draft = self.editor.draft
        self.runner.submit(
            self.bridge.save_lyrics, track.file_path, draft,
            on_result=lambda ok: self._on_lyrics_saved(index, draft, bool(ok)),
            on_error=lambda e: self._on_lyrics_saved(index, draft, False, e),
        )

    def _on_lyrics_saved(self, index: int, draft: str, ok: bool, error=None):
        track = self.tracks[index]
        if not ok:
            logger.error("Lyrics save failed for %s: %s", track.file_path, error or "bridge returned false")
            self.alertRequested.emit("Lyrics", "Failed to save lyrics")
            return

        track.lyrics = draft
        self.trackUpdated.emit(index)
        if index == self.playback.current_index:
            self.currentTrackChanged.emit(track)
            self.editor.editor_open = False
            self.editorOpenChanged.emit(False)
            self.set_lyrics_visible(True)
        self.app_state.notify("Lyrics saved.", "success")

    def fetch_lyrics_online(self):
        track = self.current_track()
        if track is None:
            return
        duration = self.playback.duration if math.isfinite(self.playback.duration or 0.0) else None
        self.runner.submit(
            self.bridge.fetch_lyrics, track.title, track.artist, duration or None,
            on_result=lambda text: self._on_lyrics_fetched(track, text),
            on_error=lambda e: self._on_lyrics_fetch_failed(track, e),
        )

    def _on_lyrics_fetched(self, track: Track, text):
        if track is not self.current_track():
            return
        if not text:
            self.app_state.notify(f"No lyrics found online for {track.title}.", "warn")
            return
        self.editor.draft = text
        self.draftChanged.emit(text)
        if not self.editor.editor_open:
            self.editor.editor_open = True
            self.editorOpenChanged.emit(True)
        self.app_state.notify("Lyrics found. Review and save them.", "info")

    def _on_lyrics_fetch_failed(self, track: Track, error):
        logger.warning("Online lyrics lookup failed for %s: %s", track.file_path, error)
        self.app_state.notify(f"Failed to look up lyrics: {error}", "error")
