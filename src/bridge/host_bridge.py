# src/bridge/host_bridge.py
from __future__ import annotations

import logging
import os
from typing import Optional

from core.config import AUDIO_EXTS, DEFAULT_LRCLIB_URL, last_open_dir, remember_open_dir
from core.models import AudioData, TrackMetadata
from core.utils import mime_type_for
from bridge.lrclib_client import LrcLibClient
from bridge.lyrics_store import save_sidecar
from bridge.metadata import read_metadata

logger = logging.getLogger(__name__)

AUDIO_FILTER = "Audio ({})".format(" ".join(f"*.{ext}" for ext in AUDIO_EXTS))


class HostBridge:
    """
    Privileged operations used by the player controller: native file
    picker, tag reading, raw audio bytes, sidecar lyrics, online lookup.

    Everything except open_audio_files() is safe to call from a worker thread.
    """

    def __init__(self, config=None, lrclib: LrcLibClient | None = None, dialog_parent=None):
        self.config = config
        self.dialog_parent = dialog_parent
        base_url = getattr(config, "lrclib_url", None) or DEFAULT_LRCLIB_URL
        self._lrclib = lrclib
        self._lrclib_url = base_url

    @property
    def lrclib(self) -> LrcLibClient:
        if self._lrclib is None:
            self._lrclib = LrcLibClient(base_url=self._lrclib_url)
        return self._lrclib

    def open_audio_files(self) -> list[str]:
        # Qt dialogs must run on the GUI thread
        from PySide6.QtWidgets import QFileDialog

        paths, _ = QFileDialog.getOpenFileNames(
            self.dialog_parent,
            "Add Music Files",
            last_open_dir(),
            AUDIO_FILTER,
        )
        if not paths:
            return []

        remember_open_dir(os.path.dirname(paths[0]))
        return [os.path.abspath(p) for p in paths]

    def read_metadata(self, path: str) -> TrackMetadata:
        return read_metadata(path)

    def read_file_data(self, path: str) -> AudioData:
        """Raises OSError when the file cannot be read."""
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError:
            logger.error("readDataUrl error for %s", path, exc_info=True)
            raise
        return AudioData(file_path=path, data=data, mime_type=mime_type_for(path))

    def save_lyrics(self, path: str, text: str) -> bool:
        return save_sidecar(path, text)

    def fetch_lyrics(self, title: str, artist: str, duration_s: float | None = None) -> Optional[str]:
        return self.lrclib.lookup_plain(title=title, artist=artist, duration_s=duration_s)
