# core/models.py
from __future__ import annotations

import uuid
from dataclasses import dataclass, field

UNKNOWN_ARTIST = "Unknown"


def new_track_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Track:
    file_path: str
    title: str
    artist: str
    lyrics: str | None = None
    artwork: bytes | None = None  # placeholder, never filled yet
    track_id: str = field(default_factory=new_track_id)


@dataclass(frozen=True)
class TrackMetadata:
    title: str
    artist: str
    lyrics: str | None = None


@dataclass(frozen=True)
class AudioData:
    file_path: str
    data: bytes
    mime_type: str


@dataclass
class PlaybackState:
    current_index: int | None = None
    playing: bool = False
    position: float = 0.0   # seconds
    duration: float = 0.0   # seconds


@dataclass
class LyricsEditorState:
    draft: str = ""
    visible: bool = False
    editor_open: bool = False
