# src/bridge/metadata.py
from __future__ import annotations

import logging
import os
from typing import Optional

from mutagen import File as MutagenFile
from mutagen.id3 import ID3

from core.models import UNKNOWN_ARTIST, TrackMetadata
from bridge.lyrics_store import read_sidecar

logger = logging.getLogger(__name__)

# Tag keys per container: ID3 frame, MP4 atom, Vorbis comment.
TITLE_KEYS = ("TIT2", "\xa9nam", "title")
ARTIST_KEYS = ("TPE1", "\xa9ART", "artist")
LYRICS_KEYS = ("\xa9lyr", "lyrics", "unsyncedlyrics")


def _as_text(value) -> Optional[str]:
    """Flatten a mutagen tag value (list, ID3 frame, bytes, str) into text."""
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        parts = [p for p in (_as_text(v) for v in value) if p]
        return "\n".join(parts) or None
    if isinstance(value, (bytes, bytearray)):
        value = bytes(value).decode("utf-8", errors="replace")
    elif not isinstance(value, str):
        # ID3 frames keep their payload in .text (str or list of str)
        text = getattr(value, "text", None)
        if text is not None:
            return _as_text(text)
    s = str(value).strip()
    return s or None


def _first(tags, keys) -> Optional[str]:
    for key in keys:
        try:
            value = tags.get(key)
        except (KeyError, ValueError):
            # Vorbis comment dicts reject non-ASCII keys such as MP4 atoms
            continue
        text = _as_text(value)
        if text:
            return text
    return None


def _embedded_lyrics(tags) -> Optional[str]:
    if isinstance(tags, ID3):
        # every USLT frame, in tag order
        return _as_text(tags.getall("USLT"))
    return _first(tags, LYRICS_KEYS)


def fallback_metadata(path: str) -> TrackMetadata:
    return TrackMetadata(title=os.path.basename(path), artist=UNKNOWN_ARTIST, lyrics=None)


def read_tags(path: str) -> TrackMetadata:
    """
    Title/artist/lyrics straight from the audio tags.
    Missing values fall back to the file name and "Unknown"; any failure in
    tag extraction yields the full fallback.
    """
    fallback = fallback_metadata(path)
    try:
        audio = MutagenFile(path)
    except Exception as e:
        logger.warning("Failed to read tags from %s: %s", path, e)
        return fallback

    if audio is None or not getattr(audio, "tags", None):
        return fallback

    tags = audio.tags
    try:
        title = _first(tags, TITLE_KEYS)
        artist = _first(tags, ARTIST_KEYS)
        lyrics = _embedded_lyrics(tags)
    except Exception as e:
        logger.warning("Unexpected tag layout in %s: %s", path, e)
        return fallback

    return TrackMetadata(
        title=title or fallback.title,
        artist=artist or fallback.artist,
        lyrics=lyrics,
    )


def read_metadata(path: str) -> TrackMetadata:
    """Tags plus lyrics, preferring a saved sidecar over embedded lyrics."""
    meta = read_tags(path)
    sidecar = read_sidecar(path)
    if sidecar:
        return TrackMetadata(title=meta.title, artist=meta.artist, lyrics=sidecar)
    return meta
