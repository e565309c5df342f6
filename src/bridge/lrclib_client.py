from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import logging

import requests

from core.utils import strip_timestamps

logger = logging.getLogger(__name__)

INSTRUMENTAL_MARK = "[au: instrumental]"


@dataclass(frozen=True)
class LyricsResult:
    plain: Optional[str]
    synced: Optional[str]
    instrumental: bool
    source: str  # "get" | "search" | "none"


def _clean(s) -> Optional[str]:
    return (s or "").strip() or None


def _to_result(data: dict, source: str) -> LyricsResult:
    plain = _clean(data.get("plainLyrics"))
    synced = _clean(data.get("syncedLyrics"))
    instrumental = bool(data.get("instrumental", False)) or (synced == INSTRUMENTAL_MARK)
    return LyricsResult(plain=plain, synced=synced, instrumental=instrumental, source=source)


class LrcLibClient:
    def __init__(self, base_url: str = "https://lrclib.net", user_agent: str = "arkia/0.1", timeout: float = 15, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent})

    def get_by_metadata(self, title: str, artist: str, duration_s: float | None = None) -> Optional[dict]:
        # GET /api/get?track_name=&artist_name=&duration=
        params = {"track_name": title, "artist_name": artist}
        if duration_s and duration_s > 0:
            params["duration"] = int(round(duration_s))

        r = self.session.get(f"{self.base_url}/api/get", params=params, timeout=self.timeout)
        if r.status_code == 404:
            return None
        r.raise_for_status()
        return r.json()

    def search(self, query: str, artist: str | None = None, limit: int = 10) -> list[dict]:
        params = {"q": query}
        if artist:
            params["artist_name"] = artist
        r = self.session.get(f"{self.base_url}/api/search", params=params, timeout=self.timeout)
        r.raise_for_status()
        items = r.json()
        return items[:limit] if isinstance(items, list) else []

    def fetch_best(self, title: str, artist: str, duration_s: float | None = None) -> LyricsResult:
        data = self.get_by_metadata(title=title, artist=artist, duration_s=duration_s)
        if data:
            return _to_result(data, "get")

        items = self.search(query=f"{artist} {title}", artist=artist)
        if items:
            return _to_result(items[0], "search")

        return LyricsResult(plain=None, synced=None, instrumental=False, source="none")

    def lookup_plain(self, title: str, artist: str, duration_s: float | None = None) -> Optional[str]:
        """Plain lyrics text for a track, derived from LRC when only synced lyrics exist."""
        res = self.fetch_best(title=title, artist=artist, duration_s=duration_s)
        logger.debug("LRCLIB lookup %r / %r -> %s", artist, title, res.source)
        if res.instrumental:
            return None
        if res.plain:
            return res.plain
        if res.synced:
            return _clean(strip_timestamps(res.synced))
        return None
