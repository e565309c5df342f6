import math
import os
import re

SIDECAR_SUFFIX = ".txt"

MIME_BY_EXT = {
    ".m4a": "audio/mp4",
    ".mp4": "audio/mp4",
    ".wav": "audio/wav",
    ".ogg": "audio/ogg",
    ".flac": "audio/flac",
}
DEFAULT_MIME = "audio/mpeg"


def mime_type_for(path: str) -> str:
    ext = os.path.splitext(path)[1].lower()
    return MIME_BY_EXT.get(ext, DEFAULT_MIME)


def sidecar_path(path: str) -> str:
    """song.mp3 -> song.mp3.txt (the audio extension is kept)."""
    return path + SIDECAR_SUFFIX


def fmt_seconds(sec) -> str:
    if not sec or not math.isfinite(sec) or sec < 0:
        return "0:00"
    m = int(sec // 60)
    s = int(sec % 60)
    return f"{m}:{s:02d}"


def is_known_duration(duration) -> bool:
    return bool(duration) and math.isfinite(duration) and duration > 0


def scroll_fraction(position: float, duration: float) -> float | None:
    """
    Linear progress in [0, 1], or None while the duration is unknown/infinite.
    """
    if not is_known_duration(duration):
        return None
    pos = position if math.isfinite(position) else 0.0
    return min(1.0, max(0.0, pos / duration))


def scroll_offset(fraction: float, scroll_range: int) -> int:
    if scroll_range <= 0:
        return 0
    fraction = min(1.0, max(0.0, fraction))
    return int(round(fraction * scroll_range))


def strip_timestamps(lrc: str) -> str:
    """
    Drop leading [mm:ss.xx] (and [tag:value]) blocks from every LRC line.
    """
    out_lines = []
    for line in lrc.splitlines():
        line = re.sub(r"^(\s*\[[^\]]*\])+\s*", "", line)
        out_lines.append(line)
    return "\n".join(out_lines).strip()
