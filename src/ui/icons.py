# ui/icons.py
from __future__ import annotations

from PySide6.QtCore import Qt, QByteArray
from PySide6.QtGui import QIcon, QPixmap, QPainter
from PySide6.QtSvg import QSvgRenderer

SVG_PLAY = "M5 3v18l15-9L5 3z"
SVG_PAUSE = "M6 4h4v16H6zM14 4h4v16h-4z"
SVG_LYRICS = "M4 6h16v2H4zM4 10h10v2H4zM4 14h8v2H4z"
SVG_EYE = "M12 5c-7 0-11 7-11 7s4 7 11 7 11-7 11-7-4-7-11-7zm0 11a4 4 0 1 1 0-8 4 4 0 0 1 0 8z"

ACCENT = "#2a9d8f"
FOREGROUND = "#ffffff"

_cache: dict[tuple[str, int, str], QIcon] = {}


def svg_icon(path_d: str, size: int = 20, color: str = FOREGROUND) -> QIcon:
    key = (path_d, size, color)
    if key in _cache:
        return _cache[key]

    svg = f"""
    <svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" viewBox="0 0 24 24">
      <path d="{path_d}" fill="{color}"/>
    </svg>
    """.strip()

    renderer = QSvgRenderer(QByteArray(svg.encode("utf-8")))
    pm = QPixmap(size, size)
    pm.fill(Qt.transparent)

    p = QPainter(pm)
    renderer.render(p)
    p.end()

    icon = QIcon(pm)
    _cache[key] = icon
    return icon
