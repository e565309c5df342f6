# src/bridge/lyrics_store.py
from __future__ import annotations

import logging
import os
from typing import Optional

from core.utils import sidecar_path

logger = logging.getLogger(__name__)


def save_sidecar(path: str, text: str) -> bool:
    """
    Write lyrics verbatim to <path>.txt, replacing any previous content.
    The audio file itself is never touched.
    """
    target = sidecar_path(path)
    try:
        with open(target, "w", encoding="utf-8", newline="") as f:
            f.write(text)
    except (OSError, UnicodeError) as e:
        logger.error("Lyrics save error for %s: %s", target, e)
        return False
    logger.info("Saved lyrics to %s", target)
    return True


def read_sidecar(path: str) -> Optional[str]:
    target = sidecar_path(path)
    if not os.path.isfile(target):
        return None
    try:
        with open(target, "r", encoding="utf-8", errors="replace", newline="") as f:
            text = f.read()
    except OSError as e:
        logger.warning("Cannot read lyrics sidecar %s: %s", target, e)
        return None
    return text if text.strip() else None
