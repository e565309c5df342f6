# core/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from PySide6.QtCore import QSettings, QStandardPaths

logger = logging.getLogger(__name__)

ORG_NAME = "Arkia"
APP_NAME = "Arkia"

DEFAULT_LRCLIB_URL = "https://lrclib.net"
DEFAULT_VOLUME = 0.7

# extensions offered by the open dialog
AUDIO_EXTS = ("mp3", "m4a", "flac", "wav", "ogg", "aac")


@dataclass
class AppConfig:
    app_data_dir: str
    log_level: str = "INFO"
    log_file: str | None = None
    lrclib_url: str = DEFAULT_LRCLIB_URL
    volume: float = DEFAULT_VOLUME


def get_app_data_dir() -> str:
    base = QStandardPaths.writableLocation(QStandardPaths.AppDataLocation)
    if not base:
        base = os.path.join(os.path.expanduser("~"), ".arkia")
    os.makedirs(base, exist_ok=True)
    return base


def _env_volume(raw: str | None) -> float:
    if not raw:
        return DEFAULT_VOLUME
    try:
        v = float(raw)
    except ValueError:
        logger.warning("Ignoring invalid ARKIA_VOLUME=%r", raw)
        return DEFAULT_VOLUME
    return min(1.0, max(0.0, v))


def load_config(app_data_dir: str | None = None, env=None) -> AppConfig:
    """
    Build the runtime configuration.

    Environment variables:
      - ARKIA_LOG_LEVEL   logging level name (default INFO)
      - ARKIA_LOG_FILE    log file path (default <app data>/arkia.log, "-" disables)
      - ARKIA_LRCLIB_URL  LRCLIB instance used for online lyrics lookup
      - ARKIA_VOLUME      initial volume 0..1
    """
    env = os.environ if env is None else env
    data_dir = app_data_dir or get_app_data_dir()

    log_file = env.get("ARKIA_LOG_FILE") or os.path.join(data_dir, "arkia.log")
    if log_file == "-":
        log_file = None

    return AppConfig(
        app_data_dir=data_dir,
        log_level=(env.get("ARKIA_LOG_LEVEL") or "INFO").upper(),
        log_file=log_file,
        lrclib_url=(env.get("ARKIA_LRCLIB_URL") or DEFAULT_LRCLIB_URL).rstrip("/"),
        volume=_env_volume(env.get("ARKIA_VOLUME")),
    )


def settings() -> QSettings:
    return QSettings(ORG_NAME, APP_NAME)


def last_open_dir() -> str:
    value = settings().value("dialogs/last_open_dir", "")
    return str(value or "")


def remember_open_dir(path: str) -> None:
    if path:
        settings().setValue("dialogs/last_open_dir", path)
