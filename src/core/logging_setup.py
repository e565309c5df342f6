"""
Logging configuration.

Console output plus a rotating log file in the application data directory.
Modules log through ``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import logging
import logging.handlers
import os

CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(config) -> logging.Logger:
    root = logging.getLogger()
    root.setLevel(getattr(logging, config.log_level, logging.INFO))

    # idempotent: drop handlers from a previous call
    for handler in list(root.handlers):
        if getattr(handler, "_arkia", False):
            root.removeHandler(handler)
            handler.close()

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    console._arkia = True
    root.addHandler(console)

    if config.log_file:
        try:
            os.makedirs(os.path.dirname(config.log_file) or ".", exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                config.log_file,
                maxBytes=1_000_000,
                backupCount=3,
                encoding="utf-8",
            )
        except OSError as e:
            root.warning("Cannot open log file %s: %s", config.log_file, e)
        else:
            file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
            file_handler._arkia = True
            root.addHandler(file_handler)

    return root
