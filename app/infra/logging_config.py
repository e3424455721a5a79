"""Process-wide logging setup."""

from __future__ import annotations

import logging
import sys

from app.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
ROOT_LOGGER_NAME = "threadkeep"


class LoggingConfig:
    """Configure the root logger once; later instantiations only adjust the level."""

    _configured = False

    def __init__(self, level: str | None = None) -> None:
        level_name = (level or get_settings().log_level or "INFO").upper()
        root = logging.getLogger()
        root.setLevel(level_name)
        if LoggingConfig._configured:
            return
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        LoggingConfig._configured = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
