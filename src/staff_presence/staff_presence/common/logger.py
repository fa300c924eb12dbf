"""Centralised logging configuration.

Logs to console and, when a directory is configured, to a rotating file.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

_configured = False


def configure_logging(level: str = "INFO", log_dir: Optional[str] = None) -> None:
    global _configured
    if _configured:
        return
    _configured = True

    level = level.upper()
    fmt = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(fmt)

    root = logging.getLogger("staff_presence")
    root.setLevel(level)
    root.addHandler(console)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        # keeps last 10 x 5MB files
        file_handler = RotatingFileHandler(
            filename=os.path.join(log_dir, "presence.log"),
            maxBytes=5 * 1024 * 1024,
            backupCount=10,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(fmt)
        root.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a named logger. Call this at the top of every module."""
    return logging.getLogger(name)
