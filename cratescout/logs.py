"""Logging configuration for interactive and one-shot runs.

Console handlers would corrupt the raw-mode screen, so the interactive
session logs to a file only. ``--find`` logs warnings to stderr.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(threadName)s %(name)s: %(message)s"


def configure_file_logging(path: Path, level: int = logging.INFO) -> None:
    """Route the root logger to ``path``; suppress logging if it cannot be opened."""
    root_logger = logging.getLogger()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        root_logger.handlers = [logging.NullHandler()]
        root_logger.setLevel(logging.CRITICAL + 1)
        return
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.handlers = [handler]
    root_logger.setLevel(level)


def configure_console_logging(level: int = logging.WARNING) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("cratescout: %(levelname)s: %(message)s"))
    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(level)


__all__ = ["LOG_FORMAT", "configure_file_logging", "configure_console_logging"]
