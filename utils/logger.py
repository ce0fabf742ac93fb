"""Shared logger initialization for the ofremove CLI.

Usage:
    from utils.logger import get_logger
    log = get_logger(__name__)
    log.info("message")
"""
from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_FORMAT = "%(message)s"  # rich handler already adds time & level


def configure_logging(level: Optional[int] = None) -> None:
    """Idempotently configure root logger with a rich handler on stderr."""
    root = logging.getLogger()
    if any(isinstance(h, RichHandler) for h in root.handlers):
        # Already configured; only adjust the level when asked to.
        if level is not None:
            root.setLevel(level)
        return
    if level is None:
        level = logging.INFO
    handler = RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.setLevel(level)
    root.addHandler(handler)


def get_logger(name: str = __name__, level: Optional[int] = None) -> logging.Logger:
    """Return a module-level logger (configuring root on first call)."""
    configure_logging()
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger
