# citerag/logging/logger.py
"""
Unified logging setup for citerag.

All modules use:
    from citerag.logging.logger import get_logger
    logger = get_logger(__name__)

Configuration happens once, in configure_logging(), called by the CLI and
the API app factory.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO, Union

DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def configure_logging(
    level: Union[int, str] = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    stream: TextIO = sys.stderr,
) -> None:
    """
    Configure the root logging handler.

    Safe to call multiple times; only one handler is ever installed.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(fmt))
        root.addHandler(handler)

    root.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """
    Modules call this to get a logger.

    Do NOT configure logging here.
    """
    return logging.getLogger(name)


__all__ = ["DEFAULT_FORMAT", "configure_logging", "get_logger"]
