# citerag/logging/__init__.py
"""Logging setup and subsystem tags."""

from citerag.logging.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
