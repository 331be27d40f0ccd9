# citerag/cli/__init__.py
from citerag.cli.cli import app

__all__ = ["app"]
