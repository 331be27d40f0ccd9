# citerag/cli/commands/__init__.py
"""CLI command implementations, imported lazily by citerag.cli.cli."""
