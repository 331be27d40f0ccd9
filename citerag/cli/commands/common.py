# citerag/cli/commands/common.py
"""Context loading shared by CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn, Optional

import typer

from citerag.cli.ui import ui
from citerag.core.exceptions import CiteRagError
from citerag.logging.logger import configure_logging
from citerag.runtime import AppContext


def load_context(config: Optional[Path]) -> AppContext:
    """Build an AppContext or exit with a message."""
    try:
        context = AppContext.from_config_path(config)
    except CiteRagError as e:
        ui.error(f"Failed to load config: {e}")
        raise typer.Exit(1)

    configure_logging(context.config.logging.level)
    return context


def fail(e: CiteRagError) -> NoReturn:
    """Report a pipeline error and exit non-zero."""
    ui.error(str(e))
    raise typer.Exit(1)
