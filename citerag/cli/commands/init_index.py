# citerag/cli/commands/init_index.py
"""
Recreate the vector collection.

Usage:
    citerag init-index                  # asks before dropping existing data
    citerag init-index --yes --vector-size 384
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from citerag.cli.commands.common import fail, load_context
from citerag.cli.ui import ui
from citerag.core.exceptions import CiteRagError
from citerag.logging.logger import get_logger
from citerag.logging.tags import CLI

logger = get_logger(__name__)


def command(vector_size: Optional[int], yes: bool, config: Optional[Path]) -> None:
    context = load_context(config)
    cfg = context.config.vector_db
    size = vector_size or cfg.vector_size

    if not yes:
        typer.confirm(
            f"This deletes every record in '{cfg.collection}'. Continue?",
            abort=True,
        )

    try:
        context.vector_store.recreate_index(size)
    except CiteRagError as e:
        fail(e)

    logger.info(f"{CLI} Recreated '{cfg.collection}' (dim={size})")
    ui.success(f"Collection '{cfg.collection}' ready (dim={size}, cosine)")
