# citerag/cli/commands/ingest.py
"""
Ingest one text file.

Usage:
    citerag ingest ./handbook.txt
    citerag ingest ./handbook.txt --title "Handbook" --doc-id handbook-2024
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from citerag.cli.commands.common import fail, load_context
from citerag.cli.ui import ui
from citerag.core.exceptions import CiteRagError, VectorStoreError


def command(
    path: Path,
    title: Optional[str],
    source: str,
    url: Optional[str],
    doc_id: Optional[str],
    config: Optional[Path],
) -> None:
    context = load_context(config)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        ui.error(f"Cannot read '{path.name}': not valid UTF-8 text")
        raise typer.Exit(1)
    except OSError as e:
        ui.error(f"Cannot read '{path.name}': {e.strerror or e}")
        raise typer.Exit(1)

    try:
        result = context.ingestion_pipeline().ingest(
            text,
            title=title or path.stem,
            source=source,
            url=url,
            doc_id=doc_id,
        )
    except VectorStoreError as e:
        if e.inserted_so_far:
            ui.warning(f"{e.inserted_so_far} record(s) were written before the failure")
        fail(e)
    except CiteRagError as e:
        fail(e)

    ui.table(
        None,
        ["doc_id", "chunks", "embedded", "inserted"],
        [[result.doc_id, str(result.chunks), str(result.embedded), str(result.inserted_count)]],
    )
    if result.inserted_count < result.chunks:
        ui.warning("Store confirmed fewer records than chunks produced")
    else:
        ui.success(f"Ingested '{path.name}'")
