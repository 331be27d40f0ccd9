# citerag/cli/commands/ask.py
"""
Ask a question.

Usage:
    citerag ask "What is the refund window?"
    citerag ask "What is the refund window?" --doc-id policy-7 --final-n 3
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from rich.panel import Panel
from rich.text import Text

from citerag.cli.commands.common import fail, load_context
from citerag.cli.ui import console, ui
from citerag.core.exceptions import CiteRagError


def command(
    question: str,
    top_k: Optional[int],
    final_n: Optional[int],
    doc_id: Optional[str],
    config: Optional[Path],
) -> None:
    context = load_context(config)
    defaults = context.config.ask

    try:
        result = context.answer_pipeline().answer(
            question,
            top_k=top_k or defaults.top_k,
            final_n=final_n or defaults.final_n,
            doc_id=doc_id,
        )
    except CiteRagError as e:
        fail(e)

    console.print(Panel(Text(result.answer_text), title="Answer"))

    if result.sources:
        ui.table(
            "Sources",
            ["#", "title", "section", "position", "source"],
            [
                [
                    f"[{s.n}]",
                    s.title,
                    s.section,
                    str(s.position),
                    f"{s.source}: {s.url}" if s.url else s.source,
                ]
                for s in result.sources
            ],
        )
    console.print(f"[dim]{result.timing_ms:.0f} ms[/dim]")
