# citerag/cli/cli.py
"""
citerag CLI - Main application.

Commands:
    citerag init-index    Drop and recreate the vector collection
    citerag ingest        Ingest a text file
    citerag ask           Ask a question and print a cited answer
    citerag serve         Start the REST API server

NOTE: Commands use lazy loading - heavy imports only happen when a command is invoked.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="citerag",
    help="citerag - cited question answering over your documents.",
    no_args_is_help=True,
    add_completion=False,
)

CONFIG_OPTION_HELP = "Config YAML (defaults to $CITERAG_CONFIG, then packaged defaults)."


# =============================================================================
# LAZY COMMANDS
# =============================================================================


@app.command("init-index")
def init_index(
    vector_size: Optional[int] = typer.Option(None, "--vector-size", help="Vector dimension."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
    config: Optional[Path] = typer.Option(None, "--config", help=CONFIG_OPTION_HELP),
) -> None:
    """Drop the collection if present and create it empty (cosine)."""
    from citerag.cli.commands import init_index as mod

    mod.command(vector_size=vector_size, yes=yes, config=config)


@app.command("ingest")
def ingest(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Text file to ingest."),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Document title (default: file name)."),
    source: str = typer.Option("upload", "--source", "-s", help="Source label."),
    url: Optional[str] = typer.Option(None, "--url", help="Canonical document URL."),
    doc_id: Optional[str] = typer.Option(None, "--doc-id", help="Stable document id."),
    config: Optional[Path] = typer.Option(None, "--config", help=CONFIG_OPTION_HELP),
) -> None:
    """Chunk, embed and store one document."""
    from citerag.cli.commands import ingest as mod

    mod.command(path=path, title=title, source=source, url=url, doc_id=doc_id, config=config)


@app.command("ask")
def ask(
    question: str = typer.Argument(..., help="Question to ask."),
    top_k: Optional[int] = typer.Option(None, "--top-k", min=1, help="Candidates to retrieve."),
    final_n: Optional[int] = typer.Option(None, "--final-n", min=1, help="Candidates kept after rerank."),
    doc_id: Optional[str] = typer.Option(None, "--doc-id", help="Restrict to one document."),
    config: Optional[Path] = typer.Option(None, "--config", help=CONFIG_OPTION_HELP),
) -> None:
    """Answer a question with numbered citations."""
    from citerag.cli.commands import ask as mod

    mod.command(question=question, top_k=top_k, final_n=final_n, doc_id=doc_id, config=config)


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", "--host", "-h", help="Host to bind to."),
    port: int = typer.Option(8000, "--port", "-p", help="Port to listen on."),
    config: Optional[Path] = typer.Option(None, "--config", help=CONFIG_OPTION_HELP),
) -> None:
    """Start the REST API server."""
    from citerag.cli.commands import serve as mod

    mod.command(host=host, port=port, config=config)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
