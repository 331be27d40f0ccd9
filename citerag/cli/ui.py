# citerag/cli/ui.py
"""
Shared rich output helpers for CLI commands.

Usage:
    from citerag.cli.ui import ui

    ui.success("Done!")
    ui.error("Something failed")
"""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()
err_console = Console(stderr=True)


class UI:
    def info(self, message: str) -> None:
        console.print(message)

    def success(self, message: str) -> None:
        console.print(f"[green]✓[/green] {message}")

    def warning(self, message: str) -> None:
        err_console.print(f"[yellow]![/yellow] {message}")

    def error(self, message: str) -> None:
        err_console.print(f"[red]✗[/red] {message}")

    def table(self, title: Optional[str], columns: list[str], rows: list[list[str]]) -> None:
        table = Table(title=title)
        for column in columns:
            table.add_column(column)
        for row in rows:
            table.add_row(*(escape(cell) for cell in row))
        console.print(table)


ui = UI()

__all__ = ["console", "err_console", "ui", "UI"]
