"""Console rendering helpers for the crud-up CLI."""
from __future__ import annotations

from typing import Any, Dict, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .models import StatusMessage
from .services.status import StatusBoard


console = Console()

_PENDING = {
    StatusMessage.PREPARING,
    StatusMessage.UPLOADING,
    StatusMessage.GENERATING,
}


def _status_style(message: str) -> str:
    if message in _PENDING:
        return "cyan"
    if message == StatusMessage.DOWNLOAD_STARTED:
        return "bold green"
    if message.startswith(("Server error:", "Error:")):
        return "bold red"
    return "yellow"


def render_configuration_summary(config: Dict[str, Any], out: Optional[Console] = None) -> None:
    """Render startup configuration summary."""
    out = out or console
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold cyan", justify="right")
    table.add_column(style="white")

    for key, value in config.items():
        rendered = "-" if value is None else str(value)
        table.add_row(key, rendered)

    panel = Panel(
        table,
        title="[bold green]crud-up[/bold green]",
        subtitle="[dim]CRUD project generator[/dim]",
        border_style="blue",
    )
    out.print(panel)


class ConsoleStatusSink(StatusBoard):
    """Status board that also prints each transition to the console."""

    def __init__(self, out: Optional[Console] = None):
        super().__init__()
        self._console = out or console

    def update(self, message: str) -> None:
        super().update(message)
        self._console.print(message, style=_status_style(message), markup=False, highlight=False)
