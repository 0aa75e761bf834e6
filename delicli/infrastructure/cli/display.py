import json
import logging
from typing import Any, Dict, List

from rich.box import HEAVY, ROUNDED, SIMPLE
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from delicli.domain.interfaces.user_interface import UserInterface
from delicli.domain.models.common import Envelope

logger = logging.getLogger(__name__)

# Envelope keys rendered in the summary rather than as fields.
_ENVELOPE_KEYS = ("success", "message", "url")


def _cell(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return "" if value is None else str(value)


class ConsoleDisplay(UserInterface):
    """Concrete implementation of UserInterface using the rich library for console output."""

    def __init__(self, console: Console = None):
        self._console = console or Console()

    @property
    def console(self) -> Console:
        """Get the Rich console instance for direct operations."""
        return self._console

    @console.setter
    def console(self, console: Console) -> None:
        self._console = console

    def display_envelope(self, envelope: Envelope, **kwargs: Any) -> None:
        """Displays a Result Envelope: a status panel, then one table per list field.

        Args:
            envelope: The envelope to render.
            **kwargs: Additional arguments including:
                - title: Panel title (default: "Result")
        """
        title = kwargs.get("title", "Result")
        success = bool(envelope.get("success"))
        scalars: Dict[str, Any] = {}
        lists: Dict[str, List[Any]] = {}
        for key, value in envelope.items():
            if key in _ENVELOPE_KEYS:
                continue
            if isinstance(value, list):
                lists[key] = value
            else:
                scalars[key] = value

        summary = Table.grid(padding=(0, 2))
        summary.add_column(style="bold")
        summary.add_column()
        summary.add_row("status", "[green]success[/green]" if success else "[red]failure[/red]")
        if envelope.get("message"):
            summary.add_row("message", str(envelope["message"]))
        for key, value in scalars.items():
            summary.add_row(key, _cell(value))
        summary.add_row("url", Text(str(envelope.get("url", "")), style="dim"))

        self.console.print(Panel(
            summary,
            title=f"[bold]{title}[/bold]",
            title_align="left",
            border_style="green" if success else "red",
            box=ROUNDED,
            padding=(0, 1),
        ))

        for name, items in lists.items():
            self.console.print(self._build_table(name, items))

    def _build_table(self, name: str, items: List[Any]) -> Table:
        """One row per item; columns are the union of the items' keys, in first-seen order."""
        table = Table(title=f"{name} ({len(items)})", box=SIMPLE, title_justify="left")
        if items and all(isinstance(item, dict) for item in items):
            columns: List[str] = []
            for item in items:
                for key in item:
                    if key not in columns:
                        columns.append(key)
            for column in columns:
                table.add_column(column, overflow="fold")
            for item in items:
                table.add_row(*(_cell(item.get(column)) for column in columns))
        else:
            table.add_column(name)
            for item in items:
                table.add_row(_cell(item))
        return table

    def display_json(self, data: Any) -> None:
        self.console.print_json(json.dumps(data, ensure_ascii=False))

    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message in a distinct style.

        Args:
            error_message: The error message to display.
        """
        panel = Panel(
            Text(error_message, style="white"),
            title="[bold red]Error[/bold red]",
            border_style="red",
            box=HEAVY,
            padding=(0, 1)
        )
        self.console.print(panel)

    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        logger.warning(f"Display warning: {warning_message}")
        panel = Panel(
            Text(warning_message, style="white"),
            title="[bold yellow]Warning[/bold yellow]",
            border_style="yellow",
            box=HEAVY,
            padding=(0, 1)
        )
        self.console.print(panel)
