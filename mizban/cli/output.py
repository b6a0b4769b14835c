"""
Output Helpers.

Shared rendering for all commands: rich tables and detail views, JSON
output, delete confirmations, and the error boundary that turns a
MizbanError into a message and exit status 1.
"""

from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from typing import Any

import typer
from pydantic_core import to_json
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from mizban.core.exceptions import APIError, MizbanError
from mizban.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

JSON_OPTION = typer.Option(False, "--json", help="Output as JSON")
FORCE_OPTION = typer.Option(False, "--force", "-f", help="Skip confirmation")

_BYTE_UNITS = "KMGTPE"


@contextmanager
def handle_errors() -> Iterator[None]:
    """
    Error boundary for a command body.

    Prints `Error: <message>` (plus any field-level reasons the API sent)
    to stderr and exits with status 1.
    """
    try:
        yield
    except MizbanError as e:
        log_with_source(logger, "cli", "debug", "Command failed", code=e.code, error=e.message)
        err_console.print(f"[red]Error: {escape(e.message)}[/red]")
        if isinstance(e, APIError):
            for field, reason in e.errors.items():
                err_console.print(f"[red]  {escape(str(field))}: {escape(_reason(reason))}[/red]")
        raise typer.Exit(1) from e


def _reason(reason: Any) -> str:
    if isinstance(reason, list):
        return "; ".join(str(item) for item in reason)
    return str(reason)


def confirmed(force: bool, prompt: str) -> bool:
    """
    Ask for a literal "yes" unless --force was given.

    Prints "Aborted" and returns False on any other answer.
    """
    if force:
        return True
    answer = typer.prompt(f"{prompt} (yes/no)", default="", show_default=False)
    if answer.strip() == "yes":
        return True
    console.print("Aborted")
    return False


def print_json(value: Any) -> None:
    """Print models, lists of models or raw JSON data as indented JSON."""
    console.print_json(to_json(value).decode("utf-8"), indent=2)


def success(message: str) -> None:
    """Print a confirmation line in green."""
    console.print(f"[green]{escape(message)}[/green]")


def warning(message: str) -> None:
    """Print a warning line in yellow."""
    console.print(f"[yellow]{escape(message)}[/yellow]")


def _cell(value: Any) -> Text | str:
    if isinstance(value, Text):
        return value
    if value is None or value == "":
        return "-"
    if isinstance(value, bool):
        return "Yes" if value else "No"
    return escape(str(value))


def print_table(
    columns: Sequence[str],
    rows: Iterable[Sequence[Any]],
    title: str | None = None,
) -> None:
    """Render rows as a table. The first column is highlighted."""
    table = Table(title=title, show_header=True, header_style="bold")
    for index, column in enumerate(columns):
        table.add_column(column, style="cyan" if index == 0 else None)
    for row in rows:
        table.add_row(*(_cell(value) for value in row))
    console.print(table)


def print_details(rows: Iterable[tuple[str, Any]], title: str | None = None) -> None:
    """Render label/value pairs, one per line."""
    table = Table(title=title, show_header=False, box=None, padding=(0, 2, 0, 0))
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for label, value in rows:
        table.add_row(f"{label}:", _cell(value))
    console.print(table)


def status_text(enabled: bool, on: str = "Enabled", off: str = "Disabled") -> Text:
    """Green/red status label."""
    return Text(on, style="green") if enabled else Text(off, style="red")


def truncate(value: str, max_len: int) -> str:
    """Cut a string to max_len characters, ending in '...' when shortened."""
    if len(value) <= max_len:
        return value
    return value[: max_len - 3] + "..."


def format_bytes(size: int) -> str:
    """
    Human-readable byte count using 1024-based units.

    Examples:
        format_bytes(512)   -> "512 B"
        format_bytes(1536)  -> "1.50 KB"
    """
    if size < 1024:
        return f"{size} B"
    div, exp = 1024, 0
    n = size // 1024
    while n >= 1024:
        div *= 1024
        exp += 1
        n //= 1024
    return f"{size / div:.2f} {_BYTE_UNITS[exp]}B"


def split_csv(values: Iterable[str] | None) -> list[str]:
    """
    Flatten a repeatable option that also accepts comma-separated values.

    Examples:
        split_csv(["GET,POST", "PUT"]) -> ["GET", "POST", "PUT"]
    """
    if not values:
        return []
    return [item.strip() for value in values for item in value.split(",") if item.strip()]
