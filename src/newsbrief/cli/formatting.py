"""Rich formatting helpers for the newsbrief CLI.

Provides functions that format SDK data structures for terminal display.
Rich auto-detects TTY and degrades gracefully when piped (no ANSI codes).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from newsbrief.models.config import Settings
    from newsbrief.models.sources import Source
    from newsbrief.orchestrator import AgentEvent, AgentRunResult


def get_console() -> Console:
    """Create a Rich Console that auto-detects TTY for graceful pipe degradation."""
    return Console(stderr=False)


def configure_logging(verbosity: int) -> None:
    """Route library logging through Rich at a level chosen by ``-v`` count."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def format_error(message: str, console: Console) -> None:
    """Display an error message in red."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def format_success(message: str, console: Console) -> None:
    console.print(f"[green]{escape(message)}[/green]")


def format_sources(sources: list[Source], console: Console) -> None:
    """Display the registry as a table."""
    if not sources:
        console.print("[dim]No sources configured.[/dim]")
        return

    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("URL")
    table.add_column("Active")

    for idx, source in enumerate(sources, start=1):
        active = "[green]yes[/green]" if source.active else "[yellow]paused[/yellow]"
        table.add_row(str(idx), escape(source.name), escape(source.url), active)

    console.print(table)


def format_reports(names: list[str], console: Console) -> None:
    if not names:
        console.print("[dim]No briefings found.[/dim]")
        return
    for name in names:
        console.print(f"  {escape(name)}")


def format_report(content: str, console: Console) -> None:
    console.print(Markdown(content))


def format_settings(settings: Settings, console: Console) -> None:
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Key", style="bold")
    table.add_column("Value")
    for key, value in settings.to_document().items():
        table.add_row(key, escape(str(value)))
    console.print(table)


def format_event(event: AgentEvent, console: Console) -> None:
    """One-line progress display for tool dispatches."""
    from newsbrief.orchestrator import EventType

    if event.type is EventType.TOOL_EXECUTION_START and event.tool_call is not None:
        console.print(f"[dim]turn {event.turn}[/dim] [cyan]{event.tool_call.name}[/cyan] ...")
    elif event.type is EventType.TOOL_EXECUTION_END and event.result is not None:
        if not event.result.success:
            console.print(f"  [yellow]{escape(event.result.text[:200])}[/yellow]")


def format_run_result(result: AgentRunResult, console: Console) -> None:
    """Summarize a settled run."""
    console.print(
        f"[bold]Run complete[/bold]: {result.turns} turns, "
        f"{result.total_tool_calls} tool calls "
        f"([yellow]{len(result.failed_steps)} failed[/yellow])"
    )
    for path in result.saved_reports:
        console.print(f"  Saved [green]{escape(path)}[/green]")
    if not result.saved_reports:
        console.print("[dim]No report was saved.[/dim]")
