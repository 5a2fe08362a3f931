"""newsbrief CLI -- terminal interface for sources, reports, and runs.

This module is NEVER imported from newsbrief/__init__.py.
It is only loaded via the ``newsbrief`` entry point defined in pyproject.toml.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

import click
from dotenv import find_dotenv, load_dotenv

from newsbrief.cli.formatting import configure_logging, format_error, get_console
from newsbrief.models.config import DEFAULT_SETTINGS_PATH, DEFAULT_SOURCES_PATH

if TYPE_CHECKING:
    from collections.abc import Iterator

    from rich.console import Console


@click.group()
@click.option(
    "--sources",
    "sources_path",
    default=DEFAULT_SOURCES_PATH,
    envvar="NEWSBRIEF_SOURCES",
    show_default=True,
    help="Path to the sources document.",
)
@click.option(
    "--settings",
    "settings_path",
    default=DEFAULT_SETTINGS_PATH,
    envvar="NEWSBRIEF_SETTINGS",
    show_default=True,
    help="Path to the settings document.",
)
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (-v, -vv).")
@click.pass_context
def cli(ctx: click.Context, sources_path: str, settings_path: str, verbose: int) -> None:
    """newsbrief: read your news sources and write a daily briefing."""
    load_dotenv(find_dotenv(usecwd=True))
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["sources_path"] = sources_path
    ctx.obj["settings_path"] = settings_path


@contextmanager
def _cli_errors() -> Iterator[Console]:
    """Yield a console and turn newsbrief errors into a formatted exit 1."""
    from newsbrief.exceptions import BriefError

    console = get_console()
    try:
        yield console
    except SystemExit:
        raise
    except (BriefError, OSError) as e:
        format_error(str(e), console)
        raise SystemExit(1) from None


# Register subcommands after cli group is defined
from newsbrief.cli.commands.reports import reports  # noqa: E402
from newsbrief.cli.commands.run import run  # noqa: E402
from newsbrief.cli.commands.settings import settings  # noqa: E402
from newsbrief.cli.commands.sources import sources  # noqa: E402

cli.add_command(run)
cli.add_command(sources)
cli.add_command(reports)
cli.add_command(settings)
