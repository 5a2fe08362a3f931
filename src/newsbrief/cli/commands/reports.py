"""newsbrief reports -- browse briefings saved in the vault."""

from __future__ import annotations

import click

from newsbrief.cli.formatting import format_report, format_reports


def _writer(ctx: click.Context):
    from newsbrief.models.config import load_settings
    from newsbrief.storage.vault import ReportWriter

    settings = load_settings(ctx.obj["settings_path"])
    return ReportWriter(settings.vault_path)


@click.group()
def reports() -> None:
    """Browse saved briefings."""


@reports.command("list")
@click.pass_context
def list_reports(ctx: click.Context) -> None:
    """List briefings, newest first."""
    from newsbrief.cli import _cli_errors

    with _cli_errors() as console:
        format_reports(_writer(ctx).list_reports(), console)


@reports.command()
@click.argument("filename")
@click.pass_context
def show(ctx: click.Context, filename: str) -> None:
    """Render the briefing FILENAME."""
    from newsbrief.cli import _cli_errors

    with _cli_errors() as console:
        format_report(_writer(ctx).read_report(filename), console)
