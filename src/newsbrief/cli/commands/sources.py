"""newsbrief sources -- list and edit the source registry."""

from __future__ import annotations

import click

from newsbrief.cli.formatting import format_sources, format_success


def _registry(ctx: click.Context):
    from newsbrief.storage.registry import SourceRegistry

    return SourceRegistry(ctx.obj["sources_path"])


def _selector(url: str | None, name: str | None) -> dict[str, str | None]:
    if not url and not name:
        raise click.UsageError("Provide --url or --name to select a source.")
    return {"url": url, "name": name}


_select_options = [
    click.option("--url", default=None, help="Select the source by URL."),
    click.option("--name", default=None, help="Select the source by name (when no URL)."),
]


def _with_selector(fn):
    for option in reversed(_select_options):
        fn = option(fn)
    return fn


@click.group()
def sources() -> None:
    """Manage the configured news sources."""


@sources.command("list")
@click.pass_context
def list_sources(ctx: click.Context) -> None:
    """Show all sources in stored order."""
    from newsbrief.cli import _cli_errors

    with _cli_errors() as console:
        format_sources(_registry(ctx).list(), console)


@sources.command()
@click.argument("name")
@click.argument("url")
@click.option("--inactive", is_flag=True, help="Add the source paused.")
@click.pass_context
def add(ctx: click.Context, name: str, url: str, inactive: bool) -> None:
    """Add a source NAME at URL."""
    from newsbrief.cli import _cli_errors

    with _cli_errors() as console:
        source = _registry(ctx).add(name, url, active=not inactive)
        format_success(f"Added source: {source.name}", console)


@sources.command()
@_with_selector
@click.pass_context
def remove(ctx: click.Context, url: str | None, name: str | None) -> None:
    """Remove a source."""
    from newsbrief.cli import _cli_errors

    with _cli_errors() as console:
        removed = _registry(ctx).remove(**_selector(url, name))
        format_success(f"Removed source: {removed.name}", console)


@sources.command()
@_with_selector
@click.pass_context
def toggle(ctx: click.Context, url: str | None, name: str | None) -> None:
    """Flip a source between active and paused."""
    from newsbrief.cli import _cli_errors

    with _cli_errors() as console:
        source = _registry(ctx).toggle(**_selector(url, name))
        state = "active" if source.active else "paused"
        format_success(f"Toggled source: {source.name} -> {state}", console)


@sources.command("set-active")
@_with_selector
@click.option("--on/--off", "active", default=None, required=True, help="Activate or pause.")
@click.pass_context
def set_active(ctx: click.Context, url: str | None, name: str | None, active: bool) -> None:
    """Explicitly activate or pause a source."""
    from newsbrief.cli import _cli_errors

    with _cli_errors() as console:
        source = _registry(ctx).set_active(active, **_selector(url, name))
        state = "active" if source.active else "paused"
        format_success(f"Updated source: {source.name} -> {state}", console)
