"""newsbrief settings -- inspect and edit the settings document."""

from __future__ import annotations

import click

from newsbrief.cli.formatting import format_settings, format_success

_KEYS = {
    "modelProvider": "model_provider",
    "openaiModel": "openai_model",
    "anthropicModel": "anthropic_model",
    "googleModel": "google_model",
    "obsidianPath": "obsidian_path",
}


@click.group()
def settings() -> None:
    """Show or change settings."""


@settings.command()
@click.pass_context
def show(ctx: click.Context) -> None:
    """Print the effective settings."""
    from newsbrief.cli import _cli_errors
    from newsbrief.models.config import load_settings

    with _cli_errors() as console:
        format_settings(load_settings(ctx.obj["settings_path"]), console)


@settings.command("set")
@click.argument("key", type=click.Choice(sorted(_KEYS)))
@click.argument("value")
@click.pass_context
def set_value(ctx: click.Context, key: str, value: str) -> None:
    """Set KEY to VALUE and save the settings document."""
    from pydantic import ValidationError

    from newsbrief.cli import _cli_errors
    from newsbrief.exceptions import SettingsError
    from newsbrief.models.config import load_settings, save_settings

    with _cli_errors() as console:
        current = load_settings(ctx.obj["settings_path"])
        try:
            setattr(current, _KEYS[key], value)
        except ValidationError as exc:
            raise SettingsError(f"Invalid value for {key}: {value}") from exc
        save_settings(current, ctx.obj["settings_path"])
        format_success(f"{key} = {value}", console)
