"""newsbrief run -- produce today's briefing."""

from __future__ import annotations

import click

from newsbrief.cli.formatting import format_event, format_run_result


@click.command()
@click.option("--max-turns", default=25, show_default=True, help="Fail the run after this many reasoning turns.")
@click.option(
    "--tool-timeout",
    default=60.0,
    show_default=True,
    help="Seconds each tool call may take.",
)
@click.option(
    "--safe",
    is_flag=True,
    help="Withhold the run_shell_command tool from the agent.",
)
@click.pass_context
def run(ctx: click.Context, max_turns: int, tool_timeout: float, safe: bool) -> None:
    """Fetch every active source and save a synthesized daily briefing."""
    from newsbrief.briefing import BriefingEnvironment, run_daily_briefing
    from newsbrief.cli import _cli_errors
    from newsbrief.models.config import load_settings
    from newsbrief.orchestrator import AgentConfig

    with _cli_errors() as console:
        env = BriefingEnvironment(
            settings=load_settings(ctx.obj["settings_path"]),
            sources_path=ctx.obj["sources_path"],
            config=AgentConfig(
                max_turns=max_turns,
                tool_timeout=tool_timeout,
                profile="safe" if safe else "full",
            ),
        )
        console.print(f"Running daily briefing with [bold]{env.settings.provider}[/bold] ({env.settings.model_name})")
        result = run_daily_briefing(env, on_event=lambda e: format_event(e, console))
        format_run_result(result, console)
