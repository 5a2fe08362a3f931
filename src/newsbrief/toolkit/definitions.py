"""Tool definitions for the briefing agent.

Each tool definition includes an action-oriented description, a JSON Schema
for its parameters, and a handler lambda bound to a :class:`ToolContext`.
Handler lambdas whitelist their parameters explicitly (no ``**kwargs``
passthrough) so hallucinated arguments fail loudly.
"""

from __future__ import annotations

import json
import logging
import subprocess
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from newsbrief.exceptions import SourceRegistryError, ToolError
from newsbrief.fetch import ContentFetcher
from newsbrief.models.actions import parse_action
from newsbrief.shell import run_command
from newsbrief.toolkit.models import ToolDefinition, ToolResult

if TYPE_CHECKING:
    from newsbrief.storage.registry import SourceRegistry
    from newsbrief.storage.vault import ReportWriter

logger = logging.getLogger(__name__)


@dataclass
class ToolContext:
    """Collaborators the tool handlers act on.

    Attributes:
        registry: The source registry (sole owner of the sources document).
        writer: The report vault writer.
        fetcher: HTTP content fetcher.
        shell_timeout: Seconds before a shell command is killed.
        shell_cwd: Working directory for shell commands.
    """

    registry: SourceRegistry
    writer: ReportWriter
    fetcher: ContentFetcher = field(default_factory=ContentFetcher)
    shell_timeout: float | None = 60.0
    shell_cwd: str | None = None


def get_all_tools(ctx: ToolContext) -> list[ToolDefinition]:
    """Build the tool catalog bound to ``ctx``.

    Args:
        ctx: The collaborators to bind tool handlers to.

    Returns:
        The five briefing tools, in catalog order.
    """
    return [
        ToolDefinition(
            name="fetch_url",
            label="Fetch URL",
            description=(
                "Fetch a web page and return its visible text, whitespace "
                "collapsed and truncated to 3000 characters. Use this once per "
                "active source."
            ),
            parameters={
                "type": "object",
                "properties": {
                    "url": {
                        "type": "string",
                        "format": "uri",
                        "description": "The URL to fetch.",
                    },
                },
                "required": ["url"],
            },
            handler=lambda url=None: _handle_fetch_url(ctx, url),
        ),
        ToolDefinition(
            name="save_to_obsidian",
            label="Save to Obsidian",
            description=(
                "Save markdown content to a file in the Obsidian vault. The "
                "'.md' extension is added if missing; an existing file with the "
                "same name is overwritten."
            ),
            parameters={
                "type": "object",
                "properties": {
                    "filename": {
                        "type": "string",
                        "description": "The filename to save (with or without .md extension).",
                    },
                    "content": {
                        "type": "string",
                        "description": "The markdown content to save.",
                    },
                },
                "required": ["filename", "content"],
            },
            handler=lambda filename=None, content=None: _handle_save(ctx, filename, content),
        ),
        ToolDefinition(
            name="get_sources",
            label="Get Sources",
            description=(
                "Read the configured list of news sources. Only sources with "
                "active=true should be fetched."
            ),
            parameters={
                "type": "object",
                "properties": {},
            },
            handler=lambda: _handle_get_sources(ctx),
        ),
        ToolDefinition(
            name="manage_sources",
            label="Manage Sources",
            description=(
                "Add, remove, toggle, or explicitly activate/deactivate a news "
                "source. 'add' requires name and url. The other actions select "
                "a source by url if given, otherwise by name. 'set_active' also "
                "requires the active boolean."
            ),
            parameters={
                "type": "object",
                "properties": {
                    "action": {
                        "type": "string",
                        "enum": ["add", "remove", "toggle", "set_active"],
                        "description": "The action to perform.",
                    },
                    "name": {"type": "string", "description": "The name of the source."},
                    "url": {"type": "string", "description": "The URL of the source."},
                    "active": {
                        "type": "boolean",
                        "description": "Whether the source is active.",
                    },
                },
                "required": ["action"],
            },
            handler=lambda action=None, name=None, url=None, active=None: _handle_manage_sources(
                ctx, {"action": action, "name": name, "url": url, "active": active}
            ),
        ),
        ToolDefinition(
            name="run_shell_command",
            label="Run Shell Command",
            description=(
                "Execute a command in the host shell and return its stdout "
                "(or stderr when stdout is empty)."
            ),
            parameters={
                "type": "object",
                "properties": {
                    "command": {
                        "type": "string",
                        "description": "The command to execute.",
                    },
                },
                "required": ["command"],
            },
            handler=lambda command=None: _handle_shell(ctx, command),
        ),
    ]


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _handle_fetch_url(ctx: ToolContext, url: str | None) -> ToolResult:
    if not url:
        raise ToolError("fetch_url requires url")
    result = ctx.fetcher.fetch(url)
    if not result.ok:
        return ToolResult.fail("fetch_url", result.error, url=url, status=result.status_code)
    return ToolResult.ok("fetch_url", result.text, url=url, contentLength=len(result.text))


def _handle_save(ctx: ToolContext, filename: str | None, content: str | None) -> ToolResult:
    if not filename or content is None:
        raise ToolError("save_to_obsidian requires filename and content")
    full_path = ctx.writer.write(filename, content)
    return ToolResult.ok(
        "save_to_obsidian",
        f"Saved to {full_path}",
        path=str(full_path),
        filename=full_path.name,
    )


def _handle_get_sources(ctx: ToolContext) -> ToolResult:
    # Read failures propagate; the executor turns them into an error result.
    data = ctx.registry.read().model_dump(mode="json")
    return ToolResult.ok("get_sources", json.dumps(data, indent=2), **data)


def _handle_manage_sources(ctx: ToolContext, arguments: dict[str, Any]) -> ToolResult:
    try:
        action = parse_action(arguments)
        source = ctx.registry.apply(action)
    except SourceRegistryError as exc:
        return ToolResult.fail("manage_sources", f"Error: {exc}", kind=exc.kind)

    entry = source.model_dump(mode="json")
    if action.action == "add":
        text = f"Added source: {source.name}"
    elif action.action == "remove":
        text = f"Removed source: {source.name}"
    elif action.action == "toggle":
        text = f"Toggled source: {source.name} -> {str(source.active).lower()}"
    else:
        text = f"Updated source: {source.name} -> {str(source.active).lower()}"
    return ToolResult.ok("manage_sources", text, action=action.action, source=entry)


def _handle_shell(ctx: ToolContext, command: str | None) -> ToolResult:
    try:
        output = run_command(command or "", timeout=ctx.shell_timeout, cwd=ctx.shell_cwd)
    except subprocess.CalledProcessError as exc:
        detail = (exc.stderr or exc.stdout or "").strip()
        message = f"Error: Command failed with exit code {exc.returncode}: {command}"
        if detail:
            message = f"{message}\n{detail}"
        return ToolResult.fail(
            "run_shell_command",
            message,
            command=command,
            returncode=exc.returncode,
            stdout=exc.stdout or "",
            stderr=exc.stderr or "",
        )
    except (subprocess.TimeoutExpired, OSError) as exc:
        return ToolResult.fail("run_shell_command", f"Error: {exc}", command=command)

    return ToolResult.ok(
        "run_shell_command",
        output.text,
        command=command,
        stdout=output.stdout,
        stderr=output.stderr,
        returncode=output.returncode,
    )
