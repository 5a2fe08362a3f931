"""ToolExecutor: the dispatch table between the agent loop and the tools.

Provides a single ``execute()`` method that looks up the tool by name,
invokes its handler with the provided arguments under a time budget, and
returns a structured ``ToolResult``.  Nothing raises past ``execute()``:
unknown tools, bad arguments, timeouts, and handler exceptions all come
back as failed results.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from newsbrief.exceptions import ToolTimeoutError
from newsbrief.toolkit.models import ToolResult

if TYPE_CHECKING:
    from collections.abc import Callable

    from newsbrief.toolkit.models import ToolDefinition, ToolProfile

logger = logging.getLogger(__name__)


class ToolExecutor:
    """Dispatches tool calls to tool handlers and returns structured results.

    Usage::

        executor = ToolExecutor(get_all_tools(ctx), timeout=30)
        result = executor.execute("get_sources", {})
        if result.success:
            print(result.output)
        else:
            print(result.error)
    """

    def __init__(
        self,
        tools: list[ToolDefinition],
        *,
        profile: ToolProfile | None = None,
        timeout: float | None = None,
    ) -> None:
        if profile is not None:
            tools = profile.filter_tools(tools)
        self._tools: dict[str, ToolDefinition] = {t.name: t for t in tools}
        self._timeout = timeout

    @property
    def tools(self) -> list[ToolDefinition]:
        """The tool definitions this executor dispatches to, in catalog order."""
        return list(self._tools.values())

    def available_tools(self) -> list[str]:
        """Return the names of all available tools."""
        return list(self._tools.keys())

    def schemas(self) -> list[dict]:
        """OpenAI function-calling schemas for every available tool."""
        return [t.to_openai() for t in self._tools.values()]

    def execute(self, tool_name: str, arguments: dict | None = None) -> ToolResult:
        """Execute a tool by name with the given arguments.

        Args:
            tool_name: Name of the tool to execute.
            arguments: Dict of arguments matching the tool's parameter schema.

        Returns:
            ToolResult with success/failure status and output/error.
        """
        tool = self._tools.get(tool_name)
        if tool is None:
            return ToolResult.fail(tool_name, f"Error: Unknown tool: {tool_name}")
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            return ToolResult.fail(
                tool_name,
                f"Error: Arguments for {tool_name} must be an object, "
                f"got {type(arguments).__name__}",
            )

        try:
            result = _call_with_timeout(tool.handler, arguments, self._timeout, tool_name)
        except Exception as exc:
            logger.debug("Tool %s failed: %s", tool_name, exc, exc_info=True)
            return ToolResult.fail(
                tool_name,
                f"Error: {exc}",
                exception=type(exc).__name__,
            )

        if isinstance(result, ToolResult):
            return result
        return ToolResult.ok(tool_name, str(result))


def _call_with_timeout(
    handler: Callable[..., object],
    arguments: dict[str, Any],
    timeout: float | None,
    tool_name: str,
) -> object:
    """Run ``handler(**arguments)``, raising ToolTimeoutError past ``timeout``.

    The handler runs on a daemon thread; a handler that never returns is
    abandoned rather than killed.
    """
    if timeout is None:
        return handler(**arguments)

    outcome: dict[str, Any] = {}

    def target() -> None:
        try:
            outcome["value"] = handler(**arguments)
        except BaseException as exc:  # re-raised on the calling thread
            outcome["error"] = exc

    worker = threading.Thread(target=target, name=f"tool-{tool_name}", daemon=True)
    worker.start()
    worker.join(timeout)
    if worker.is_alive():
        logger.warning("Tool %s exceeded %ss; abandoning it", tool_name, timeout)
        raise ToolTimeoutError(tool_name, timeout)
    if "error" in outcome:
        raise outcome["error"]
    return outcome.get("value")
