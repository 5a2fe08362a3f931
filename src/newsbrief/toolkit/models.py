"""Toolkit data models for agent tool definitions.

Frozen dataclasses for tool definitions, profiles, configs, and results.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolDefinition:
    """A single tool definition for LLM consumption.

    Attributes:
        name: Tool name (e.g. "fetch_url", "manage_sources").
        label: Short human-readable title for progress displays.
        description: When/why the model should use this tool.
        parameters: JSON Schema dict describing tool parameters.
        handler: Callable that executes the tool.  It may return a
            ToolResult or any value (which is stringified as output).
    """

    name: str
    label: str
    description: str
    parameters: dict
    handler: Callable[..., object]

    def to_openai(self) -> dict:
        """Convert to OpenAI function-calling format.

        Returns:
            Dict with "type": "function" and nested "function" object.
        """
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


@dataclass(frozen=True)
class ToolConfig:
    """Per-tool configuration within a profile.

    Attributes:
        enabled: Whether this tool is included in the profile.
        description: Override description, or None to use default.
    """

    enabled: bool = True
    description: str | None = None


@dataclass
class ToolProfile:
    """A named profile that curates a subset of tools with optional description overrides.

    Attributes:
        name: Profile identifier (e.g. "full", "safe").
        tool_configs: Mapping of tool_name -> ToolConfig.
    """

    name: str
    tool_configs: dict[str, ToolConfig] = field(default_factory=dict)

    def filter_tools(self, all_tools: list[ToolDefinition]) -> list[ToolDefinition]:
        """Filter and optionally override tool descriptions based on this profile.

        Only tools present in ``tool_configs`` with ``enabled=True`` are included.

        Args:
            all_tools: Complete list of available tool definitions.

        Returns:
            Filtered (and possibly description-overridden) tool definitions.
        """
        from dataclasses import replace

        result: list[ToolDefinition] = []
        for tool in all_tools:
            config = self.tool_configs.get(tool.name)
            if config is None or not config.enabled:
                continue
            if config.description is not None:
                tool = replace(tool, description=config.description)
            result.append(tool)
        return result


@dataclass(frozen=True)
class ToolResult:
    """Structured result from executing a tool.

    Failures are data: a tool never raises past the executor, it returns a
    result with ``success=False`` and the message in ``error``.

    Attributes:
        tool_name: Name of the tool that was executed.
        success: Whether execution succeeded.
        output: Text content on success.
        error: Error text on failure.
        details: Structured companion data (echoed entries, paths, ...).
    """

    tool_name: str
    success: bool
    output: str = ""
    error: str = ""
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def text(self) -> str:
        """The textual content fed back to the model."""
        if self.success:
            return self.output
        return self.error if self.error.startswith("Error") else f"Error: {self.error}"

    @classmethod
    def ok(cls, tool_name: str, output: str, **details: Any) -> ToolResult:
        return cls(tool_name=tool_name, success=True, output=output, details=details)

    @classmethod
    def fail(cls, tool_name: str, error: str, **details: Any) -> ToolResult:
        details.setdefault("error", error)
        return cls(tool_name=tool_name, success=False, error=error, details=details)
