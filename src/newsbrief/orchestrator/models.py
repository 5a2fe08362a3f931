"""Orchestration run models.

Provides ToolCall, StepResult, and AgentRunResult.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from newsbrief.orchestrator.config import AgentState

if TYPE_CHECKING:
    from newsbrief.toolkit.models import ToolResult


@dataclass(frozen=True)
class ToolCall:
    """A tool invocation requested by the reasoning component."""

    id: str
    name: str
    arguments: dict = field(default_factory=dict)


@dataclass(frozen=True)
class StepResult:
    """Result of a single dispatched tool call.

    Frozen: step results are immutable records of what happened.
    """

    step: int
    turn: int
    tool_call: ToolCall
    result: ToolResult

    @property
    def success(self) -> bool:
        return self.result.success


@dataclass(frozen=True)
class AgentRunResult:
    """Final result of a settled run.

    Attributes:
        messages: Full conversation history, system prompt first.
        steps: Every tool dispatch, in execution order.
        turns: Number of reasoning turns taken.
        final_text: Content of the last assistant message.
        state: Agent state after the run (IDLE for a settled run).
    """

    messages: list[dict[str, Any]] = field(default_factory=list)
    steps: list[StepResult] = field(default_factory=list)
    turns: int = 0
    final_text: str = ""
    state: AgentState = AgentState.IDLE

    @property
    def total_tool_calls(self) -> int:
        return len(self.steps)

    @property
    def failed_steps(self) -> list[StepResult]:
        """Steps whose tool returned an error result."""
        return [s for s in self.steps if not s.success]

    @property
    def saved_reports(self) -> list[str]:
        """Paths written by successful ``save_to_obsidian`` calls."""
        return [
            s.result.details["path"]
            for s in self.steps
            if s.success and s.tool_call.name == "save_to_obsidian" and "path" in s.result.details
        ]
