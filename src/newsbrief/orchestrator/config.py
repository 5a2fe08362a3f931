"""Agent configuration types.

Provides AgentState and AgentConfig for the orchestration loop.

State machine::

    IDLE --prompt()--> RUNNING <--> TOOL_PENDING
      ^                  |
      +---- settled -----+----- failed turn / turn limit ----> FAILED
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class AgentState(str, enum.Enum):
    """States the agent can be in during its lifecycle."""

    IDLE = "idle"
    RUNNING = "running"
    TOOL_PENDING = "tool_pending"
    FAILED = "failed"


@dataclass
class AgentConfig:
    """Configuration for the orchestration loop.

    Mutable dataclass -- callers may adjust settings between runs.

    Attributes:
        max_turns: Maximum number of reasoning turns per run.  A run whose
            reasoning component still requests tools on the last turn fails.
        tool_timeout: Seconds each tool invocation may take (None = no limit).
        profile: Tool profile name ("full" or "safe").
        system_prompt: Override for the default briefing system prompt.
        model: LLM model identifier (None = use default from LLM client).
        temperature: LLM temperature.
        max_tokens: Maximum tokens for each LLM response.
        extra_llm_kwargs: Additional LLM kwargs forwarded to client.chat().
    """

    max_turns: int = 25
    tool_timeout: float | None = 60.0
    profile: str = "full"
    system_prompt: str | None = None
    model: str | None = None
    temperature: float | None = None
    max_tokens: int | None = None
    extra_llm_kwargs: dict | None = None

    def __post_init__(self) -> None:
        if self.max_turns < 1:
            raise ValueError(f"max_turns must be at least 1, got {self.max_turns}")
