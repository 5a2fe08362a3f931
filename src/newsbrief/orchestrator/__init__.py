"""Orchestrator package -- the briefing agent loop and its types.

Provides the Agent class, configuration and state, run/step models, and
the event side-channel used for progress reporting.
"""

from newsbrief.orchestrator.config import AgentConfig, AgentState
from newsbrief.orchestrator.events import AgentEvent, EventBus, EventType, log_events
from newsbrief.orchestrator.loop import Agent
from newsbrief.orchestrator.models import AgentRunResult, StepResult, ToolCall

__all__ = [
    # Core
    "Agent",
    # Config
    "AgentConfig",
    "AgentState",
    # Models
    "ToolCall",
    "StepResult",
    "AgentRunResult",
    # Events
    "AgentEvent",
    "EventBus",
    "EventType",
    "log_events",
]
