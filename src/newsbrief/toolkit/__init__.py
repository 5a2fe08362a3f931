"""Agent toolkit: tool definitions, profiles, and the dispatch executor.

Exposes the briefing capabilities (fetch, save, registry, shell) as
function-calling schemas for the orchestration loop.
"""

from newsbrief.toolkit.definitions import ToolContext, get_all_tools
from newsbrief.toolkit.executor import ToolExecutor
from newsbrief.toolkit.models import ToolConfig, ToolDefinition, ToolProfile, ToolResult
from newsbrief.toolkit.profiles import FULL_PROFILE, SAFE_PROFILE, get_profile

__all__ = [
    "ToolContext",
    "ToolDefinition",
    "ToolProfile",
    "ToolConfig",
    "ToolResult",
    "ToolExecutor",
    "get_all_tools",
    "get_profile",
    "FULL_PROFILE",
    "SAFE_PROFILE",
]
