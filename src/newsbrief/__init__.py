"""newsbrief: an agent that reads your news sources and writes a daily briefing.

Public API::

    from newsbrief import SourceRegistry, run_daily_briefing

    SourceRegistry("sources.json").add("Verge", "https://theverge.com")
    result = run_daily_briefing()
    print(result.saved_reports)
"""

from newsbrief.briefing import BriefingEnvironment, create_agent, run_daily_briefing
from newsbrief.exceptions import (
    BriefError,
    DuplicateSourceError,
    InvalidArgumentError,
    MissingFieldError,
    OrchestratorError,
    RunFailedError,
    SettingsError,
    SourceNotFoundError,
    SourceRegistryError,
    ToolError,
    ToolTimeoutError,
    TurnLimitExceededError,
)
from newsbrief.fetch import ContentFetcher, sanitize_html
from newsbrief.models import Settings, Source, SourcesFile, load_settings, save_settings
from newsbrief.orchestrator import (
    Agent,
    AgentConfig,
    AgentEvent,
    AgentRunResult,
    AgentState,
    EventBus,
    EventType,
)
from newsbrief.storage import ReportWriter, SourceRegistry
from newsbrief.toolkit import ToolContext, ToolExecutor, ToolResult, get_all_tools

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "run_daily_briefing",
    "create_agent",
    "BriefingEnvironment",
    # Agent loop
    "Agent",
    "AgentConfig",
    "AgentState",
    "AgentRunResult",
    "AgentEvent",
    "EventBus",
    "EventType",
    # Tools
    "ToolContext",
    "ToolExecutor",
    "ToolResult",
    "get_all_tools",
    "ContentFetcher",
    "sanitize_html",
    # Storage and models
    "SourceRegistry",
    "ReportWriter",
    "Source",
    "SourcesFile",
    "Settings",
    "load_settings",
    "save_settings",
    # Exceptions
    "BriefError",
    "SourceRegistryError",
    "DuplicateSourceError",
    "SourceNotFoundError",
    "InvalidArgumentError",
    "MissingFieldError",
    "SettingsError",
    "ToolError",
    "ToolTimeoutError",
    "OrchestratorError",
    "RunFailedError",
    "TurnLimitExceededError",
]
