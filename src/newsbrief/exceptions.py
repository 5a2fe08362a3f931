"""Newsbrief exception hierarchy.

All newsbrief-specific exceptions inherit from BriefError.
"""


class BriefError(Exception):
    """Base exception for all newsbrief errors."""


# ---------------------------------------------------------------------------
# Source registry
# ---------------------------------------------------------------------------


class SourceRegistryError(BriefError):
    """Base for validated source registry conditions.

    Each subclass carries a short ``kind`` used when the condition is
    encoded into a tool result instead of being raised.
    """

    kind = "registry_error"


class DuplicateSourceError(SourceRegistryError):
    """Raised when adding a source whose URL is already registered."""

    kind = "duplicate_source"

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Source already exists: {url}")


class SourceNotFoundError(SourceRegistryError):
    """Raised when no source matches the requested URL or name."""

    kind = "not_found"

    def __init__(self, match: str) -> None:
        self.match = match
        super().__init__(f"Source not found: {match}")


class InvalidArgumentError(SourceRegistryError):
    """Raised when a registry request carries an invalid value."""

    kind = "invalid_argument"


class MissingFieldError(InvalidArgumentError):
    """Raised when a registry request omits a required field."""

    kind = "missing_field"

    def __init__(self, action: str, fields: list[str]) -> None:
        self.action = action
        self.fields = fields
        super().__init__(f"{action} requires {' and '.join(fields)}")


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class SettingsError(BriefError):
    """Raised when the settings document cannot be parsed or validated."""


# ---------------------------------------------------------------------------
# Tools and orchestration
# ---------------------------------------------------------------------------


class ToolError(BriefError):
    """Raised inside the dispatch table for tool-level failures."""


class ToolTimeoutError(ToolError):
    """Raised when a tool invocation exceeds its time budget."""

    def __init__(self, tool_name: str, timeout: float) -> None:
        self.tool_name = tool_name
        self.timeout = timeout
        super().__init__(f"Tool {tool_name} timed out after {timeout:g}s")


class OrchestratorError(BriefError):
    """Raised for orchestration loop misuse and run-level failures."""


class RunFailedError(OrchestratorError):
    """Raised when the reasoning component reports a failed turn."""

    def __init__(self, message: str, *, turn: int | None = None) -> None:
        self.turn = turn
        super().__init__(message)


class TurnLimitExceededError(OrchestratorError):
    """Raised when a run keeps requesting tools past its turn limit."""

    def __init__(self, max_turns: int) -> None:
        self.max_turns = max_turns
        super().__init__(
            f"Agent did not settle within {max_turns} turns; "
            f"aborting run"
        )
