"""Built-in tool profiles.

Two profiles:
- ``FULL_PROFILE``: all five briefing tools, including the shell escape hatch.
- ``SAFE_PROFILE``: everything except ``run_shell_command``.
"""

from __future__ import annotations

import logging

from newsbrief.toolkit.models import ToolConfig, ToolProfile

logger = logging.getLogger(__name__)

# Must match definitions.py
_ALL_TOOL_NAMES = [
    "fetch_url",
    "save_to_obsidian",
    "get_sources",
    "manage_sources",
    "run_shell_command",
]

PRIVILEGED_TOOLS = frozenset({"run_shell_command"})

FULL_PROFILE = ToolProfile(
    name="full",
    tool_configs={name: ToolConfig() for name in _ALL_TOOL_NAMES},
)

SAFE_PROFILE = ToolProfile(
    name="safe",
    tool_configs={
        name: ToolConfig(enabled=name not in PRIVILEGED_TOOLS)
        for name in _ALL_TOOL_NAMES
    },
)

_PROFILES: dict[str, ToolProfile] = {
    "full": FULL_PROFILE,
    "safe": SAFE_PROFILE,
}


def get_profile(name: str) -> ToolProfile:
    """Look up a built-in profile by name.

    Raises:
        ValueError: If the profile name is unknown.
    """
    try:
        return _PROFILES[name]
    except KeyError:
        raise ValueError(
            f"Unknown tool profile {name!r}. Available: {', '.join(sorted(_PROFILES))}"
        ) from None
