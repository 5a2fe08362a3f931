"""Daily briefing entry point.

Wires the settings, source registry, report vault, fetcher, tool catalog,
reasoning component, and agent loop together for one run.
"""

from __future__ import annotations

import logging
from contextlib import ExitStack
from dataclasses import dataclass, field, replace
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

from newsbrief.fetch import ContentFetcher
from newsbrief.models.config import DEFAULT_SOURCES_PATH, Settings
from newsbrief.orchestrator import Agent, AgentConfig, log_events
from newsbrief.prompts.briefing import build_task_prompt
from newsbrief.storage.registry import SourceRegistry
from newsbrief.storage.vault import ReportWriter
from newsbrief.toolkit import ToolContext, ToolExecutor, get_all_tools, get_profile

if TYPE_CHECKING:
    from collections.abc import Callable

    from newsbrief.llm.protocols import LLMClient
    from newsbrief.orchestrator import AgentEvent, AgentRunResult

logger = logging.getLogger(__name__)


@dataclass
class BriefingEnvironment:
    """Everything a briefing run needs besides the reasoning component."""

    settings: Settings = field(default_factory=Settings)
    sources_path: str | Path = DEFAULT_SOURCES_PATH
    config: AgentConfig = field(default_factory=AgentConfig)
    fetcher: ContentFetcher | None = None

    def tool_context(self) -> ToolContext:
        return ToolContext(
            registry=SourceRegistry(self.sources_path),
            writer=ReportWriter(self.settings.vault_path),
            fetcher=self.fetcher or ContentFetcher(),
            shell_timeout=self.config.tool_timeout,
        )


def create_agent(
    env: BriefingEnvironment,
    llm: LLMClient | Callable[..., dict] | None = None,
) -> Agent:
    """Build a briefing agent with the full tool catalog.

    When ``llm`` is omitted a chat client is resolved from ``env.settings``.
    """
    if llm is None:
        from newsbrief.llm.resolver import create_llm_client

        llm = create_llm_client(env.settings)

    executor = ToolExecutor(
        get_all_tools(env.tool_context()),
        profile=get_profile(env.config.profile),
        timeout=env.config.tool_timeout,
    )
    return Agent(llm, executor, config=env.config)


def run_daily_briefing(
    env: BriefingEnvironment | None = None,
    llm: LLMClient | Callable[..., dict] | None = None,
    *,
    day: date | None = None,
    on_event: Callable[[AgentEvent], None] | None = None,
) -> AgentRunResult:
    """Run one daily briefing to completion.

    Args:
        env: Settings and paths (defaults: ./settings defaults, ./sources.json).
        llm: Reasoning component; resolved from settings when omitted.
        day: Date stamped into the report filename (today when omitted).
        on_event: Optional extra event subscriber (e.g. a progress display).

    Returns:
        The settled run.

    Raises:
        RunFailedError, TurnLimitExceededError, or the reasoning component's
        own exception if the run fails.
    """
    env = env or BriefingEnvironment()
    with ExitStack() as owned:
        # Clients built here are closed here; caller-supplied ones are not.
        if llm is None:
            from newsbrief.llm.resolver import create_llm_client

            llm = create_llm_client(env.settings)
            close = getattr(llm, "close", None)
            if close is not None:
                owned.callback(close)
        if env.fetcher is None:
            env = replace(env, fetcher=owned.enter_context(ContentFetcher()))

        agent = create_agent(env, llm)
        agent.subscribe(log_events)
        if on_event is not None:
            agent.subscribe(on_event)

        task = build_task_prompt(day)
        logger.info("Prompting agent: %s", task)
        agent.prompt(task)
        result = agent.wait_for_idle()
    logger.info(
        "Briefing complete: %d messages, reports %s",
        len(result.messages),
        result.saved_reports or "none",
    )
    return result
