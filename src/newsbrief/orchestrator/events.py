"""Agent event channel for progress reporting and logging.

The orchestration loop publishes an :class:`AgentEvent` at every observable
step.  Subscribers run synchronously on the loop's thread, in registration
order; a subscriber that raises is logged and skipped.  Events carry copies
of the loop's data, so subscribers cannot alter the run.
"""

from __future__ import annotations

import enum
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

    from newsbrief.orchestrator.models import ToolCall
    from newsbrief.toolkit.models import ToolResult

logger = logging.getLogger(__name__)


class EventType(str, enum.Enum):
    """Kinds of events published during a run, in emission order."""

    AGENT_START = "agent_start"
    TURN_START = "turn_start"
    MESSAGE_START = "message_start"
    MESSAGE_END = "message_end"
    TOOL_EXECUTION_START = "tool_execution_start"
    TOOL_EXECUTION_END = "tool_execution_end"
    TURN_END = "turn_end"
    AGENT_END = "agent_end"


@dataclass(frozen=True)
class AgentEvent:
    """A single loop event.

    Attributes:
        type: What happened.
        turn: Reasoning turn number (0 for run-level events).
        message: Assistant message for message_end, or None.
        stop_reason: Reasoning stop reason for message_end.
        tool_call: The call for tool_execution_* events.
        result: The tool result for tool_execution_end.
        error: The turn failure for a message_end whose stop reason is
            ``error``, or the run failure for a failed agent_end.
        timestamp: When the event was published (UTC).
    """

    type: EventType
    turn: int = 0
    message: dict[str, Any] | None = None
    stop_reason: str | None = None
    tool_call: ToolCall | None = None
    result: ToolResult | None = None
    error: BaseException | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class EventBus:
    """Thread-safe synchronous publish/subscribe for agent events.

    Usage::

        bus = EventBus()
        unsubscribe = bus.subscribe(lambda e: print(e.type.value))
        ...
        unsubscribe()
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._handlers: list[Callable[[AgentEvent], None]] = []

    def subscribe(self, handler: Callable[[AgentEvent], None]) -> Callable[[], None]:
        """Register ``handler`` for every event. Returns an unsubscribe callable."""
        with self._lock:
            self._handlers.append(handler)

        def unsubscribe() -> None:
            self.unsubscribe(handler)

        return unsubscribe

    def unsubscribe(self, handler: Callable[[AgentEvent], None]) -> bool:
        """Remove ``handler``. Returns ``True`` if found."""
        with self._lock:
            try:
                self._handlers.remove(handler)
                return True
            except ValueError:
                return False

    def publish(self, event: AgentEvent) -> None:
        """Deliver ``event`` to every subscriber, isolating their failures."""
        with self._lock:
            snapshot = list(self._handlers)

        for handler in snapshot:
            try:
                handler(event)
            except Exception:
                logger.exception("Error in agent event handler %r for %s", handler, event.type.value)

    def handler_count(self) -> int:
        with self._lock:
            return len(self._handlers)


def log_events(event: AgentEvent, *, logger: logging.Logger = logger) -> None:
    """Subscriber that mirrors events into the log.

    A ``message_end`` with an ``error`` stop reason is logged as an error.
    """
    if event.type is EventType.MESSAGE_END and event.stop_reason == "error":
        error = (
            str(event.error) if event.error is not None
            else (event.message or {}).get("error") or "No error message provided"
        )
        logger.error("Reasoning turn %d failed: %s", event.turn, error)
    elif event.type is EventType.TOOL_EXECUTION_START and event.tool_call is not None:
        logger.info("Turn %d: calling %s", event.turn, event.tool_call.name)
    elif event.type is EventType.TOOL_EXECUTION_END and event.result is not None:
        if event.result.success:
            logger.info("Turn %d: %s ok", event.turn, event.result.tool_name)
        else:
            logger.warning("Turn %d: %s -> %s", event.turn, event.result.tool_name, event.result.text)
    elif event.type is EventType.AGENT_END and event.error is not None:
        logger.error("Agent run failed: %s", event.error)
    else:
        logger.debug("Agent event: %s (turn %d)", event.type.value, event.turn)
