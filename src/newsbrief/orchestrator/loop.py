"""Core agent loop for briefing runs.

Provides the Agent class that runs a tool-calling loop: send the history
and tool schemas to the reasoning component, dispatch each requested tool
call through the ToolExecutor, feed the results back, and repeat until a
turn requests no tools (idle) or the run fails.

Tool failures are data and never stop the loop.  Run-level failures (an
``error`` stop reason, an exception from the reasoning component, or the
turn limit) move the agent to FAILED and are re-raised from
``wait_for_idle()``.
"""

from __future__ import annotations

import copy
import json
import logging
import threading
import uuid
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from newsbrief.exceptions import (
    OrchestratorError,
    RunFailedError,
    TurnLimitExceededError,
)
from newsbrief.orchestrator.config import AgentConfig, AgentState
from newsbrief.orchestrator.events import AgentEvent, EventBus, EventType
from newsbrief.orchestrator.models import AgentRunResult, StepResult, ToolCall

if TYPE_CHECKING:
    from collections.abc import Callable

    from newsbrief.llm.protocols import LLMClient
    from newsbrief.toolkit.executor import ToolExecutor

logger = logging.getLogger(__name__)


class Agent:
    """One agent serving one run at a time.

    The reasoning component is either an object implementing the LLMClient
    protocol (``chat(messages, tools=...)``) or a plain callable
    ``llm(messages=..., tools=...)``.  Both must return an OpenAI-format
    chat completion dict.

    Usage::

        agent = Agent(client, ToolExecutor(get_all_tools(ctx)))
        agent.subscribe(lambda event: print(event.type.value))
        agent.prompt("Generate my daily briefing now.")
        result = agent.wait_for_idle()
        print(f"Settled after {result.turns} turns")
    """

    def __init__(
        self,
        llm: LLMClient | Callable[..., dict],
        executor: ToolExecutor,
        config: AgentConfig | None = None,
        events: EventBus | None = None,
    ) -> None:
        self._llm = llm
        self._executor = executor
        self._config = config or AgentConfig()
        self._events = events or EventBus()
        self._state = AgentState.IDLE
        self._lock = threading.Lock()
        self._idle = threading.Event()
        self._idle.set()
        self._thread: threading.Thread | None = None
        self._messages: list[dict[str, Any]] = []
        self._result: AgentRunResult | None = None
        self._error: BaseException | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def state(self) -> AgentState:
        """Return the current agent state."""
        return self._state

    @property
    def config(self) -> AgentConfig:
        return self._config

    @property
    def events(self) -> EventBus:
        return self._events

    @property
    def messages(self) -> list[dict[str, Any]]:
        """A copy of the current run's message history."""
        return copy.deepcopy(self._messages)

    @property
    def system_prompt(self) -> str:
        if self._config.system_prompt is not None:
            return self._config.system_prompt
        from newsbrief.prompts.briefing import BRIEFING_SYSTEM_PROMPT

        return BRIEFING_SYSTEM_PROMPT

    def subscribe(self, handler: Callable[[AgentEvent], None]) -> Callable[[], None]:
        """Observe run events. Returns an unsubscribe callable."""
        return self._events.subscribe(handler)

    def prompt(self, text: str) -> None:
        """Start a run for ``text`` on a worker thread and return immediately.

        Raises:
            OrchestratorError: If a run is already in progress.
        """
        with self._lock:
            if not self._idle.is_set():
                raise OrchestratorError("Agent is already running; wait_for_idle() first")
            self._idle.clear()
            self._state = AgentState.RUNNING
            self._result = None
            self._error = None
            self._messages = [
                {"role": "system", "content": self.system_prompt},
                {"role": "user", "content": text},
            ]
            self._thread = threading.Thread(
                target=self._run, name="newsbrief-agent", daemon=True
            )
            self._thread.start()

    def wait_for_idle(self, timeout: float | None = None) -> AgentRunResult:
        """Block until the current run settles.

        Returns:
            The settled run's result (an empty result if nothing ran).

        Raises:
            OrchestratorError: If ``timeout`` elapses first.
            RunFailedError, TurnLimitExceededError, or the reasoning
                component's own exception: if the run failed.
        """
        if not self._idle.wait(timeout):
            raise OrchestratorError(f"Agent did not become idle within {timeout}s")
        if self._error is not None:
            raise self._error
        return self._result or AgentRunResult(messages=self.messages)

    def run(self, text: str, timeout: float | None = None) -> AgentRunResult:
        """Prompt and block until idle."""
        self.prompt(text)
        return self.wait_for_idle(timeout)

    # ------------------------------------------------------------------
    # Run driver
    # ------------------------------------------------------------------

    def _run(self) -> None:
        self._publish(EventType.AGENT_START)
        error: BaseException | None = None
        try:
            result = self._loop()
        except Exception as exc:
            error = exc
            self._error = exc
            self._state = AgentState.FAILED
            logger.error("Agent run failed: %s", exc)
        else:
            self._result = result
            self._state = AgentState.IDLE
            logger.info(
                "Agent idle after %d turns and %d tool calls",
                result.turns,
                result.total_tool_calls,
            )
        finally:
            self._publish(EventType.AGENT_END, error=error)
            self._idle.set()

    def _loop(self) -> AgentRunResult:
        tools = self._executor.schemas()
        steps: list[StepResult] = []
        max_turns = self._config.max_turns

        for turn in range(1, max_turns + 1):
            self._publish(EventType.TURN_START, turn=turn)
            self._publish(EventType.MESSAGE_START, turn=turn)

            response = self._call_llm(self._messages, tools)
            message = self._extract_message(response, turn)
            stop_reason = _stop_reason(response)
            failure = None
            if stop_reason == "error":
                failure = RunFailedError(
                    _error_message(response) or "Reasoning component reported an error",
                    turn=turn,
                )
            self._publish(
                EventType.MESSAGE_END,
                turn=turn,
                message=message,
                stop_reason=stop_reason,
                error=failure,
            )

            if failure is not None:
                raise failure

            self._messages.append(message)
            tool_calls = self._extract_tool_calls(message)

            if not tool_calls:
                self._publish(EventType.TURN_END, turn=turn)
                return AgentRunResult(
                    messages=self.messages,
                    steps=steps,
                    turns=turn,
                    final_text=message.get("content") or "",
                    state=AgentState.IDLE,
                )

            self._state = AgentState.TOOL_PENDING
            for tc in tool_calls:
                steps.append(self._dispatch(tc, turn, len(steps) + 1))
            self._state = AgentState.RUNNING
            self._publish(EventType.TURN_END, turn=turn)

        raise TurnLimitExceededError(max_turns)

    def _dispatch(self, tc: ToolCall, turn: int, step_num: int) -> StepResult:
        """Execute one tool call and append its result to the history."""
        self._publish(EventType.TOOL_EXECUTION_START, turn=turn, tool_call=tc)
        logger.debug("Dispatching %s(%s)", tc.name, tc.arguments)
        result = self._executor.execute(tc.name, tc.arguments)
        self._messages.append({
            "role": "tool",
            "tool_call_id": tc.id,
            "content": result.text,
        })
        self._publish(
            EventType.TOOL_EXECUTION_END, turn=turn, tool_call=tc, result=result
        )
        return StepResult(step=step_num, turn=turn, tool_call=tc, result=result)

    # ------------------------------------------------------------------
    # Reasoning component plumbing
    # ------------------------------------------------------------------

    def _call_llm(self, messages: list[dict[str, Any]], tools: list[dict]) -> dict:
        """Ask the reasoning component for its next turn.

        Exceptions raised by the component propagate and fail the run.
        """
        history = copy.deepcopy(messages)
        chat = getattr(self._llm, "chat", None)
        if chat is None:
            if not callable(self._llm):
                raise OrchestratorError("LLM must provide chat() or be callable")
            return self._llm(messages=history, tools=tools)

        kwargs: dict[str, Any] = {"tools": tools}
        if self._config.model:
            kwargs["model"] = self._config.model
        if self._config.temperature is not None:
            kwargs["temperature"] = self._config.temperature
        if self._config.max_tokens is not None:
            kwargs["max_tokens"] = self._config.max_tokens
        if self._config.extra_llm_kwargs:
            kwargs.update(self._config.extra_llm_kwargs)
        return chat(history, **kwargs)

    def _extract_message(self, response: dict, turn: int) -> dict[str, Any]:
        """Return a copy of the assistant message from an OpenAI-format response."""
        try:
            message = copy.deepcopy(response["choices"][0]["message"])
        except (KeyError, IndexError, TypeError):
            if _stop_reason(response) == "error":
                return {"role": "assistant", "content": "", "error": _error_message(response)}
            raise RunFailedError(
                f"Reasoning component returned no message: {response!r}", turn=turn
            ) from None
        message.setdefault("role", "assistant")
        return message

    def _extract_tool_calls(self, message: dict[str, Any]) -> list[ToolCall]:
        """Parse the tool calls of an assistant message, in requested order.

        Malformed JSON arguments are dispatched as ``{}`` so the tool's own
        validation reports what is missing.
        """
        raw_calls = message.get("tool_calls") or []
        result: list[ToolCall] = []
        for raw in raw_calls:
            call_id = raw.get("id") or f"call_{uuid.uuid4().hex[:8]}"
            func = raw.get("function", {})
            name = func.get("name", "")
            raw_args = func.get("arguments", "{}")
            if isinstance(raw_args, dict):
                arguments = raw_args
            else:
                try:
                    arguments = json.loads(raw_args or "{}")
                except (json.JSONDecodeError, TypeError):
                    arguments = {}
                    logger.warning("Malformed JSON in tool call arguments for %s", name)
            result.append(ToolCall(id=call_id, name=name, arguments=arguments))
        return result

    def _publish(self, event_type: EventType, **fields: Any) -> None:
        # Subscribers get copies; nothing they mutate reaches the run.
        if fields.get("message") is not None:
            fields["message"] = copy.deepcopy(fields["message"])
        if fields.get("tool_call") is not None:
            tc = fields["tool_call"]
            fields["tool_call"] = replace(tc, arguments=copy.deepcopy(tc.arguments))
        if fields.get("result") is not None:
            result = fields["result"]
            fields["result"] = replace(result, details=copy.deepcopy(result.details))
        self._events.publish(AgentEvent(type=event_type, **fields))


def _stop_reason(response: Any) -> str | None:
    if not isinstance(response, dict):
        return None
    if response.get("error"):
        return "error"
    try:
        return response["choices"][0].get("finish_reason")
    except (KeyError, IndexError, TypeError, AttributeError):
        return None


def _error_message(response: dict) -> str:
    error = response.get("error")
    if isinstance(error, dict):
        return str(error.get("message") or error)
    if error:
        return str(error)
    try:
        message = response["choices"][0]["message"]
        return str(message.get("error") or message.get("content") or "")
    except (KeyError, IndexError, TypeError, AttributeError):
        return ""
