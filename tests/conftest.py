"""Shared test fixtures for newsbrief.

Provides file-backed registry and vault fixtures under ``tmp_path``, an
httpx mock transport for the fetcher, and scripted OpenAI-format LLM
responses for the agent loop.
"""

from __future__ import annotations

import json

import httpx
import pytest

from newsbrief.fetch import ContentFetcher
from newsbrief.storage.registry import SourceRegistry
from newsbrief.storage.vault import ReportWriter
from newsbrief.toolkit import ToolContext


@pytest.fixture
def sources_path(tmp_path):
    return tmp_path / "sources.json"


@pytest.fixture
def registry(sources_path) -> SourceRegistry:
    """Registry backed by a not-yet-existing file."""
    return SourceRegistry(sources_path)


@pytest.fixture
def vault_path(tmp_path):
    return tmp_path / "vault"


@pytest.fixture
def writer(vault_path) -> ReportWriter:
    return ReportWriter(vault_path)


@pytest.fixture
def pages() -> dict[str, tuple[int, str]]:
    """URL -> (status, body) served by the ``fetcher`` fixture. Mutate per test."""
    return {}


@pytest.fixture
def fetcher(pages) -> ContentFetcher:
    """Fetcher whose transport serves ``pages`` (404 for anything else)."""
    f = ContentFetcher(transport=make_transport(pages))
    yield f
    f.close()


@pytest.fixture
def tool_context(registry, writer, fetcher, tmp_path) -> ToolContext:
    return ToolContext(
        registry=registry,
        writer=writer,
        fetcher=fetcher,
        shell_timeout=10,
        shell_cwd=str(tmp_path),
    )


# ------------------------------------------------------------------
# Shared test helpers
# ------------------------------------------------------------------


def make_transport(pages: dict[str, tuple[int, str]]) -> httpx.MockTransport:
    """Serve canned HTML keyed by full URL."""

    def handler(request: httpx.Request) -> httpx.Response:
        status, body = pages.get(str(request.url), (404, "<html><body>Not Found</body></html>"))
        return httpx.Response(status, text=body, headers={"Content-Type": "text/html"})

    return httpx.MockTransport(handler)


def html_page(body: str, title: str = "Page") -> str:
    return f"<html><head><title>{title}</title></head><body>{body}</body></html>"


def make_mock_llm(responses: list[dict]):
    """Create a mock LLM that returns responses in sequence.

    Records the messages it was shown on ``mock_llm.seen``.
    """
    call_count = [0]
    seen: list[list[dict]] = []

    def mock_llm(messages=None, tools=None, **kwargs):
        seen.append(messages)
        idx = min(call_count[0], len(responses) - 1)
        call_count[0] += 1
        return responses[idx]

    mock_llm.call_count = call_count
    mock_llm.seen = seen
    return mock_llm


def no_tool_call_response(text: str = "Briefing saved.") -> dict:
    """LLM response with no tool calls."""
    return {
        "choices": [
            {
                "message": {"role": "assistant", "content": text},
                "finish_reason": "stop",
            }
        ]
    }


def tool_call_response(
    tool_name: str,
    arguments: dict,
    call_id: str = "call_1",
    text: str = "",
) -> dict:
    """LLM response with a single tool call."""
    return multi_tool_call_response([(tool_name, arguments, call_id)], text=text)


def multi_tool_call_response(
    calls: list[tuple[str, dict, str]],
    text: str = "",
) -> dict:
    """LLM response with multiple tool calls.

    Args:
        calls: List of (tool_name, arguments, call_id) tuples.
        text: Optional text content.
    """
    tool_calls = [
        {
            "id": cid,
            "type": "function",
            "function": {
                "name": name,
                "arguments": json.dumps(args),
            },
        }
        for name, args, cid in calls
    ]
    return {
        "choices": [
            {
                "message": {
                    "role": "assistant",
                    "content": text,
                    "tool_calls": tool_calls,
                },
                "finish_reason": "tool_calls",
            }
        ]
    }


def error_response(message: str = "upstream model error") -> dict:
    """LLM response whose turn ended with an error stop reason."""
    return {
        "choices": [
            {
                "message": {"role": "assistant", "content": "", "error": message},
                "finish_reason": "error",
            }
        ]
    }
