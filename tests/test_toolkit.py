"""Tests for the briefing toolkit.

Tests cover tool definitions, profiles, the ToolExecutor dispatch table,
and every briefing tool executed end to end against a real registry, vault,
and mock-transport fetcher.
"""

from __future__ import annotations

import json
import sys
import threading

import pytest

from newsbrief.toolkit import (
    FULL_PROFILE,
    SAFE_PROFILE,
    ToolDefinition,
    ToolExecutor,
    ToolResult,
    get_all_tools,
    get_profile,
)
from tests.conftest import html_page

TOOL_NAMES = [
    "fetch_url",
    "save_to_obsidian",
    "get_sources",
    "manage_sources",
    "run_shell_command",
]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def executor(tool_context):
    return ToolExecutor(get_all_tools(tool_context))


def _echo_tool(handler) -> ToolDefinition:
    return ToolDefinition(
        name="echo",
        label="Echo",
        description="Echo text back.",
        parameters={"type": "object", "properties": {"text": {"type": "string"}}},
        handler=handler,
    )


# ===========================================================================
# Definitions and profiles
# ===========================================================================


class TestToolDefinitionFormats:
    def test_to_openai(self, tool_context):
        tool = get_all_tools(tool_context)[0]
        schema = tool.to_openai()
        assert schema["type"] == "function"
        assert schema["function"]["name"] == "fetch_url"
        assert schema["function"]["parameters"]["required"] == ["url"]


class TestGetAllTools:
    def test_catalog_order(self, tool_context):
        assert [t.name for t in get_all_tools(tool_context)] == TOOL_NAMES

    def test_every_tool_has_description_and_object_schema(self, tool_context):
        for tool in get_all_tools(tool_context):
            assert tool.description
            assert tool.label
            assert tool.parameters["type"] == "object"

    def test_manage_sources_enum(self, tool_context):
        tool = get_all_tools(tool_context)[3]
        action = tool.parameters["properties"]["action"]
        assert action["enum"] == ["add", "remove", "toggle", "set_active"]
        assert tool.parameters["required"] == ["action"]


class TestProfiles:
    def test_full_profile_keeps_everything(self, tool_context):
        tools = FULL_PROFILE.filter_tools(get_all_tools(tool_context))
        assert [t.name for t in tools] == TOOL_NAMES

    def test_safe_profile_drops_shell(self, tool_context):
        tools = SAFE_PROFILE.filter_tools(get_all_tools(tool_context))
        assert "run_shell_command" not in [t.name for t in tools]
        assert len(tools) == 4

    def test_get_profile(self):
        assert get_profile("full") is FULL_PROFILE
        assert get_profile("safe") is SAFE_PROFILE

    def test_get_profile_unknown(self):
        with pytest.raises(ValueError, match="Unknown tool profile"):
            get_profile("root")

    def test_executor_with_profile(self, tool_context):
        executor = ToolExecutor(get_all_tools(tool_context), profile=SAFE_PROFILE)
        assert "run_shell_command" not in executor.available_tools()
        result = executor.execute("run_shell_command", {"command": "echo hi"})
        assert not result.success
        assert result.text == "Error: Unknown tool: run_shell_command"


# ===========================================================================
# ToolExecutor
# ===========================================================================


class TestToolExecutor:
    def test_schemas_match_tools(self, executor):
        names = [s["function"]["name"] for s in executor.schemas()]
        assert names == executor.available_tools() == TOOL_NAMES

    def test_unknown_tool(self, executor):
        result = executor.execute("delete_everything", {})
        assert not result.success
        assert result.tool_name == "delete_everything"
        assert result.error == "Error: Unknown tool: delete_everything"

    def test_non_dict_arguments(self, executor):
        result = executor.execute("get_sources", ["not", "a", "dict"])  # type: ignore[arg-type]
        assert not result.success
        assert "must be an object" in result.error

    def test_none_arguments(self, executor):
        assert executor.execute("get_sources", None).success

    def test_unexpected_argument_is_encoded(self, executor):
        result = executor.execute("get_sources", {"bogus": 1})
        assert not result.success
        assert result.details["exception"] == "TypeError"
        assert result.text.startswith("Error: ")

    def test_handler_exception_is_encoded(self):
        def boom(text=None):
            raise RuntimeError("kaboom")

        result = ToolExecutor([_echo_tool(boom)]).execute("echo", {"text": "x"})
        assert not result.success
        assert result.error == "Error: kaboom"
        assert result.details == {"error": "Error: kaboom", "exception": "RuntimeError"}

    def test_plain_return_value_wrapped(self):
        result = ToolExecutor([_echo_tool(lambda text=None: text)]).execute("echo", {"text": "hi"})
        assert result.success
        assert result.output == "hi"

    def test_timeout(self):
        release = threading.Event()

        def slow(text=None):
            release.wait(5)
            return "late"

        executor = ToolExecutor([_echo_tool(slow)], timeout=0.1)
        try:
            result = executor.execute("echo", {})
        finally:
            release.set()
        assert not result.success
        assert result.error == "Error: Tool echo timed out after 0.1s"
        assert result.details["exception"] == "ToolTimeoutError"

    def test_fast_handler_under_timeout(self):
        executor = ToolExecutor([_echo_tool(lambda text=None: "quick")], timeout=5)
        assert executor.execute("echo", {}).output == "quick"


class TestToolResult:
    def test_text_prefixes_error(self):
        assert ToolResult.fail("x", "bad").text == "Error: bad"
        assert ToolResult.fail("x", "Error: bad").text == "Error: bad"

    def test_ok_details(self):
        result = ToolResult.ok("x", "out", path="/tmp/a")
        assert result.text == "out"
        assert result.details == {"path": "/tmp/a"}


# ===========================================================================
# Tools end to end
# ===========================================================================


class TestFetchUrlTool:
    def test_success(self, executor, pages):
        pages["https://a.example/"] = (200, html_page("<p>Markets rally</p>"))
        result = executor.execute("fetch_url", {"url": "https://a.example/"})
        assert result.success
        assert result.output == "Markets rally"
        assert result.details == {"url": "https://a.example/", "contentLength": 13}

    def test_http_error(self, executor, pages):
        pages["https://a.example/"] = (502, "")
        result = executor.execute("fetch_url", {"url": "https://a.example/"})
        assert not result.success
        assert result.text == "Error: HTTP 502 for https://a.example/"
        assert result.details["status"] == 502

    def test_missing_url(self, executor):
        result = executor.execute("fetch_url", {})
        assert not result.success
        assert "requires url" in result.error


class TestSaveToObsidianTool:
    def test_saves(self, executor, vault_path):
        result = executor.execute(
            "save_to_obsidian",
            {"filename": "Daily-Briefing-2025-02-04", "content": "# Today"},
        )
        assert result.success
        saved = vault_path / "Daily-Briefing-2025-02-04.md"
        assert saved.read_text() == "# Today"
        assert result.output == f"Saved to {saved.absolute()}"
        assert result.details["filename"] == "Daily-Briefing-2025-02-04.md"

    def test_missing_content(self, executor, vault_path):
        result = executor.execute("save_to_obsidian", {"filename": "x"})
        assert not result.success
        assert not vault_path.exists()

    def test_filename_outside_vault_rejected(self, executor, tmp_path):
        target = tmp_path / "outside" / "escape"
        result = executor.execute("save_to_obsidian", {"filename": str(target), "content": "x"})
        assert not result.success
        assert result.details["exception"] == "ToolError"
        assert "escapes the vault" in result.text
        assert not (tmp_path / "outside").exists()


class TestGetSourcesTool:
    def test_empty(self, executor):
        result = executor.execute("get_sources", {})
        assert result.success
        assert json.loads(result.output) == {"sources": []}

    def test_lists_registry(self, executor, registry):
        registry.add("A", "https://a.example", active=False)
        result = executor.execute("get_sources", {})
        assert json.loads(result.output) == {
            "sources": [{"name": "A", "url": "https://a.example", "active": False}]
        }
        assert result.details["sources"][0]["name"] == "A"

    def test_corrupt_registry_is_encoded(self, executor, sources_path):
        sources_path.write_text("{{{")
        result = executor.execute("get_sources", {})
        assert not result.success
        assert result.details["exception"] == "SourceRegistryError"
        assert result.text.startswith("Error: Malformed sources document")


class TestManageSourcesTool:
    def test_add(self, executor, registry):
        result = executor.execute(
            "manage_sources", {"action": "add", "name": "Verge", "url": "https://theverge.com"}
        )
        assert result.success
        assert result.output == "Added source: Verge"
        assert result.details["source"] == {
            "name": "Verge", "url": "https://theverge.com", "active": True
        }
        assert registry.list()[0].name == "Verge"

    def test_duplicate(self, executor, registry):
        registry.add("Verge", "https://theverge.com")
        result = executor.execute(
            "manage_sources", {"action": "add", "name": "Verge 2", "url": "https://theverge.com"}
        )
        assert not result.success
        assert result.details["kind"] == "duplicate_source"
        assert len(registry.list()) == 1

    def test_toggle_and_set_active(self, executor, registry):
        registry.add("Verge", "https://theverge.com")
        toggled = executor.execute("manage_sources", {"action": "toggle", "name": "Verge"})
        assert toggled.output == "Toggled source: Verge -> false"
        updated = executor.execute(
            "manage_sources", {"action": "set_active", "url": "https://theverge.com", "active": True}
        )
        assert updated.output == "Updated source: Verge -> true"
        assert registry.list()[0].active is True

    def test_remove(self, executor, registry):
        registry.add("Verge", "https://theverge.com")
        result = executor.execute("manage_sources", {"action": "remove", "name": "Verge"})
        assert result.output == "Removed source: Verge"
        assert registry.list() == []

    def test_not_found(self, executor):
        result = executor.execute("manage_sources", {"action": "remove", "url": "https://x.example"})
        assert not result.success
        assert result.text == "Error: Source not found: https://x.example"
        assert result.details["kind"] == "not_found"

    def test_missing_field(self, executor, sources_path):
        result = executor.execute("manage_sources", {"action": "add", "name": "Verge"})
        assert not result.success
        assert result.text == "Error: add requires url"
        assert result.details["kind"] == "missing_field"
        assert not sources_path.exists()

    def test_invalid_active(self, executor, registry):
        registry.add("Verge", "https://theverge.com")
        result = executor.execute(
            "manage_sources", {"action": "set_active", "name": "Verge", "active": "no"}
        )
        assert result.details["kind"] == "invalid_argument"
        assert registry.list()[0].active is True


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX shell commands")
class TestRunShellCommandTool:
    def test_success(self, executor):
        result = executor.execute("run_shell_command", {"command": "echo briefing"})
        assert result.success
        assert result.output == "briefing\n"
        assert result.details["returncode"] == 0

    def test_runs_in_configured_cwd(self, executor, tmp_path):
        (tmp_path / "here.txt").write_text("")
        result = executor.execute("run_shell_command", {"command": "ls"})
        assert "here.txt" in result.output

    def test_failure(self, executor):
        result = executor.execute("run_shell_command", {"command": "echo oops 1>&2; exit 2"})
        assert not result.success
        assert result.text.startswith("Error: Command failed with exit code 2: ")
        assert "oops" in result.text
        assert result.details["returncode"] == 2

    def test_empty_command(self, executor):
        result = executor.execute("run_shell_command", {"command": ""})
        assert not result.success
        assert result.details["exception"] == "ToolError"
