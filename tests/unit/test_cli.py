"""
tests/unit/test_cli.py — CLI Interface Unit Tests

Drives CLIInterface.handle_line() with a real Orchestrator backed by a
fake generation client, rendering into an in-memory rich Console.
"""

from __future__ import annotations

import io
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from agent.orchestrator import Orchestrator
from brain.llm_client import BaseLLMClient
from brain.types import GenerationResult
from interfaces.cli import PLAN_PREFIX, CLIInterface


class _EchoClient(BaseLLMClient):
    def __init__(self):
        super().__init__(api_key="test")
        self.closed = False

    def generate(self, contents):
        return GenerationResult.success(f"echo: {contents[-1].text}")

    def close(self):
        self.closed = True


def _make_cli(orchestrator=None):
    buf = io.StringIO()
    console = Console(file=buf, width=120, force_terminal=False, color_system=None)
    orc = orchestrator or Orchestrator(llm_client=_EchoClient())
    return CLIInterface(orc, session_id="cli-test", console=console), buf


class TestCommands:
    @pytest.mark.parametrize("line", ["exit", "quit", "EXIT", "  quit  "])
    def test_exit_words_stop_loop(self, line):
        cli, _ = _make_cli()
        assert cli.handle_line(line) is False

    def test_blank_line_ignored(self):
        orc = MagicMock()
        cli, buf = _make_cli(orc)
        assert cli.handle_line("   ") is True
        orc.respond.assert_not_called()
        assert buf.getvalue() == ""

    def test_goal_sets_goal(self):
        cli, buf = _make_cli()
        assert cli.handle_line("goal learn [rust]") is True
        assert cli.orchestrator.sessions.get("cli-test").goals == ["learn [rust]"]
        assert "Goal set: learn [rust]" in buf.getvalue()

    def test_plan_prefixes_message(self):
        orc = MagicMock()
        orc.respond.return_value = MagicMock(text="ok", tool_name=None, kind=None)
        cli, _ = _make_cli(orc)
        cli.handle_line("plan my move")
        orc.respond.assert_called_once_with(PLAN_PREFIX + "my move", "cli-test")

    def test_plan_reply_rendered(self):
        cli, buf = _make_cli()
        cli.handle_line("plan my move")
        out = buf.getvalue()
        assert "1. Analyze requirements" in out
        assert cli.orchestrator.sessions.get("cli-test").current_task.description == (
            "Please help me plan: my move"
        )

    def test_clear(self):
        cli, buf = _make_cli()
        cli.handle_line("hello")
        cli.handle_line("clear")
        assert cli.orchestrator.sessions.get("cli-test") is None
        assert "Conversation history cleared!" in buf.getvalue()

    def test_free_text_goes_to_orchestrator(self):
        cli, buf = _make_cli()
        cli.handle_line("hello there")
        assert "echo: hello there" in buf.getvalue()

    def test_tool_reply_rendered(self):
        cli, buf = _make_cli()
        cli.handle_line("calculate 3 + 4")
        out = buf.getvalue()
        assert "3.00 + 4.00 = 7.00" in out
        assert "calculator" in out

    def test_tools_table(self):
        cli, buf = _make_cli()
        cli.handle_line("tools")
        out = buf.getvalue()
        for name in ("calculator", "web_search", "task_planner"):
            assert name in out

    def test_status_without_session(self):
        cli, buf = _make_cli()
        cli.handle_line("status")
        assert "No state yet" in buf.getvalue()

    def test_status_with_session(self):
        cli, buf = _make_cli()
        cli.handle_line("goal ship it")
        cli.handle_line("status")
        out = buf.getvalue()
        assert "cli-test" in out
        assert "ship it" in out


class TestRunLoop:
    def test_run_shuts_down_on_exit(self):
        client = _EchoClient()
        cli, buf = _make_cli(Orchestrator(llm_client=client))
        cli.console.input = MagicMock(side_effect=["hello", "exit"])
        cli.run()
        assert client.closed
        assert "echo: hello" in buf.getvalue()

    def test_run_handles_eof(self):
        client = _EchoClient()
        cli, _ = _make_cli(Orchestrator(llm_client=client))
        cli.console.input = MagicMock(side_effect=EOFError)
        cli.run()
        assert client.closed
