"""
tools/tool_registry.py — Tool Registry

Maps tool names to Tool instances. Built once at startup and read-only
afterwards; there is no register() after construction.

The task planner is held in its own typed slot (`registry.planner`) as
well as by name, so callers that need plan() never downcast.

Usage:
    registry = ToolRegistry.default()
    tool = registry.resolve("calculator")
    steps = registry.planner.plan("launch the website")
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Iterable, Optional

from exceptions import ToolExecutionError, ToolNotFoundError
from observability.logger import get_logger
from tools.calculator import CalculatorTool
from tools.planner import TaskPlannerTool
from tools.search import WebSearchTool
from tools.types import Tool, ToolSchema

if TYPE_CHECKING:
    from agent.session import Session

log = get_logger(__name__)


class ToolRegistry:
    """Immutable name → Tool mapping plus the planner capability."""

    def __init__(self, tools: Iterable[Tool], planner: TaskPlannerTool):
        table: dict[str, Tool] = {}
        for tool in (*tools, planner):
            if tool.name in table and table[tool.name] is not tool:
                raise ValueError(f"Duplicate tool name: {tool.name}")
            table[tool.name] = tool
        self._tools = MappingProxyType(table)
        self._planner = planner
        log.debug("tool_registry.built", tools=list(table))

    @classmethod
    def default(
        cls,
        web_search_live: bool = False,
        web_search_max_results: int = 5,
        web_search_timeout: float = 15.0,
    ) -> "ToolRegistry":
        """The three built-in tools: calculator, web_search, task_planner."""
        return cls(
            tools=[
                CalculatorTool(),
                WebSearchTool(
                    live=web_search_live,
                    max_results=web_search_max_results,
                    timeout=web_search_timeout,
                ),
            ],
            planner=TaskPlannerTool(),
        )

    @property
    def planner(self) -> TaskPlannerTool:
        return self._planner

    def resolve(self, name: str) -> Optional[Tool]:
        """Return the tool registered under name, or None."""
        return self._tools.get(name)

    def require(self, name: str) -> Tool:
        """Like resolve() but raises ToolNotFoundError."""
        tool = self._tools.get(name)
        if tool is None:
            raise ToolNotFoundError(name)
        return tool

    def execute(self, name: str, text: str, session: "Session") -> str:
        """
        Run the named tool on the raw message.

        Raises ToolNotFoundError for an unknown name and ToolExecutionError
        (chained to the original) when the tool itself raises.
        """
        tool = self.require(name)
        try:
            return tool.execute(text, session)
        except Exception as e:
            raise ToolExecutionError(name, str(e) or type(e).__name__) from e

    def list_names(self) -> list[str]:
        return list(self._tools)

    def list_schemas(self) -> list[ToolSchema]:
        return [t.schema for t in self._tools.values()]

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def __repr__(self) -> str:
        return f"<ToolRegistry tools={list(self._tools)}>"
