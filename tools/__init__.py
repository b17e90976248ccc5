"""
tools/ — Local tools

Public interface for the tool system.

Usage:
    from tools import ToolRegistry

    registry = ToolRegistry.default()
    reply = registry.require("calculator").execute("calculate 3 + 4", session)
"""

from __future__ import annotations

from tools.calculator import CalculatorTool
from tools.planner import PLAN_STEPS, TaskPlannerTool
from tools.search import WebSearchTool
from tools.tool_registry import ToolRegistry
from tools.types import Tool, ToolSchema

__all__ = [
    "ToolRegistry",
    "Tool",
    "ToolSchema",
    "CalculatorTool",
    "WebSearchTool",
    "TaskPlannerTool",
    "PLAN_STEPS",
]
