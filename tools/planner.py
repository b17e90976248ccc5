"""
tools/planner.py — Task Planner Tool

Fixed, non-adaptive decomposition: every task gets the same five steps.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tools.types import Tool

if TYPE_CHECKING:
    from agent.session import Session

PLAN_STEPS: tuple[str, ...] = (
    "Analyze requirements",
    "Break down into components",
    "Create timeline",
    "Assign resources",
    "Monitor progress",
)


class TaskPlannerTool(Tool):
    name = "task_planner"
    description = "Break a task into a fixed sequence of steps"
    category = "planning"

    def execute(self, text: str, session: "Session") -> str:
        return f"Planning task: {text}"

    def plan(self, task: str) -> list[str]:
        return list(PLAN_STEPS)
