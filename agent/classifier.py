"""
agent/classifier.py — Turn Classifier

Decides how an incoming message is handled:

    COMPLEX_TASK   contains a planning keyword       → fixed task plan
    TOOL_CALL      contains a tool trigger word      → local tool
    CONVERSATION   anything else                     → generation API

Matching is case-insensitive substring search and ignores session state.
Planning keywords are checked first, so "plan a search" plans.

Substring matching misroutes some messages ("search for meaning in life"
goes to web_search, "explanation" matches "plan"). That is accepted behaviour.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

TASK_KEYWORDS: tuple[str, ...] = (
    "plan", "organize", "schedule", "break down", "steps", "sequence",
)

# Checked in order; first tool with a matching trigger wins.
TOOL_TRIGGERS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("calculator", ("calculate", "math")),
    ("web_search", ("search", "find")),
)


class TurnKind(str, Enum):
    COMPLEX_TASK = "complex_task"
    TOOL_CALL = "tool_call"
    CONVERSATION = "conversation"


@dataclass(frozen=True)
class Classification:
    kind: TurnKind
    tool_name: Optional[str] = None

    @classmethod
    def complex_task(cls) -> "Classification":
        return cls(TurnKind.COMPLEX_TASK)

    @classmethod
    def tool_call(cls, tool_name: str) -> "Classification":
        return cls(TurnKind.TOOL_CALL, tool_name)

    @classmethod
    def conversation(cls) -> "Classification":
        return cls(TurnKind.CONVERSATION)


def is_complex_task(message: str) -> bool:
    lowered = message.lower()
    return any(keyword in lowered for keyword in TASK_KEYWORDS)


def select_tool(message: str) -> Optional[str]:
    lowered = message.lower()
    for tool_name, triggers in TOOL_TRIGGERS:
        if any(trigger in lowered for trigger in triggers):
            return tool_name
    return None


def classify(message: str) -> Classification:
    if is_complex_task(message):
        return Classification.complex_task()
    tool_name = select_tool(message)
    if tool_name is not None:
        return Classification.tool_call(tool_name)
    return Classification.conversation()
