"""
tools/types.py — Tool System Data Models

Every tool is a text-in / text-out capability:

    execute(text, session) -> str

Tools may read the session but the built-in ones never write to it.
The task planner additionally exposes plan(task); the registry hands it
out through a dedicated, typed accessor rather than by name lookup.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

from pydantic import BaseModel

if TYPE_CHECKING:
    from agent.session import Session


class ToolSchema(BaseModel):
    """Display metadata for a registered tool."""
    name: str
    description: str
    category: str = "general"


class Tool(ABC):
    """Base class for all local tools."""

    name: ClassVar[str]
    description: ClassVar[str] = ""
    category: ClassVar[str] = "general"

    @abstractmethod
    def execute(self, text: str, session: "Session") -> str:
        """Handle the raw user message and return the reply text."""
        ...

    @property
    def schema(self) -> ToolSchema:
        return ToolSchema(name=self.name, description=self.description, category=self.category)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name}>"
