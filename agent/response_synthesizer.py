"""
agent/response_synthesizer.py — Response Synthesizer

Turns the outcome of each route (tool output, task plan, generated text,
failure) into an AgentResponse. The text is what process_message()
returns; the kind lets the CLI pick a style.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from brain.types import GenerationResult
from exceptions import ToolExecutionError

PLAN_INTRO = "I'll help you break this down into manageable steps:\n\n"


class ResponseKind(str, Enum):
    TEXT = "text"
    TOOL_RESULT = "tool_result"
    PLAN = "plan"
    ERROR = "error"


@dataclass
class AgentResponse:
    """Unified output of one turn. Always has `text`."""
    kind: ResponseKind
    text: str
    tool_name: Optional[str] = None
    metadata: dict = field(default_factory=dict)


class ResponseSynthesizer:
    """Formats raw route outputs into AgentResponse objects."""

    def tool_result(self, tool_name: str, output: str) -> AgentResponse:
        return AgentResponse(kind=ResponseKind.TOOL_RESULT, text=output, tool_name=tool_name)

    def tool_error(self, error: ToolExecutionError) -> AgentResponse:
        return AgentResponse(
            kind=ResponseKind.ERROR,
            text=f"Error executing tool '{error.tool}': {error}",
            tool_name=error.tool,
        )

    def tool_not_found(self, tool_name: str) -> AgentResponse:
        return AgentResponse(
            kind=ResponseKind.ERROR,
            text=f"Error: tool '{tool_name}' is not available",
            tool_name=tool_name,
        )

    def plan(self, steps: list[str]) -> AgentResponse:
        text = PLAN_INTRO + "".join(f"{i}. {step}\n" for i, step in enumerate(steps, start=1))
        return AgentResponse(kind=ResponseKind.PLAN, text=text, metadata={"steps": len(steps)})

    def from_generation(self, result: GenerationResult) -> AgentResponse:
        if not result.ok:
            return AgentResponse(
                kind=ResponseKind.ERROR,
                text=result.reply_text,
                metadata={"status_code": result.status_code, "model": result.model},
            )
        return AgentResponse(
            kind=ResponseKind.TEXT,
            text=result.reply_text,
            metadata={
                "model": result.model,
                "tokens_in": result.usage.input_tokens,
                "tokens_out": result.usage.output_tokens,
            },
        )

    def error(self, detail: str) -> AgentResponse:
        return AgentResponse(kind=ResponseKind.ERROR, text=f"Error processing message: {detail}")
