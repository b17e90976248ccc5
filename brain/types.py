"""
brain/types.py — Generation Data Models

Shared types between the context builder, the generation client and the
orchestrator. Content blocks mirror the generateContent request shape:
{"role": ..., "parts": [{"text": ...}]}.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from exceptions import GatewayError


# ─────────────────────────────────────────────────────────────────────────────
# Enums
# ─────────────────────────────────────────────────────────────────────────────


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"


# ─────────────────────────────────────────────────────────────────────────────
# Content blocks
# ─────────────────────────────────────────────────────────────────────────────


class Part(BaseModel):
    text: str


class Content(BaseModel):
    """A role-tagged block of prompt text. Always carries exactly one part."""
    role: Role
    parts: list[Part] = Field(default_factory=list)

    @classmethod
    def system(cls, text: str) -> "Content":
        return cls(role=Role.SYSTEM, parts=[Part(text=text)])

    @classmethod
    def user(cls, text: str) -> "Content":
        return cls(role=Role.USER, parts=[Part(text=text)])

    @property
    def text(self) -> str:
        return self.parts[0].text if self.parts else ""

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


def build_request_body(contents: list[Content]) -> dict[str, Any]:
    """Serialize content blocks into the generateContent request body."""
    return {"contents": [c.to_wire() for c in contents]}


# ─────────────────────────────────────────────────────────────────────────────
# Generation result
# ─────────────────────────────────────────────────────────────────────────────


class TokenUsage(BaseModel):
    input_tokens: int = 0
    output_tokens: int = 0


class GenerationResult(BaseModel):
    """
    Outcome of one generate() call. Exactly one of text / error is set.

    Clients never raise past generate(); failures come back here and the
    orchestrator renders them via reply_text.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    text: Optional[str] = None
    error: Optional[GatewayError] = None
    usage: TokenUsage = Field(default_factory=TokenUsage)
    model: str = ""

    @classmethod
    def success(cls, text: str, model: str = "", usage: Optional[TokenUsage] = None) -> "GenerationResult":
        return cls(text=text, model=model, usage=usage or TokenUsage())

    @classmethod
    def failure(cls, error: GatewayError, model: str = "") -> "GenerationResult":
        return cls(error=error, model=model)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def status_code(self) -> Optional[int]:
        return self.error.status_code if self.error else None

    @property
    def reply_text(self) -> str:
        """Text to hand back to the user: the generated text or the rendered error."""
        if self.error is not None:
            return self.error.render()
        return self.text or ""
