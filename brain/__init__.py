"""
brain/ — Generation gateway

Public API:
    from brain import GeminiClient, Content, GenerationResult
"""

from __future__ import annotations

from brain.gemini_client import GeminiClient
from brain.llm_client import BaseLLMClient
from brain.types import (
    Content,
    GenerationResult,
    Part,
    Role,
    TokenUsage,
    build_request_body,
)

__all__ = [
    "BaseLLMClient",
    "GeminiClient",
    "Content",
    "GenerationResult",
    "Part",
    "Role",
    "TokenUsage",
    "build_request_body",
]
