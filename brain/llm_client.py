"""
brain/llm_client.py — Abstract Generation Client

Every generation backend subclasses BaseLLMClient and implements
generate() and close(). generate() is synchronous and must never raise:
transport and HTTP failures are returned as GenerationResult.failure().
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from brain.types import Content, GenerationResult


class BaseLLMClient(ABC):
    """
    Abstract base for generation clients.

    Subclasses must implement:
      - generate() -> send content blocks, return a GenerationResult
      - close()    -> release network resources
    """

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None):
        self.api_key = api_key
        self.base_url = base_url

    @abstractmethod
    def generate(self, contents: list[Content]) -> GenerationResult:
        """Call the generation API and return a normalised result."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Release connection pools and other network resources."""
        ...

    def __enter__(self) -> "BaseLLMClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"
