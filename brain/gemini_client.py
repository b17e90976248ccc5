"""
brain/gemini_client.py — Google Gemini Generation Client

Talks to the generateContent REST endpoint directly over httpx:

    POST {base_url}/models/{model}:generateContent?key=<API key>
    {"contents": [{"role": "...", "parts": [{"text": "..."}]}, ...]}

The reply text is read from candidates[0].content.parts[0].text.
One synchronous call per generate(), bounded by a timeout, no retries.
Redirects are followed; a 307/308 replays the POST body at the new location.

Get key: https://makersuite.google.com/app/apikey
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from brain.llm_client import BaseLLMClient
from brain.types import Content, GenerationResult, TokenUsage, build_request_body
from exceptions import GatewayError, GatewayHTTPError, GatewayTransportError
from observability.logger import get_logger

log = get_logger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1"
DEFAULT_MODEL = "gemini-1.5-pro"
DEFAULT_TIMEOUT = 30.0

NO_RESPONSE_TEXT = "No response generated"


class GeminiClient(BaseLLMClient):
    """
    Gemini REST client.

    `transport` is passed straight to httpx.Client; tests hand in an
    httpx.MockTransport to avoid the network.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        super().__init__(api_key=api_key, base_url=base_url.rstrip("/"))
        self.model = model
        self.timeout = timeout
        self._client = httpx.Client(timeout=timeout, transport=transport, follow_redirects=True)

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def generate(self, contents: list[Content]) -> GenerationResult:
        log.debug("gemini.generate.start", model=self.model, blocks=len(contents))

        try:
            data = self._post(build_request_body(contents))
        except GatewayError as e:
            log.warning(
                "gemini.generate.failed",
                model=self.model,
                error_type=type(e).__name__,
                status_code=e.status_code,
                error=str(e),
            )
            return GenerationResult.failure(e, model=self.model)

        text = _extract_text(data)
        usage = _extract_usage(data)
        log.debug(
            "gemini.generate.complete",
            model=self.model,
            chars=len(text),
            tokens_in=usage.input_tokens,
            tokens_out=usage.output_tokens,
        )
        return GenerationResult.success(text, model=self.model, usage=usage)

    def close(self) -> None:
        self._client.close()
        log.debug("gemini.closed")

    # ── Private helpers ───────────────────────────────────────────────────────

    def _post(self, payload: dict[str, Any]) -> Any:
        """Issue the request and decode the body. Raises GatewayError subclasses only."""
        try:
            response = self._client.post(
                self.endpoint,
                params={"key": self.api_key or ""},
                json=payload,
            )
        except httpx.TimeoutException as e:
            raise GatewayTransportError(
                f"request timed out after {self.timeout:g}s ({type(e).__name__})"
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise GatewayTransportError(str(e) or type(e).__name__) from e
        except (TypeError, ValueError) as e:
            raise GatewayTransportError(f"could not serialize request: {e}") from e

        if not response.is_success:
            raise GatewayHTTPError(
                status_code=response.status_code,
                reason=response.reason_phrase,
                body=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise GatewayTransportError(f"could not decode response body: {e}") from e

        if not isinstance(data, dict):
            raise GatewayTransportError(
                f"unexpected response payload of type {type(data).__name__}"
            )
        return data


def _first(seq: Any) -> Any:
    if isinstance(seq, list) and seq:
        return seq[0]
    return None


def _extract_text(data: dict[str, Any]) -> str:
    """Walk candidates[0].content.parts[0].text, falling back to the placeholder."""
    candidate = _first(data.get("candidates"))
    content = candidate.get("content") if isinstance(candidate, dict) else None
    part = _first(content.get("parts")) if isinstance(content, dict) else None
    text = part.get("text") if isinstance(part, dict) else None
    if not isinstance(text, str):
        return NO_RESPONSE_TEXT
    return text


def _extract_usage(data: dict[str, Any]) -> TokenUsage:
    um = data.get("usageMetadata")
    if not isinstance(um, dict):
        return TokenUsage()
    return TokenUsage(
        input_tokens=um.get("promptTokenCount", 0) or 0,
        output_tokens=um.get("candidatesTokenCount", 0) or 0,
    )
