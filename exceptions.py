"""
exceptions.py — Shim Agent Error Hierarchy

All project-specific exceptions live here. Every layer raises typed
subclasses of ShimError internally; the orchestrator renders them as
reply text so nothing escapes process_message().

Import from here, not from individual modules:
    from exceptions import GatewayHTTPError, ToolExecutionError

Hierarchy:
    ShimError
    ├── ToolError
    │   ├── ToolNotFoundError
    │   └── ToolExecutionError
    ├── GatewayError
    │   ├── GatewayHTTPError
    │   └── GatewayTransportError
    └── ConfigError
"""

from __future__ import annotations

from typing import Optional


# ─────────────────────────────────────────────────────────────────────────────
# Root
# ─────────────────────────────────────────────────────────────────────────────

class ShimError(Exception):
    """Base class for all shim agent exceptions."""


# ─────────────────────────────────────────────────────────────────────────────
# Tool layer
# ─────────────────────────────────────────────────────────────────────────────

class ToolError(ShimError):
    """Base for tool dispatch errors."""

    def __init__(self, tool: str, message: str = "") -> None:
        self.tool = tool
        super().__init__(message or f"Tool '{tool}' failed")


class ToolNotFoundError(ToolError):
    """Requested tool is not registered in the ToolRegistry."""

    def __init__(self, tool: str) -> None:
        super().__init__(tool, f"tool '{tool}' is not available")


class ToolExecutionError(ToolError):
    """A tool raised while executing."""


# ─────────────────────────────────────────────────────────────────────────────
# Generation gateway layer
# ─────────────────────────────────────────────────────────────────────────────

class GatewayError(ShimError):
    """Base for failures talking to the generation API."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        reason: str = "",
        body: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.body = body

    def render(self) -> str:
        """User-visible reply text for this failure."""
        return str(self)


class GatewayHTTPError(GatewayError):
    """The API answered with a non-success status code."""

    def __init__(self, status_code: int, reason: str = "", body: str = "") -> None:
        super().__init__(
            f"HTTP {status_code} {reason}".strip(),
            status_code=status_code,
            reason=reason,
            body=body,
        )

    def render(self) -> str:
        return f"Error: {self.status_code} - {self.reason}\nDetails: {self.body}"


class GatewayTransportError(GatewayError):
    """Connection, timeout or (de)serialization failure around the call."""

    def render(self) -> str:
        return f"Error executing request: {self}"


# ─────────────────────────────────────────────────────────────────────────────
# Configuration
# ─────────────────────────────────────────────────────────────────────────────

class ConfigError(ShimError):
    """Raised by Settings.validate_all() when one or more config problems are found."""
