"""
agent/orchestrator.py — Agent Orchestrator

Entry point for every user turn. For each message the orchestrator:
    1. Fetches or lazily creates the session   (SessionStore)
    2. Classifies the turn                      (classifier.classify)
    3. Routes it:
         complex task  → fixed plan from the planner, stored on the session
         tool call     → ToolRegistry tool, output returned verbatim
         conversation  → ContextBuilder + generation client, history updated
    4. Formats the reply                        (ResponseSynthesizer)

process_message() never raises: tool failures, gateway failures and
anything unexpected all come back as reply text.

The session's lock is held for the whole turn, so two callers using the
same session id are served one after the other. clear_history() deletes
the session from the store; a turn already running on it finishes
against the detached object and its updates are discarded with it.

Usage:
    orc = Orchestrator.from_settings(settings)
    reply = orc.process_message("calculate 3 + 4", "demo-session")
    orc.shutdown()
"""

from __future__ import annotations

import time
from typing import Optional

from agent.classifier import TurnKind, classify
from agent.context_builder import ContextBuilder
from agent.response_synthesizer import AgentResponse, ResponseSynthesizer
from agent.session import DEFAULT_MAX_HISTORY_PAIRS, Session
from agent.session_store import SessionStore
from brain.llm_client import BaseLLMClient
from exceptions import ToolExecutionError, ToolNotFoundError
from observability.logger import bind_session, clear_session, get_logger
from tools.tool_registry import ToolRegistry

log = get_logger(__name__)


class Orchestrator:
    """
    Coordinates classification, tool dispatch and generation for each turn.

    Inject all dependencies via constructor; use from_settings() for
    convenience when wiring up the application.
    """

    def __init__(
        self,
        llm_client: BaseLLMClient,
        tool_registry: Optional[ToolRegistry] = None,
        session_store: Optional[SessionStore] = None,
        context_builder: Optional[ContextBuilder] = None,
        max_history_pairs: int = DEFAULT_MAX_HISTORY_PAIRS,
    ):
        self._llm = llm_client
        self._registry = tool_registry or ToolRegistry.default()
        self._store = session_store or SessionStore(max_history_pairs=max_history_pairs)
        self._ctx = context_builder or ContextBuilder()
        self._synth = ResponseSynthesizer()

    @classmethod
    def from_settings(cls, settings, transport=None) -> "Orchestrator":
        """Wire the default stack from a config.settings.Settings instance."""
        from brain.gemini_client import GeminiClient

        client = GeminiClient(
            api_key=settings.google_api_key or "",
            model=settings.llm.model,
            base_url=settings.llm.base_url,
            timeout=settings.llm.timeout_seconds,
            transport=transport,
        )
        search_cfg = settings.tools.web_search
        registry = ToolRegistry.default(
            web_search_live=search_cfg.live,
            web_search_max_results=search_cfg.max_results,
            web_search_timeout=search_cfg.timeout_seconds,
        )
        return cls(
            llm_client=client,
            tool_registry=registry,
            max_history_pairs=settings.agent.max_history_pairs,
        )

    @property
    def sessions(self) -> SessionStore:
        return self._store

    @property
    def tools(self) -> ToolRegistry:
        return self._registry

    # ─────────────────────────────────────────────────────────────────────────
    # Public surface
    # ─────────────────────────────────────────────────────────────────────────

    def process_message(self, message: str, session_id: str) -> str:
        """Handle one user turn and return the reply text. Never raises."""
        return self.respond(message, session_id).text

    def respond(self, message: str, session_id: str) -> AgentResponse:
        """Like process_message() but returns the full AgentResponse."""
        bind_session(session_id)
        t0 = time.monotonic()
        try:
            session = self._store.get_or_create(session_id)
            with session.lock:
                response = self._route(message, session)
            log.info(
                "orchestrator.turn_done",
                kind=response.kind.value,
                ms=round((time.monotonic() - t0) * 1000),
            )
            return response
        except Exception as e:
            log.error("orchestrator.turn_error", error=str(e), exc_info=True)
            return self._synth.error(str(e) or type(e).__name__)
        finally:
            clear_session()

    def set_goal(self, session_id: str, goal: str) -> None:
        session = self._store.get_or_create(session_id)
        with session.lock:
            session.add_goal(goal)

    def clear_history(self, session_id: str) -> None:
        """Delete the session entirely: history, goals and task go together."""
        self._store.remove(session_id)

    def shutdown(self) -> None:
        """Release network resources held by the generation client."""
        self._llm.close()
        log.info("orchestrator.shutdown", sessions=len(self._store))

    # ─────────────────────────────────────────────────────────────────────────
    # Routes
    # ─────────────────────────────────────────────────────────────────────────

    def _route(self, message: str, session: Session) -> AgentResponse:
        classification = classify(message)
        log.info(
            "orchestrator.turn_start",
            route=classification.kind.value,
            tool=classification.tool_name,
            user_message=message[:120],
        )

        if classification.kind == TurnKind.COMPLEX_TASK:
            return self._handle_complex_task(message, session)
        if classification.kind == TurnKind.TOOL_CALL:
            return self._dispatch_tool(classification.tool_name, message, session)
        return self._handle_conversation(message, session)

    def _handle_complex_task(self, message: str, session: Session) -> AgentResponse:
        subtasks = self._registry.planner.plan(message)
        session.set_task(message, subtasks)
        return self._synth.plan(subtasks)

    def _dispatch_tool(self, tool_name: str, message: str, session: Session) -> AgentResponse:
        try:
            output = self._registry.execute(tool_name, message, session)
        except ToolNotFoundError:
            log.warning("orchestrator.tool_not_found", tool=tool_name)
            return self._synth.tool_not_found(tool_name)
        except ToolExecutionError as e:
            log.warning("orchestrator.tool_failed", tool=tool_name, error=str(e), exc_info=True)
            return self._synth.tool_error(e)

        log.debug("orchestrator.tool_done", tool=tool_name, chars=len(output))
        return self._synth.tool_result(tool_name, output)

    def _handle_conversation(self, message: str, session: Session) -> AgentResponse:
        contents = self._ctx.build(session, message)
        result = self._llm.generate(contents)

        if result.ok:
            session.record_exchange(message, result.text or "")
        else:
            log.warning(
                "orchestrator.generation_failed",
                status_code=result.status_code,
                error=str(result.error),
            )
        return self._synth.from_generation(result)
