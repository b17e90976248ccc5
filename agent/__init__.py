"""
agent/ — Agent Core

Public API:
    from agent import Orchestrator, Session, SessionStore

Component overview:
    Session             Per-session state (capped history, goals, planned task)
    SessionStore        Thread-safe session_id → Session map, lazy creation
    classify            Keyword turn classifier (task / tool / conversation)
    ContextBuilder      Assembles the content blocks sent to the generation API
    ResponseSynthesizer Formats route outputs as AgentResponse
    Orchestrator        Per-message routing; process_message / set_goal / clear_history
"""

from agent.classifier import Classification, TurnKind, classify
from agent.context_builder import ContextBuilder
from agent.orchestrator import Orchestrator
from agent.response_synthesizer import AgentResponse, ResponseKind, ResponseSynthesizer
from agent.session import Session, Task, TaskStatus
from agent.session_store import SessionStore

__all__ = [
    "Orchestrator",
    "Session",
    "SessionStore",
    "Task",
    "TaskStatus",
    "Classification",
    "TurnKind",
    "classify",
    "ContextBuilder",
    "AgentResponse",
    "ResponseKind",
    "ResponseSynthesizer",
]
