"""
agent/session.py — Per-Session State

One Session object exists per session id. Holds the capped conversation
history, the user's goals, and the most recently planned task.

The per-session lock is held by the Orchestrator for a whole turn, so
concurrent callers on the same id are serialized. Code that touches a
Session outside the orchestrator must take `session.lock` itself.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from observability.logger import get_logger

log = get_logger(__name__)

DEFAULT_MAX_HISTORY_PAIRS = 5

USER_PREFIX = "User: "
ASSISTANT_PREFIX = "Assistant: "


class TaskStatus(str, Enum):
    PLANNED = "PLANNED"


@dataclass
class Task:
    description: str
    subtasks: list[str] = field(default_factory=list)


class Session:
    """All runtime state for a single conversation."""

    def __init__(self, session_id: str, max_history_pairs: int = DEFAULT_MAX_HISTORY_PAIRS):
        if max_history_pairs < 1:
            raise ValueError("max_history_pairs must be >= 1")
        self.id = session_id
        self.created_at = time.time()
        self.max_history_pairs = max_history_pairs

        self.conversation_history: list[str] = []
        self.goals: list[str] = []
        self.current_task: Optional[Task] = None
        self.task_status: Optional[TaskStatus] = None

        self.lock = threading.RLock()

        log.debug("session.created", session_id=session_id)

    # ── History ───────────────────────────────────────────────────────────────

    def record_exchange(self, user_message: str, assistant_reply: str) -> None:
        """Append one User/Assistant pair, evicting the oldest pairs past the cap."""
        self.conversation_history.append(USER_PREFIX + user_message)
        self.conversation_history.append(ASSISTANT_PREFIX + assistant_reply)

        dropped = 0
        while len(self.conversation_history) > self.max_history_pairs * 2:
            del self.conversation_history[:2]
            dropped += 1
        if dropped:
            log.debug("session.history_evicted", session_id=self.id, pairs=dropped)

    @property
    def has_history(self) -> bool:
        return bool(self.conversation_history)

    # ── Goals ─────────────────────────────────────────────────────────────────

    def add_goal(self, goal: str) -> None:
        self.goals.append(goal)
        log.info("session.goal_added", session_id=self.id, goals=len(self.goals))

    # ── Task ──────────────────────────────────────────────────────────────────

    def set_task(self, description: str, subtasks: list[str]) -> Task:
        """Replace the current task and mark it planned."""
        self.current_task = Task(description=description, subtasks=list(subtasks))
        self.task_status = TaskStatus.PLANNED
        log.info(
            "session.task_set",
            session_id=self.id,
            task=description[:80],
            steps=len(subtasks),
        )
        return self.current_task

    # ── Summary ───────────────────────────────────────────────────────────────

    def status_summary(self) -> dict:
        return {
            "session_id": self.id,
            "history_entries": len(self.conversation_history),
            "goals": len(self.goals),
            "current_task": self.current_task.description if self.current_task else None,
            "task_status": self.task_status.value if self.task_status else None,
            "uptime_seconds": round(time.time() - self.created_at, 1),
        }

    def __repr__(self) -> str:
        return (f"<Session id={self.id} history={len(self.conversation_history)} "
                f"goals={len(self.goals)}>")
