"""
agent/session_store.py — Centralized Session Store

Owns all Session objects. Maps session_id → Session.
A single threading.Lock makes get-or-create and remove atomic, so two
callers racing on a new id always end up sharing one Session.

Sessions never expire; ids accumulate until remove() is called.
"""

from __future__ import annotations

import threading
from typing import Optional

from agent.session import DEFAULT_MAX_HISTORY_PAIRS, Session
from observability.logger import get_logger

log = get_logger(__name__)


class SessionStore:
    """Thread-safe keyed store of sessions, created lazily on first reference."""

    def __init__(self, max_history_pairs: int = DEFAULT_MAX_HISTORY_PAIRS):
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()
        self._max_history_pairs = max_history_pairs

    def get(self, session_id: str) -> Optional[Session]:
        """Get a session by ID, or None if not found."""
        with self._lock:
            return self._sessions.get(session_id)

    def get_or_create(self, session_id: str) -> Session:
        """Return the session for this id, creating it if absent."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                session = Session(session_id, max_history_pairs=self._max_history_pairs)
                self._sessions[session_id] = session
                log.info("session_store.created", session_id=session_id)
            return session

    def remove(self, session_id: str) -> bool:
        """Delete a session outright. Returns True if it existed."""
        with self._lock:
            existed = self._sessions.pop(session_id, None) is not None
        if existed:
            log.info("session_store.removed", session_id=session_id)
        return existed

    def list_sessions(self) -> list[str]:
        """Return all active session IDs."""
        with self._lock:
            return list(self._sessions.keys())

    def __contains__(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
