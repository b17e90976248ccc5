"""
agent/context_builder.py — Context Builder

Assembles the content blocks sent to the generation API each turn:

    1. system  "Current context:" + task + goals   (always present)
    2. user    "Previous conversation:" + history  (only with history)
    3. user    the new message, verbatim

History is already capped by the Session, so nothing is trimmed here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from brain.types import Content
from observability.logger import get_logger

if TYPE_CHECKING:
    from agent.session import Session

log = get_logger(__name__)

CONTEXT_HEADER = "Current context:\n"
GOALS_HEADER = "Active goals:\n"
HISTORY_HEADER = "Previous conversation:\n"


class ContextBuilder:
    """Builds the ordered list of content blocks for one conversational turn."""

    def build(self, session: "Session", user_message: str) -> list[Content]:
        contents: list[Content] = [Content.system(self._build_system_context(session))]

        if session.has_history:
            contents.append(Content.user(self._build_history(session)))

        contents.append(Content.user(user_message))

        log.debug(
            "context_builder.built",
            session_id=session.id,
            blocks=len(contents),
            history_entries=len(session.conversation_history),
            goals=len(session.goals),
            has_task=session.current_task is not None,
        )
        return contents

    def _build_system_context(self, session: "Session") -> str:
        context = CONTEXT_HEADER
        if session.current_task is not None:
            status = session.task_status.value if session.task_status else None
            context += f"Current task: {session.current_task.description}\n"
            context += f"Task status: {status}\n"
        if session.goals:
            context += GOALS_HEADER
            for goal in session.goals:
                context += f"- {goal}\n"
        return context

    def _build_history(self, session: "Session") -> str:
        return HISTORY_HEADER + "\n".join(session.conversation_history)
