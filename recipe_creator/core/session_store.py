"""In-memory session storage."""

import logging
import uuid
from collections import OrderedDict
from typing import Optional, Tuple

from recipe_creator.models.session import SessionState

logger = logging.getLogger(__name__)


def generate_session_id() -> str:
    """Generate an opaque session ID."""
    return uuid.uuid4().hex


class SessionStore:
    """
    Keeps one SessionState per browser, in process memory.

    Nothing is persisted. When more than ``max_sessions`` exist the least
    recently used one is dropped.
    """

    def __init__(self, max_sessions: int = 1000):
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, SessionState]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, session_id: Optional[str]) -> Optional[SessionState]:
        if not session_id or session_id not in self._sessions:
            return None
        self._sessions.move_to_end(session_id)
        return self._sessions[session_id]

    def create(self) -> Tuple[str, SessionState]:
        session_id = generate_session_id()
        state = SessionState()
        self._sessions[session_id] = state

        while len(self._sessions) > self.max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            logger.info("Evicted session", extra={"session_id": evicted[:8]})

        return session_id, state

    def get_or_create(self, session_id: Optional[str]) -> Tuple[str, SessionState, bool]:
        """
        Look up a session, creating a fresh one if it is unknown.

        Returns:
            Tuple of (session ID, state, whether it was created)
        """
        state = self.get(session_id)
        if state is not None:
            return session_id, state, False
        new_id, state = self.create()
        return new_id, state, True
