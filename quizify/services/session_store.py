"""
In-memory registry of quiz sessions
"""
from typing import Callable, Dict
from loguru import logger

from quizify.services.quiz_session import QuizSession


class SessionStore:
    """
    Keeps QuizSession objects in process memory

    Nothing is persisted; restarting the service drops every session. At most
    ``max_sessions`` are kept: creating one more evicts the least recently
    used session.
    """

    def __init__(self, session_factory: Callable[[], QuizSession], max_sessions: int = 1000):
        self._session_factory = session_factory
        self._max_sessions = max_sessions
        self._sessions: Dict[str, QuizSession] = {}

    def create(self) -> QuizSession:
        while len(self._sessions) >= self._max_sessions:
            evicted_id = next(iter(self._sessions))
            del self._sessions[evicted_id]
            logger.info(f"♻️ Evicted quiz session {evicted_id[:8]} (limit {self._max_sessions})")

        session = self._session_factory()
        self._sessions[session.id] = session
        logger.info(f"🆕 Created quiz session {session.id[:8]}")
        return session

    def get(self, session_id: str) -> QuizSession:
        """
        Raises:
            KeyError: If the session does not exist
        """
        try:
            session = self._sessions.pop(session_id)
        except KeyError:
            raise KeyError(f"Quiz session {session_id} not found") from None
        # Most recently used sessions live at the end
        self._sessions[session_id] = session
        return session

    def delete(self, session_id: str) -> None:
        self.get(session_id)
        del self._sessions[session_id]
        logger.info(f"🗑️ Deleted quiz session {session_id[:8]}")

    def __len__(self) -> int:
        return len(self._sessions)
