"""In-memory store of analysis sessions."""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable

from analyzers.base import BaseCritiqueGenerator
from config import settings
from pipeline.exceptions import SessionLimitError, SessionNotFoundError
from pipeline.session import AnalysisSession

logger = logging.getLogger(__name__)


class SessionRegistry:
    """
    Handles creation, lookup and removal of sessions. Nothing is persisted.

    Sessions untouched for longer than the TTL are evicted when a new one
    is created, unless they still have an analysis running.
    """

    def __init__(
        self,
        max_sessions: int | None = None,
        generator_factory: Callable[[], BaseCritiqueGenerator] | None = None,
        ttl_seconds: float | None = None,
    ):
        self.max_sessions = max_sessions or settings.max_sessions
        self.generator_factory = generator_factory
        if ttl_seconds is None:
            ttl_seconds = settings.session_ttl_seconds
        self.ttl = timedelta(seconds=ttl_seconds)
        self._sessions: dict[uuid.UUID, AnalysisSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self) -> AnalysisSession:
        """Create and register a new session."""
        self.evict_expired()

        if len(self._sessions) >= self.max_sessions:
            raise SessionLimitError(f"Session limit of {self.max_sessions} reached")

        generator = self.generator_factory() if self.generator_factory else None
        session = AnalysisSession(generator=generator)
        self._sessions[session.id] = session
        logger.info(f"Created session {session.id}")
        return session

    def get(self, session_id: uuid.UUID) -> AnalysisSession:
        """Retrieve a session by its ID."""
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(f"Session {session_id} not found")
        return session

    def remove(self, session_id: uuid.UUID) -> None:
        """Drop a session, cancelling any analysis it still has running."""
        session = self.get(session_id)
        session.cancel()
        del self._sessions[session_id]
        logger.info(f"Removed session {session_id}")

    def evict_expired(self, now: datetime | None = None) -> int:
        """
        Drop idle or complete sessions last updated more than the TTL ago.

        Returns:
            Number of sessions evicted
        """
        cutoff = (now or datetime.now(timezone.utc)) - self.ttl
        expired = [
            session.id
            for session in self._sessions.values()
            if not session.is_analyzing and session.updated_at < cutoff
        ]

        for session_id in expired:
            del self._sessions[session_id]

        if expired:
            logger.info(f"Evicted {len(expired)} expired sessions")
        return len(expired)


registry = SessionRegistry()


def get_registry() -> SessionRegistry:
    """Dependency that provides the process-wide session registry."""
    return registry
