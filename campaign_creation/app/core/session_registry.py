"""In-process registry of campaign creation sessions."""

from __future__ import annotations

from threading import Lock
from uuid import UUID

from ..domain.state import is_terminal
from .campaign_session import CampaignCreationSession
from .exceptions import SessionLimitError, SessionNotFoundError
from .log_config import logger


class InMemorySessionRegistry:
    """Keep sessions by id for the lifetime of the process. Nothing is persisted.

    With `max_sessions` set, a full registry evicts every published and errored session before
    it refuses to open a new one.
    """

    def __init__(self, max_sessions: int | None = None) -> None:
        self._lock = Lock()
        self._sessions: dict[UUID, CampaignCreationSession] = {}
        self._max_sessions = max_sessions

    def create(self) -> CampaignCreationSession:
        session = CampaignCreationSession()
        with self._lock:
            if self._max_sessions is not None and len(self._sessions) >= self._max_sessions:
                self._evict_terminal()
                if len(self._sessions) >= self._max_sessions:
                    raise SessionLimitError(self._max_sessions)
            if session.session_id in self._sessions:
                msg = f'Session already exists: {session.session_id}'
                raise ValueError(msg)
            self._sessions[session.session_id] = session
        return session

    def get(self, session_id: UUID) -> CampaignCreationSession:
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def remove(self, session_id: UUID) -> CampaignCreationSession:
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def session_ids(self) -> list[UUID]:
        with self._lock:
            return list(self._sessions)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _evict_terminal(self) -> None:
        finished = [
            session_id
            for session_id, session in self._sessions.items()
            if is_terminal(session.state)
        ]
        for session_id in finished:
            del self._sessions[session_id]
        if finished:
            logger.info('Evicted finished campaign creation sessions', count=len(finished))
