import logging
import os
import time
from collections import OrderedDict
from typing import Callable, Dict, Optional

from services.analysis_client import AnalysisClient
from services.meeting_session import MeetingSession

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL_SECONDS = 1800


class SessionNotFoundError(KeyError):
    """No live session with the requested id."""


class SessionStore:
    """In-memory registry of live meeting sessions.

    A session expires only after it has gone unused for ``ttl_seconds``; an
    open page keeps its session alive by polling it. Sessions are never
    persisted: a process restart or a page reload starts from an empty
    meeting.
    """

    def __init__(
        self,
        analysis_client: AnalysisClient,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        if ttl_seconds is None:
            ttl_seconds = float(os.getenv("SESSION_TTL_SECONDS", DEFAULT_SESSION_TTL_SECONDS))
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")

        self.analysis_client = analysis_client
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        # Ordered by last use, oldest first
        self._sessions: "OrderedDict[str, MeetingSession]" = OrderedDict()
        self._last_seen: Dict[str, float] = {}

    def create(self) -> MeetingSession:
        """Start a new session bound to the shared analysis client."""
        self.expire()
        session = MeetingSession(self.analysis_client)
        self._sessions[session.session_id] = session
        self._last_seen[session.session_id] = self._clock()
        logger.info(
            f"Session created: session_id={session.session_id}, "
            f"live_sessions={len(self._sessions)}"
        )
        return session

    def get(self, session_id: str) -> MeetingSession:
        """Look up a live session and mark it as used."""
        self.expire()
        try:
            session = self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(session_id) from None
        self._sessions.move_to_end(session_id)
        self._last_seen[session_id] = self._clock()
        return session

    def expire(self) -> int:
        """Drop sessions idle for longer than the TTL. Returns how many."""
        cutoff = self._clock() - self.ttl_seconds
        expired = []
        for session_id, session in self._sessions.items():
            if self._last_seen[session_id] > cutoff:
                break
            # An analysis in flight keeps its session alive
            if not session.is_processing:
                expired.append(session_id)

        for session_id in expired:
            del self._sessions[session_id]
            del self._last_seen[session_id]
            logger.info(f"Session expired: session_id={session_id}")
        return len(expired)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
