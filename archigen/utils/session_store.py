"""In-memory session store with idle TTL."""

import time
import uuid
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

from .logger import get_logger
from .errors import SessionNotFound

logger = get_logger(__name__)

T = TypeVar("T")


class SessionStore(Generic[T]):
    """Keeps live sessions in process memory; nothing is persisted."""

    def __init__(
        self,
        factory: Callable[[str], T],
        ttl_seconds: int = 3600,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize store.

        Args:
            factory: Builds a new session for a given id
            ttl_seconds: Idle time after which a session expires
            clock: Monotonic time source
        """
        self._sessions: Dict[str, Dict[str, Any]] = {}
        self._factory = factory
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self) -> T:
        """Create and register a fresh session."""
        self.cleanup_expired()

        session_id = uuid.uuid4().hex
        session = self._factory(session_id)
        self._sessions[session_id] = {
            "value": session,
            "expires_at": self._clock() + self.ttl_seconds,
        }

        logger.info(
            "Session created",
            extra={"session_id": session_id, "live_sessions": len(self._sessions)}
        )
        return session

    def get(self, session_id: str) -> T:
        """
        Get a live session and refresh its TTL.

        Raises:
            SessionNotFound: If unknown or expired
        """
        entry = self._sessions.get(session_id)
        if entry is None:
            raise SessionNotFound(session_id)

        now = self._clock()
        if now > entry["expires_at"]:
            del self._sessions[session_id]
            logger.info("Session expired", extra={"session_id": session_id})
            raise SessionNotFound(session_id)

        entry["expires_at"] = now + self.ttl_seconds
        return entry["value"]

    def delete(self, session_id: str):
        """Drop a session if present."""
        if self._sessions.pop(session_id, None) is not None:
            logger.info("Session deleted", extra={"session_id": session_id})

    def cleanup_expired(self) -> int:
        """Remove all expired sessions and return how many were dropped."""
        now = self._clock()
        expired = [
            session_id for session_id, entry in self._sessions.items()
            if now > entry["expires_at"]
        ]

        for session_id in expired:
            del self._sessions[session_id]

        if expired:
            logger.info(
                f"Session cleanup: {len(expired)} expired sessions removed",
                extra={"removed": len(expired)}
            )
        return len(expired)
