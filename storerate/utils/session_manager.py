"""
Session Manager Module
Server-side sessions: an explicit mapping from session token to user id
with a fixed expiry measured from creation (no sliding renewal)
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional

from storerate.config import SESSION_TTL_HOURS
from storerate.core.auth import generate_session_token
from storerate.utils.clock import utcnow

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """A single token-to-user binding"""
    token: str
    user_id: str
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


class SessionStore:
    """
    Manages all login sessions
    - One entry per token, many tokens per user allowed
    - Expiry fixed at creation time
    - Safe to share between threadpool workers
    """

    def __init__(
        self,
        ttl: timedelta = timedelta(hours=SESSION_TTL_HOURS),
        clock: Callable[[], datetime] = utcnow,
    ):
        self.ttl = ttl
        self.clock = clock
        self._sessions: Dict[str, Session] = {}  # token -> Session
        self._lock = threading.Lock()
        logger.info(f"[Session Store] Initialized (ttl={ttl})")

    def create(self, user_id: str) -> Session:
        """
        Bind a new token to a user

        Expired sessions are dropped on every create, so abandoned logins
        do not accumulate.

        Args:
            user_id: Authenticated user's id

        Returns:
            The new Session
        """
        now = self.clock()
        session = Session(
            token=generate_session_token(),
            user_id=user_id,
            created_at=now,
            expires_at=now + self.ttl,
        )
        with self._lock:
            expired = self._drop_expired(now)
            self._sessions[session.token] = session
        if expired:
            logger.info(f"[Session Store] Dropped {expired} expired session(s)")
        logger.info(f"[Session Store] Created session for user {user_id}")
        return session

    def _drop_expired(self, now: datetime) -> int:
        """Remove expired entries, caller must hold the lock"""
        expired = [token for token, session in self._sessions.items() if session.is_expired(now)]
        for token in expired:
            del self._sessions[token]
        return len(expired)

    def resolve(self, token: Optional[str]) -> Optional[str]:
        """
        Look up the user bound to a token

        Returns:
            user id, or None for unknown and expired tokens (expired ones are evicted)
        """
        if not token:
            return None
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return None
            if session.is_expired(self.clock()):
                del self._sessions[token]
                logger.info(f"[Session Store] Session for user {session.user_id} expired")
                return None
            return session.user_id

    def destroy(self, token: Optional[str]) -> bool:
        """Remove a session, True if it existed"""
        if not token:
            return False
        with self._lock:
            session = self._sessions.pop(token, None)
        if session is not None:
            logger.info(f"[Session Store] Destroyed session for user {session.user_id}")
        return session is not None

    def destroy_user(self, user_id: str, keep: Optional[str] = None) -> int:
        """
        Remove every session of a user except the token in ``keep``

        Returns:
            Number of sessions removed
        """
        with self._lock:
            tokens = [
                token for token, session in self._sessions.items()
                if session.user_id == user_id and token != keep
            ]
            for token in tokens:
                del self._sessions[token]
        if tokens:
            logger.info(f"[Session Store] Removed {len(tokens)} other session(s) of user {user_id}")
        return len(tokens)

    def purge_expired(self) -> int:
        """Drop all expired sessions, returns how many were dropped"""
        now = self.clock()
        with self._lock:
            return self._drop_expired(now)

    def count(self) -> int:
        """Number of stored sessions (expired ones included until purged)"""
        with self._lock:
            return len(self._sessions)
