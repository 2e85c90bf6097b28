"""
Server-side login sessions.

A session maps an opaque random id (the cookie value) to a user id and an
expiry time. Expired sessions are treated as missing and removed on read.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import Callable, Dict, Optional
import logging
import secrets

from pydantic import BaseModel

logger = logging.getLogger(__name__)

SESSIONS = "sessions"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Session(BaseModel):
    id: str
    user_id: int
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


class SessionStore(ABC):
    """
    Contract:
    - create() always issues a fresh id (no session fixation).
    - get() returns None for unknown or expired ids.
    - delete() is a no-op for unknown ids.
    """

    def __init__(self, ttl_minutes: int, clock: Callable[[], datetime] = _utcnow):
        self.ttl = timedelta(minutes=ttl_minutes)
        self.clock = clock

    def create(self, user_id: int) -> Session:
        session = Session(
            id=secrets.token_urlsafe(32),
            user_id=user_id,
            expires_at=self.clock() + self.ttl,
        )
        self._save(session)
        logger.info(f"Session created for user {user_id}")
        return session

    def get(self, session_id: Optional[str]) -> Optional[Session]:
        if not session_id:
            return None
        session = self._load(session_id)
        if session is None:
            return None
        if session.is_expired(self.clock()):
            self.delete(session_id)
            return None
        return session

    @abstractmethod
    def delete(self, session_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def _save(self, session: Session) -> None:
        raise NotImplementedError

    @abstractmethod
    def _load(self, session_id: str) -> Optional[Session]:
        raise NotImplementedError


class MemorySessionStore(SessionStore):

    def __init__(self, ttl_minutes: int, clock: Callable[[], datetime] = _utcnow):
        super().__init__(ttl_minutes, clock)
        self._sessions: Dict[str, Session] = {}
        self._lock = Lock()

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def _save(self, session: Session) -> None:
        now = self.clock()
        with self._lock:
            # Abandoned sessions are never read again; drop them here.
            expired = [sid for sid, s in self._sessions.items() if s.is_expired(now)]
            for sid in expired:
                del self._sessions[sid]
            self._sessions[session.id] = session
        if expired:
            logger.debug(f"Purged {len(expired)} expired session(s)")

    def _load(self, session_id: str) -> Optional[Session]:
        with self._lock:
            return self._sessions.get(session_id)

    def count(self) -> int:
        return len(self._sessions)


class FirestoreSessionStore(SessionStore):
    """Sessions kept in the Firestore `sessions` collection, keyed by session id."""

    def __init__(self, db, ttl_minutes: int, clock: Callable[[], datetime] = _utcnow):
        super().__init__(ttl_minutes, clock)
        self.db = db

    def delete(self, session_id: str) -> None:
        self.db.collection(SESSIONS).document(session_id).delete()

    def _save(self, session: Session) -> None:
        self.db.collection(SESSIONS).document(session.id).set(
            {"user_id": session.user_id, "expires_at": session.expires_at}
        )

    def _load(self, session_id: str) -> Optional[Session]:
        doc = self.db.collection(SESSIONS).document(session_id).get()
        if not doc.exists:
            return None
        data = doc.to_dict() or {}
        expires_at = data.get("expires_at")
        if isinstance(expires_at, datetime) and expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return Session(id=session_id, user_id=data["user_id"], expires_at=expires_at)
