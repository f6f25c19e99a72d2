from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from threading import Lock
from uuid import uuid4

from recipe_tracker.core.security import create_session_token, decode_session_token


@dataclass(frozen=True)
class ActiveSession:
    user_id: int
    username: str
    session_id: str
    token: str
    started_at: datetime = field(default_factory=datetime.utcnow)


class SessionManager:
    """Holds the one authenticated session of the running process.

    Opening a session replaces whatever session was active before it, so the
    last login wins. Nothing here is persisted.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._active: ActiveSession | None = None

    def open(self, *, user_id: int, username: str) -> ActiveSession:
        session_id = uuid4().hex
        token = create_session_token(user_id=user_id, username=username, session_id=session_id)
        session = ActiveSession(user_id=user_id, username=username, session_id=session_id, token=token)
        with self._lock:
            self._active = session
        return session

    def close(self) -> None:
        with self._lock:
            self._active = None

    def current(self, token: str | None = None) -> ActiveSession | None:
        with self._lock:
            session = self._active

        if session is None:
            return None

        if token is not None:
            payload = decode_session_token(token)
            if not payload or payload.get("sid") != session.session_id:
                return None

        return session
