"""
FastAPI dependencies.

The store, session store and settings are attached to `app.state` by the
app factory; handlers receive them through these dependencies instead of
importing module-level singletons.
"""

from typing import Optional

from fastapi import Depends, Request

from app.core.errors import AuthenticationError
from app.models.user import User
from app.services.auth_service import AuthService
from app.services.session_store import SessionStore
from app.services.storage import BaseStore


def get_store(request: Request) -> BaseStore:
    return request.app.state.store


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.sessions


def get_auth_service(store: BaseStore = Depends(get_store)) -> AuthService:
    return AuthService(store)


def get_session_id(request: Request) -> Optional[str]:
    return request.cookies.get(request.app.state.settings.SESSION_COOKIE_NAME)


def current_user(
    session_id: Optional[str] = Depends(get_session_id),
    sessions: SessionStore = Depends(get_session_store),
    store: BaseStore = Depends(get_store),
) -> Optional[User]:
    """The logged-in user, or None. The store is only consulted for a live session."""
    session = sessions.get(session_id)
    if session is None:
        return None
    user = store.get_user(session.user_id)
    if user is None:
        sessions.delete(session.id)
    return user


def require_user(user: Optional[User] = Depends(current_user)) -> User:
    """Guard for mutation endpoints: 401 when no valid session is attached."""
    if user is None:
        raise AuthenticationError()
    return user
