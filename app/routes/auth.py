"""
Authentication endpoints - admin username/password login with a
server-side session referenced by an HttpOnly cookie.
"""

from typing import Optional
import logging

from fastapi import APIRouter, Depends, Request, Response

from app.core.deps import (
    get_auth_service,
    get_session_id,
    get_session_store,
    require_user,
)
from app.models.user import LoginRequest, User, UserResponse
from app.services.auth_service import AuthService
from app.services.session_store import SessionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Authentication"])


@router.post("/login", response_model=UserResponse)
def login(
    body: LoginRequest,
    request: Request,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
    sessions: SessionStore = Depends(get_session_store),
):
    """
    Verify credentials and start a session.

    Wrong password and unknown username both return 401 "Invalid credentials";
    no session is created in either case.
    """
    user = auth.login(body.username, body.password)

    previous = get_session_id(request)
    if previous:
        sessions.delete(previous)

    session = sessions.create(user.id)
    config = request.app.state.settings
    response.set_cookie(
        key=config.SESSION_COOKIE_NAME,
        value=session.id,
        max_age=int(sessions.ttl.total_seconds()),
        httponly=True,
        samesite="lax",
        secure=config.SESSION_COOKIE_SECURE,
    )
    return user.public()


@router.post("/logout")
def logout(
    request: Request,
    response: Response,
    user: User = Depends(require_user),
    session_id: Optional[str] = Depends(get_session_id),
    sessions: SessionStore = Depends(get_session_store),
):
    sessions.delete(session_id)
    response.delete_cookie(request.app.state.settings.SESSION_COOKIE_NAME)
    logger.info(f"User {user.id} logged out")
    return {"success": True}


@router.get("/user", response_model=UserResponse)
def get_current_user(user: User = Depends(require_user)):
    """The logged-in admin, or 401."""
    return user.public()
