"""Shared FastAPI dependencies."""
from typing import Optional

from fastapi import Depends, Header, Request

from app.core.sessions import Session, SessionStore
from app.services.auth_service import authenticate
from app.services.media_store import MediaStore

SESSION_HEADER = "X-Session-Token"


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_media_store(request: Request) -> MediaStore:
    return request.app.state.media_store


def get_session_token(
    token: Optional[str] = Header(default=None, alias=SESSION_HEADER),
) -> Optional[str]:
    return token


def require_session(
    token: Optional[str] = Depends(get_session_token),
    store: SessionStore = Depends(get_session_store),
) -> Session:
    """Reject the request with AuthError unless it carries a live session."""
    return authenticate(store, token)
