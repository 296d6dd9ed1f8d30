"""Authentication API."""
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_session_store, get_session_token
from app.core.database import get_db
from app.core.sessions import SessionStore
from app.schemas.auth import AuthStatusResponse, PinRequest, SessionStatusResponse, VerifyResponse
from app.services import auth_service

router = APIRouter()


@router.get("/status", response_model=AuthStatusResponse)
def get_status(db: Session = Depends(get_db)):
    """Whether a PIN has been configured."""
    return AuthStatusResponse(isSetup=auth_service.is_setup(db))


@router.get("/session", response_model=SessionStatusResponse, response_model_exclude_none=True)
def get_session(
    token: Optional[str] = Depends(get_session_token),
    store: SessionStore = Depends(get_session_store),
):
    """Check an existing session token without failing the request."""
    return auth_service.session_status(store, token)


@router.post("/setup")
def setup_pin(request: PinRequest, db: Session = Depends(get_db)):
    """Set the PIN (first time only)."""
    auth_service.setup(db, request.pin)
    return {"success": True}


@router.post("/verify", response_model=VerifyResponse, response_model_exclude_none=True)
def verify_pin(
    request: PinRequest,
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
):
    """Verify the PIN and open a session."""
    result = auth_service.verify(db, store, request.pin)
    if not result.valid:
        return VerifyResponse(valid=False)
    return VerifyResponse(
        valid=True,
        sessionToken=result.session.token,
        expiresAt=result.session.expires_at_ms,
    )


@router.post("/logout")
def logout(
    token: Optional[str] = Depends(get_session_token),
    store: SessionStore = Depends(get_session_store),
):
    auth_service.logout(store, token)
    return {"success": True}
