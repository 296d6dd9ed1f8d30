"""PIN setup/verification and session lifecycle."""
import asyncio
import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session as DBSession

from app.core.config import settings
from app.core.exceptions import AuthError, ConflictError, StateError, ValidationError
from app.core.security import generate_session_token, hash_pin, is_valid_pin, verify_pin
from app.core.sessions import Session, SessionStore
from app.models.credential import Credential

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerifyResult:
    valid: bool
    session: Optional[Session] = None


def session_duration() -> timedelta:
    return timedelta(minutes=settings.SESSION_DURATION_MINUTES)


def is_setup(db: DBSession) -> bool:
    return db.query(Credential).first() is not None


def setup(db: DBSession, pin) -> None:
    """Store the PIN hash. Only allowed once."""
    if not is_valid_pin(pin):
        raise ValidationError("PIN must be exactly 4 digits")
    if is_setup(db):
        raise ConflictError("PIN already set up")

    db.add(Credential(pin_hash=hash_pin(pin)))
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent setup on the singleton row
        db.rollback()
        raise ConflictError("PIN already set up") from e
    logger.info("PIN configured")


def issue_session(store: SessionStore) -> Session:
    now = store.clock()
    session = Session(
        token=generate_session_token(),
        created_at=now,
        expires_at=now + session_duration(),
    )
    store.put(session)
    logger.info(f"New session created: {session.token[:8]}... expires at {session.expires_at.isoformat()}")
    return session


def verify(db: DBSession, store: SessionStore, pin) -> VerifyResult:
    """Check a PIN and open a session when it matches.

    A wrong PIN is a normal outcome, reported as ``VerifyResult(valid=False)``.
    """
    credential = db.query(Credential).first()
    if credential is None:
        raise StateError("PIN not set up")

    if not is_valid_pin(pin) or not verify_pin(pin, credential.pin_hash):
        logger.info("PIN verification failed")
        return VerifyResult(valid=False)
    return VerifyResult(valid=True, session=issue_session(store))


def authenticate(store: SessionStore, token: Optional[str]) -> Session:
    """Return the live session for ``token`` or raise AuthError.

    Expired sessions are evicted on lookup.
    """
    if not token:
        raise AuthError("missing")
    session = store.get(token)
    if session is None:
        raise AuthError("missing")
    if session.is_expired(store.clock()):
        store.evict(token)
        raise AuthError("expired")
    return session


def session_status(store: SessionStore, token: Optional[str]) -> dict:
    try:
        session = authenticate(store, token)
    except AuthError:
        return {"valid": False}
    return {"valid": True, "expiresAt": session.expires_at_ms}


def logout(store: SessionStore, token: Optional[str]) -> None:
    if token and store.evict(token):
        logger.info(f"Session closed: {token[:8]}...")


async def sweep_sessions_periodically(store: SessionStore, interval_seconds: float) -> None:
    """Evict expired sessions forever; cancelled at application shutdown."""
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            store.sweep()
        except Exception as e:
            logger.error(f"Session sweep failed: {e}", exc_info=True)
