"""Tests for PIN setup, verification and session checks."""
import asyncio
from datetime import timedelta

import pytest

from app.core.exceptions import AuthError, ConflictError, StateError, ValidationError
from app.models import Credential
from app.services import auth_service

from conftest import PIN


class TestSetup:
    """Tests for auth_service.setup."""

    @pytest.mark.parametrize("pin", ["123", "12345", "12a4", "", None, " 123", "１２３４"])
    def test_rejects_malformed_pin(self, db, pin):
        with pytest.raises(ValidationError):
            auth_service.setup(db, pin)
        assert not auth_service.is_setup(db)

    def test_stores_hash_not_pin(self, db):
        auth_service.setup(db, PIN)
        credential = db.query(Credential).one()
        assert credential.pin_hash != PIN
        assert auth_service.is_setup(db)

    def test_second_setup_conflicts(self, db):
        auth_service.setup(db, PIN)
        with pytest.raises(ConflictError):
            auth_service.setup(db, "0000")
        assert db.query(Credential).count() == 1


class TestVerify:
    """Tests for auth_service.verify."""

    def test_requires_setup(self, db, store):
        with pytest.raises(StateError):
            auth_service.verify(db, store, PIN)

    @pytest.mark.parametrize("pin", ["0000", "0042", "9999"])
    def test_setup_then_verify_same_pin(self, db, store, pin):
        auth_service.setup(db, pin)
        result = auth_service.verify(db, store, pin)
        assert result.valid
        assert len(result.session.token) == 64
        assert store.get(result.session.token) is result.session

    def test_wrong_pin_is_invalid_result(self, db, store):
        auth_service.setup(db, PIN)
        result = auth_service.verify(db, store, "1111")
        assert result.valid is False
        assert result.session is None
        assert len(store) == 0

    def test_malformed_pin_is_invalid_result(self, db, store):
        auth_service.setup(db, PIN)
        assert auth_service.verify(db, store, "abc").valid is False

    def test_session_lasts_one_hour(self, db, store, clock):
        auth_service.setup(db, PIN)
        session = auth_service.verify(db, store, PIN).session
        assert session.created_at == clock()
        assert session.expires_at - session.created_at == timedelta(hours=1)

    def test_tokens_are_unique(self, db, store):
        auth_service.setup(db, PIN)
        first = auth_service.verify(db, store, PIN).session.token
        second = auth_service.verify(db, store, PIN).session.token
        assert first != second


class TestAuthenticate:
    """Tests for auth_service.authenticate."""

    @pytest.fixture
    def session(self, db, store):
        auth_service.setup(db, PIN)
        return auth_service.verify(db, store, PIN).session

    def test_missing_token(self, store):
        with pytest.raises(AuthError) as exc:
            auth_service.authenticate(store, None)
        assert exc.value.reason == "missing"

    def test_unknown_token(self, store):
        with pytest.raises(AuthError) as exc:
            auth_service.authenticate(store, "deadbeef")
        assert exc.value.reason == "missing"

    def test_valid_until_expiry_inclusive(self, store, clock, session):
        clock.advance(hours=1)
        assert auth_service.authenticate(store, session.token) is session

    def test_expired_strictly_after_and_evicted(self, store, clock, session):
        clock.advance(hours=1, microseconds=1)
        with pytest.raises(AuthError) as exc:
            auth_service.authenticate(store, session.token)
        assert exc.value.reason == "expired"
        assert store.get(session.token) is None

    def test_repeated_calls_are_idempotent(self, store, session):
        for _ in range(3):
            assert auth_service.authenticate(store, session.token) is session
        assert len(store) == 1

    def test_session_status(self, store, clock, session):
        assert auth_service.session_status(store, session.token) == {
            "valid": True,
            "expiresAt": session.expires_at_ms,
        }
        clock.advance(hours=2)
        assert auth_service.session_status(store, session.token) == {"valid": False}

    def test_logout(self, store, session):
        auth_service.logout(store, session.token)
        auth_service.logout(store, session.token)
        with pytest.raises(AuthError):
            auth_service.authenticate(store, session.token)


class TestPeriodicSweep:
    """Tests for the background sweep loop."""

    def test_sweeps_expired_sessions(self, db, store, clock):
        auth_service.setup(db, PIN)
        session = auth_service.verify(db, store, PIN).session
        clock.advance(hours=2)

        async def run_briefly():
            task = asyncio.create_task(auth_service.sweep_sessions_periodically(store, 0.01))
            await asyncio.sleep(0.1)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(run_briefly())
        assert store.get(session.token) is None
