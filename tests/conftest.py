"""Shared fixtures: in-memory database, temporary media root, fake clock."""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("PIN_HASH_ROUNDS", "4")

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import create_tables, get_db
from app.core.sessions import InMemorySessionStore
from app.main import create_app
from app.services.media_store import MediaStore

PIN = "4821"
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start=None):
        self.now = start or datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return InMemorySessionStore(clock=clock)


@pytest.fixture
def media(tmp_path):
    media = MediaStore(tmp_path / "media", max_size=1024 * 1024)
    media.ensure_ready()
    return media


@pytest.fixture
def app(engine, session_factory, store, media):
    app = create_app(session_store=store, media_store=media, db_engine=engine, rate_limit=False)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def auth_headers(client):
    assert client.post("/api/auth/setup", json={"pin": PIN}).status_code == 200
    token = client.post("/api/auth/verify", json={"pin": PIN}).json()["sessionToken"]
    return {"X-Session-Token": token}


@pytest.fixture
def car_payload():
    return {
        "brand": "Skoda",
        "model": "Octavia",
        "vin": "TMBJJ7NE8K0123456",
        "license_plate": "WX 12345",
        "current_mileage": 98000,
        "insurance_expiry": None,
        "color": "Grey",
    }
