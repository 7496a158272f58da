# tests/conftest.py

import os
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy_utils import create_database, database_exists, drop_database
from starlette.testclient import TestClient

from community_events.api import deps
from community_events.core.limiter import limiter
from community_events.db.session import get_db
from community_events.main import app
from community_events.models import Base

# Rate limits are exercised in production only
limiter.enabled = False


# --- E2E Test Database Setup ---
@pytest.fixture(scope="function")
def db_engine(tmp_path):
    """
    A fresh database per test. Defaults to a SQLite file; set
    TEST_DATABASE_URL to run the same suite against PostgreSQL.
    """
    url = os.getenv("TEST_DATABASE_URL") or f"sqlite:///{tmp_path / 'community_events_test.db'}"
    connect_args = (
        {"timeout": 30, "check_same_thread": False} if url.startswith("sqlite") else {}
    )
    engine = create_engine(url, connect_args=connect_args)

    if database_exists(engine.url):
        drop_database(engine.url)
    create_database(engine.url)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()
    drop_database(engine.url)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db_session_e2e(session_factory):
    session = session_factory()
    yield session
    session.close()


# --- Mock Dependencies Setup ---
class MockTokenPayload:
    def __init__(self, sub="user_123", email="member@example.com"):
        self.sub = sub
        self.email = email


def override_get_current_user():
    return MockTokenPayload()


def override_get_current_profile():
    return MagicMock(id="user_123", role="member", email="member@example.com")


def override_get_current_admin():
    return MagicMock(id="admin_1", role="admin", email="admin@example.com")


# --- Test Client Fixtures ---
@pytest.fixture(scope="function")
def test_client():
    """
    TestClient with the database and authentication mocked.
    For INTEGRATION tests that patch the service layer.
    """
    app.dependency_overrides[get_db] = lambda: MagicMock()
    app.dependency_overrides[deps.get_current_user] = override_get_current_user
    app.dependency_overrides[deps.get_current_profile] = override_get_current_profile
    app.dependency_overrides[deps.get_current_admin] = override_get_current_admin

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def test_client_e2e(session_factory):
    """
    TestClient backed by the live test database. Authentication is real:
    build headers with tests.utils.auth.
    """

    def override_get_db_e2e():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db_e2e

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
