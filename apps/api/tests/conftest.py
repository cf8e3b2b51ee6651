"""
Pytest configuration and fixtures

Tests run against an in-memory SQLite database. The schema is created once
per session and every table is emptied after each test, so nothing leaks
between tests.
"""
import pytest
import sys
import os
from typing import Optional

# Settings are read at import time; configure the environment first.
os.environ.setdefault("SECRET_KEY", "test-secret-key-that-is-at-least-32-characters-long")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CACHE_ENABLED"] = "false"
os.environ["LOG_FORMAT"] = "text"
os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("PAYSTACK_SECRET_KEY", "sk_test_dummy")

# Add the parent directory to the path so we can import from services
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from core.database import Base, SessionLocal, engine, get_db
from core.security import create_access_token
from main import app
import models  # noqa: F401


@pytest.fixture(scope="session", autouse=True)
def _create_schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def _clean_tables():
    yield
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client(db_session):
    """TestClient whose requests share the test's session."""
    def _get_test_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_test_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)


def make_auth_headers(user_id: str, email: Optional[str] = None) -> dict:
    claims = {"sub": user_id}
    if email:
        claims["email"] = email
    token = create_access_token(claims)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers():
    return make_auth_headers("user-123", "user@example.com")
