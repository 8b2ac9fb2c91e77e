"""
Pytest configuration file for backend testing.

Every test gets a fresh in-memory SQLite database. The API client shares the
test's session, and access tokens are signed with the test JWT secret.
"""
import os
import sys
from datetime import datetime, timedelta
from pathlib import Path

# Settings are read at import time, so the environment must be set first
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("ENVIRONMENT", "test")

# Add the backend directory to Python path so imports work correctly
backend_dir = Path(__file__).parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.startup import import_models, register_domain_handlers
from core.auth import ALGORITHM
from core.config import settings
from core.database import Base, get_db
from core.events import clear_event_handlers

# Import all models to ensure SQLAlchemy relationships work
import_models()


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Create a test database session."""
    from tests.factories.base import bind_factory_session

    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    bind_factory_session(session)
    yield session
    bind_factory_session(None)
    session.close()


@pytest.fixture(autouse=True)
def domain_handlers():
    """Register the production event handlers for each test."""
    clear_event_handlers()
    register_domain_handlers()
    yield
    clear_event_handlers()


@pytest.fixture
def client(db_session):
    """Create a test client bound to the test session."""
    from app.main import app

    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_access_token(user_id: str, email: str = None, user_metadata: dict = None,
                      expires_in: int = 3600) -> str:
    payload = {
        "sub": user_id,
        "email": email or f"{user_id}@example.com",
        "role": "authenticated",
        "aud": settings.supabase_jwt_audience,
        "exp": datetime.utcnow() + timedelta(seconds=expires_in),
        "user_metadata": user_metadata or {},
    }
    return jwt.encode(payload, settings.supabase_jwt_secret, algorithm=ALGORITHM)


@pytest.fixture
def auth_headers():
    """Build Authorization headers for an auth user id."""

    def _headers(user_id: str = "owner-1", **kwargs) -> dict:
        return {"Authorization": f"Bearer {make_access_token(user_id, **kwargs)}"}

    return _headers
