# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Shared fixtures for the storage, service, API, client and worker tests.
#
# Key features:
# - Sets test environment variables before stockmind.config is imported
# - Gives every test its own in-memory SQLite database
# - Routes the FastAPI app onto that database via a get_db override
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# stockmind.config builds Settings at import time

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("REDIS_URL", "redis://127.0.0.1:6379/0")

import pytest

from stockmind.database import build_engine, build_session_factory, create_tables, get_db
from stockmind.storage import (
    ProjectRepository,
    ProjectStepRepository,
    ScriptRepository,
    UserRepository,
)


# =============================================================================
# Database fixtures
# =============================================================================

@pytest.fixture
def engine():
    """Fresh in-memory database with all tables."""
    engine = build_engine("sqlite://", environment="test")
    create_tables(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


# =============================================================================
# Repository fixtures
# =============================================================================

@pytest.fixture
def user_repo(db):
    return UserRepository(db)


@pytest.fixture
def project_repo(db):
    return ProjectRepository(db)


@pytest.fixture
def step_repo(db):
    return ProjectStepRepository(db)


@pytest.fixture
def script_repo(db):
    return ScriptRepository(db)


@pytest.fixture
def make_user(user_repo):
    """Factory creating users directly through the repository."""
    def _make(email="alice@stockmind.io", **fields):
        return user_repo.create(email=email, **fields)
    return _make


# =============================================================================
# API fixtures
# =============================================================================

@pytest.fixture
def client(session_factory):
    """TestClient whose requests use the per-test database."""
    from fastapi.testclient import TestClient
    from stockmind.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
