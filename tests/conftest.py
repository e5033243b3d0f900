"""Pytest configuration and fixtures."""

import os
import shutil
import tempfile

# Settings are cached on first import, so the test environment must be set first
_test_dir = tempfile.mkdtemp(prefix="accounts-test-")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_test_dir, 'test.db')}")
os.environ.setdefault("AVATAR_DIR", os.path.join(_test_dir, "avatars"))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from accounts.database import Base, engine, get_db  # noqa: E402
from accounts.main import app  # noqa: E402

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class AuthHeaders(dict):
    """Dict subclass that also stores the registered user's details."""

    def __init__(self, *args, user_id: int, email: str, token: str, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email
        self.token = token


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    Base.metadata.create_all(bind=engine)
    yield
    engine.dispose()
    shutil.rmtree(_test_dir, ignore_errors=True)


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    """Register a user and return auth headers with user info."""
    response = client.post(
        "/users",
        json={"name": "Test User", "email": "test@example.com", "password": "testpass123"},
    )
    assert response.status_code == 201
    data = response.json()
    token = data["token"]

    return AuthHeaders(
        {"Authorization": f"Bearer {token}"},
        user_id=data["user"]["id"],
        email=data["user"]["email"],
        token=token,
    )
