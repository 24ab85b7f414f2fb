"""Pytest configuration and fixtures."""

import os

# Settings are read on import, so the environment must be in place first.
os.environ.setdefault("JWT_SECRET", "test-secret-for-the-usuarios-suite")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
# Use test database - PostgreSQL when TEST_DATABASE_URL is set, SQLite locally
os.environ["DATABASE_URL"] = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///./test.db")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from src.database import Base  # noqa: E402
from src.main import app  # noqa: E402
from src.repositories.user_repository import UserRepository  # noqa: E402
from src.services.auth import get_password_hash  # noqa: E402

TEST_EMAIL = "test@example.com"
TEST_PASSWORD = "testpass123"


class AuthHeaders(dict):
    """Dict subclass that also stores user_id."""

    def __init__(self, *args, user_id: int | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = TEST_EMAIL


async def clear_tables(database):
    """Delete every row so each test starts from an empty store."""
    async with database.engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            await conn.execute(table.delete())


@pytest.fixture(scope="function")
def client():
    """Create a test client with a clean database."""
    with TestClient(app) as test_client:
        test_client.portal.call(clear_tables, app.state.database)
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def repo(client):
    """Repository bound to the running application's pool."""
    return UserRepository(app.state.database)


@pytest.fixture
def seeded_user(client, repo):
    """Insert a user directly; creating one over the API already needs a token."""

    async def seed():
        return await repo.create(
            name="Test User",
            email=TEST_EMAIL,
            password_hash=get_password_hash(TEST_PASSWORD),
            description="seeded",
        )

    return client.portal.call(seed)


@pytest.fixture
def auth_headers(client, seeded_user):
    """Log the seeded user in and return auth headers with user info."""
    response = client.post(
        "/login",
        json={"correo_electronico": TEST_EMAIL, "contrasena": TEST_PASSWORD},
    )
    assert response.status_code == 200
    token = response.json()["token"]

    return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=seeded_user.id)
