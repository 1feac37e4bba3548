"""Shared test fixtures for driver-auth."""

from datetime import timedelta

import pytest

from driver_auth.auth import AuthService, CredentialHasher, TokenIssuer
from driver_auth.config import Settings
from driver_auth.db import InMemoryUserRegistry, SQLiteUserRegistry, init_db
from driver_auth.main import create_app

# At least 32 bytes so PyJWT does not warn about short HMAC keys
TEST_SECRET = "test-secret-key-0123456789abcdef0123"
TEST_TTL = timedelta(hours=1)
# bcrypt minimum cost, keeps tests fast
FAST_WORK_FACTOR = 4


@pytest.fixture
def db_path(tmp_path):
    """Path to a fresh, initialized SQLite database file."""
    path = str(tmp_path / "test.db")
    init_db(path)
    return path


@pytest.fixture
def test_settings(db_path):
    """Settings pointing at the temp database with fast hashing."""
    return Settings(
        env="local",
        database_path=db_path,
        jwt_secret_key=TEST_SECRET,
        token_ttl=TEST_TTL,
        bcrypt_work_factor=FAST_WORK_FACTOR,
    )


@pytest.fixture
def hasher():
    return CredentialHasher(work_factor=FAST_WORK_FACTOR)


@pytest.fixture
def token_issuer():
    return TokenIssuer(TEST_SECRET)


@pytest.fixture
def registry(db_path):
    """SQLite user registry on the temp database."""
    return SQLiteUserRegistry(db_path)


@pytest.fixture
def memory_registry():
    return InMemoryUserRegistry()


@pytest.fixture
def auth_service(registry, token_issuer, hasher):
    """AuthService backed by SQLite."""
    return AuthService(
        user_saver=registry,
        user_provider=registry,
        token_issuer=token_issuer,
        token_ttl=TEST_TTL,
        hasher=hasher,
    )


@pytest.fixture
def memory_auth_service(memory_registry, token_issuer, hasher):
    """AuthService backed by the in-memory registry."""
    return AuthService(
        user_saver=memory_registry,
        user_provider=memory_registry,
        token_issuer=token_issuer,
        token_ttl=TEST_TTL,
        hasher=hasher,
    )


@pytest.fixture
def app(test_settings):
    """Flask app wired to the temp database."""
    app = create_app(test_settings)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    """Create test client for API testing."""
    with app.test_client() as client:
        yield client


@pytest.fixture
def registered_user(client):
    """Register a user through the API.

    Returns a tuple of (user_id, email, password).
    """
    email, password = "a@x.com", "pw1"
    response = client.post("/signup", json={"email": email, "password": password})
    assert response.status_code == 201
    return response.get_json()["id"], email, password


@pytest.fixture
def jwt_secret():
    """Secret the test token issuer signs with."""
    return TEST_SECRET
