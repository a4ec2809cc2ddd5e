"""
Shared fixtures: an app instance backed by a throwaway SQLite database
"""

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app

TEST_SECRET = "test-secret-key"


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "energy_monitor.db"


@pytest.fixture
def settings(db_path):
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{db_path}",
        JWT_SECRET_KEY=TEST_SECRET,
        BCRYPT_ROUNDS=4,
        LOG_LEVEL="WARNING",
        _env_file=None,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def token_service(app):
    return app.state.token_service


@pytest.fixture
def register_user(client):
    """Register a user and return the response body"""

    def _register(email="a@b.com", password="pw123456", first_name="A", last_name="B"):
        response = client.post("/api/register", json={
            "email": email,
            "firstName": first_name,
            "lastName": last_name,
            "password": password,
        })
        assert response.status_code == 200, response.text
        return response.json()

    return _register


@pytest.fixture
def auth_headers(register_user):
    body = register_user()
    return {"Authorization": f"Bearer {body['token']}"}
