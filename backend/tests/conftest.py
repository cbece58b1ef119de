"""Pytest fixtures: in-memory sqlite, one fresh user per test."""
import logging
import os
import uuid

import pytest
from fastapi.testclient import TestClient

# Quiet SQLAlchemy
logging.getLogger("sqlalchemy").setLevel(logging.ERROR)
logging.getLogger("sqlalchemy.engine").setLevel(logging.ERROR)
logging.getLogger("sqlalchemy.pool").setLevel(logging.ERROR)

os.environ["SECRET_KEY"] = "test-secret"
os.environ["DATABASE_URL"] = "sqlite://"

from lingua.auth.jwt import create_user_token  # noqa: E402
from lingua.db.session import SessionLocal  # noqa: E402
from lingua.main import app  # noqa: E402


@pytest.fixture(scope="function")
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture(scope="function")
def db():
    db = SessionLocal()
    yield db
    db.close()


@pytest.fixture(scope="function")
def user_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture(scope="function")
def auth_headers(user_id):
    return {"Authorization": f"Bearer {create_user_token(user_id)}"}


@pytest.fixture(scope="function")
def create_card(client, auth_headers):
    def _create(**overrides) -> dict:
        payload = {"front_text": "the house", "back_text": "Haus", "language": "de"}
        payload.update(overrides)
        response = client.post("/cards/", json=payload, headers=auth_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
