"""Test configuration."""
import os
from typing import Dict, Generator

# Set test environment before any imports
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

# Import after environment setup
from infrastructure.database import SessionLocal, drop_db, init_db
from main import app

fake = Faker()


@pytest.fixture(autouse=True)
def setup_database() -> Generator[None, None, None]:
    """Fresh tables for each test."""
    drop_db()
    init_db()
    yield


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Database session for repository-level tests."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client() -> TestClient:
    """Anonymous client."""
    return TestClient(app)


@pytest.fixture
def credentials() -> Dict[str, str]:
    """Registration data for a new user."""
    return {
        "name": fake.name(),
        "email": fake.unique.email(),
        "password": fake.password(length=12),
    }


@pytest.fixture
def auth_client(client: TestClient, credentials: Dict[str, str]) -> TestClient:
    """Client holding a session cookie of a freshly registered user."""
    response = client.post("/api/auth/register", json=credentials)
    assert response.status_code == 201
    return client
