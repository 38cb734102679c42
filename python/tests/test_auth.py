"""Tests for sessions and the page/API session gates."""
from datetime import timedelta
from typing import Dict

import pytest
from fastapi.testclient import TestClient

from core.exceptions import AuthenticationError
from models.domain.user import User
from services.auth import (
    create_access_token,
    decode_session_token,
    hash_password,
    verify_password,
)


def test_password_hashing() -> None:
    """Test hashes verify only the original password."""
    password_hash = hash_password("correct horse")
    assert password_hash.startswith("pbkdf2_sha256$")
    assert password_hash != hash_password("correct horse")
    assert verify_password("correct horse", password_hash)
    assert not verify_password("wrong horse", password_hash)
    assert not verify_password("correct horse", "not-a-hash")


def test_token_round_trip_is_minimized() -> None:
    """Test the decoded session only carries id, email and name."""
    user = User(id=7, email="ana@example.com", name="Ana")
    session = decode_session_token(create_access_token(user))
    assert session.model_dump() == {"id": "7", "email": "ana@example.com", "name": "Ana"}


def test_expired_token_is_rejected() -> None:
    """Test expired tokens raise AuthenticationError."""
    user = User(id=1, email="a@example.com", name="A")
    token = create_access_token(user, expires_delta=timedelta(seconds=-10))
    with pytest.raises(AuthenticationError):
        decode_session_token(token)


def test_garbage_token_is_rejected() -> None:
    with pytest.raises(AuthenticationError):
        decode_session_token("not.a.token")


def test_health_is_public(client: TestClient) -> None:
    """Test the health check needs no session."""
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "healthy"


def test_register_returns_session(client: TestClient, credentials: Dict[str, str]) -> None:
    """Test registration creates the user and sets the cookie."""
    response = client.post("/api/auth/register", json=credentials)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["user"]["email"] == credentials["email"].lower()
    assert "password_hash" not in data["user"]
    assert data["token"]
    assert "fitness_session" in response.cookies


def test_register_duplicate_email(client: TestClient, credentials: Dict[str, str]) -> None:
    """Test registering the same email twice conflicts."""
    client.post("/api/auth/register", json=credentials)
    response = client.post("/api/auth/register", json=credentials)

    assert response.status_code == 409
    assert response.json()["code"] == "CONFLICT"


def test_register_validation(client: TestClient) -> None:
    """Test short passwords and bad emails are refused."""
    response = client.post(
        "/api/auth/register",
        json={"name": "A", "email": "not-an-email", "password": "short"},
    )
    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_login(client: TestClient, credentials: Dict[str, str]) -> None:
    """Test login with the right and the wrong password."""
    client.post("/api/auth/register", json=credentials)
    client.cookies.clear()

    wrong = client.post("/api/auth/login", json={"email": credentials["email"], "password": "nope-nope"})
    assert wrong.status_code == 401
    assert wrong.json()["error"] == "Invalid email or password"

    unknown = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "whatever"})
    assert unknown.status_code == 401

    right = client.post(
        "/api/auth/login",
        json={"email": credentials["email"].upper(), "password": credentials["password"]},
    )
    assert right.status_code == 200
    assert right.json()["data"]["user"]["name"] == credentials["name"]


def test_session_endpoint(auth_client: TestClient, credentials: Dict[str, str]) -> None:
    """Test the current session is exposed as id/email/name only."""
    response = auth_client.get("/api/auth/session")

    assert response.status_code == 200
    session = response.json()["data"]
    assert set(session) == {"id", "email", "name"}
    assert session["email"] == credentials["email"].lower()
    assert session["name"] == credentials["name"]


def test_api_requires_session(client: TestClient) -> None:
    """Test protected API routes answer 401 in the envelope format."""
    for path in ("/api/exercises", "/api/methods", "/api/training-sheets", "/api/schedules", "/api/auth/session"):
        response = client.get(path)
        assert response.status_code == 401, path
        body = response.json()
        assert body["success"] is False
        assert body["code"] == "AUTHENTICATION_ERROR"


def test_api_rejects_bad_token(client: TestClient) -> None:
    response = client.get("/api/exercises", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401


def test_bearer_token(client: TestClient, credentials: Dict[str, str]) -> None:
    """Test API clients can send the token as a bearer header."""
    token = client.post("/api/auth/register", json=credentials).json()["data"]["token"]
    client.cookies.clear()

    response = client.get("/api/exercises", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["data"] == []


@pytest.mark.parametrize("path", ["/home", "/exercises", "/methods", "/training-sheets", "/schedules", "/exercises/1"])
def test_pages_redirect_to_login(client: TestClient, path: str) -> None:
    """Test unauthenticated page requests go to the login page."""
    response = client.get(path, follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/login"


def test_page_with_invalid_token_redirects(client: TestClient) -> None:
    """Test a tampered token counts as unauthenticated."""
    response = client.get("/exercises", headers={"Authorization": "Bearer tampered"}, follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/login"


def test_login_page_redirects_when_authenticated(auth_client: TestClient) -> None:
    """Test logged-in users skip the auth pages."""
    for path in ("/login", "/register"):
        response = auth_client.get(path, follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/home"


def test_home_page_shows_user(auth_client: TestClient, credentials: Dict[str, str]) -> None:
    response = auth_client.get("/home")
    assert response.status_code == 200
    assert "Welcome" in response.text


def test_root_redirects_home(client: TestClient) -> None:
    response = client.get("/", follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/home"


def test_login_form(client: TestClient, credentials: Dict[str, str]) -> None:
    """Test the HTML login form starts a session."""
    client.post("/api/auth/register", json=credentials)
    client.cookies.clear()

    bad = client.post("/login", data={"email": credentials["email"], "password": "wrong-password"})
    assert bad.status_code == 401
    assert "Invalid email or password" in bad.text

    response = client.post(
        "/login",
        data={"email": credentials["email"], "password": credentials["password"]},
        follow_redirects=False,
    )
    assert response.status_code == 303
    assert response.headers["location"] == "/home"
    assert client.get("/home").status_code == 200


def test_register_form(client: TestClient) -> None:
    """Test the HTML registration form."""
    short = client.post("/register", data={"name": "Bo", "email": "bo@example.com", "password": "short"})
    assert short.status_code == 422

    response = client.post(
        "/register",
        data={"name": "Bo", "email": "bo@example.com", "password": "long-enough"},
        follow_redirects=False,
    )
    assert response.status_code == 303

    again = client.post("/register", data={"name": "Bo", "email": "bo@example.com", "password": "long-enough"})
    assert again.status_code == 409


def test_logout(auth_client: TestClient) -> None:
    """Test logging out ends the page session."""
    response = auth_client.get("/logout", follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/login"

    auth_client.cookies.clear()
    assert auth_client.get("/home", follow_redirects=False).status_code == 303


@pytest.mark.parametrize(
    "form",
    [
        {"name": "Bo", "email": "x", "password": "long-enough"},
        {"name": "Bo", "email": "bo@", "password": "long-enough"},
        {"name": "   ", "email": "bo@example.com", "password": "long-enough"},
    ],
)
def test_register_form_rejects_invalid_fields(client: TestClient, form: Dict[str, str]) -> None:
    """Test the HTML form validates like the JSON endpoint and creates nothing."""
    response = client.post("/register", data=form, follow_redirects=False)

    assert response.status_code == 422
    assert "fitness_session" not in response.cookies
    assert client.post("/api/auth/login", json={"email": "bo@example.com", "password": "long-enough"}).status_code == 401


def test_register_api_rejects_blank_name(client: TestClient) -> None:
    response = client.post(
        "/api/auth/register", json={"name": " ", "email": "bo@example.com", "password": "long-enough"}
    )
    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_register_form_lowercases_email(client: TestClient) -> None:
    """Test the stored address is lowercased whichever entry point is used."""
    response = client.post(
        "/register",
        data={"name": "Bo", "email": "Bo@Example.COM", "password": "long-enough"},
        follow_redirects=False,
    )
    assert response.status_code == 303

    assert client.get("/api/auth/session").json()["data"]["email"] == "bo@example.com"
