"""
Tests for the demo authentication: hashing, JWT and the /auth routes
"""

import asyncio
from datetime import timedelta

import jwt
import pytest

from app import security
from app.config import settings
from app.security import (
    DEMO_USER_EMAIL,
    DEMO_USER_PASSWORD,
    AuthError,
    StaticUserDirectory,
    UserRecord,
    authenticate_user,
    create_access_token,
    get_password_hash,
    verify_access_token,
    verify_password,
)


# --- Password hashing / user directory ---

class TestPasswordHashing:

    def test_hash_is_salted(self):
        first = get_password_hash("secret-password")
        second = get_password_hash("secret-password")

        assert first != second
        assert verify_password("secret-password", first)
        assert verify_password("secret-password", second)

    def test_wrong_password(self):
        assert verify_password("nope-nope", get_password_hash("secret-password")) is False


class TestAuthenticateUser:

    @pytest.fixture
    def directory(self):
        user = UserRecord(email="ops@example.com", hashed_password=get_password_hash("letmein"), role="ops")
        return StaticUserDirectory([user])

    def test_match(self, directory):
        assert authenticate_user(directory, "ops@example.com", "letmein").role == "ops"

    def test_unknown_email(self, directory):
        with pytest.raises(AuthError):
            authenticate_user(directory, "who@example.com", "letmein")

    def test_wrong_password(self, directory):
        with pytest.raises(AuthError):
            authenticate_user(directory, "ops@example.com", "letmeout")


# --- Tokens ---

class TestTokens:

    def test_round_trip(self):
        claims = verify_access_token(create_access_token("a@example.com"))

        assert claims["email"] == "a@example.com"
        assert claims["exp"] - claims["iat"] == settings.token_expire_minutes * 60

    def test_expired(self):
        token = create_access_token("a@example.com", expires_delta=timedelta(seconds=-30))

        with pytest.raises(AuthError):
            verify_access_token(token)

    def test_wrong_signature(self):
        token = jwt.encode({"email": "a@example.com"}, "some-other-secret", algorithm="HS256")

        with pytest.raises(AuthError):
            verify_access_token(token)

    def test_token_without_email(self):
        token = jwt.encode({"sub": "x"}, settings.jwt_secret, algorithm=settings.jwt_algorithm)

        with pytest.raises(AuthError):
            verify_access_token(token)


# --- Routes ---

class TestLoginRoute:

    def test_correct_credentials(self, client):
        response = client.post("/auth", json={"email": DEMO_USER_EMAIL, "password": DEMO_USER_PASSWORD})

        assert response.status_code == 200
        assert isinstance(response.json()["token"], str)
        assert response.json()["token"]

    def test_wrong_password(self, client):
        response = client.post("/auth", json={"email": DEMO_USER_EMAIL, "password": "wrong-password"})

        assert response.status_code == 401
        assert response.json() == {"message": "Invalid email or password"}

    def test_unknown_email(self, client):
        response = client.post("/auth", json={"email": "someone@example.com", "password": DEMO_USER_PASSWORD})

        assert response.status_code == 401
        assert response.json() == {"message": "Invalid email or password"}

    def test_malformed_body(self, client):
        assert client.post("/auth", json={"email": "not-an-email", "password": "password"}).status_code == 400
        assert client.post("/auth", json={"email": DEMO_USER_EMAIL, "password": "short"}).status_code == 400


class TestVerifyRoute:

    def _login(self, client):
        response = client.post("/auth", json={"email": DEMO_USER_EMAIL, "password": DEMO_USER_PASSWORD})
        return response.json()["token"]

    def test_valid_token(self, client):
        token = self._login(client)

        response = client.get("/auth/verify", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        body = response.json()
        assert body["email"] == DEMO_USER_EMAIL
        assert body["role"] == "admin"
        assert body["name"]
        assert body["permissions"]

    def test_missing_header(self, client):
        response = client.get("/auth/verify")

        assert response.status_code == 401
        assert response.json() == {"message": "Invalid token"}

    def test_garbage_token(self, client):
        response = client.get("/auth/verify", headers={"Authorization": "Bearer not.a.jwt"})

        assert response.status_code == 401
        assert response.json() == {"message": "Invalid token"}

    def test_expired_token(self, client):
        token = create_access_token(DEMO_USER_EMAIL, expires_delta=timedelta(seconds=-30))

        response = client.get("/auth/verify", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_email_unknown_to_directory(self, client):
        """A valid token for a user not in the directory still verifies, without profile fields"""
        token = create_access_token("ghost@example.com")

        response = client.get("/auth/verify", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json() == {"email": "ghost@example.com", "name": None, "role": None, "permissions": []}


class TestLoginConcurrency:

    def test_password_check_runs_off_the_event_loop(self, client, monkeypatch):
        """bcrypt verification happens in a worker thread with no running loop"""
        seen = []
        real_verify = security.verify_password

        def spy(plain_password, hashed_password):
            try:
                asyncio.get_running_loop()
                seen.append("event loop")
            except RuntimeError:
                seen.append("worker thread")
            return real_verify(plain_password, hashed_password)

        monkeypatch.setattr(security, "verify_password", spy)

        response = client.post("/auth", json={"email": DEMO_USER_EMAIL, "password": DEMO_USER_PASSWORD})

        assert response.status_code == 200
        assert seen == ["worker thread"]
