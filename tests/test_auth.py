"""
Integration tests for registration, login and bearer authentication.
"""
import uuid
from datetime import timedelta

import pytest

from app.core.security import create_access_token


def _email() -> str:
    return f"auth-{uuid.uuid4().hex[:12]}@example.com"


class TestRegister:
    def test_register_returns_user_and_token(self, client):
        email = _email()
        r = client.post("/register", json={"name": "Ada", "email": email, "password": "secret123"})
        assert r.status_code == 201
        body = r.json()
        assert body["user"]["email"] == email
        assert body["user"]["name"] == "Ada"
        assert body["user"]["id"] > 0
        assert body["token"]
        assert body["token_type"] == "bearer"
        assert "password" not in body["user"]
        assert "password_hash" not in body["user"]

    def test_name_is_stripped(self, client):
        r = client.post("/register", json={"name": "  Grace  ", "email": _email(), "password": "secret123"})
        assert r.status_code == 201
        assert r.json()["user"]["name"] == "Grace"

    def test_duplicate_email_conflicts(self, client):
        email = _email()
        client.post("/register", json={"name": "A", "email": email, "password": "secret123"})
        r = client.post("/register", json={"name": "B", "email": email, "password": "other-pass"})
        assert r.status_code == 409
        assert r.json()["code"] == "EMAIL_ALREADY_REGISTERED"

    def test_duplicate_email_is_case_insensitive(self, client):
        email = _email()
        client.post("/register", json={"name": "A", "email": email, "password": "secret123"})
        r = client.post("/register", json={"name": "B", "email": email.upper(), "password": "secret123"})
        assert r.status_code == 409

    @pytest.mark.parametrize("payload", [
        {"name": "", "email": "x@example.com", "password": "secret123"},
        {"name": "   ", "email": "x@example.com", "password": "secret123"},
        {"name": "A", "email": "not-an-email", "password": "secret123"},
        {"name": "A", "email": "x@example.com", "password": "12345"},
        {"email": "x@example.com", "password": "secret123"},
    ])
    def test_invalid_payload_rejected(self, client, payload):
        r = client.post("/register", json=payload)
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"


    def test_password_limit_counts_utf8_bytes(self, client):
        # 40 characters, 80 bytes
        r = client.post("/register", json={"name": "A", "email": _email(), "password": "é" * 40})
        assert r.status_code == 422
        fields = [e["field"] for e in r.json()["details"]["errors"]]
        assert "password" in fields

    def test_multibyte_password_within_limit(self, client):
        email = _email()
        password = "é" * 36
        r = client.post("/register", json={"name": "A", "email": email, "password": password})
        assert r.status_code == 201
        login = client.post("/login", json={"email": email, "password": password})
        assert login.status_code == 200


class TestLogin:
    def test_login_success(self, client, register):
        email = _email()
        registered = register(email=email, password="hunter22")
        r = client.post("/login", json={"email": email, "password": "hunter22"})
        assert r.status_code == 200
        body = r.json()
        assert body["user"]["id"] == registered["user"]["id"]
        assert body["token"]

    def test_wrong_password(self, client, register):
        email = _email()
        register(email=email, password="hunter22")
        r = client.post("/login", json={"email": email, "password": "wrong-pass"})
        assert r.status_code == 401
        assert r.json()["code"] == "INVALID_CREDENTIALS"

    def test_unknown_email_looks_like_wrong_password(self, client):
        r = client.post("/login", json={"email": _email(), "password": "whatever"})
        assert r.status_code == 401
        assert r.json()["code"] == "INVALID_CREDENTIALS"

    def test_overlong_password_rejected(self, client):
        r = client.post("/login", json={"email": _email(), "password": "é" * 37})
        assert r.status_code == 422

    def test_missing_password_rejected(self, client):
        r = client.post("/login", json={"email": _email()})
        assert r.status_code == 422


class TestBearerAuth:
    def test_token_grants_access(self, client, register):
        token = register()["token"]
        r = client.get("/habits", headers={"Authorization": f"Bearer {token}"})
        assert r.status_code == 200

    def test_login_token_grants_access(self, client, register):
        email = _email()
        register(email=email)
        token = client.post("/login", json={"email": email, "password": "secret123"}).json()["token"]
        r = client.get("/habits", headers={"Authorization": f"Bearer {token}"})
        assert r.status_code == 200

    def test_missing_header(self, client):
        r = client.get("/habits")
        assert r.status_code == 401
        assert r.json()["code"] == "NOT_AUTHENTICATED"
        assert r.headers["www-authenticate"] == "Bearer"

    def test_wrong_scheme(self, client):
        r = client.get("/habits", headers={"Authorization": "Basic abc"})
        assert r.status_code == 401
        assert r.json()["code"] == "NOT_AUTHENTICATED"

    def test_garbage_token(self, client):
        r = client.get("/habits", headers={"Authorization": "Bearer not.a.jwt"})
        assert r.status_code == 401
        assert r.json()["code"] == "INVALID_TOKEN"

    def test_expired_token(self, client, register):
        user_id = register()["user"]["id"]
        token = create_access_token(user_id, expires_delta=timedelta(minutes=-1))
        r = client.get("/habits", headers={"Authorization": f"Bearer {token}"})
        assert r.status_code == 401
        assert r.json()["code"] == "INVALID_TOKEN"

    def test_token_for_unknown_user(self, client):
        token = create_access_token(987_654_321)
        r = client.get("/habits", headers={"Authorization": f"Bearer {token}"})
        assert r.status_code == 401
        assert r.json()["code"] == "INVALID_TOKEN"

    @pytest.mark.parametrize("method,path", [
        ("post", "/habits"),
        ("get", "/habits/1"),
        ("put", "/habits/1"),
        ("delete", "/habits/1"),
        ("post", "/habits/1/track"),
        ("get", "/habits/1/history"),
    ])
    def test_every_habit_route_requires_auth(self, client, method, path):
        r = getattr(client, method)(path)
        assert r.status_code in (401, 422)
        if r.status_code == 401:
            assert r.json()["code"] == "NOT_AUTHENTICATED"
