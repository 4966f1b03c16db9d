"""
Tests for registration, login and token handling.
"""
from datetime import timedelta

from supercart.utils.security import (
    create_access_token,
    decode_token,
    get_password_hash,
    verify_password,
)


class TestSecurity:

    def test_password_hash_roundtrip(self):
        hashed = get_password_hash("s3cret-pass")
        assert hashed != "s3cret-pass"
        assert verify_password("s3cret-pass", hashed)
        assert not verify_password("wrong-pass", hashed)

    def test_token_carries_subject_as_string(self):
        payload = decode_token(create_access_token({"sub": 42, "is_admin": True}))
        assert payload["sub"] == "42"
        assert payload["is_admin"] is True
        assert payload["type"] == "access"

    def test_expired_token_is_rejected(self):
        token = create_access_token({"sub": 1}, expires_delta=timedelta(seconds=-5))
        assert decode_token(token) is None

    def test_garbage_token_is_rejected(self):
        assert decode_token("not-a-jwt") is None


class TestRegister:

    def test_register_returns_token_and_user(self, client):
        resp = client.post(
            "/api/auth/register",
            json={"name": "Dana", "email": "Dana@Shop.io", "password": "password123"},
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["success"] is True
        assert body["token"]
        assert body["user"]["email"] == "dana@shop.io"
        assert body["user"]["is_admin"] is False
        assert "password_hash" not in body["user"]

    def test_duplicate_email_conflicts(self, client, user_headers):
        resp = client.post(
            "/api/auth/register",
            json={"name": "Dana Two", "email": "dana@shop.io", "password": "password123"},
        )
        assert resp.status_code == 409

    def test_short_password_rejected(self, client):
        resp = client.post(
            "/api/auth/register",
            json={"name": "Dana", "email": "dana@shop.io", "password": "short"},
        )
        assert resp.status_code == 422


class TestLogin:

    def test_login_success(self, client, user_headers):
        resp = client.post(
            "/api/auth/login",
            json={"email": "dana@shop.io", "password": "password123"},
        )
        assert resp.status_code == 200
        assert resp.json()["user"]["name"] == "Dana"

    def test_wrong_password_and_unknown_email_look_the_same(self, client, user_headers):
        wrong = client.post(
            "/api/auth/login",
            json={"email": "dana@shop.io", "password": "nope-nope"},
        )
        unknown = client.post(
            "/api/auth/login",
            json={"email": "ghost@shop.io", "password": "password123"},
        )
        assert wrong.status_code == unknown.status_code == 401
        assert wrong.json()["detail"] == unknown.json()["detail"]


class TestProfile:

    def test_profile_with_x_auth_token(self, client, user_headers):
        resp = client.get("/api/user/profile", headers=user_headers)
        assert resp.status_code == 200
        assert resp.json()["email"] == "dana@shop.io"

    def test_profile_with_bearer_header(self, client, user_headers):
        headers = {"Authorization": f"Bearer {user_headers['x-auth-token']}"}
        resp = client.get("/api/user/profile", headers=headers)
        assert resp.status_code == 200

    def test_missing_token(self, client):
        assert client.get("/api/user/profile").status_code == 401

    def test_invalid_token(self, client):
        resp = client.get("/api/user/profile", headers={"x-auth-token": "garbage"})
        assert resp.status_code == 401

    def test_deleted_user_profile_is_404(self, client):
        token = create_access_token({"sub": 999})
        resp = client.get("/api/user/profile", headers={"x-auth-token": token})
        assert resp.status_code == 404


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "service": "supercart"}
