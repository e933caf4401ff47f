#!/usr/bin/env python3
"""
Pytest tests for login, registration and bearer token resolution
"""

from fastapi.testclient import TestClient

from lazynote.core.config import settings
from lazynote.core.security import hash_password, verify_password
from lazynote.main import app


class TestPasswordHashing:
    def test_verify_round_trip(self):
        hashed = hash_password("s3cret")

        assert verify_password("s3cret", hashed)
        assert not verify_password("wrong", hashed)

    def test_salts_differ(self):
        assert hash_password("s3cret") != hash_password("s3cret")

    def test_malformed_hash_never_verifies(self):
        assert not verify_password("s3cret", "not-a-hash")


class TestAuthEndpoints:
    def setup_method(self):
        self.client = TestClient(app)

    def test_demo_login(self):
        response = self.client.post(
            "/auth/login",
            json={"email": "john.doe@example.com", "password": settings.DEMO_PASSWORD},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["user"]["id"] == "user123"
        assert body["token"]

        me = self.client.get(
            "/auth/me", headers={"Authorization": f"Bearer {body['token']}"}
        )
        assert me.json()["email"] == "john.doe@example.com"

    def test_email_is_case_insensitive(self):
        response = self.client.post(
            "/auth/login",
            json={"email": " John.Doe@Example.com ", "password": settings.DEMO_PASSWORD},
        )
        assert response.status_code == 200

    def test_wrong_password(self):
        response = self.client.post(
            "/auth/login",
            json={"email": "john.doe@example.com", "password": "nope"},
        )
        assert response.status_code == 401

    def test_missing_fields(self):
        response = self.client.post("/auth/login", json={"email": "john.doe@example.com"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Please fill in all required fields"

    def test_register_then_use_token(self):
        response = self.client.post(
            "/auth/register",
            json={"name": "Jane Roe", "email": "jane@example.com", "password": "pw"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["user"]["id"].startswith("user-")

        headers = {"Authorization": f"Bearer {body['token']}"}
        quizzes = self.client.get("/quizzes", headers=headers)
        assert quizzes.status_code == 200
        assert quizzes.json()["data"] == []

    def test_register_duplicate_email(self):
        response = self.client.post(
            "/auth/register",
            json={"name": "John", "email": "john.doe@example.com", "password": "pw"},
        )
        assert response.status_code == 400

    def test_me_without_token(self):
        response = self.client.get("/auth/me")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"
