#!/usr/bin/env python3
"""
Pytest tests for CORS configuration
Tests that the API accepts browser requests from the frontend at localhost:3000
"""

from fastapi.testclient import TestClient

from lazynote.core.config import settings
from lazynote.main import app


class TestCORSConfiguration:
    """Test CORS middleware configuration"""

    def setup_method(self):
        self.client = TestClient(app)
        self.frontend_origin = "http://localhost:3000"

    def test_cors_preflight_request(self):
        """Preflight for an authenticated quiz request"""
        response = self.client.options(
            "/quizzes",
            headers={
                "Origin": self.frontend_origin,
                "Access-Control-Request-Method": "GET",
                "Access-Control-Request-Headers": "Authorization",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == self.frontend_origin
        assert "access-control-allow-methods" in response.headers
        assert "access-control-allow-headers" in response.headers

    def test_cors_simple_get_request(self):
        response = self.client.get("/", headers={"Origin": self.frontend_origin})

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == self.frontend_origin
        assert response.json()["message"] == "LazyNote API is running"

    def test_cors_allows_credentials(self):
        response = self.client.get("/", headers={"Origin": self.frontend_origin})

        assert response.headers["access-control-allow-credentials"] == "true"

    def test_cors_on_authenticated_endpoint(self):
        response = self.client.get(
            "/dashboard/stats",
            headers={
                "Origin": self.frontend_origin,
                "Authorization": f"Bearer {settings.DEMO_TOKEN}",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == self.frontend_origin

    def test_cors_with_different_origin(self):
        """Requests from other origins succeed but are not granted CORS access"""
        different_origin = "http://localhost:4000"

        response = self.client.get("/", headers={"Origin": different_origin})

        assert response.status_code == 200
        if "access-control-allow-origin" in response.headers:
            assert response.headers["access-control-allow-origin"] != different_origin

    def test_cors_all_http_methods(self):
        for method in ["GET", "POST", "DELETE", "PATCH"]:
            response = self.client.options(
                "/ingestions",
                headers={
                    "Origin": self.frontend_origin,
                    "Access-Control-Request-Method": method,
                },
            )

            assert response.status_code == 200
            allowed_methods = response.headers.get("access-control-allow-methods", "")
            assert method in allowed_methods.upper()

    def test_cors_without_origin_header(self):
        response = self.client.get("/")
        assert response.status_code == 200
