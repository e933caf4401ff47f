#!/usr/bin/env python3
"""
Pytest tests for dashboard statistics and the document listing
"""

from fastapi.testclient import TestClient

from lazynote.core.config import settings
from lazynote.main import app


class TestDashboardEndpoints:
    def setup_method(self):
        self.client = TestClient(app)
        self.headers = {"Authorization": f"Bearer {settings.DEMO_TOKEN}"}

    def test_stats_from_seed_data(self):
        response = self.client.get("/dashboard/stats", headers=self.headers)

        assert response.status_code == 200
        assert response.json() == {
            "flashcards_created": 120,
            "flashcards_reviewed": 11,
            "quizzes_completed": 9,
            "average_score": 84,
            "total_study_time": 70,
        }

    def test_stats_follow_reviews(self):
        self.client.patch("/flashcards/card5", headers=self.headers, json={"mastered": True})

        stats = self.client.get("/dashboard/stats", headers=self.headers).json()
        assert stats["flashcards_reviewed"] == 12

    def test_stats_for_new_user_are_zero(self):
        body = self.client.post(
            "/auth/register",
            json={"name": "New", "email": "new@example.com", "password": "pw"},
        ).json()

        stats = self.client.get(
            "/dashboard/stats", headers={"Authorization": f"Bearer {body['token']}"}
        ).json()
        assert stats["flashcards_created"] == 0
        assert stats["average_score"] == 0

    def test_documents_newest_first(self):
        response = self.client.get("/documents", headers=self.headers)

        assert response.status_code == 200
        documents = response.json()["data"]
        assert [d["id"] for d in documents] == ["doc2", "doc3"]
        assert documents[0]["type"] == "ppt"
