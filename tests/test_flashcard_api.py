#!/usr/bin/env python3
"""
Pytest tests for the flashcard set endpoints
"""

from fastapi.testclient import TestClient

from lazynote.core.config import settings
from lazynote.main import app


class TestFlashcardEndpoints:
    def setup_method(self):
        self.client = TestClient(app)
        self.headers = {"Authorization": f"Bearer {settings.DEMO_TOKEN}"}

    def get_set(self, set_id):
        return self.client.get(f"/flashcard-sets/{set_id}", headers=self.headers).json()

    def test_list_sets_recent_first(self):
        response = self.client.get("/flashcard-sets", headers=self.headers)

        assert response.status_code == 200
        ids = [s["id"] for s in response.json()["data"]]
        assert ids == ["dummy-set-123", "set2", "set1", "set3"]

    def test_list_sets_by_mastery(self):
        response = self.client.get("/flashcard-sets?sort=mastery", headers=self.headers)

        ids = [s["id"] for s in response.json()["data"]]
        assert ids == ["set3", "set2", "set1", "dummy-set-123"]

    def test_search_is_case_insensitive(self):
        response = self.client.get("/flashcard-sets?q=FRONTEND", headers=self.headers)

        assert [s["id"] for s in response.json()["data"]] == ["set3"]

    def test_invalid_sort_is_rejected(self):
        response = self.client.get("/flashcard-sets?sort=alphabetical", headers=self.headers)
        assert response.status_code == 422

    def test_unknown_set_is_not_found(self):
        response = self.client.get("/flashcard-sets/set-missing", headers=self.headers)
        assert response.status_code == 404

    def test_cards_in_order(self):
        response = self.client.get("/flashcard-sets/set2/cards", headers=self.headers)

        cards = response.json()["data"]
        assert [c["id"] for c in cards] == ["card6", "card7", "card8", "card9"]
        assert cards[0]["set_id"] == "set2"

    def test_mark_card_mastered(self):
        response = self.client.patch(
            "/flashcards/card3", headers=self.headers, json={"mastered": True}
        )

        assert response.status_code == 200
        assert response.json()["mastered"] is True
        assert response.json()["last_reviewed"] is not None

        flashcard_set = self.get_set("set1")
        assert flashcard_set["mastered"] == 21
        assert flashcard_set["last_studied_at"] is not None

    def test_unmark_card(self):
        self.client.patch("/flashcards/card1", headers=self.headers, json={"mastered": False})

        assert self.get_set("set1")["mastered"] == 19

    def test_repeated_update_does_not_double_count(self):
        for _ in range(2):
            self.client.patch(
                "/flashcards/card3", headers=self.headers, json={"mastered": True}
            )

        assert self.get_set("set1")["mastered"] == 21

    def test_mastered_count_never_negative(self):
        # dummy-set-123 starts at zero mastered; unmarking an unmastered card is a no-op
        self.client.patch(
            "/flashcards/gen-card1", headers=self.headers, json={"mastered": False}
        )
        assert self.get_set("dummy-set-123")["mastered"] == 0

    def test_unknown_card_is_not_found(self):
        response = self.client.patch(
            "/flashcards/card-missing", headers=self.headers, json={"mastered": True}
        )
        assert response.status_code == 404
