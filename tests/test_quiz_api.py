#!/usr/bin/env python3
"""
Pytest tests for the quiz catalog and quiz-taking endpoints
"""

from unittest.mock import patch

from fastapi.testclient import TestClient

from lazynote.core.config import settings
from lazynote.core.database import SessionLocal
from lazynote.main import app
from lazynote.models import QuizQuestion
from lazynote.services.quiz import QuizService


class TestQuizCatalog:
    def setup_method(self):
        self.client = TestClient(app)
        self.headers = {"Authorization": f"Bearer {settings.DEMO_TOKEN}"}

    def test_requires_authentication(self):
        response = self.client.get("/quizzes")
        assert response.status_code == 401

    def test_rejects_unknown_token(self):
        response = self.client.get(
            "/quizzes", headers={"Authorization": "Bearer not-a-token"}
        )
        assert response.status_code == 401

    def test_list_quizzes_recent_first(self):
        response = self.client.get("/quizzes", headers=self.headers)

        assert response.status_code == 200
        ids = [q["id"] for q in response.json()["data"]]
        # dummy-quiz-123 is created at seed time, so it is the newest
        assert ids == ["dummy-quiz-123", "quiz2", "quiz1", "quiz3"]

    def test_list_quizzes_by_score(self):
        response = self.client.get("/quizzes?sort=score", headers=self.headers)

        scores = [q["average_score"] for q in response.json()["data"]]
        assert scores == [92, 85, 75, 0]

    def test_search_matches_title_and_tags(self):
        by_title = self.client.get("/quizzes?q=web", headers=self.headers).json()
        by_tag = self.client.get("/quizzes?q=algo", headers=self.headers).json()

        assert [q["id"] for q in by_title["data"]] == ["quiz3"]
        assert [q["id"] for q in by_tag["data"]] == ["quiz2"]

    def test_get_quiz(self):
        response = self.client.get("/quizzes/quiz2", headers=self.headers)

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "Data Structures"
        assert body["tags"] == ["CS", "Programming", "Algorithms"]

    def test_unknown_quiz_is_not_found(self):
        response = self.client.get("/quizzes/quiz-missing", headers=self.headers)

        assert response.status_code == 404
        assert "quiz-missing" in response.json()["detail"]

    def test_questions_in_order(self):
        response = self.client.get("/quizzes/quiz1/questions", headers=self.headers)

        questions = response.json()["data"]
        assert [q["id"] for q in questions] == ["q1", "q2", "q3"]
        assert [q["correct_option_index"] for q in questions] == [1, 3, 0]

    def test_attempts_newest_first(self):
        response = self.client.get("/quizzes/quiz3/attempts", headers=self.headers)

        attempts = response.json()["data"]
        assert [a["id"] for a in attempts] == ["attempt4", "attempt5"]


class TestQuizSessionEndpoints:
    def setup_method(self):
        self.client = TestClient(app)
        self.headers = {"Authorization": f"Bearer {settings.DEMO_TOKEN}"}

    def start(self, quiz_id="quiz1"):
        response = self.client.post(f"/quizzes/{quiz_id}/sessions", headers=self.headers)
        assert response.status_code == 201
        return response.json()

    def post(self, session_id, action, json=None):
        return self.client.post(
            f"/quiz-sessions/{session_id}/{action}", headers=self.headers, json=json
        )

    def test_start_session(self):
        body = self.start()

        assert body["status"] == "in_progress"
        assert body["quiz_title"] == "Machine Learning Fundamentals"
        assert body["question_count"] == 3
        assert body["selections"] == [-1, -1, -1]
        assert body["current_index"] == 0
        assert body["progress_percent"] == 33
        assert body["current_question"]["id"] == "q1"
        # Answers stay hidden while the quiz is in progress
        assert body["current_question"]["correct_option_index"] is None

    def test_empty_quiz_cannot_start(self):
        response = self.client.post(
            "/quizzes/dummy-quiz-123/sessions", headers=self.headers
        )
        assert response.status_code == 422

    def test_full_run_scores_and_records_attempt(self):
        session_id = self.start()["session_id"]

        # correct indices are [1, 3, 0]; answer the last one wrong
        for option in (1, 3):
            assert self.post(session_id, "answer", {"option_index": option}).status_code == 200
            assert self.post(session_id, "advance").json()["moved"] is True
        self.post(session_id, "answer", {"option_index": 2})

        response = self.post(session_id, "submit")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "submitted"
        assert body["attempt"]["correct_answers"] == 2
        assert body["attempt"]["total_questions"] == 3
        assert body["attempt"]["score"] == 67
        assert body["attempt"]["id"].startswith("attempt-")
        assert body["current_question"]["correct_option_index"] == 0

        quiz = self.client.get("/quizzes/quiz1", headers=self.headers).json()
        assert quiz["completed_count"] == 4
        # (85 * 3 + 67) / 4 = 80.5 -> 81
        assert quiz["average_score"] == 81

        attempts = self.client.get("/quizzes/quiz1/attempts", headers=self.headers).json()
        assert len(attempts["data"]) == 3

    def test_out_of_range_correct_index_is_rejected(self):
        db = SessionLocal()
        try:
            db.query(QuizQuestion).filter(QuizQuestion.id == "q4").update(
                {"correct_option_index": -1}
            )
            db.commit()
        finally:
            db.close()

        response = self.client.post("/quizzes/quiz2/sessions", headers=self.headers)

        assert response.status_code == 422
        assert "q4" in response.json()["detail"]

        questions = self.client.get("/quizzes/quiz2/questions", headers=self.headers)
        assert questions.status_code == 200

    def test_submit_can_be_retried_after_recording_fails(self):
        session_id = self.start("quiz2")["session_id"]
        for index, option in enumerate([1, 2, 3]):
            self.post(session_id, "jump", {"index": index})
            self.post(session_id, "answer", {"option_index": option})

        with patch.object(
            QuizService, "submit_quiz_attempt", side_effect=RuntimeError("disk I/O error")
        ):
            response = self.post(session_id, "submit")
        assert response.status_code == 500

        session = self.client.get(f"/quiz-sessions/{session_id}", headers=self.headers).json()
        assert session["status"] == "in_progress"
        assert session["attempt"] is None

        response = self.post(session_id, "submit")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "submitted"
        assert body["attempt"]["id"].startswith("attempt-")
        assert body["attempt"]["score"] == 100
        attempts = self.client.get("/quizzes/quiz2/attempts", headers=self.headers).json()
        assert len(attempts["data"]) == 2

    def test_submit_before_all_answered_conflicts(self):
        session_id = self.start()["session_id"]
        self.post(session_id, "answer", {"option_index": 1})

        response = self.post(session_id, "submit")

        assert response.status_code == 409
        assert "unanswered" in response.json()["detail"]

    def test_advance_without_answer_conflicts(self):
        session_id = self.start()["session_id"]
        assert self.post(session_id, "advance").status_code == 409

    def test_boundary_navigation_is_noop(self):
        session_id = self.start()["session_id"]

        response = self.post(session_id, "retreat")
        assert response.status_code == 200
        assert response.json()["moved"] is False

        self.post(session_id, "jump", {"index": 2})
        self.post(session_id, "answer", {"option_index": 0})
        response = self.post(session_id, "advance")
        assert response.json()["moved"] is False
        assert response.json()["session"]["current_index"] == 2

    def test_invalid_option_and_jump(self):
        session_id = self.start()["session_id"]

        assert self.post(session_id, "answer", {"option_index": 7}).status_code == 400
        assert self.post(session_id, "jump", {"index": 3}).status_code == 400

    def test_submitted_session_is_read_only(self):
        session_id = self.start("quiz2")["session_id"]
        for index, option in enumerate([1, 2, 3]):
            self.post(session_id, "jump", {"index": index})
            self.post(session_id, "answer", {"option_index": option})
        assert self.post(session_id, "submit").json()["attempt"]["score"] == 100

        assert self.post(session_id, "answer", {"option_index": 0}).status_code == 409
        assert self.post(session_id, "retreat").status_code == 409

    def test_session_is_private_and_discardable(self):
        session_id = self.start()["session_id"]
        other = self.client.post(
            "/auth/register",
            json={"name": "Jane", "email": "jane@example.com", "password": "pw"},
        ).json()
        other_headers = {"Authorization": f"Bearer {other['token']}"}

        response = self.client.get(f"/quiz-sessions/{session_id}", headers=other_headers)
        assert response.status_code == 404

        response = self.client.delete(f"/quiz-sessions/{session_id}", headers=self.headers)
        assert response.status_code == 204
        response = self.client.get(f"/quiz-sessions/{session_id}", headers=self.headers)
        assert response.status_code == 404
