#!/usr/bin/env python3
"""
Pytest tests for the ingestion job endpoints
"""

from fastapi.testclient import TestClient

from lazynote.core.config import settings
from lazynote.main import app


class TestIngestionEndpoints:
    def setup_method(self):
        self.client = TestClient(app)
        self.headers = {"Authorization": f"Bearer {settings.DEMO_TOKEN}"}
        self.payload = {
            "title": "Biology Notes",
            "files": ["cells.pdf"],
            "tags": ["Biology", " Biology ", "Cells"],
        }

    def create(self, payload=None):
        return self.client.post(
            "/ingestions", headers=self.headers, json=payload or self.payload
        )

    def test_create_starts_uploading(self):
        response = self.create()

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "uploading"
        assert body["upload_progress"] == 0
        assert body["processing_progress"] == 0
        assert body["tags"] == ["Biology", "Cells"]
        assert body["generated_set_id"] is None

    def test_missing_title_is_rejected(self):
        response = self.create({"title": "  ", "files": ["cells.pdf"]})

        assert response.status_code == 400
        assert (
            response.json()["detail"]
            == "Please select at least one file and provide a title."
        )

    def test_missing_files_is_rejected(self):
        response = self.create({"title": "Biology Notes", "files": []})
        assert response.status_code == 400

    def test_unsupported_extension_is_rejected(self):
        response = self.create({"title": "Biology Notes", "files": ["cells.exe"]})
        assert response.status_code == 400

    def test_requires_authentication(self):
        response = self.client.post("/ingestions", json=self.payload)
        assert response.status_code == 401

    def test_reset_returns_to_idle(self):
        job_id = self.create().json()["job_id"]

        response = self.client.post(f"/ingestions/{job_id}/reset", headers=self.headers)

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "idle"
        assert body["upload_progress"] == 0
        assert body["title"] == ""
        assert body["files"] == []

    def test_restart_after_reset(self):
        job_id = self.create().json()["job_id"]
        self.client.post(f"/ingestions/{job_id}/reset", headers=self.headers)

        response = self.client.post(
            f"/ingestions/{job_id}/start",
            headers=self.headers,
            json={"title": "Chemistry", "files": ["atoms.txt"]},
        )

        assert response.status_code == 200
        assert response.json()["status"] == "uploading"
        assert response.json()["title"] == "Chemistry"

    def test_start_while_running_conflicts(self):
        job_id = self.create().json()["job_id"]

        response = self.client.post(
            f"/ingestions/{job_id}/start", headers=self.headers, json=self.payload
        )
        assert response.status_code == 409

    def test_unknown_job_is_not_found(self):
        response = self.client.get("/ingestions/missing", headers=self.headers)
        assert response.status_code == 404

    def test_discard_job(self):
        job_id = self.create().json()["job_id"]

        response = self.client.delete(f"/ingestions/{job_id}", headers=self.headers)
        assert response.status_code == 204

        response = self.client.get(f"/ingestions/{job_id}", headers=self.headers)
        assert response.status_code == 404
