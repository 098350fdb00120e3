"""
Tests for the recommendation HTTP endpoints.
"""

from contextlib import contextmanager

import pytest
from fastapi.testclient import TestClient

from db import get_db
from main import app


@pytest.fixture
def client(db_session):
    @contextmanager
    def _session_scope():
        yield db_session

    app.dependency_overrides[get_db] = lambda: _session_scope()
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/recommendations/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_score_endpoint(client, profile):
    payload = {
        "preference_profile": profile.model_dump(exclude={"user_id"}),
        "materials": [
            {"material_id": 2, "title": "Intro Video", "difficulty": "Advanced", "file_type": "video"},
            {
                "material_id": 1,
                "title": "Pengantar Basis Data",
                "category_name": "Database & Data",
                "difficulty": "Beginner",
                "file_type": "pdf",
                "tags": "MySQL, SQL",
                "avg_rating": 4.6,
                "view_count": 600,
            },
        ],
        "min_raw_score": 20,
    }
    response = client.post("/recommendations/score", json=payload)
    assert response.status_code == 200

    body = response.json()
    assert body["count"] == 1
    assert body["total_evaluated"] == 2
    top = body["recommendations"][0]
    assert top["material_id"] == 1
    assert top["raw_score"] == 98
    assert top["match_level"] == "strong"
    assert len(top["match_reasons"]) == 7


def test_score_endpoint_rejects_invalid_material(client):
    response = client.post(
        "/recommendations/score",
        json={"preference_profile": {}, "materials": [{"title": "missing id"}]},
    )
    assert response.status_code == 400


def test_score_endpoint_rejects_negative_threshold(client):
    response = client.post(
        "/recommendations/score",
        json={"materials": [], "min_raw_score": -1},
    )
    assert response.status_code == 422


def test_user_recommendations_full(client):
    response = client.get("/recommendations/users/student-1", params={"screen": "dashboard"})
    assert response.status_code == 200

    body = response.json()
    assert body["screen"] == "dashboard"
    assert body["summary"]["total_evaluated"] == 4
    assert body["summary"]["total_recommended"] == 3
    assert body["summary"]["profile_complete"] is True
    assert [r["material_id"] for r in body["recommendations"]] == [1, 3, 2]


def test_user_recommendations_simple(client):
    response = client.get(
        "/recommendations/users/student-1",
        params={"format": "simple", "difficulty": "beginner"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 2
    assert [r["material_id"] for r in body["recommendations"]] == [1, 3]


def test_user_recommendations_unknown_screen(client):
    response = client.get("/recommendations/users/student-1", params={"screen": "sidebar"})
    assert response.status_code == 400


def test_user_without_profile_gets_warning(client):
    response = client.get("/recommendations/users/nobody")
    assert response.status_code == 200
    body = response.json()
    assert body["recommendations"] == []
    assert body["warnings"]


def test_related_materials(client):
    response = client.get("/recommendations/materials/1/related")
    assert response.status_code == 200
    assert [m["material_id"] for m in response.json()["related"]] == [2]

    missing = client.get("/recommendations/materials/999/related")
    assert missing.status_code == 404


def test_score_endpoint_accepts_scalar_preferences(client):
    response = client.post(
        "/recommendations/score",
        json={
            "preference_profile": {"difficulty_level": "beginner", "preferred_tags": 5},
            "materials": [{"material_id": 1, "title": "Git", "difficulty": "Beginner", "tags": "5, git"}],
        },
    )
    assert response.status_code == 200
    top = response.json()["recommendations"][0]
    assert top["raw_score"] == 40
    assert "Tags: 5" in top["match_reasons"]


def test_user_recommendations_format_and_search_filters(client):
    response = client.get("/recommendations/users/student-1", params={"file_type": "pdf"})
    assert response.status_code == 200
    assert [r["material_id"] for r in response.json()["recommendations"]] == [1, 3]

    response = client.get(
        "/recommendations/users/student-1",
        params={"search": "sql", "format": "simple"},
    )
    assert response.status_code == 200
    assert [r["material_id"] for r in response.json()["recommendations"]] == [2]
