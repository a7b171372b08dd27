"""Smoke tests for API routes."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from conftest import build_app
from little_learners.config import Settings
from little_learners.db import get_db
from little_learners.main import create_app
from little_learners.storage.seed import seed_catalogs

CONTENT_DIR = Path(__file__).resolve().parent.parent / "config" / "content"


@pytest.fixture
def seeded_client(session_factory, client):
    db = session_factory()
    try:
        seed_catalogs(db, CONTENT_DIR)
    finally:
        db.close()
    return client


def create_user(client, name="Maya", age=5) -> dict:
    response = client.post("/api/users", json={"name": name, "age": age})
    assert response.status_code == 200
    return response.json()


class TestHealthCheck:
    def test_health_returns_ok(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestUsers:
    def test_create_returns_camel_case_profile(self, client):
        user = create_user(client)
        assert user["name"] == "Maya"
        assert user["totalStars"] == 0
        assert user["lastActive"] is None

    def test_create_missing_age(self, client):
        response = client.post("/api/users", json={"name": "Maya"})
        assert response.status_code == 422
        assert response.json()["error"] == "validation_failed"

    def test_get_touches_last_active(self, client):
        user = create_user(client)
        response = client.get(f"/api/user/{user['id']}")
        assert response.status_code == 200
        assert response.json()["lastActive"] is not None

    def test_get_missing_user(self, client):
        response = client.get("/api/user/999")
        assert response.status_code == 404
        assert response.json() == {"error": "not_found", "message": "User not found"}

    def test_list_users(self, client):
        create_user(client, "A")
        b = create_user(client, "B")
        client.get(f"/api/user/{b['id']}")
        names = [u["name"] for u in client.get("/api/users").json()]
        assert names == ["B", "A"]

    def test_update_user(self, client):
        user = create_user(client)
        response = client.put(f"/api/users/{user['id']}", json={"name": "Maya Rose"})
        assert response.status_code == 200
        assert response.json()["name"] == "Maya Rose"

    def test_delete_cascades(self, client):
        user = create_user(client)
        uid = user["id"]
        client.post("/api/progress", json={
            "userId": uid, "activityType": "reading", "level": 1, "completedItems": [1, 2], "stars": 1,
        })
        client.post(f"/api/user/{uid}/achievements", json={
            "title": "First Word", "description": "Read a word", "icon": "📖",
        })
        assert client.delete(f"/api/users/{uid}").json() == {"success": True}
        assert client.get(f"/api/user/{uid}/progress").json() == []
        assert client.get(f"/api/user/{uid}/achievements").json() == []
        assert client.get(f"/api/user/{uid}").status_code == 404


class TestProgress:
    def test_upsert_keeps_single_record(self, client):
        uid = create_user(client)["id"]
        payload = {"userId": uid, "activityType": "math", "level": 1, "completedItems": [1], "stars": 1}
        first = client.post("/api/progress", json=payload).json()
        payload.update(completedItems=[1, 2, 2, 3], stars=3)
        second = client.post("/api/progress", json=payload).json()
        assert second["id"] == first["id"]
        assert second["completedItems"] == [1, 2, 3]
        assert second["totalItems"] == 10
        rows = client.get(f"/api/user/{uid}/progress").json()
        assert len(rows) == 1
        assert client.get(f"/api/user/{uid}").json()["totalStars"] == 3

    def test_filter_and_clear_by_type(self, client):
        uid = create_user(client)["id"]
        for activity_type in ("reading", "math"):
            client.post("/api/progress", json={
                "userId": uid, "activityType": activity_type, "level": 1, "completedItems": [1], "stars": 0,
            })
        assert len(client.get(f"/api/user/{uid}/progress/math").json()) == 1
        response = client.delete(f"/api/user/{uid}/progress/math")
        assert response.json()["success"] is True
        remaining = client.get(f"/api/user/{uid}/progress").json()
        assert [r["activityType"] for r in remaining] == ["reading"]
        client.delete(f"/api/user/{uid}/progress")
        assert client.get(f"/api/user/{uid}/progress").json() == []

    def test_malformed_payload(self, client):
        response = client.post("/api/progress", json={"activityType": "math"})
        assert response.status_code == 422


class TestSessions:
    def test_activate_and_record_through_session(self, client):
        uid = create_user(client)["id"]
        activation = client.post(f"/api/user/{uid}/activate").json()
        token = activation["sessionToken"]
        headers = {"X-Session-Token": token}
        assert client.get("/api/session", headers=headers).json()["id"] == uid

        record = client.post("/api/session/progress", headers=headers, json={
            "activityType": "reading", "level": 2, "completedItems": [13, 14], "stars": 1,
        }).json()
        assert record["userId"] == uid

        assert client.delete("/api/session", headers=headers).json() == {"success": True}
        assert client.get("/api/session", headers=headers).status_code == 404

    def test_missing_token(self, client):
        assert client.get("/api/session").status_code == 404

    def test_switching_learner_revokes_previous_token(self, client):
        maya = create_user(client, "Maya", 5)["id"]
        leo = create_user(client, "Leo", 7)["id"]
        first = client.post(f"/api/user/{maya}/activate").json()["sessionToken"]
        second = client.post(f"/api/user/{leo}/activate", headers={"X-Session-Token": first}).json()["sessionToken"]

        assert client.get("/api/session", headers={"X-Session-Token": first}).status_code == 404
        assert client.get("/api/session", headers={"X-Session-Token": second}).json()["id"] == leo


class TestContent:
    def test_reading_words_by_level(self, seeded_client):
        words = seeded_client.get("/api/reading/words", params={"level": 1}).json()
        assert len(words) == 12
        assert words[0]["word"] == "CAT"
        assert all(w["level"] == 1 for w in words)
        assert len(seeded_client.get("/api/reading/words/all").json()) == 63

    def test_level_zero_returns_full_catalog(self, seeded_client):
        assert len(seeded_client.get("/api/reading/words", params={"level": 0}).json()) == 63
        activities = seeded_client.get("/api/math/activities", params={"type": "counting", "level": 0}).json()
        assert len(activities) == 26

    def test_reading_word_crud(self, client):
        created = client.post("/api/reading/words", json={
            "word": "kite", "imageUrl": "https://example.com/kite.jpg", "level": 2,
        })
        assert created.status_code == 200
        word = created.json()
        assert word["word"] == "KITE"

        updated = client.put(f"/api/reading/words/{word['id']}", json={
            "word": "kites", "imageUrl": "https://example.com/kite.jpg", "level": 3,
        }).json()
        assert updated["word"] == "KITES"
        assert updated["level"] == 3

        assert client.delete(f"/api/reading/words/{word['id']}").json() == {"success": True}
        assert client.delete(f"/api/reading/words/{word['id']}").status_code == 404

    def test_reading_word_missing_fields(self, client):
        response = client.post("/api/reading/words", json={"word": "kite", "level": 1})
        assert response.status_code == 422

    def test_math_activities_filtered_only_with_type_and_level(self, seeded_client):
        counting = seeded_client.get("/api/math/activities", params={"type": "counting", "level": 1}).json()
        assert len(counting) == 5
        assert all(a["type"] == "counting" and a["level"] == 1 for a in counting)
        everything = seeded_client.get("/api/math/activities", params={"type": "counting"}).json()
        assert len(everything) == 26

    def test_math_activity_options_are_stable(self, seeded_client):
        first = seeded_client.get("/api/math/activities/1").json()
        again = seeded_client.get("/api/math/activities/1").json()
        assert first["options"] == again["options"]
        assert first["answer"] in first["options"]

    def test_math_activity_not_found(self, client):
        assert client.get("/api/math/activities/999").status_code == 404


class TestDashboard:
    def test_dashboard_for_new_user(self, client):
        uid = create_user(client)["id"]
        dashboard = client.get(f"/api/user/{uid}/dashboard").json()
        assert len(dashboard["weeklyActivity"]) == 7
        assert len(dashboard["reading"]) == 6
        assert dashboard["totalSessionMinutes"] == 0
        assert dashboard["totalStars"] == 0

    def test_dashboard_counts_today(self, client):
        uid = create_user(client)["id"]
        client.post("/api/progress", json={
            "userId": uid, "activityType": "reading", "level": 1, "completedItems": list(range(1, 26)), "stars": 5,
        })
        dashboard = client.get(f"/api/user/{uid}/dashboard").json()
        assert max(d["minutes"] for d in dashboard["weeklyActivity"]) == 60
        assert dashboard["totalSessionMinutes"] == 62.5
        assert dashboard["reading"][0]["completed"] == 25

    def test_dashboard_missing_user(self, client):
        assert client.get("/api/user/5/dashboard").status_code == 404


def test_storage_failure_maps_to_503(tmp_path):
    broken = create_engine(f"sqlite:///{tmp_path / 'missing' / 'app.db'}")
    app = build_app(sessionmaker(bind=broken))
    with TestClient(app) as c:
        response = c.get("/api/users")
    assert response.status_code == 503
    assert response.json()["error"] == "storage_unavailable"


def test_request_session_rolled_back_on_storage_error(session_factory):
    app = build_app(session_factory)
    dependency = app.dependency_overrides[get_db]()
    session = next(dependency)
    calls = []
    session.rollback = lambda: calls.append("rollback")
    with pytest.raises(SQLAlchemyError):
        dependency.throw(SQLAlchemyError("statement failed"))
    assert calls == ["rollback"]


class TestAppSecret:
    ORIGIN = "http://localhost:5173"

    @pytest.fixture
    def guarded_client(self):
        app = create_app(Settings(app_secret="s3cret", allowed_origins=self.ORIGIN, seed_content=False))
        return TestClient(app)

    def test_preflight_allowed_without_secret(self, guarded_client):
        response = guarded_client.options("/api/users", headers={
            "Origin": self.ORIGIN,
            "Access-Control-Request-Method": "GET",
        })
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == self.ORIGIN

    def test_unauthorized_response_carries_cors_headers(self, guarded_client):
        response = guarded_client.get("/api/users", headers={"Origin": self.ORIGIN})
        assert response.status_code == 401
        assert response.json()["error"] == "unauthorized"
        assert response.headers["access-control-allow-origin"] == self.ORIGIN

    def test_health_open_without_secret(self, guarded_client):
        assert guarded_client.get("/api/health").json() == {"status": "ok"}
