"""
Tests for live broadcast announcements.
"""

import pytest


@pytest.fixture
def live_event(admin_client):
    response = admin_client.post("/api/admin/live-events", json={
        "title": "Débat présidentiel",
        "description": "Le débat de l'entre-deux-tours en direct",
        "live_url": "https://www.youtube.com/embed/abc",
        "active": True,
    })
    assert response.status_code == 201
    return response.json()


class TestPublicLiveEvents:

    def test_no_active_event(self, client, admin_client):
        admin_client.post("/api/admin/live-events", json={"title": "Plus tard", "description": "..."})
        assert client.get("/api/live-event").status_code == 404

    def test_active_event(self, client, live_event):
        response = client.get("/api/live-event")
        assert response.status_code == 200
        assert response.json()["id"] == live_event["id"]
        assert response.json()["live_url"] == "https://www.youtube.com/embed/abc"

    def test_get_by_id(self, client, live_event):
        assert client.get(f"/api/live-events/{live_event['id']}").json()["title"] == "Débat présidentiel"
        assert client.get("/api/live-events/999").status_code == 404

    def test_non_numeric_id(self, client):
        response = client.get("/api/live-events/demain")
        assert response.status_code == 400
        assert response.json()["detail"] == "Identifiant de direct invalide"


class TestAdminLiveEvents:

    def test_ending_event_refreshes_cached_page(self, client, admin_client, live_event):
        assert client.get("/api/live-event").status_code == 200
        assert client.get(f"/api/live-events/{live_event['id']}").json()["active"] is True

        response = admin_client.put(f"/api/admin/live-events/{live_event['id']}", json={"active": False})
        assert response.status_code == 200

        assert client.get("/api/live-event").status_code == 404
        assert client.get(f"/api/live-events/{live_event['id']}").json()["active"] is False

    def test_latest_activated_event_wins(self, client, admin_client, live_event):
        other = admin_client.post("/api/admin/live-events", json={
            "title": "Soirée électorale", "description": "...", "active": True,
        }).json()
        assert client.get("/api/live-event").json()["id"] == other["id"]

        admin_client.put(f"/api/admin/live-events/{live_event['id']}", json={"description": "Mis à jour"})
        assert client.get("/api/live-event").json()["id"] == live_event["id"]

    def test_delete(self, client, admin_client, live_event):
        assert admin_client.delete(f"/api/admin/live-events/{live_event['id']}").status_code == 200
        assert admin_client.get("/api/admin/live-events").json() == []
        assert admin_client.delete(f"/api/admin/live-events/{live_event['id']}").status_code == 404

    def test_requires_live_coverage_code(self, editor_client):
        assert editor_client.get("/api/admin/live-events").status_code == 403
