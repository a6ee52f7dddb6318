"""
Tests for the admin route table and the server-side permission gates.
"""

import pytest

from politiquensemble.permissions import (
    DEFAULT_PERMISSIONS,
    ROUTE_PERMISSIONS,
    default_grants,
    permission_for_route,
)


class TestRouteTable:

    @pytest.mark.parametrize("path,code", [
        ("/admin", "dashboard"),
        ("/admin/articles", "articles"),
        ("/admin/directs", "live_coverage"),
        ("/admin/team", "users"),
        ("/admin/glossaire", "glossary"),
        ("/admin/alertes", "site_alerts"),
    ])
    def test_exact_match(self, path, code):
        assert permission_for_route(path) == code

    def test_sub_path_uses_parent_entry(self):
        """Given an edit page, when looking it up, then the section code applies."""
        assert permission_for_route("/admin/articles/12/edit") == "articles"
        assert permission_for_route("/admin/directs/5") == "live_coverage"

    def test_query_and_trailing_slash_ignored(self):
        assert permission_for_route("/admin/videos/?page=2") == "videos"
        assert permission_for_route("/admin/categories#top") == "categories"

    def test_unknown_path_falls_back_to_admin(self):
        assert permission_for_route("/admin/parametres") == "admin"
        assert permission_for_route("/admin/articles-archive") == "admin"
        assert permission_for_route("/") == "admin"

    def test_every_route_code_is_seeded(self):
        seeded = {p["code"] for p in DEFAULT_PERMISSIONS}
        assert set(ROUTE_PERMISSIONS.values()) <= seeded
        assert "admin" in seeded

    def test_only_administrator_gets_admin_code(self):
        assert "admin" in default_grants("administrator")
        assert "admin" not in default_grants("editor")
        assert default_grants("media_manager") == ["dashboard", "videos"]
        assert default_grants("unknown") == []


class TestAdminGates:

    def test_anonymous_gets_401(self, client):
        response = client.get("/api/admin/articles")
        assert response.status_code == 401

    def test_missing_grant_gets_403(self, editor_client):
        response = editor_client.get("/api/admin/videos")
        assert response.status_code == 403
        assert response.json()["detail"] == "Accès refusé"

    def test_granted_code_passes(self, editor_client):
        assert editor_client.get("/api/admin/articles").status_code == 200
        assert editor_client.get("/api/admin/flash-infos").status_code == 200

    def test_legacy_admin_passes_everywhere(self, admin_client):
        for path in ("/api/admin/videos", "/api/admin/roles", "/api/admin/cache/stats"):
            assert admin_client.get(path).status_code == 200

    def test_cache_admin_requires_admin_code(self, editor_client):
        assert editor_client.get("/api/admin/cache/stats").status_code == 403

    def test_user_without_role_is_refused(self, make_user, login_as):
        make_user("lecteur", role="user")
        reader = login_as("lecteur")
        assert reader.get("/api/admin/articles").status_code == 403

    def test_revoked_grant_applies_immediately(self, admin_client, editor_client, roles):
        """Given a warmed admin cache, when the grant is removed, then the cached page is not served."""
        assert editor_client.get("/api/admin/articles").status_code == 200

        role_id = roles["content_manager"].id
        permissions = admin_client.get("/api/admin/roles/permissions/all").json()
        keep = [p["id"] for p in permissions if p["code"] in ("dashboard", "videos")]
        assert admin_client.put(f"/api/admin/roles/{role_id}", json={"permission_ids": keep}).status_code == 200

        assert editor_client.get("/api/admin/articles").status_code == 403
        assert editor_client.get("/api/admin/videos").status_code == 200
