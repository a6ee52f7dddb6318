"""
Tests for user and role administration.
"""


class TestRoles:

    def test_seeded_roles_listed_by_priority(self, admin_client, roles):
        names = [r["name"] for r in admin_client.get("/api/admin/roles").json()]
        assert names == ["administrator", "editor", "content_manager", "media_manager"]

    def test_all_permissions(self, admin_client, roles):
        codes = {p["code"] for p in admin_client.get("/api/admin/roles/permissions/all").json()}
        assert {"admin", "articles", "glossary", "newsletter"} <= codes

    def test_create_update_delete_role(self, admin_client, roles):
        permissions = {p["code"]: p["id"] for p in admin_client.get("/api/admin/roles/permissions/all").json()}

        response = admin_client.post("/api/admin/roles", json={
            "name": "moderateur",
            "display_name": "Modérateur",
            "permission_ids": [permissions["messages"], permissions["messages"], 9999],
        })
        assert response.status_code == 201
        role = response.json()
        assert [p["code"] for p in role["permissions"]] == ["messages"]

        updated = admin_client.put(f"/api/admin/roles/{role['id']}", json={"display_name": "Modération"}).json()
        assert updated["display_name"] == "Modération"
        assert [p["code"] for p in updated["permissions"]] == ["messages"]

        replaced = admin_client.put(f"/api/admin/roles/{role['id']}", json={
            "permission_ids": [permissions["newsletter"]]
        }).json()
        assert [p["code"] for p in replaced["permissions"]] == ["newsletter"]

        assert admin_client.delete(f"/api/admin/roles/{role['id']}").status_code == 200
        assert admin_client.get(f"/api/admin/roles/{role['id']}").status_code == 404

    def test_duplicate_role_name(self, admin_client, roles):
        response = admin_client.post("/api/admin/roles", json={"name": "editor", "display_name": "Doublon"})
        assert response.status_code == 400

    def test_system_roles_cannot_be_deleted(self, admin_client, roles):
        response = admin_client.delete(f"/api/admin/roles/{roles['administrator'].id}")
        assert response.status_code == 400

    def test_deleting_role_detaches_users(self, admin_client, roles, make_user):
        user = make_user("video", role="none", custom_role=roles["media_manager"])
        assert admin_client.delete(f"/api/admin/roles/{roles['media_manager'].id}").status_code == 200
        assert admin_client.get(f"/api/admin/users/{user.id}").json()["custom_role_id"] is None


class TestUsers:

    def test_user_crud(self, client, admin_client, roles):
        response = admin_client.post("/api/admin/users", json={
            "username": "journaliste",
            "password": "secret123",
            "display_name": "Journaliste",
            "role": "none",
            "custom_role_id": roles["editor"].id,
            "is_team_member": True,
        })
        assert response.status_code == 201
        user = response.json()

        login = client.post("/api/auth/login", json={"username": "journaliste", "password": "secret123"})
        assert login.status_code == 200
        assert client.get("/api/auth/permissions/live_coverage").json()["has_permission"] is True

        admin_client.put(f"/api/admin/users/{user['id']}", json={"password": "nouveau123", "bio": "Bio"})
        assert client.post("/api/auth/login", json={"username": "journaliste", "password": "secret123"}).status_code == 401

        assert admin_client.delete(f"/api/admin/users/{user['id']}").status_code == 200
        assert admin_client.get(f"/api/admin/users/{user['id']}").status_code == 404

    def test_unknown_custom_role_rejected(self, admin_client):
        response = admin_client.post("/api/admin/users", json={
            "username": "x_user", "password": "secret123", "display_name": "X", "custom_role_id": 42
        })
        assert response.status_code == 400

    def test_cannot_delete_self(self, admin_client, admin_user):
        assert admin_client.delete(f"/api/admin/users/{admin_user.id}").status_code == 400

    def test_team_page_refreshed_on_user_change(self, client, admin_client, admin_user):
        assert client.get("/api/team/members").json() == []
        admin_client.put(f"/api/admin/users/{admin_user.id}", json={"is_team_member": True})
        assert len(client.get("/api/team/members").json()) == 1
