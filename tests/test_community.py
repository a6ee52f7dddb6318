"""
Tests for newsletter, team applications and contact messages.
"""


class TestNewsletter:

    def test_subscribe_unsubscribe_and_reactivate(self, client, admin_client):
        assert client.post("/api/newsletter/subscribe", json={"email": "Lina@Example.com"}).status_code == 201
        assert client.post("/api/newsletter/unsubscribe", json={"email": "lina@example.com"}).status_code == 200

        subscribers = admin_client.get("/api/admin/newsletter/subscribers").json()
        assert subscribers[0]["email"] == "lina@example.com"
        assert subscribers[0]["active"] is False

        client.post("/api/newsletter/subscribe", json={"email": "lina@example.com"})
        subscribers = admin_client.get("/api/admin/newsletter/subscribers").json()
        assert len(subscribers) == 1
        assert subscribers[0]["active"] is True

    def test_invalid_email(self, client):
        assert client.post("/api/newsletter/subscribe", json={"email": "pas-un-email"}).status_code == 422

    def test_unknown_address_unsubscribe_is_silent(self, client):
        assert client.post("/api/newsletter/unsubscribe", json={"email": "x@example.com"}).status_code == 200

    def test_delete_subscriber(self, client, admin_client):
        client.post("/api/newsletter/subscribe", json={"email": "a@example.com"})
        subscriber = admin_client.get("/api/admin/newsletter/subscribers").json()[0]
        path = f"/api/admin/newsletter/subscribers/{subscriber['id']}"
        assert admin_client.delete(path).status_code == 200
        assert admin_client.delete(path).status_code == 404


class TestApplications:

    def test_apply_and_review(self, client, admin_client, admin_user):
        response = client.post("/api/team/applications", json={
            "full_name": "Sam Martin",
            "email": "sam@example.com",
            "position": "Journaliste",
            "message": "Je souhaite rejoindre la rédaction.",
        })
        assert response.status_code == 201
        application_id = response.json()["id"]

        pending = admin_client.get("/api/admin/applications", params={"status": "pending"}).json()
        assert [a["id"] for a in pending] == [application_id]

        reviewed = admin_client.put(f"/api/admin/applications/{application_id}", json={
            "status": "accepted", "notes": "Profil solide"
        }).json()
        assert reviewed["status"] == "accepted"
        assert reviewed["reviewed_by"] == admin_user.id
        assert reviewed["reviewed_at"] is not None
        assert admin_client.get("/api/admin/applications", params={"status": "pending"}).json() == []

    def test_unknown_status_rejected(self, admin_client):
        assert admin_client.get("/api/admin/applications", params={"status": "maybe"}).status_code == 422

    def test_applications_require_grant(self, editor_client):
        assert editor_client.get("/api/admin/applications").status_code == 403


class TestTeamMembers:

    def test_only_team_members_listed(self, client, make_user):
        make_user("alice", is_team_member=True, title="Journaliste politique", display_name="Alice")
        make_user("bob")

        members = client.get("/api/team/members").json()
        assert [m["display_name"] for m in members] == ["Alice"]
        assert "username" not in members[0]


class TestContact:

    def test_contact_message_flow(self, client, admin_client, admin_user):
        response = client.post("/api/contact", json={
            "name": "Lecteur",
            "email": "lecteur@example.com",
            "subject": "Erreur dans un article",
            "message": "Le chiffre cité est faux.",
        })
        assert response.status_code == 201
        message_id = response.json()["id"]

        unread = admin_client.get("/api/admin/contact-messages", params={"unread_only": True}).json()
        assert [m["id"] for m in unread] == [message_id]

        updated = admin_client.put(f"/api/admin/contact-messages/{message_id}", json={
            "is_read": True, "assigned_to": admin_user.id
        }).json()
        assert updated["is_read"] is True
        assert updated["assigned_to"] == admin_user.id
        assert admin_client.get("/api/admin/contact-messages", params={"unread_only": True}).json() == []

        assert admin_client.delete(f"/api/admin/contact-messages/{message_id}").status_code == 200

    def test_missing_fields(self, client):
        assert client.post("/api/contact", json={"name": "X", "email": "x@example.com"}).status_code == 422
