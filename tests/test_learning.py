"""
Tests for the educational section and the political glossary.
"""

import pytest


@pytest.fixture
def topic(admin_client):
    response = admin_client.post("/api/admin/educational-topics", json={
        "title": "Les institutions",
        "description": "Comprendre la Ve République",
        "image_url": "/img/institutions.jpg",
        "order": 2,
    })
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def lesson(admin_client, topic):
    response = admin_client.post("/api/admin/educational-content", json={
        "title": "Le rôle du Sénat",
        "content": "<p>...</p>",
        "summary": "La chambre haute",
        "image_url": "/img/senat.jpg",
        "topic_id": topic["id"],
    })
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def quiz(admin_client, lesson):
    response = admin_client.post("/api/admin/quizzes", json={
        "content_id": lesson["id"],
        "question": "Combien de sénateurs ?",
        "option1": "348",
        "option2": "577",
        "option3": "100",
        "correct_option": 1,
        "explanation": "Le Sénat compte 348 sénateurs.",
    })
    assert response.status_code == 201
    return response.json()


class TestTopics:

    def test_topics_ordered(self, client, admin_client, topic, admin_user):
        admin_client.post("/api/admin/educational-topics", json={
            "title": "Les bases", "description": "...", "image_url": "/img/bases.jpg", "order": 1
        })
        topics = client.get("/api/educational-topics").json()
        assert [t["slug"] for t in topics] == ["les-bases", "les-institutions"]
        assert topics[1]["author_id"] == admin_user.id

    def test_topic_content_lists_published_lessons(self, client, admin_client, topic, lesson):
        admin_client.post("/api/admin/educational-content", json={
            "title": "Brouillon", "content": "...", "summary": "...", "image_url": "/x.jpg",
            "topic_id": topic["id"], "published": False,
        })
        lessons = client.get("/api/educational-topics/les-institutions/content").json()
        assert [l["slug"] for l in lessons] == ["le-role-du-senat"]

    def test_deleting_topic_removes_lessons(self, client, admin_client, topic, lesson, quiz):
        assert admin_client.delete(f"/api/admin/educational-topics/{topic['id']}").status_code == 200
        assert client.get(f"/api/educational-content/{lesson['id']}").status_code == 404
        assert admin_client.get("/api/admin/quizzes").json() == []

    def test_lesson_needs_existing_topic(self, admin_client):
        response = admin_client.post("/api/admin/educational-content", json={
            "title": "Orphelin", "content": "...", "summary": "...", "image_url": "/x.jpg", "topic_id": 99
        })
        assert response.status_code == 400


class TestLessons:

    def test_reading_counts_views(self, client, lesson):
        client.get(f"/api/educational-content/{lesson['id']}")
        assert client.get(f"/api/educational-content/{lesson['id']}").json()["views"] == 2

    def test_like(self, client, lesson):
        assert client.post(f"/api/educational-content/{lesson['id']}/like").json() == {"likes": 1}
        assert client.post("/api/educational-content/999/like").status_code == 404

    def test_like_refreshes_cached_topic_content(self, client, lesson):
        listing = "/api/educational-topics/les-institutions/content"
        assert client.get(listing).json()[0]["likes"] == 0
        client.post(f"/api/educational-content/{lesson['id']}/like")
        assert client.get(listing).json()[0]["likes"] == 1

    def test_editor_needs_grant(self, editor_client):
        assert editor_client.get("/api/admin/educational-content").status_code == 403


class TestQuizzes:

    def test_public_quiz_hides_answer(self, client, lesson, quiz):
        quizzes = client.get(f"/api/educational-content/{lesson['id']}/quizzes").json()
        assert quizzes[0]["question"] == "Combien de sénateurs ?"
        assert "correct_option" not in quizzes[0]
        assert "explanation" not in quizzes[0]

    def test_answer_check(self, client, quiz):
        wrong = client.post(f"/api/quizzes/{quiz['id']}/answer", json={"option": 2}).json()
        assert wrong == {"correct": False, "correct_option": 1, "explanation": "Le Sénat compte 348 sénateurs."}

        right = client.post(f"/api/quizzes/{quiz['id']}/answer", json={"option": 1}).json()
        assert right["correct"] is True

    def test_answer_validation(self, client, quiz):
        assert client.post(f"/api/quizzes/{quiz['id']}/answer", json={"option": 4}).status_code == 422
        assert client.post("/api/quizzes/999/answer", json={"option": 1}).status_code == 404

    def test_update_quiz(self, admin_client, quiz):
        response = admin_client.put(f"/api/admin/quizzes/{quiz['id']}", json={"correct_option": 3})
        assert response.json()["correct_option"] == 3
        assert admin_client.put(f"/api/admin/quizzes/{quiz['id']}", json={"correct_option": 0}).status_code == 422


class TestGlossary:

    def test_glossary_round_trip(self, client, admin_client):
        response = admin_client.post("/api/admin/glossary", json={
            "term": "Motion de censure",
            "definition": "Procédure permettant à l'Assemblée de renverser le gouvernement.",
            "category": "Parlement",
        })
        assert response.status_code == 201
        admin_client.post("/api/admin/glossary", json={"term": "Amendement", "definition": "Modification d'un texte."})

        assert [t["term"] for t in client.get("/api/glossary").json()] == ["Amendement", "Motion de censure"]
        assert [t["term"] for t in client.get("/api/glossary", params={"category": "Parlement"}).json()] == ["Motion de censure"]
        assert client.get("/api/glossary/motion de censure").json()["category"] == "Parlement"

    def test_duplicate_term_rejected(self, admin_client):
        admin_client.post("/api/admin/glossary", json={"term": "Quorum", "definition": "..."})
        response = admin_client.post("/api/admin/glossary", json={"term": "quorum", "definition": "..."})
        assert response.status_code == 400

    def test_delete_term(self, client, admin_client):
        term = admin_client.post("/api/admin/glossary", json={"term": "Scrutin", "definition": "Vote."}).json()
        client.get("/api/glossary/scrutin")
        assert admin_client.delete(f"/api/admin/glossary/{term['id']}").status_code == 200
        assert client.get("/api/glossary/scrutin").status_code == 404
