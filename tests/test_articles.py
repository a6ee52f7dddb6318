"""
Tests for articles, categories and the news ticker.
"""

from politiquensemble.services.article_service import slugify


def create_article(admin_client, **fields):
    payload = {"title": "Titre", "content": "<p>Contenu</p>", "excerpt": "Résumé"}
    payload.update(fields)
    response = admin_client.post("/api/admin/articles", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestSlugs:

    def test_slugify_folds_accents(self):
        assert slugify("Élection présidentielle 2027 !") == "election-presidentielle-2027"

    def test_slug_derived_from_title(self, admin_client):
        article = create_article(admin_client, title="Réforme des retraites")
        assert article["slug"] == "reforme-des-retraites"

    def test_duplicate_titles_get_suffixes(self, admin_client):
        create_article(admin_client, title="Budget")
        assert create_article(admin_client, title="Budget")["slug"] == "budget-2"
        assert create_article(admin_client, title="Budget")["slug"] == "budget-3"

    def test_explicit_duplicate_slug_rejected(self, admin_client):
        create_article(admin_client, slug="unique")
        response = admin_client.post("/api/admin/articles", json={
            "title": "Autre", "content": "c", "excerpt": "e", "slug": "unique"
        })
        assert response.status_code == 400


class TestPublicArticles:

    def test_article_crud_round_trip(self, client, admin_client, admin_user):
        article = create_article(admin_client, title="Sénat", sources="Le Monde")
        assert article["author_id"] == admin_user.id

        updated = admin_client.put(f"/api/admin/articles/{article['id']}", json={"featured": True})
        assert updated.json()["featured"] is True
        assert updated.json()["sources"] == "Le Monde"

        public = client.get("/api/articles/senat").json()
        assert public["featured"] is True
        assert public["author"]["display_name"] == "Admin"

        assert admin_client.delete(f"/api/admin/articles/{article['id']}").status_code == 200
        assert client.get("/api/articles/senat").status_code == 404

    def test_drafts_hidden_from_public(self, client, admin_client):
        create_article(admin_client, title="Brouillon", published=False)
        create_article(admin_client, title="Publié")

        assert [a["slug"] for a in client.get("/api/articles").json()] == ["publie"]
        assert client.get("/api/articles/brouillon").status_code == 404
        assert len(admin_client.get("/api/admin/articles").json()) == 2

    def test_search_matches_title_excerpt_and_content(self, client, admin_client):
        create_article(admin_client, title="Assemblée nationale")
        create_article(admin_client, title="Autre", excerpt="vote à l'assemblée")
        create_article(admin_client, title="Rien", content="<p>football</p>")

        results = client.get("/api/articles", params={"search": "assemblée"}).json()
        assert {a["slug"] for a in results} == {"assemblee-nationale", "autre"}

    def test_popular_sort(self, client, admin_client):
        create_article(admin_client, title="Calme")
        create_article(admin_client, title="Populaire")
        client.get("/api/articles/populaire")
        client.get("/api/articles/populaire")

        results = client.get("/api/articles", params={"sort": "popular"}).json()
        assert results[0]["slug"] == "populaire"
        assert results[0]["view_count"] == 2

    def test_unknown_sort_rejected(self, client):
        assert client.get("/api/articles", params={"sort": "random"}).status_code == 422

    def test_featured_and_by_category(self, client, admin_client):
        category = admin_client.post("/api/admin/categories", json={"name": "Europe"}).json()
        create_article(admin_client, title="A la une", featured=True)
        create_article(admin_client, title="Bruxelles", category_id=category["id"])

        assert [a["slug"] for a in client.get("/api/articles/featured").json()] == ["a-la-une"]
        by_category = client.get(f"/api/articles/by-category/{category['id']}").json()
        assert [a["slug"] for a in by_category] == ["bruxelles"]
        assert by_category[0]["category"]["name"] == "Europe"
        assert len(client.get("/api/articles/recent").json()) == 2


class TestCategories:

    def test_category_crud(self, client, admin_client):
        category = admin_client.post("/api/admin/categories", json={"name": "International"}).json()
        assert category["color"] == "#FF4D4D"
        assert client.get("/api/categories/international").json()["id"] == category["id"]

        admin_client.put(f"/api/admin/categories/{category['id']}", json={"color": "#000000"})
        assert client.get("/api/categories/international").json()["color"] == "#000000"

    def test_duplicate_category_name_rejected(self, admin_client):
        admin_client.post("/api/admin/categories", json={"name": "Santé"})
        response = admin_client.post("/api/admin/categories", json={"name": "Santé", "slug": "sante-2"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Conflit avec des données existantes"

    def test_deleting_category_keeps_articles(self, client, admin_client):
        category = admin_client.post("/api/admin/categories", json={"name": "Société"}).json()
        create_article(admin_client, title="Logement", category_id=category["id"])

        assert admin_client.delete(f"/api/admin/categories/{category['id']}").status_code == 200
        article = client.get("/api/articles/logement").json()
        assert article["category_id"] is None

    def test_category_permission(self, editor_client):
        """Content managers hold the categories code."""
        assert editor_client.post("/api/admin/categories", json={"name": "Culture"}).status_code == 201


class TestNewsUpdates:

    def test_only_active_items_listed(self, client, admin_client):
        admin_client.post("/api/admin/news-updates", json={"title": "Remaniement"})
        admin_client.post("/api/admin/news-updates", json={"title": "Ancien", "active": False})

        assert [n["title"] for n in client.get("/api/news-updates").json()] == ["Remaniement"]
