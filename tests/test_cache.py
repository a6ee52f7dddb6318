"""
Tests for the response cache: the store itself and its wiring on routes.
"""

from politiquensemble.core.cache import ResponseCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestResponseCache:

    def setup_method(self):
        self.clock = FakeClock()
        self.cache = ResponseCache(default_ttl=300, admin_ttl=30, clock=self.clock)

    def test_fresh_entry_returned_verbatim(self):
        self.cache.set("/api/videos", b'[{"id": 1}]')
        self.clock.now += 299
        assert self.cache.get("/api/videos").data == b'[{"id": 1}]'

    def test_expired_entry_dropped(self):
        self.cache.set("/api/videos", b"[]")
        self.clock.now += 300
        assert self.cache.get("/api/videos") is None
        assert "/api/videos" not in self.cache

    def test_admin_keys_use_short_ttl(self):
        self.cache.set("/api/admin/videos", b"[]")
        self.clock.now += 31
        assert self.cache.get("/api/admin/videos") is None
        assert self.cache.ttl_for("/api/admin/roles") == 30
        assert self.cache.ttl_for("/api/videos") == 300

    def test_invalidate_prefix_only_drops_matching_keys(self):
        for key in ("/api/articles", "/api/articles?sort=popular", "/api/admin/articles", "/api/videos"):
            self.cache.set(key, b"[]")

        dropped = self.cache.invalidate_prefix("/api/articles", "/api/admin/articles")

        assert dropped == 3
        assert len(self.cache) == 1
        assert "/api/videos" in self.cache

    def test_invalidate_and_clear(self):
        self.cache.set("/api/a", b"1")
        self.cache.set("/api/b", b"2")
        assert self.cache.invalidate("/api/a") is True
        assert self.cache.invalidate("/api/a") is False
        self.cache.clear()
        assert self.cache.stats() == {"entries": 0, "default_ttl": 300, "admin_ttl": 30}


class TestCachedRoutes:

    def test_miss_then_hit(self, client, admin_client):
        admin_client.post("/api/admin/categories", json={"name": "Politique"})

        first = client.get("/api/categories")
        second = client.get("/api/categories")

        assert first.headers["X-Cache"] == "MISS"
        assert second.headers["X-Cache"] == "HIT"
        assert second.json() == first.json()

    def test_query_string_is_part_of_the_key(self, client):
        assert client.get("/api/articles?sort=popular").headers["X-Cache"] == "MISS"
        assert client.get("/api/articles?sort=recent").headers["X-Cache"] == "MISS"
        assert client.get("/api/articles?sort=popular").headers["X-Cache"] == "HIT"

    def test_mutation_invalidates_public_listing(self, client, admin_client):
        assert client.get("/api/categories").json() == []

        admin_client.post("/api/admin/categories", json={"name": "Économie"})

        response = client.get("/api/categories")
        assert response.headers["X-Cache"] == "MISS"
        assert [c["slug"] for c in response.json()] == ["economie"]

    def test_errors_are_not_cached(self, client):
        assert client.get("/api/categories/inconnue").status_code == 404
        response = client.get("/api/categories/inconnue")
        assert response.status_code == 404
        assert "X-Cache" not in response.headers

    def test_view_counting_pages_bypass_cache(self, client, admin_client):
        admin_client.post("/api/admin/articles", json={"title": "Vu", "content": "c", "excerpt": "e"})

        client.get("/api/articles/vu")
        response = client.get("/api/articles/vu")

        assert "X-Cache" not in response.headers
        assert response.json()["view_count"] == 2

    def test_cached_admin_data_never_reaches_anonymous_callers(self, client, admin_client):
        assert admin_client.get("/api/admin/articles").headers["X-Cache"] == "MISS"
        assert admin_client.get("/api/admin/articles").headers["X-Cache"] == "HIT"

        response = client.get("/api/admin/articles")
        assert response.status_code == 401
        assert "X-Cache" not in response.headers

    def test_admin_stats_and_flush(self, client, admin_client):
        client.get("/api/categories")
        client.get("/api/videos")

        assert admin_client.get("/api/admin/cache/stats").json()["entries"] == 2
        assert admin_client.delete("/api/admin/cache?prefix=/api/videos").json() == {"dropped": 1}
        assert admin_client.delete("/api/admin/cache").json() == {"dropped": 1}
        assert client.get("/api/categories").headers["X-Cache"] == "MISS"
