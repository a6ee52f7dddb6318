"""
Tests for security headers, request logging and error handling.
"""

import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from politiquensemble.core.exception_handlers import setup_exception_handlers
from politiquensemble.core.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware


class TestSecurityHeaders:

    def test_headers_present(self, client):
        response = client.get("/health")
        assert response.headers["X-Frame-Options"] == "SAMEORIGIN"
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"

    def test_offsite_redirect_rejected(self, client):
        response = client.get("/api/categories", params={"redirect": "https://evil.example.com/"})
        assert response.status_code == 400
        assert response.text == "Redirection non autorisée"

    def test_local_redirect_allowed(self, client):
        assert client.get("/api/categories", params={"redirect": "/admin"}).status_code == 200
        assert client.get("/api/categories", params={"redirect": "//evil.example.com"}).status_code == 400

    @pytest.mark.parametrize("target", ["/\\evil.example.com", "\\\\evil.example.com", "/\\/evil.example.com"])
    def test_backslash_redirect_rejected(self, client, target):
        assert client.get("/api/categories", params={"redirect": target}).status_code == 400

    def test_unknown_method_rejected(self, client):
        assert client.request("TRACE", "/api/categories").status_code == 405


class TestRequestLogging:

    def test_api_requests_logged(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="politiquensemble.core.middleware"):
            client.get("/api/categories")
            client.get("/health")

        lines = [r.getMessage() for r in caplog.records if r.name == "politiquensemble.core.middleware"]
        assert len(lines) == 1
        assert lines[0].startswith("GET /api/categories 200 in ")

    def test_long_lines_truncated(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="politiquensemble.core.middleware"):
            client.get("/api/glossary/" + "x" * 100)

        line = [r.getMessage() for r in caplog.records if r.name == "politiquensemble.core.middleware"][0]
        assert len(line) == 80
        assert line.endswith("…")


class TestErrorHandling:

    def setup_method(self):
        app = FastAPI()
        app.add_middleware(RequestLoggingMiddleware)
        app.add_middleware(SecurityHeadersMiddleware)
        setup_exception_handlers(app)

        @app.get("/api/boom")
        async def boom():
            raise RuntimeError("kaboom")

        self.client = TestClient(app, raise_server_exceptions=False)

    def test_unhandled_error_returns_error_id(self, caplog):
        with caplog.at_level(logging.ERROR):
            response = self.client.get("/api/boom")

        assert response.status_code == 500
        body = response.json()
        assert body["detail"] == "Erreur interne du serveur"
        assert len(body["error_id"]) == 12
        assert any(body["error_id"] in r.getMessage() for r in caplog.records)

    def test_validation_errors_are_422(self, client):
        assert client.get("/api/articles", params={"category_id": "abc"}).status_code == 422
