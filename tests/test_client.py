"""
Tests for the session API client: permission checks and the route guard.
"""

import httpx
import pytest

from politiquensemble.client import ApiError, RouteAccess, SiteClient


def mock_client(handler):
    return SiteClient(client=httpx.Client(transport=httpx.MockTransport(handler), base_url="http://api.test"))


class TestHasPermission:

    def test_granted(self):
        calls = []

        def handler(request):
            calls.append(request.url.path)
            return httpx.Response(200, json={"permission": "articles", "has_permission": True})

        assert mock_client(handler).has_permission("articles") is True
        assert calls == ["/api/auth/permissions/articles"]

    @pytest.mark.parametrize("status_code", [401, 403, 500])
    def test_error_status_means_denied(self, status_code):
        client = mock_client(lambda request: httpx.Response(status_code, json={"detail": "nope"}))
        assert client.has_permission("articles") is False

    def test_network_error_means_denied(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        assert mock_client(handler).has_permission("articles") is False

    def test_malformed_body_means_denied(self):
        client = mock_client(lambda request: httpx.Response(200, text="<html>"))
        assert client.has_permission("articles") is False

    def test_no_caching_between_calls(self):
        answers = iter([True, False])
        calls = []

        def handler(request):
            calls.append(1)
            return httpx.Response(200, json={"has_permission": next(answers)})

        client = mock_client(handler)
        assert client.has_permission("videos") is True
        assert client.has_permission("videos") is False
        assert len(calls) == 2

    def test_route_is_resolved_to_its_code(self):
        seen = []

        def handler(request):
            seen.append(request.url.path)
            return httpx.Response(200, json={"has_permission": True})

        mock_client(handler).check_permission_for_route("/admin/directs/3")
        assert seen == ["/api/auth/permissions/live_coverage"]


class TestGuardRoute:

    def test_anonymous_is_redirected(self):
        client = mock_client(lambda request: httpx.Response(401, json={"detail": "Non autorisé"}))
        assert client.guard_route("/admin/articles") is RouteAccess.REDIRECT

    def test_unreachable_api_redirects(self):
        def handler(request):
            raise httpx.ReadTimeout("timeout", request=request)

        assert mock_client(handler).guard_route("/admin") is RouteAccess.REDIRECT

    def test_against_application(self, client, content_manager):
        site = SiteClient(client=client)
        assert site.guard_route("/admin/articles") is RouteAccess.REDIRECT

        site.login("redacteur", "motdepasse")
        assert site.current_user()["username"] == "redacteur"
        assert site.guard_route("/admin/articles/4/edit") is RouteAccess.ALLOWED
        assert site.guard_route("/admin/videos") is RouteAccess.DENIED
        assert site.guard_route("/admin/parametres") is RouteAccess.DENIED
        assert "articles" in site.my_permissions()

        site.logout()
        assert site.guard_route("/admin/articles") is RouteAccess.REDIRECT

    def test_bad_login_raises(self, client):
        site = SiteClient(client=client)
        with pytest.raises(ApiError) as excinfo:
            site.login("ghost", "motdepasse")
        assert excinfo.value.status_code == 401
        assert excinfo.value.detail == "Identifiants incorrects"
