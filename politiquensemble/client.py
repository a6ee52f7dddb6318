"""
Python client for the Politiquensemble session API.

Mirrors what the dashboard does in the browser: it keeps the session cookie,
resolves the current user, and decides whether an admin page may be shown.

Permission checks never raise. A transport error, a timeout or any non-200
answer from ``/api/auth/permissions/{code}`` means "denied". Each check
performs exactly one request; results are not cached between calls.

>>> client = SiteClient("http://localhost:5000")
>>> client.login("alice", "secret")
>>> client.guard_route("/admin/articles/12/edit")
<RouteAccess.ALLOWED: 'allowed'>
"""

from enum import Enum
from typing import Any, Dict, List, Optional

import httpx

from .core.config import settings
from .core.logging_config import get_logger
from .permissions import permission_for_route

AUTH_PAGE = "/auth"


class RouteAccess(str, Enum):
    ALLOWED = "allowed"
    REDIRECT = "redirect"  # Anonymous visitor, send to the login page
    DENIED = "denied"


class ApiError(Exception):
    """Non-2xx answer from the API."""

    def __init__(self, status_code: int, detail: Any = None):
        super().__init__(f"HTTP {status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class SiteClient:
    """Session-aware HTTP client for the auth endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        """
        Args:
            base_url: API root, defaults to ``API_BASE_URL``.
            timeout: Request timeout in seconds, defaults to ``API_TIMEOUT``.
            client: Preconfigured ``httpx.Client`` (its base URL and cookies are used).
        """
        self._client = client or httpx.Client(
            base_url=(base_url or settings.API_BASE_URL).rstrip("/"),
            timeout=timeout if timeout is not None else settings.API_TIMEOUT,
        )
        self._logger = get_logger(__name__)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "SiteClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ============ Session ============

    def login(self, username: str, password: str) -> Dict[str, Any]:
        return self._json("POST", "/api/auth/login", json={"username": username, "password": password})

    def register(self, username: str, password: str, display_name: str) -> Dict[str, Any]:
        return self._json(
            "POST",
            "/api/auth/register",
            json={"username": username, "password": password, "display_name": display_name},
        )

    def logout(self) -> None:
        self._json("POST", "/api/auth/logout")

    def current_user(self) -> Optional[Dict[str, Any]]:
        """The logged-in user, or None when anonymous or unreachable."""
        try:
            response = self._client.get("/api/auth/me")
        except httpx.HTTPError as e:
            self._logger.warning("Could not fetch current user: %s", e)
            return None
        if response.status_code != 200:
            return None
        return response.json()

    def my_permissions(self) -> List[str]:
        return self._json("GET", "/api/auth/me/permissions")["permissions"]

    # ============ Permissions ============

    def has_permission(self, code: str) -> bool:
        """One round trip; anything but a positive 200 answer is a refusal."""
        try:
            response = self._client.get(f"/api/auth/permissions/{code}")
        except httpx.HTTPError as e:
            self._logger.warning("Permission check for %s failed: %s", code, e)
            return False
        if response.status_code != 200:
            return False
        try:
            payload = response.json()
        except ValueError:
            return False
        return isinstance(payload, dict) and payload.get("has_permission") is True

    def check_permission_for_route(self, path: str) -> bool:
        return self.has_permission(permission_for_route(path))

    def guard_route(self, path: str) -> RouteAccess:
        """
        Decide what the dashboard shows for ``path``: the page, a redirect
        to the login page for anonymous visitors, or an access-denied screen.
        """
        if self.current_user() is None:
            return RouteAccess.REDIRECT
        if self.check_permission_for_route(path):
            return RouteAccess.ALLOWED
        return RouteAccess.DENIED

    # ============ Helpers ============

    def _json(self, method: str, url: str, **kwargs) -> Any:
        response = self._client.request(method, url, **kwargs)
        if response.is_error:
            try:
                detail = response.json().get("detail")
            except ValueError:
                detail = response.text
            raise ApiError(response.status_code, detail)
        return response.json()
