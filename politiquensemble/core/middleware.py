"""
HTTP middleware: request logging and security headers.
"""

import time
from typing import Callable
from urllib.parse import urlparse

from fastapi import Request
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from .logging_config import get_logger

logger = get_logger(__name__)

ALLOWED_METHODS = {"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"}
MAX_LOG_LINE = 80


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per API request: method, path, status and duration."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)

        path = request.url.path
        if path.startswith("/api"):
            duration_ms = (time.perf_counter() - start_time) * 1000
            line = f"{request.method} {path} {response.status_code} in {duration_ms:.0f}ms"
            if len(line) > MAX_LOG_LINE:
                line = line[: MAX_LOG_LINE - 1] + "…"
            logger.info(line)

        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Baseline hardening:
    - reject unknown HTTP methods (405)
    - reject ``?redirect=`` targets pointing to another site (400)
    - add the usual defensive response headers
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.method not in ALLOWED_METHODS:
            return JSONResponse(status_code=405, content={"detail": "Méthode non autorisée"})

        redirect = request.query_params.get("redirect")
        if redirect and not _is_local_redirect(redirect, request.url.hostname):
            return PlainTextResponse("Redirection non autorisée", status_code=400)

        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "SAMEORIGIN")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
        response.headers.setdefault("X-DNS-Prefetch-Control", "on")
        return response


def _is_local_redirect(target: str, hostname: str) -> bool:
    # Browsers read backslashes as slashes, so "/\evil.com" is protocol-relative
    target = target.replace("\\", "/")
    if target.startswith("/") and not target.startswith("//"):
        return True
    parsed = urlparse(target)
    return parsed.scheme == "https" and parsed.hostname == hostname
