"""CORS policy: echo https origins on one root domain and its subdomains."""

from __future__ import annotations

from typing import Awaitable, Callable
from urllib.parse import urlsplit

from fastapi import FastAPI, Request, status
from fastapi.responses import Response

ALLOWED_METHODS = "GET, OPTIONS"
ALLOWED_HEADERS = "Content-Type"


def allowed_origin(origin: str | None, root_domain: str) -> str | None:
    """Return ``origin`` when it may read responses, otherwise ``None``."""
    if not origin:
        return None
    try:
        parts = urlsplit(origin)
        hostname = parts.hostname
    except ValueError:
        return None
    if parts.scheme != "https" or not hostname:
        return None
    root = root_domain.lower().strip(".")
    if hostname == root or hostname.endswith("." + root):
        return origin
    return None


def cors_headers(origin: str | None, root_domain: str) -> dict[str, str]:
    allowed = allowed_origin(origin, root_domain)
    if allowed is None:
        return {}
    return {
        "Access-Control-Allow-Origin": allowed,
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
        "Vary": "Origin",
    }


def install_cors(app: FastAPI, root_domain: str) -> None:
    """Answer preflights with 204 and decorate every other response."""

    @app.middleware("http")
    async def apply_cors(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        headers = cors_headers(request.headers.get("origin"), root_domain)
        if request.method == "OPTIONS":
            return Response(status_code=status.HTTP_204_NO_CONTENT, headers=headers)
        response = await call_next(request)
        for key, value in headers.items():
            response.headers[key] = value
        return response


__all__ = ["allowed_origin", "cors_headers", "install_cors"]
