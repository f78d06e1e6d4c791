"""Reusable error primitives for API exception handling."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response

UNKNOWN_ERROR = "Unknown error"


@dataclass(slots=True)
class ApiError(Exception):
    """Structured application-level error for HTTP handlers.

    Validation errors answer in plain text, capture errors as ``{"error": ...}``.
    """

    status_code: int
    message: str
    as_json: bool = False

    def to_response(self) -> Response:
        if self.as_json:
            return JSONResponse(status_code=self.status_code, content={"error": self.message})
        return PlainTextResponse(self.message, status_code=self.status_code)


async def api_error_handler(_: Request, exc: ApiError) -> Response:
    """Convert :class:`ApiError` exceptions into responses."""
    return exc.to_response()


def missing_url_error() -> ApiError:
    return ApiError(status.HTTP_400_BAD_REQUEST, "Missing url parameter")


def invalid_format_error() -> ApiError:
    return ApiError(status.HTTP_400_BAD_REQUEST, "Format must be either jpg or gif")


def capture_failed_error(message: str) -> ApiError:
    return ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, message, as_json=True)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)  # type: ignore[arg-type]


__all__ = [
    "ApiError",
    "api_error_handler",
    "capture_failed_error",
    "install_error_handlers",
    "invalid_format_error",
    "missing_url_error",
]
