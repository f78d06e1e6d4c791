"""Shared request parsing and capture execution for snapshot routers."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Literal

from ..capture.capture_models import SnapshotPair
from ..exceptions import CaptureError
from .errors import UNKNOWN_ERROR, capture_failed_error, invalid_format_error, missing_url_error

logger = logging.getLogger(__name__)

ImageFormat = Literal["jpg", "gif"]
CaptureCallable = Callable[[str], Awaitable[SnapshotPair]]


def require_url(url: str | None) -> str:
    if not url:
        raise missing_url_error()
    return url


def parse_format(raw: str | None) -> ImageFormat:
    fmt = (raw or "jpg").lower()
    if fmt == "jpg":
        return "jpg"
    if fmt == "gif":
        return "gif"
    raise invalid_format_error()


async def run_capture(capture: CaptureCallable, url: str) -> SnapshotPair:
    """Run a pipeline and translate its failures into 500 responses.

    Only the short failure message reaches the client; diagnostics stay in
    the logs written by the pipeline.
    """
    try:
        return await capture(url)
    except CaptureError as exc:
        logger.warning("api.capture.failed", extra={"source": url, "reason": str(exc)})
        raise capture_failed_error(str(exc) or UNKNOWN_ERROR) from exc
    except Exception as exc:
        logger.exception("api.capture.unexpected_error", extra={"source": url})
        raise capture_failed_error(UNKNOWN_ERROR) from exc


def absolute_url(base_url: str, path: str) -> str:
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


__all__ = ["ImageFormat", "absolute_url", "parse_format", "require_url", "run_capture"]
