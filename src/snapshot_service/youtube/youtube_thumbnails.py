"""YouTube thumbnail download via the public image CDN."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

import httpx

from ..exceptions import ThumbnailUnavailable

THUMBNAIL_BASE_URL = "https://img.youtube.com/vi"
# Preference order: live-updating frame, max resolution, high quality.
THUMBNAIL_VARIANTS: tuple[str, ...] = ("live.jpg", "maxresdefault.jpg", "hqdefault.jpg")


def thumbnail_urls(video_id: str, variants: Sequence[str] = THUMBNAIL_VARIANTS) -> list[str]:
    return [f"{THUMBNAIL_BASE_URL}/{video_id}/{variant}" for variant in variants]


@dataclass(slots=True)
class ThumbnailFetcher:
    """Download the best available thumbnail for a video."""

    timeout_seconds: float = 10.0
    variants: tuple[str, ...] = THUMBNAIL_VARIANTS
    transport: httpx.AsyncBaseTransport | None = None
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    async def fetch(self, video_id: str) -> bytes:
        """Return the bytes of the first variant answering with a 2xx status."""
        async with httpx.AsyncClient(
            timeout=self.timeout_seconds,
            transport=self.transport,
            follow_redirects=True,
        ) as client:
            for url in thumbnail_urls(video_id, self.variants):
                try:
                    response = await client.get(url)
                except httpx.HTTPError as exc:
                    self.log.warning("youtube.thumbnail.request_failed", extra={"url": url, "error": str(exc)})
                    continue
                if response.is_success and response.content:
                    self.log.info("youtube.thumbnail.fetched", extra={"url": url, "bytes": len(response.content)})
                    return response.content
                self.log.info(
                    "youtube.thumbnail.unavailable",
                    extra={"url": url, "status_code": response.status_code},
                )
        raise ThumbnailUnavailable("Failed to download any YouTube thumbnail")


__all__ = ["THUMBNAIL_VARIANTS", "ThumbnailFetcher", "thumbnail_urls"]
