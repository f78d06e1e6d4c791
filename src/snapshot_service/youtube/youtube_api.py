"""HTTP routes for YouTube snapshots."""

from __future__ import annotations

from fastapi import APIRouter, Query, status
from fastapi.responses import PlainTextResponse, RedirectResponse, Response

from ..api.capture_helpers import absolute_url, parse_format, require_url, run_capture
from ..api.schemas import SnapshotUrls
from ..media.public_media_service import PublicMediaService
from .youtube_service import YouTubeSnapshotService

PREFIX = "/youtube-snapshot"
IMAGES_PATH = f"{PREFIX}/images"

YOUTUBE_HELP_TEXT = (
    "YouTube Snapshot Service\n\n"
    "Available endpoints:\n\n"
    "1. JSON Response:\n"
    "   /youtube-snapshot?url=YOUR_YOUTUBE_URL\n\n"
    "2. Direct Image Redirect:\n"
    "   /youtube-snapshot/redirect?url=YOUR_YOUTUBE_URL&format=jpg\n"
    "   /youtube-snapshot/redirect?url=YOUR_YOUTUBE_URL&format=gif\n"
)


def build_youtube_router(
    *,
    service: YouTubeSnapshotService,
    media: PublicMediaService,
    base_url: str,
) -> APIRouter:
    router = APIRouter(tags=["youtube"])

    @router.get(PREFIX, response_model=SnapshotUrls)
    async def take_youtube_snapshot(url: str | None = Query(default=None)) -> SnapshotUrls:
        pair = await run_capture(service.capture, require_url(url))
        return SnapshotUrls(
            jpgUrl=absolute_url(base_url, f"{IMAGES_PATH}/{pair.still_filename}"),
            gifUrl=absolute_url(base_url, f"{IMAGES_PATH}/{pair.loop_filename}"),
        )

    @router.get(PREFIX + "/")
    def youtube_help() -> PlainTextResponse:
        return PlainTextResponse(YOUTUBE_HELP_TEXT)

    @router.get(PREFIX + "/redirect")
    async def redirect_to_youtube_snapshot(
        url: str | None = Query(default=None),
        fmt: str | None = Query(default=None, alias="format"),
    ) -> RedirectResponse:
        source = require_url(url)
        image_format = parse_format(fmt)
        pair = await run_capture(service.capture, source)
        return RedirectResponse(
            f"{IMAGES_PATH}/{pair.filename_for(image_format)}",
            status_code=status.HTTP_302_FOUND,
        )

    @router.get(IMAGES_PATH + "/{filename}")
    def get_youtube_image(filename: str) -> Response:
        return media.open_media(filename)

    return router
