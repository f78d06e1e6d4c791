"""HTTP routes for live-stream snapshots."""

from __future__ import annotations

from fastapi import APIRouter, Query, status
from fastapi.responses import RedirectResponse, Response

from ..api.capture_helpers import absolute_url, parse_format, require_url, run_capture
from ..api.schemas import SnapshotUrls
from ..media.public_media_service import PublicMediaService
from .webcam_service import WebcamSnapshotService

IMAGES_PATH = "/images"


def build_webcam_router(
    *,
    service: WebcamSnapshotService,
    media: PublicMediaService,
    base_url: str,
) -> APIRouter:
    router = APIRouter(tags=["webcam"])

    @router.get("/snapshot", response_model=SnapshotUrls)
    async def take_snapshot(url: str | None = Query(default=None)) -> SnapshotUrls:
        """Capture a still and a loop from ``url`` and return absolute links."""
        pair = await run_capture(service.capture, require_url(url))
        return SnapshotUrls(
            jpgUrl=absolute_url(base_url, f"{IMAGES_PATH}/{pair.still_filename}"),
            gifUrl=absolute_url(base_url, f"{IMAGES_PATH}/{pair.loop_filename}"),
        )

    @router.get("/redirect")
    async def redirect_to_snapshot(
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
    def get_image(filename: str) -> Response:
        return media.open_media(filename)

    return router
