"""Service landing page: endpoint help and recent captures."""

from __future__ import annotations

from html import escape

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from ..capture.capture_models import SnapshotPair
from ..media.snapshot_store import SnapshotStore

HELP_TEXT = (
    "Webcam Snapshot Service\n\n"
    "Available endpoints:\n\n"
    "1. Webcam Snapshots:\n"
    "   /snapshot?url=YOUR_WEBCAM_URL\n"
    "   /redirect?url=YOUR_WEBCAM_URL&format=jpg\n\n"
    "   /snapshot?url=https://camsecure.co/HLS/swanagecamlifeboat.m3u8\n\n"
    "2. YouTube Snapshots:\n"
    "   /youtube-snapshot?url=YOUR_YOUTUBE_URL\n"
    "   /youtube-snapshot/redirect?url=YOUR_YOUTUBE_URL&format=jpg\n"
)


def _gallery_section(title: str, pairs: list[SnapshotPair], images_path: str) -> str:
    if not pairs:
        return f"<h2>{escape(title)}</h2>\n<p>No captures yet.</p>"
    items = []
    for pair in pairs:
        still = escape(f"{images_path}/{pair.still_filename}", quote=True)
        loop = escape(f"{images_path}/{pair.loop_filename}", quote=True)
        items.append(
            f'<figure><a href="{loop}"><img src="{still}" alt="{escape(pair.stem, quote=True)}" '
            f'width="240" loading="lazy"></a><figcaption>{escape(pair.stem)}</figcaption></figure>'
        )
    return f"<h2>{escape(title)}</h2>\n" + "\n".join(items)


def render_home_page(sections: list[tuple[str, list[SnapshotPair], str]]) -> str:
    body = "\n".join(_gallery_section(*section) for section in sections)
    return (
        "<!doctype html>\n<html><head><meta charset=\"utf-8\">"
        "<title>Webcam Snapshot Service</title></head><body>\n"
        f"<pre>{escape(HELP_TEXT)}</pre>\n{body}\n</body></html>\n"
    )


def build_home_router(
    *,
    webcam_store: SnapshotStore,
    youtube_store: SnapshotStore,
    gallery_limit: int = 12,
) -> APIRouter:
    router = APIRouter(tags=["home"])

    @router.get("/", response_class=HTMLResponse)
    def home() -> HTMLResponse:
        sections = [
            ("Recent webcam snapshots", webcam_store.list_pairs(gallery_limit), "/images"),
            ("Recent YouTube snapshots", youtube_store.list_pairs(gallery_limit), "/youtube-snapshot/images"),
        ]
        return HTMLResponse(render_home_page(sections))

    return router


__all__ = ["HELP_TEXT", "build_home_router", "render_home_page"]
