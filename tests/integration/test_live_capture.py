"""Live captures against real streams; needs network, ffmpeg and yt-dlp."""

from __future__ import annotations

import os
import shutil
from pathlib import Path

import pytest

from src.snapshot_service.capture.capture_invoker import CaptureInvoker
from src.snapshot_service.media.snapshot_store import SnapshotStore
from src.snapshot_service.webcam.webcam_service import WebcamSnapshotService
from src.snapshot_service.youtube.youtube_service import build_youtube_service
from src.snapshot_service.youtube.youtube_thumbnails import ThumbnailFetcher

pytestmark = [
    pytest.mark.integration,
    pytest.mark.asyncio,
    pytest.mark.skipif(
        os.environ.get("SNAPSHOT_LIVE_TESTS") != "1",
        reason="set SNAPSHOT_LIVE_TESTS=1 to run live capture tests",
    ),
    pytest.mark.skipif(shutil.which("ffmpeg") is None, reason="ffmpeg not installed"),
]

WEBCAM_URL = os.environ.get(
    "SNAPSHOT_LIVE_WEBCAM_URL", "https://camsecure.co/HLS/swanagecamlifeboat.m3u8"
)
YOUTUBE_URL = os.environ.get(
    "SNAPSHOT_LIVE_YOUTUBE_URL", "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
)


def _assert_artifacts(store: SnapshotStore, still: str, loop: str) -> None:
    still_bytes = store.path_for(still).read_bytes()
    loop_bytes = store.path_for(loop).read_bytes()
    assert still_bytes[:3] == b"\xff\xd8\xff"
    assert loop_bytes[:6] in {b"GIF89a", b"GIF87a"}
    assert len(still_bytes) > 1024
    assert len(loop_bytes) > 1024


async def test_live_webcam_capture(tmp_path: Path) -> None:
    store = SnapshotStore(directory=tmp_path, prefix="snapshot-")
    service = WebcamSnapshotService(store=store, invoker=CaptureInvoker(timeout_seconds=120))

    pair = await service.capture(WEBCAM_URL)

    _assert_artifacts(store, pair.still_filename, pair.loop_filename)
    assert {path.name for path in tmp_path.iterdir()} == set(pair.filenames)


async def test_live_youtube_capture(tmp_path: Path) -> None:
    store = SnapshotStore(directory=tmp_path, prefix="youtube-")
    service = build_youtube_service(
        store=store,
        invoker=CaptureInvoker(timeout_seconds=120),
        fetcher=ThumbnailFetcher(),
    )

    pair = await service.capture(YOUTUBE_URL)

    _assert_artifacts(store, pair.still_filename, pair.loop_filename)
