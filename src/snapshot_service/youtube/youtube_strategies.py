"""Capture strategies for YouTube videos, tried in order by the service.

Each strategy turns a :class:`YouTubeCaptureRequest` into a complete
:class:`SnapshotPair` or raises :class:`CaptureError`; it cleans up whatever
it wrote before raising.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from ..capture.capture_invoker import CaptureInvoker
from ..capture.capture_models import SnapshotPair
from ..capture.capture_presets import (
    STATIC_LOOP,
    YOUTUBE_LOOP,
    YOUTUBE_STILL,
    LoopPreset,
    StillPreset,
)
from ..exceptions import CaptureFailure, SegmentDownloadError
from ..media.snapshot_store import SnapshotStore, remove_quietly
from .youtube_thumbnails import ThumbnailFetcher

SEGMENT_TEMP_PREFIX = "temp_segment-"
YTDLP_FORMAT = "bestvideo[ext=mp4]+bestaudio[ext=m4a]/best[ext=mp4]/best"
YTDLP_RETRIES = 3
YTDLP_FRAGMENT_RETRIES = 3
SEGMENT_SECONDS = 3


@dataclass(frozen=True, slots=True)
class YouTubeCaptureRequest:
    video_url: str
    video_id: str
    timestamp: str
    pair: SnapshotPair


class CaptureStrategy(Protocol):
    name: str

    async def capture(self, request: YouTubeCaptureRequest) -> SnapshotPair:
        ...


@dataclass(slots=True)
class ThumbnailStrategy:
    """Fast path: CDN thumbnail as the still, scaled single-frame GIF as the loop."""

    store: SnapshotStore
    invoker: CaptureInvoker
    fetcher: ThumbnailFetcher
    ffmpeg_bin: str = "ffmpeg"
    loop_preset: LoopPreset = STATIC_LOOP
    name: str = "thumbnail"
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    async def capture(self, request: YouTubeCaptureRequest) -> SnapshotPair:
        pair = request.pair
        image = await self.fetcher.fetch(request.video_id)

        still_path = self.store.path_for(pair.still_filename)
        completed = False
        try:
            await asyncio.to_thread(still_path.write_bytes, image)
            result = await self.invoker.invoke(
                self.ffmpeg_bin,
                self.loop_preset.build_args(still_path, self.store.path_for(pair.loop_filename)),
            )
            if not result.ok:
                self.log.error("youtube.thumbnail.gif_failed", extra={"stderr": result.diagnostics})
                raise CaptureFailure("Failed to create static GIF from thumbnail")
            completed = True
            return pair
        finally:
            # the thumbnail alone is not a valid pair
            if not completed:
                self.store.discard(*pair.filenames)


@dataclass(slots=True)
class SegmentDownloadStrategy:
    """Fallback: download a few seconds with yt-dlp and extract both artifacts."""

    store: SnapshotStore
    invoker: CaptureInvoker
    ffmpeg_bin: str = "ffmpeg"
    ytdlp_bin: str = "yt-dlp"
    socket_timeout_seconds: int = 30
    still_preset: StillPreset = YOUTUBE_STILL
    loop_preset: LoopPreset = YOUTUBE_LOOP
    name: str = "segment_download"
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def download_args(self, video_url: str, output: Path) -> list[str]:
        return [
            "--format",
            YTDLP_FORMAT,
            "--output",
            str(output),
            "--live-from-start",
            "--downloader",
            "ffmpeg",
            "--downloader-args",
            f"ffmpeg:-ss 0 -t {SEGMENT_SECONDS}",
            "--force-overwrites",
            "--ignore-no-formats-error",
            "--ignore-errors",
            "--retries",
            str(YTDLP_RETRIES),
            "--fragment-retries",
            str(YTDLP_FRAGMENT_RETRIES),
            "--socket-timeout",
            str(self.socket_timeout_seconds),
            video_url,
        ]

    async def capture(self, request: YouTubeCaptureRequest) -> SnapshotPair:
        pair = request.pair
        segment_path = self.store.temp_path(f"{SEGMENT_TEMP_PREFIX}{request.timestamp}.mp4")
        completed = False
        try:
            await self._download(request.video_url, segment_path)
            await self._extract_pair(segment_path, pair)
            completed = True
            return pair
        finally:
            self._remove_download_debris(segment_path)
            if not completed:
                self.store.discard(*pair.filenames)

    def _remove_download_debris(self, segment_path: Path) -> None:
        """Delete the segment and any partial or per-format files yt-dlp left next to it."""
        for leftover in segment_path.parent.glob(f"{segment_path.stem}*"):
            if remove_quietly(leftover, log=self.log):
                self.log.debug("youtube.segment.removed", extra={"path": str(leftover)})

    async def _download(self, video_url: str, segment_path: Path) -> None:
        result = await self.invoker.invoke(self.ytdlp_bin, self.download_args(video_url, segment_path))
        # yt-dlp may exit 0 without writing anything usable
        if not result.ok or not _is_non_empty_file(segment_path):
            self.log.error(
                "youtube.segment.download_failed",
                extra={
                    "returncode": result.returncode,
                    "stderr": result.diagnostics,
                    "stdout": result.stdout.decode("utf-8", errors="replace").strip(),
                },
            )
            raise SegmentDownloadError("Failed to download video segment")

    async def _extract_pair(self, segment_path: Path, pair: SnapshotPair) -> None:
        still_result, loop_result = await asyncio.gather(
            self.invoker.invoke(
                self.ffmpeg_bin,
                self.still_preset.build_args(segment_path, self.store.path_for(pair.still_filename)),
            ),
            self.invoker.invoke(
                self.ffmpeg_bin,
                self.loop_preset.build_args(segment_path, self.store.path_for(pair.loop_filename)),
            ),
        )
        if not (still_result.ok and loop_result.ok):
            self.log.error(
                "youtube.segment.extract_failed",
                extra={"still_stderr": still_result.diagnostics, "loop_stderr": loop_result.diagnostics},
            )
            raise CaptureFailure("Failed to create snapshots from video")


def _is_non_empty_file(path: Path) -> bool:
    try:
        return path.stat().st_size > 0
    except OSError:
        return False


__all__ = [
    "CaptureStrategy",
    "SegmentDownloadStrategy",
    "ThumbnailStrategy",
    "YouTubeCaptureRequest",
]
