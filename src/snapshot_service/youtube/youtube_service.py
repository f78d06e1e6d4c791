"""YouTube snapshot pipeline: ordered fallback over capture strategies."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

import structlog

from ..capture.capture_invoker import CaptureInvoker
from ..capture.capture_models import SnapshotPair, make_timestamp
from ..exceptions import CaptureError, CaptureFailure, InvalidYouTubeUrl
from ..media.snapshot_store import SnapshotStore
from .youtube_ids import extract_video_id
from .youtube_strategies import (
    CaptureStrategy,
    SegmentDownloadStrategy,
    ThumbnailStrategy,
    YouTubeCaptureRequest,
)
from .youtube_thumbnails import ThumbnailFetcher

YOUTUBE_PREFIX = "youtube-"


@dataclass(slots=True)
class YouTubeSnapshotService:
    """Resolve the video id, then try each strategy until one yields a pair.

    Adding, removing or reordering fallbacks is a change to ``strategies``
    only. A failed strategy has already removed anything it wrote.
    """

    store: SnapshotStore
    strategies: Sequence[CaptureStrategy]
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    async def capture(self, video_url: str) -> SnapshotPair:
        video_id = extract_video_id(video_url)
        if not video_id:
            self.log.info("youtube.capture.invalid_url", extra={"source": video_url})
            raise InvalidYouTubeUrl()

        timestamp = make_timestamp()
        request = YouTubeCaptureRequest(
            video_url=video_url,
            video_id=video_id,
            timestamp=timestamp,
            pair=self.store.new_pair(video_id, timestamp=timestamp),
        )

        with structlog.contextvars.bound_contextvars(capture=request.pair.stem):
            self.log.info("youtube.capture.started", extra={"source": video_url, "video_id": video_id})
            for strategy in self.strategies:
                try:
                    pair = await strategy.capture(request)
                except CaptureError as exc:
                    self.log.warning(
                        "youtube.strategy.failed",
                        extra={"strategy": strategy.name, "reason": str(exc)},
                    )
                except Exception:
                    self.log.exception("youtube.strategy.crashed", extra={"strategy": strategy.name})
                else:
                    self.log.info(
                        "youtube.capture.completed",
                        extra={"strategy": strategy.name, "still": pair.still_filename},
                    )
                    return pair

        raise CaptureFailure("All snapshot methods failed")


def build_youtube_service(
    *,
    store: SnapshotStore,
    invoker: CaptureInvoker,
    fetcher: ThumbnailFetcher,
    ffmpeg_bin: str = "ffmpeg",
    ytdlp_bin: str = "yt-dlp",
    socket_timeout_seconds: int = 30,
) -> YouTubeSnapshotService:
    """Wire the default strategy order: thumbnail first, then segment download."""
    strategies: list[CaptureStrategy] = [
        ThumbnailStrategy(store=store, invoker=invoker, fetcher=fetcher, ffmpeg_bin=ffmpeg_bin),
        SegmentDownloadStrategy(
            store=store,
            invoker=invoker,
            ffmpeg_bin=ffmpeg_bin,
            ytdlp_bin=ytdlp_bin,
            socket_timeout_seconds=socket_timeout_seconds,
        ),
    ]
    return YouTubeSnapshotService(store=store, strategies=strategies)


__all__ = ["YOUTUBE_PREFIX", "YouTubeSnapshotService", "build_youtube_service"]
