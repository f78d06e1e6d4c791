"""Live-stream snapshot pipeline (HLS and other ffmpeg-readable sources)."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from ..capture.capture_invoker import CaptureInvoker
from ..capture.capture_models import SnapshotPair, make_timestamp
from ..capture.capture_presets import (
    WEBCAM_LOOP,
    WEBCAM_SEGMENT,
    WEBCAM_STILL,
    LoopPreset,
    SegmentPreset,
    StillPreset,
)
from ..exceptions import CaptureFailure
from ..media.snapshot_store import SnapshotStore, remove_quietly

WEBCAM_PREFIX = "snapshot-"
TEMP_PREFIX = "temp-"


@dataclass(slots=True)
class WebcamSnapshotService:
    """Capture a JPEG and a palette-optimised GIF from a live stream.

    The stream is read once into a short local segment; the still and the
    loop are then extracted from that file concurrently. The segment never
    outlives the call.
    """

    store: SnapshotStore
    invoker: CaptureInvoker
    ffmpeg_bin: str = "ffmpeg"
    segment_preset: SegmentPreset = WEBCAM_SEGMENT
    still_preset: StillPreset = WEBCAM_STILL
    loop_preset: LoopPreset = WEBCAM_LOOP
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    async def capture(self, stream_url: str) -> SnapshotPair:
        timestamp = make_timestamp()
        pair = self.store.new_pair(timestamp=timestamp)
        segment_path = self.store.temp_path(f"{TEMP_PREFIX}{timestamp}.ts")

        with structlog.contextvars.bound_contextvars(capture=pair.stem):
            self.log.info("webcam.capture.started", extra={"source": stream_url})
            completed = False
            try:
                await self._capture_segment(stream_url, segment_path)
                await self._extract_pair(str(segment_path), pair)
                completed = True
            except CaptureFailure as exc:
                raise CaptureFailure(f"Failed to process video: {exc}") from exc
            finally:
                remove_quietly(segment_path, log=self.log)
                if not completed:
                    self.store.discard(*pair.filenames)

            self.log.info("webcam.capture.completed", extra={"still": pair.still_filename})
            return pair

    async def _capture_segment(self, stream_url: str, segment_path: Path) -> None:
        result = await self.invoker.invoke(
            self.ffmpeg_bin, self.segment_preset.build_args(stream_url, segment_path)
        )
        if not result.ok:
            self.log.error("webcam.segment.failed", extra={"stderr": result.diagnostics})
            raise CaptureFailure("Failed to capture video segment from stream")

    async def _extract_pair(self, source: str, pair: SnapshotPair) -> None:
        still_result, loop_result = await asyncio.gather(
            self.invoker.invoke(
                self.ffmpeg_bin,
                self.still_preset.build_args(source, self.store.path_for(pair.still_filename)),
            ),
            self.invoker.invoke(
                self.ffmpeg_bin,
                self.loop_preset.build_args(source, self.store.path_for(pair.loop_filename)),
            ),
        )
        if not still_result.ok:
            self.log.error("webcam.still.failed", extra={"stderr": still_result.diagnostics})
            raise CaptureFailure("Failed to extract JPG snapshot")
        if not loop_result.ok:
            self.log.error("webcam.loop.failed", extra={"stderr": loop_result.diagnostics})
            raise CaptureFailure("Failed to generate GIF snapshot")
