"""Lifecycle helpers wiring background tasks for FastAPI startup."""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from .config import AppConfig
from .media.media_retention import RetentionReport, RetentionTarget, cleanup_old_files
from .webcam.webcam_service import WEBCAM_PREFIX
from .youtube.youtube_service import YOUTUBE_PREFIX


logger = logging.getLogger(__name__)


def retention_targets(config: AppConfig) -> list[RetentionTarget]:
    """Both artifact directories, each trimmed to ``retention_keep`` files."""
    return [
        RetentionTarget(config.snapshots_dir, WEBCAM_PREFIX, config.retention_keep),
        RetentionTarget(config.youtube_snapshots_dir, YOUTUBE_PREFIX, config.retention_keep),
    ]


def retention_cleanup_once(targets: Sequence[RetentionTarget]) -> list[RetentionReport]:
    """Run a single retention pass over every target and return the reports."""
    return [cleanup_old_files(target.directory, target.prefix, target.keep) for target in targets]


async def run_periodic_retention_cleanup(
    *,
    targets: Sequence[RetentionTarget],
    shutdown_event: asyncio.Event,
    interval_seconds: float = 3600.0,
) -> None:
    """Execute retention cleanup until ``shutdown_event`` is signalled."""

    interval = max(1.0, float(interval_seconds))
    while not shutdown_event.is_set():
        try:
            reports = await asyncio.to_thread(retention_cleanup_once, targets)
        except Exception:  # pragma: no cover - cleaner does not raise
            logger.exception("lifecycle.retention.iteration_failed")
        else:
            deleted = sum(len(report.deleted) for report in reports)
            if deleted:
                logger.info("lifecycle.retention.purged", extra={"deleted": deleted})
        try:
            await asyncio.wait_for(shutdown_event.wait(), timeout=interval)
        except asyncio.TimeoutError:
            continue


__all__ = [
    "retention_cleanup_once",
    "retention_targets",
    "run_periodic_retention_cleanup",
]
