"""Dependency wiring helpers."""

from fastapi import FastAPI

from .api.errors import install_error_handlers
from .capture.capture_invoker import CaptureInvoker
from .config import AppConfig
from .media.public_media_service import PublicMediaService
from .media.snapshot_store import SnapshotStore
from .public.cors import install_cors
from .public.home_router import build_home_router
from .webcam.webcam_api import build_webcam_router
from .webcam.webcam_service import WEBCAM_PREFIX, WebcamSnapshotService
from .youtube.youtube_api import build_youtube_router
from .youtube.youtube_service import YOUTUBE_PREFIX, build_youtube_service
from .youtube.youtube_thumbnails import ThumbnailFetcher


def include_routers(app: FastAPI, config: AppConfig) -> None:
    """Mount module routers and attach services."""
    webcam_store = SnapshotStore(directory=config.snapshots_dir, prefix=WEBCAM_PREFIX)
    youtube_store = SnapshotStore(directory=config.youtube_snapshots_dir, prefix=YOUTUBE_PREFIX)
    invoker = CaptureInvoker(timeout_seconds=config.tool_timeout)
    fetcher = ThumbnailFetcher(timeout_seconds=config.thumbnail_timeout_seconds)

    webcam_service = WebcamSnapshotService(
        store=webcam_store,
        invoker=invoker,
        ffmpeg_bin=config.ffmpeg_bin,
    )
    youtube_service = build_youtube_service(
        store=youtube_store,
        invoker=invoker,
        fetcher=fetcher,
        ffmpeg_bin=config.ffmpeg_bin,
        ytdlp_bin=config.ytdlp_bin,
        socket_timeout_seconds=config.ytdlp_socket_timeout_seconds,
    )

    app.state.config = config
    app.state.webcam_store = webcam_store
    app.state.youtube_store = youtube_store
    app.state.webcam_service = webcam_service
    app.state.youtube_service = youtube_service

    app.include_router(build_home_router(webcam_store=webcam_store, youtube_store=youtube_store))
    app.include_router(
        build_webcam_router(
            service=webcam_service,
            media=PublicMediaService(store=webcam_store),
            base_url=config.base_url,
        )
    )
    app.include_router(
        build_youtube_router(
            service=youtube_service,
            media=PublicMediaService(store=youtube_store),
            base_url=config.base_url,
        )
    )

    install_error_handlers(app)
    install_cors(app, config.cors_root_domain)
