"""FastAPI application entry point."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI

from .config import AppConfig, load_config
from .dependencies import include_routers
from .lifecycle import retention_targets, run_periodic_retention_cleanup
from .logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    config: AppConfig = app.state.config
    if not config.retention_enabled:
        yield
        return

    shutdown_event = asyncio.Event()
    task = asyncio.create_task(
        run_periodic_retention_cleanup(
            targets=retention_targets(config),
            shutdown_event=shutdown_event,
            interval_seconds=config.retention_interval_seconds,
        )
    )
    logger.info(
        "lifecycle.retention.started",
        extra={"interval_seconds": config.retention_interval_seconds, "keep": config.retention_keep},
    )
    try:
        yield
    finally:
        shutdown_event.set()
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("lifecycle.retention.stopped")


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Build FastAPI instance with configured dependencies."""
    cfg = config or load_config()
    configure_logging(cfg.log_level)
    app = FastAPI(title="Webcam Snapshot Service", lifespan=lifespan)
    include_routers(app, cfg)
    return app


app = create_app()


def run() -> None:
    """Serve :data:`app` on the configured port."""
    config: AppConfig = app.state.config
    uvicorn.run(app, host="0.0.0.0", port=config.port, log_config=None)


if __name__ == "__main__":
    run()
