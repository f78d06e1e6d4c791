"""Helpers for serving stored snapshot files."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from fastapi import status
from fastapi.responses import FileResponse, PlainTextResponse, Response

from ..exceptions import SnapshotNotFound
from .snapshot_store import SnapshotStore, guess_media_type


@dataclass(slots=True)
class PublicMediaService:
    """Expose one store's artifacts for public download."""

    store: SnapshotStore
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def open_media(self, filename: str) -> Response:
        try:
            path = self.store.resolve(filename)
        except SnapshotNotFound:
            self.log.debug(
                "public.media.not_found",
                extra={"file": filename, "directory": str(self.store.directory)},
            )
            return PlainTextResponse("Image not found", status_code=status.HTTP_404_NOT_FOUND)

        return FileResponse(path=path, media_type=guess_media_type(path.name))
