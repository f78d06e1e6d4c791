"""Response payloads for capture endpoints."""

from __future__ import annotations

from pydantic import BaseModel


class SnapshotUrls(BaseModel):
    """Absolute URLs of a freshly captured pair (camelCase on the wire)."""

    jpgUrl: str
    gifUrl: str


__all__ = ["SnapshotUrls"]
