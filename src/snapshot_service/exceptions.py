"""Domain level exceptions for capture pipelines and storage."""

from __future__ import annotations

__all__ = [
    "AppError",
    "CaptureError",
    "CaptureFailure",
    "InvalidYouTubeUrl",
    "ThumbnailUnavailable",
    "SegmentDownloadError",
    "SnapshotNotFound",
]


class AppError(Exception):
    """Base class for application specific errors."""


class CaptureError(AppError):
    """Base class for failures that end a capture attempt.

    The message is short and safe to return to clients; tool diagnostics are
    logged, never attached here.
    """


class CaptureFailure(CaptureError):
    """Raised when a pipeline could not produce both artifacts."""


class InvalidYouTubeUrl(CaptureError):
    """Raised when no video identifier can be extracted from a URL."""

    def __init__(self, message: str = "Invalid YouTube URL") -> None:
        super().__init__(message)


class ThumbnailUnavailable(CaptureError):
    """Raised when none of the thumbnail variants could be downloaded."""


class SegmentDownloadError(CaptureError):
    """Raised when the downloader did not leave a usable segment behind."""


class SnapshotNotFound(AppError):
    """Raised when a requested artifact is missing or the name is not servable."""
