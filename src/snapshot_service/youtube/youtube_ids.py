"""Extract video identifiers from YouTube URLs."""

from __future__ import annotations

import re

# First match wins; the identifier stops at the next ``&``, ``?``, ``#`` or newline.
_VIDEO_ID_PATTERNS = (
    re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/)([^&\n?#]+)"),
    re.compile(r"youtube\.com/embed/([^&\n?#]+)"),
)


def extract_video_id(url: str) -> str | None:
    """Return the video identifier, or ``None`` for unrecognised input.

    Purely syntactic: the identifier is not checked against YouTube.
    """
    if not url:
        return None
    for pattern in _VIDEO_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


__all__ = ["extract_video_id"]
