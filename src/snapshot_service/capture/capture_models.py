"""Value objects shared by the capture pipelines."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

STILL_SUFFIX = ".jpg"
LOOP_SUFFIX = ".gif"


def make_timestamp(now: datetime | None = None) -> str:
    """Return a sortable UTC timestamp such as ``2025-01-01T12-00-00-123Z``.

    Fixed field widths and a single separator character keep lexicographic
    order identical to chronological order.
    """
    current = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    millis = current.microsecond // 1000
    return f"{current:%Y-%m-%dT%H-%M-%S}-{millis:03d}Z"


@dataclass(frozen=True, slots=True)
class SnapshotPair:
    """Still image and animated loop produced by one capture call."""

    still_filename: str
    loop_filename: str

    @classmethod
    def from_stem(cls, stem: str) -> "SnapshotPair":
        return cls(still_filename=f"{stem}{STILL_SUFFIX}", loop_filename=f"{stem}{LOOP_SUFFIX}")

    @property
    def stem(self) -> str:
        return self.still_filename[: -len(STILL_SUFFIX)]

    @property
    def filenames(self) -> tuple[str, str]:
        return self.still_filename, self.loop_filename

    def filename_for(self, fmt: str) -> str:
        """Pick the artifact for a ``jpg``/``gif`` format switch."""
        if fmt == "gif":
            return self.loop_filename
        if fmt == "jpg":
            return self.still_filename
        raise ValueError(f"unsupported format: {fmt}")


@dataclass(frozen=True, slots=True)
class ToolResult:
    """Outcome of one external tool invocation."""

    tool: str
    returncode: int
    stdout: bytes = b""
    stderr: bytes = b""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def diagnostics(self) -> str:
        return self.stderr.decode("utf-8", errors="replace").strip()


__all__ = ["LOOP_SUFFIX", "STILL_SUFFIX", "SnapshotPair", "ToolResult", "make_timestamp"]
