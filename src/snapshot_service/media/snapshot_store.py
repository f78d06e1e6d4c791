"""Flat on-disk storage for captured snapshot pairs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..capture.capture_models import LOOP_SUFFIX, STILL_SUFFIX, SnapshotPair, make_timestamp
from ..exceptions import SnapshotNotFound


@dataclass(slots=True)
class SnapshotStore:
    """Own one artifact directory and the naming scheme of its files.

    ``prefix`` scopes retention and gallery listing; temporary files use a
    different prefix so they are never mistaken for artifacts.
    """

    directory: Path
    prefix: str
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def ensure_directory(self) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        return self.directory

    def new_pair(self, *qualifiers: str, timestamp: str | None = None) -> SnapshotPair:
        """Name a fresh pair: ``<prefix><qualifier>-...-<timestamp>.{jpg,gif}``."""
        parts = [*qualifiers, timestamp or make_timestamp()]
        return SnapshotPair.from_stem(self.prefix + "-".join(parts))

    def path_for(self, filename: str) -> Path:
        return self.directory / filename

    def temp_path(self, name: str) -> Path:
        return self.ensure_directory() / name

    def resolve(self, filename: str) -> Path:
        """Return the path of a stored artifact or raise :class:`SnapshotNotFound`."""
        if not _is_plain_name(filename):
            raise SnapshotNotFound(filename)
        path = self.path_for(filename)
        if not path.is_file():
            raise SnapshotNotFound(filename)
        return path

    def discard(self, *filenames: str) -> None:
        """Best-effort removal of files written by a failed capture."""
        for name in filenames:
            remove_quietly(self.path_for(name), log=self.log)

    def list_pairs(self, limit: int | None = None) -> list[SnapshotPair]:
        """Rebuild pairs from the directory listing, newest first.

        Only stems with both a still and a loop on disk are returned.
        """
        try:
            names = {entry.name for entry in self.directory.iterdir() if entry.is_file()}
        except OSError as exc:
            self.log.warning(
                "media.store.list_failed",
                extra={"directory": str(self.directory), "error": str(exc)},
            )
            return []

        stems = sorted(
            (
                name[: -len(STILL_SUFFIX)]
                for name in names
                if name.startswith(self.prefix) and name.endswith(STILL_SUFFIX)
            ),
            reverse=True,
        )
        pairs = [
            SnapshotPair.from_stem(stem)
            for stem in stems
            if f"{stem}{LOOP_SUFFIX}" in names
        ]
        return pairs[:limit] if limit is not None else pairs


def remove_quietly(path: Path, *, log: logging.Logger | None = None) -> bool:
    """Delete ``path`` if present; report whether a file was removed."""
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as exc:
        (log or logging.getLogger(__name__)).warning(
            "media.store.remove_failed", extra={"path": str(path), "error": str(exc)}
        )
        return False
    return True


def _is_plain_name(filename: str) -> bool:
    return (
        bool(filename)
        and not filename.startswith(".")
        and "/" not in filename
        and "\\" not in filename
        and Path(filename).name == filename
    )


def guess_media_type(filename: str) -> str:
    return "image/gif" if filename.endswith(LOOP_SUFFIX) else "image/jpeg"


__all__ = ["SnapshotStore", "guess_media_type", "remove_quietly"]
