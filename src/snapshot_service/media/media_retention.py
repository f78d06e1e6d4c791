"""Count-based retention for snapshot directories."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_KEEP = 100


@dataclass(frozen=True, slots=True)
class RetentionTarget:
    """Directory/prefix scope trimmed to the newest ``keep`` files."""

    directory: Path
    prefix: str
    keep: int = DEFAULT_KEEP


@dataclass(slots=True)
class RetentionReport:
    directory: Path
    prefix: str
    kept: int = 0
    deleted: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


def select_expired(names: list[str], keep: int) -> list[str]:
    """Return the names beyond the newest ``keep`` (descending name order)."""
    ordered = sorted(names, reverse=True)
    return ordered[max(0, keep):]


def cleanup_old_files(directory: Path, prefix: str, keep: int = DEFAULT_KEEP) -> RetentionReport:
    """Delete all but the newest ``keep`` files in ``directory`` starting with ``prefix``.

    Never raises: an unreadable directory yields an empty report and each
    failed deletion is logged and recorded without stopping the batch.
    """
    report = RetentionReport(directory=directory, prefix=prefix)
    try:
        names = [
            entry.name
            for entry in directory.iterdir()
            if entry.name.startswith(prefix) and entry.is_file()
        ]
    except OSError as exc:
        logger.error(
            "media.retention.list_failed",
            extra={"directory": str(directory), "prefix": prefix, "error": str(exc)},
        )
        return report

    expired = select_expired(names, keep)
    report.kept = len(names) - len(expired)
    for name in expired:
        try:
            (directory / name).unlink()
        except FileNotFoundError:
            # already gone (concurrent cleanup); nothing left to retain
            continue
        except OSError as exc:
            report.failed.append(name)
            logger.error(
                "media.retention.delete_failed",
                extra={"directory": str(directory), "file": name, "error": str(exc)},
            )
            continue
        report.deleted.append(name)
        logger.debug("media.retention.deleted", extra={"directory": str(directory), "file": name})

    if report.deleted or report.failed:
        logger.info(
            "media.retention.completed",
            extra={
                "directory": str(directory),
                "prefix": prefix,
                "deleted": len(report.deleted),
                "failed": len(report.failed),
                "kept": report.kept,
            },
        )
    return report


__all__ = [
    "DEFAULT_KEEP",
    "RetentionReport",
    "RetentionTarget",
    "cleanup_old_files",
    "select_expired",
]
