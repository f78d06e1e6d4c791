"""Cron entry point for trimming snapshot directories to the newest files."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, replace

from src.snapshot_service.config import load_config
from src.snapshot_service.lifecycle import retention_cleanup_once, retention_targets
from src.snapshot_service.media.media_retention import RetentionTarget, select_expired


@dataclass(slots=True)
class CleanupSummary:
    removed: int
    failed: int
    dry_run: bool


def _count_expired(target: RetentionTarget) -> int:
    if not target.directory.is_dir():
        return 0
    names = [
        entry.name
        for entry in target.directory.iterdir()
        if entry.name.startswith(target.prefix) and entry.is_file()
    ]
    return len(select_expired(names, target.keep))


def perform_cleanup(*, dry_run: bool, keep: int | None = None) -> CleanupSummary:
    """Execute one retention pass and return summary counters."""
    config = load_config()
    targets = retention_targets(config)
    if keep is not None:
        targets = [replace(target, keep=keep) for target in targets]

    if dry_run:
        expired = sum(_count_expired(target) for target in targets)
        return CleanupSummary(removed=expired, failed=0, dry_run=True)

    reports = retention_cleanup_once(targets)
    return CleanupSummary(
        removed=sum(len(report.deleted) for report in reports),
        failed=sum(len(report.failed) for report in reports),
        dry_run=False,
    )


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Delete all but the newest snapshot files.")
    parser.add_argument("--dry-run", action="store_true", help="Only report counts without deleting files.")
    parser.add_argument("--keep", type=int, default=None, help="Override RETENTION_KEEP for this run.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv or [])
    try:
        summary = perform_cleanup(dry_run=args.dry_run, keep=args.keep)
    except Exception as exc:
        print(f"cleanup failed: {exc}", file=sys.stderr)
        return 2

    if summary.dry_run:
        print(f"cleanup dry-run, expired={summary.removed}", file=sys.stdout)
    else:
        print(f"cleanup done, removed={summary.removed}, failed={summary.failed}", file=sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
