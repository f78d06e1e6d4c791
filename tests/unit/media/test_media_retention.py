from pathlib import Path

import pytest

from src.snapshot_service.media.media_retention import cleanup_old_files, select_expired

pytestmark = pytest.mark.unit


def _populate(directory: Path, prefix: str, count: int) -> list[str]:
    directory.mkdir(parents=True, exist_ok=True)
    names = []
    for index in range(count):
        name = f"{prefix}2025-01-01T00-00-{index // 10:02d}-{index % 10:03d}Z.jpg"
        (directory / name).write_bytes(b"x")
        names.append(name)
    return names


def test_keeps_newest_files(tmp_path: Path) -> None:
    names = _populate(tmp_path, "snapshot-", 105)

    report = cleanup_old_files(tmp_path, "snapshot-", keep=100)

    remaining = sorted(path.name for path in tmp_path.iterdir())
    assert remaining == sorted(names)[5:]
    assert sorted(report.deleted) == sorted(names)[:5]
    assert report.kept == 100
    assert report.failed == []


def test_leaves_small_directories_alone(tmp_path: Path) -> None:
    _populate(tmp_path, "snapshot-", 10)

    report = cleanup_old_files(tmp_path, "snapshot-", keep=100)

    assert report.deleted == []
    assert len(list(tmp_path.iterdir())) == 10


def test_ignores_files_with_other_prefixes(tmp_path: Path) -> None:
    _populate(tmp_path, "snapshot-", 3)
    (tmp_path / "temp-2025-01-01T00-00-00-000Z.ts").write_bytes(b"segment")
    (tmp_path / "notes.txt").write_text("keep me")

    cleanup_old_files(tmp_path, "snapshot-", keep=1)

    remaining = {path.name for path in tmp_path.iterdir()}
    assert "temp-2025-01-01T00-00-00-000Z.ts" in remaining
    assert "notes.txt" in remaining
    assert len([name for name in remaining if name.startswith("snapshot-")]) == 1


def test_missing_directory_yields_empty_report(tmp_path: Path) -> None:
    report = cleanup_old_files(tmp_path / "absent", "snapshot-", keep=1)

    assert report.deleted == []
    assert report.kept == 0


def test_failed_deletion_does_not_stop_the_batch(tmp_path: Path, monkeypatch) -> None:
    names = sorted(_populate(tmp_path, "youtube-", 4))
    stubborn = names[0]
    original_unlink = Path.unlink

    def flaky_unlink(self: Path, missing_ok: bool = False) -> None:
        if self.name == stubborn:
            raise PermissionError("read-only")
        original_unlink(self, missing_ok=missing_ok)

    monkeypatch.setattr(Path, "unlink", flaky_unlink)

    report = cleanup_old_files(tmp_path, "youtube-", keep=1)

    assert report.failed == [stubborn]
    assert sorted(report.deleted) == names[1:3]
    assert (tmp_path / names[3]).exists()


def test_negative_keep_expires_everything() -> None:
    assert select_expired(["a", "c", "b"], -5) == ["c", "b", "a"]
