from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest

from src.snapshot_service.media.snapshot_store import SnapshotStore
from tests.mocks.capture import FakeInvoker

_RUNTIME_ROOT = Path(tempfile.mkdtemp(prefix="snapshot-service-tests-"))

# ``src.snapshot_service.main`` builds a module-level app from the environment.
os.environ.setdefault("SNAPSHOTS_DIR", str(_RUNTIME_ROOT / "snapshots"))
os.environ.setdefault("YOUTUBE_SNAPSHOTS_DIR", str(_RUNTIME_ROOT / "youtube-snapshots"))
os.environ.setdefault("RETENTION_ENABLED", "false")


@pytest.fixture()
def fake_invoker() -> FakeInvoker:
    return FakeInvoker()


@pytest.fixture()
def webcam_store(tmp_path: Path) -> SnapshotStore:
    store = SnapshotStore(directory=tmp_path / "snapshots", prefix="snapshot-")
    store.ensure_directory()
    return store


@pytest.fixture()
def youtube_store(tmp_path: Path) -> SnapshotStore:
    store = SnapshotStore(directory=tmp_path / "youtube-snapshots", prefix="youtube-")
    store.ensure_directory()
    return store
