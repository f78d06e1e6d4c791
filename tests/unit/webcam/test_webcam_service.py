import pytest

from src.snapshot_service.exceptions import CaptureFailure
from src.snapshot_service.media.snapshot_store import SnapshotStore
from src.snapshot_service.webcam.webcam_service import WebcamSnapshotService
from tests.mocks.capture import ConcurrentExtractionInvoker, FakeInvoker, output_is

pytestmark = [pytest.mark.unit, pytest.mark.asyncio]

STREAM = "https://cam.example/HLS/live.m3u8"


def _files(store: SnapshotStore) -> set[str]:
    return {path.name for path in store.directory.iterdir()}


async def test_capture_produces_pair_and_removes_segment(webcam_store, fake_invoker) -> None:
    service = WebcamSnapshotService(store=webcam_store, invoker=fake_invoker)

    pair = await service.capture(STREAM)

    assert pair.still_filename.startswith("snapshot-")
    assert pair.stem == pair.loop_filename[: -len(".gif")]
    assert _files(webcam_store) == set(pair.filenames)
    assert fake_invoker.tools() == ["ffmpeg", "ffmpeg", "ffmpeg"]
    segment_args = fake_invoker.calls[0][1]
    assert segment_args[segment_args.index("-i") + 1] == STREAM
    assert segment_args[-1].endswith(".ts")
    assert "temp-" in segment_args[-1]


async def test_still_and_loop_read_the_local_segment(webcam_store, fake_invoker) -> None:
    service = WebcamSnapshotService(store=webcam_store, invoker=fake_invoker)

    await service.capture(STREAM)

    segment = fake_invoker.calls[0][1][-1]
    for _, args in fake_invoker.calls[1:]:
        assert args[args.index("-i") + 1] == segment


async def test_segment_failure_leaves_no_files(webcam_store) -> None:
    invoker = FakeInvoker(failures=[output_is(".ts")])
    service = WebcamSnapshotService(store=webcam_store, invoker=invoker)

    with pytest.raises(CaptureFailure) as excinfo:
        await service.capture(STREAM)

    assert str(excinfo.value) == "Failed to process video: Failed to capture video segment from stream"
    assert _files(webcam_store) == set()
    assert len(invoker.calls) == 1


async def test_loop_failure_discards_the_still(webcam_store) -> None:
    invoker = FakeInvoker(failures=[output_is(".gif")])
    service = WebcamSnapshotService(store=webcam_store, invoker=invoker)

    with pytest.raises(CaptureFailure, match="Failed to generate GIF snapshot"):
        await service.capture(STREAM)

    assert _files(webcam_store) == set()


async def test_still_failure_is_reported_first(webcam_store) -> None:
    invoker = FakeInvoker(failures=[output_is(".jpg"), output_is(".gif")])
    service = WebcamSnapshotService(store=webcam_store, invoker=invoker)

    with pytest.raises(CaptureFailure, match="Failed to extract JPG snapshot"):
        await service.capture(STREAM)


async def test_unexpected_error_still_cleans_up(webcam_store, fake_invoker, monkeypatch) -> None:
    service = WebcamSnapshotService(store=webcam_store, invoker=fake_invoker)

    async def broken_extract(self, source, pair):
        webcam_store.path_for(pair.still_filename).write_bytes(b"partial")
        raise OSError("disk full")

    monkeypatch.setattr(WebcamSnapshotService, "_extract_pair", broken_extract)

    with pytest.raises(OSError):
        await service.capture(STREAM)

    assert _files(webcam_store) == set()



async def test_still_and_loop_are_extracted_concurrently(webcam_store) -> None:
    invoker = ConcurrentExtractionInvoker(timeout=1.0)
    service = WebcamSnapshotService(store=webcam_store, invoker=invoker)

    pair = await service.capture(STREAM)

    assert _files(webcam_store) == set(pair.filenames)
