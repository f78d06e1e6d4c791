from pathlib import Path

import pytest

from src.snapshot_service.capture.capture_presets import (
    STATIC_LOOP,
    WEBCAM_LOOP,
    WEBCAM_SEGMENT,
    WEBCAM_STILL,
    YOUTUBE_LOOP,
    YOUTUBE_STILL,
)

pytestmark = pytest.mark.unit

OUT = Path("/data/out")


def test_webcam_segment_copies_three_seconds() -> None:
    args = WEBCAM_SEGMENT.build_args("https://cam.example/live.m3u8", OUT / "temp.ts")

    assert args == [
        "-hide_banner",
        "-loglevel",
        "error",
        "-timeout",
        "30000000",
        "-i",
        "https://cam.example/live.m3u8",
        "-t",
        "3.0",
        "-c",
        "copy",
        "-y",
        str(OUT / "temp.ts"),
    ]


def test_webcam_still_takes_one_frame() -> None:
    args = WEBCAM_STILL.build_args("segment.ts", OUT / "a.jpg")

    assert args == [
        "-hide_banner",
        "-loglevel",
        "error",
        "-i",
        "segment.ts",
        "-frames:v",
        "1",
        "-f",
        "image2",
        "-y",
        str(OUT / "a.jpg"),
    ]


def test_webcam_loop_uses_palette_graph() -> None:
    args = WEBCAM_LOOP.build_args("segment.ts", OUT / "a.gif")

    assert args[args.index("-t") + 1] == "3.0"
    assert args[args.index("-filter_complex") + 1] == (
        "[0:v] fps=10,scale=480:-1:flags=lanczos,split [a][b];"
        "[a] palettegen=stats_mode=diff [p];"
        "[b][p] paletteuse=dither=bayer:bayer_scale=5"
    )
    assert "-vf" not in args
    assert args[-1] == str(OUT / "a.gif")


def test_youtube_presets_seek_from_end_before_input() -> None:
    still = YOUTUBE_STILL.build_args(Path("seg.mp4"), OUT / "y.jpg")
    loop = YOUTUBE_LOOP.build_args(Path("seg.mp4"), OUT / "y.gif")

    assert still[still.index("-sseof") + 1] == "-0.1"
    assert still.index("-sseof") < still.index("-i")
    assert loop[loop.index("-sseof") + 1] == "-1.0"
    assert loop[loop.index("-t") + 1] == "1.0"
    assert loop[loop.index("-vf") + 1] == "fps=10,scale=320:-1:flags=lanczos"


def test_static_loop_only_scales() -> None:
    args = STATIC_LOOP.build_args(Path("thumb.jpg"), OUT / "y.gif")

    assert args[args.index("-vf") + 1] == "scale=320:-1:flags=lanczos"
    assert "-t" not in args
    assert "-sseof" not in args
