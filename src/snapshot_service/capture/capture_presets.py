"""Capture presets and their translation into ffmpeg argument lists.

Presets are plain configuration; ``build_args`` is a pure function of the
preset, the input and the output, so argument lists can be asserted in tests
without launching ffmpeg.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

BASE_ARGS: tuple[str, ...] = ("-hide_banner", "-loglevel", "error")


def _fmt_seconds(value: float) -> str:
    text = f"{value:.3f}".rstrip("0")
    return text + "0" if text.endswith(".") else text


def _seek_args(seek_from_start: float | None, seek_from_end: float | None) -> list[str]:
    if seek_from_end is not None:
        return ["-sseof", f"-{_fmt_seconds(seek_from_end)}"]
    if seek_from_start is not None:
        return ["-ss", _fmt_seconds(seek_from_start)]
    return []


@dataclass(frozen=True, slots=True)
class SegmentPreset:
    """Copy a short excerpt of a live stream to a local file without re-encoding."""

    duration: float = 3.0
    connect_timeout_us: int = 30_000_000

    def build_args(self, source: str, output: Path) -> list[str]:
        return [
            *BASE_ARGS,
            "-timeout",
            str(self.connect_timeout_us),
            "-i",
            source,
            "-t",
            _fmt_seconds(self.duration),
            "-c",
            "copy",
            "-y",
            str(output),
        ]


@dataclass(frozen=True, slots=True)
class StillPreset:
    """Extract exactly one frame into a JPEG."""

    seek_from_start: float | None = None
    seek_from_end: float | None = None

    def build_args(self, source: str | Path, output: Path) -> list[str]:
        return [
            *BASE_ARGS,
            *_seek_args(self.seek_from_start, self.seek_from_end),
            "-i",
            str(source),
            "-frames:v",
            "1",
            "-f",
            "image2",
            "-y",
            str(output),
        ]


@dataclass(frozen=True, slots=True)
class LoopPreset:
    """Scaled animated GIF, optionally with two-pass palette generation.

    ``fps=None`` together with ``duration=None`` describes a static loop built
    from a single image (scale only).
    """

    duration: float | None = 3.0
    fps: int | None = 10
    width: int = 480
    scale_flags: str = "lanczos"
    palette: bool = False
    seek_from_end: float | None = None

    def scale_filter(self) -> str:
        return f"scale={self.width}:-1:flags={self.scale_flags}"

    def filter_graph(self) -> str:
        chain = self.scale_filter()
        if self.fps:
            chain = f"fps={self.fps},{chain}"
        if not self.palette:
            return chain
        return ";".join(
            [
                f"[0:v] {chain},split [a][b]",
                "[a] palettegen=stats_mode=diff [p]",
                "[b][p] paletteuse=dither=bayer:bayer_scale=5",
            ]
        )

    def build_args(self, source: str | Path, output: Path) -> list[str]:
        args = [*BASE_ARGS, *_seek_args(None, self.seek_from_end), "-i", str(source)]
        if self.duration is not None:
            args += ["-t", _fmt_seconds(self.duration)]
        args += ["-filter_complex" if self.palette else "-vf", self.filter_graph()]
        args += ["-y", str(output)]
        return args


WEBCAM_SEGMENT = SegmentPreset(duration=3.0)
WEBCAM_STILL = StillPreset()
WEBCAM_LOOP = LoopPreset(duration=3.0, fps=10, width=480, palette=True)

YOUTUBE_STILL = StillPreset(seek_from_end=0.1)
YOUTUBE_LOOP = LoopPreset(duration=1.0, fps=10, width=320, seek_from_end=1.0)
STATIC_LOOP = LoopPreset(duration=None, fps=None, width=320)


__all__ = [
    "BASE_ARGS",
    "LoopPreset",
    "STATIC_LOOP",
    "SegmentPreset",
    "StillPreset",
    "WEBCAM_LOOP",
    "WEBCAM_SEGMENT",
    "WEBCAM_STILL",
    "YOUTUBE_LOOP",
    "YOUTUBE_STILL",
]
