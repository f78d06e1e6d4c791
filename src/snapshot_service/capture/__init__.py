"""External-tool capture primitives: presets, invoker and value objects."""

from .capture_invoker import CaptureInvoker
from .capture_models import SnapshotPair, ToolResult, make_timestamp
from .capture_presets import LoopPreset, SegmentPreset, StillPreset

__all__ = [
    "CaptureInvoker",
    "LoopPreset",
    "SegmentPreset",
    "SnapshotPair",
    "StillPreset",
    "ToolResult",
    "make_timestamp",
]
