"""Shared data contracts for track correlation and rendering."""

from .types import (
    NO_PREDECESSOR,
    RGBA,
    Detection,
    FrameSize,
    LabelEntry,
    TrackSnapshot,
    TrackStatus,
)

__all__ = [
    "NO_PREDECESSOR",
    "RGBA",
    "Detection",
    "FrameSize",
    "LabelEntry",
    "TrackSnapshot",
    "TrackStatus",
]
