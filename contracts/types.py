"""Core data contracts for detection ingest, track state, and label output."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

NO_PREDECESSOR = -1

RGBA = Tuple[float, float, float, float]


@dataclass(eq=False)
class Detection:
    """One frame's observation of a moving object.

    ``id`` is assigned by the detector and is unique within its frame.
    ``predecessor_id`` names the detection in the previous frame that this one
    continues (``NO_PREDECESSOR`` when the detector has no guess).
    ``predecessor`` is written by the track set, never by the detector.
    """

    id: int
    predecessor_id: int = NO_PREDECESSOR
    center_x: float = 0.0
    center_y: float = 0.0
    radius: float = 1.0
    velocity: Optional[float] = None
    predecessor: Optional["Detection"] = field(default=None, repr=False)

    @property
    def center(self) -> Tuple[float, float]:
        return (self.center_x, self.center_y)


@dataclass(frozen=True)
class FrameSize:
    width: int
    height: int


class TrackStatus(str, enum.Enum):
    NEW = "new"
    ACTIVE = "active"
    STALE = "stale"
    EVICTED = "evicted"


@dataclass(frozen=True)
class TrackSnapshot:
    slot: int
    hue: float
    status: TrackStatus
    length: int
    latest_id: Optional[int]
    center: Optional[Tuple[float, float]]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slot": self.slot,
            "hue": self.hue,
            "status": self.status.value,
            "length": self.length,
            "latest_id": self.latest_id,
            "center": list(self.center) if self.center is not None else None,
        }


@dataclass(frozen=True)
class LabelEntry:
    """A legend rectangle or string, in screen pixels (origin top-left).

    ``text`` is None for backdrop rectangles.
    """

    x: float
    y: float
    width: float
    height: float
    text: Optional[str]
    rgba: RGBA
