"""A single track: a bounded chain of detections with a display color."""

from __future__ import annotations

import math
import threading
from typing import Optional

from contracts import Detection, RGBA, TrackStatus
from exceptions import TrackEvictedError
from render.buffers import TriangleStripBuffers
from render.color import hsv_to_rgba
from render.labels import LabelSink
from track.history import HistoryRing


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


class Track:
    """Chain of one object's detections, newest first through ``predecessor``.

    Tracks are created and evicted by ``TrackSet``; once evicted, every
    accessor raises ``TrackEvictedError``.

    Thread Safety:
        - Every public method holds ``lock``. Tracks owned by a ``TrackSet``
          share its re-entrant lock, so reads through a handle never
          interleave with ingest, eviction or ``clear()``
    """

    def __init__(
        self,
        hue: float,
        max_history: int = 32,
        created_frame: int = 0,
        lock: Optional[threading.RLock] = None,
    ) -> None:
        self._lock = lock if lock is not None else threading.RLock()
        self.hue = hue
        self.rgba: RGBA = hsv_to_rgba(hue)
        self.created_frame = created_frame
        self.last_frame = created_frame
        self._history = HistoryRing(max_history)
        self._appended = 0
        self._evicted = False

    def _check_alive(self) -> None:
        if self._evicted:
            raise TrackEvictedError(f"Track with hue {self.hue:.2f} has been evicted")

    @property
    def evicted(self) -> bool:
        with self._lock:
            return self._evicted

    @property
    def latest(self) -> Optional[Detection]:
        with self._lock:
            self._check_alive()
            return self._history.newest()

    def __len__(self) -> int:
        with self._lock:
            return len(self._history)

    def append(self, detection: Detection, frame_index: Optional[int] = None) -> None:
        """Make ``detection`` the newest point, linking it to the previous one."""
        with self._lock:
            self._check_alive()
            detection.predecessor = self._history.newest()
            self._history.append(detection)
            self._appended += 1
            if frame_index is not None:
                self.last_frame = frame_index

    def status(self, frame_index: int) -> TrackStatus:
        with self._lock:
            if self._evicted:
                return TrackStatus.EVICTED
            if self.last_frame != frame_index:
                return TrackStatus.STALE
            if self._appended == 1:
                return TrackStatus.NEW
            return TrackStatus.ACTIVE

    def evict(self) -> None:
        """Drop the history arena; the track is unusable afterwards."""
        with self._lock:
            self._evicted = True
            self._history.clear()

    def speed(self) -> float:
        """Displacement of the newest detection from its predecessor, in px/frame."""
        with self._lock:
            latest = self.latest
            if latest is None:
                return 0.0
            prev = latest.predecessor
            if prev is None:
                return float(latest.velocity) if latest.velocity is not None else 0.0
            return math.hypot(latest.center_x - prev.center_x, latest.center_y - prev.center_y)

    def vertex_count(self) -> int:
        with self._lock:
            n = len(self._history)
        if n == 0:
            return 0
        return 4 if n == 1 else 2 * n

    def generate_curve(
        self,
        b: TriangleStripBuffers,
        min_alpha: float = 0.1,
        min_width: float = 1.0,
    ) -> None:
        """Append this track's path to the strip buffers.

        Two vertices per history point, newest first. Half-width goes from the
        detection radius at the head to ``min_width`` at the tail, and alpha
        from 1 to ``min_alpha``.
        """
        with self._lock:
            self._check_alive()
            points = list(self._history.newest_first())
        n = len(points)
        if n == 0:
            return

        r, g, bl, _ = self.rgba
        if n == 1:
            d = points[0]
            h = max(d.radius, min_width)
            color = (r, g, bl, 1.0)
            b.begin_strip(d.center_x - h, d.center_y - h, color)
            b.add_vertex(d.center_x + h, d.center_y - h, color)
            b.add_vertex(d.center_x - h, d.center_y + h, color)
            b.add_vertex(d.center_x + h, d.center_y + h, color)
            return

        for i, d in enumerate(points):
            t = i / (n - 1)
            newer = points[i - 1] if i > 0 else d
            older = points[i + 1] if i < n - 1 else d
            tx = newer.center_x - older.center_x
            ty = newer.center_y - older.center_y
            length = math.hypot(tx, ty)
            if length > 0.0:
                nx, ny = -ty / length, tx / length
            else:
                nx, ny = 0.0, 1.0
            half = _lerp(d.radius, min_width, t)
            color = (r, g, bl, _lerp(1.0, min_alpha, t))
            x0, y0 = d.center_x + nx * half, d.center_y + ny * half
            x1, y1 = d.center_x - nx * half, d.center_y - ny * half
            if i == 0:
                b.begin_strip(x0, y0, color)
            else:
                b.add_vertex(x0, y0, color)
            b.add_vertex(x1, y1, color)

    def generate_label(self, sink: LabelSink, hs: float, ws: float, top: float, slot_index: int) -> None:
        """Emit the speed label for legend row ``slot_index`` (row 0 is below the header)."""
        text = f"{self.speed():.1f}"
        sink.add_string(text, ws, top + (slot_index + 1.5) * hs, hs, self.rgba)

    def __repr__(self) -> str:
        with self._lock:
            state = "evicted" if self._evicted else f"{len(self._history)} points"
        return f"Track(hue={self.hue:.2f}, {state})"
