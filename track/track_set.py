"""Correlates per-frame detections into a bounded set of on-screen tracks.

One ``TrackSet`` is shared between the thread that produces detections and
the thread(s) that render. Every public method holds the same lock for its
whole duration, so a render always sees the tracks exactly as some completed
``add_detections`` call left them.
"""

from __future__ import annotations

import threading
from typing import Dict, List, Optional, Sequence, Tuple

from configs.settings import AppConfig, RenderConfig, TrackingConfig
from contracts import Detection, FrameSize, LabelEntry, TrackSnapshot
from exceptions import (
    GeometryBufferFullError,
    InvalidConfigError,
    InvalidInputError,
    LabelSlotError,
)
from log_config.logger import get_logger
from render.buffers import TriangleStripBuffers, set_ndc_transform
from render.color import palette_hue
from render.labels import LabelCollector, LabelSink
from track.history import MIN_CAPACITY
from track.track import Track

logger = get_logger(__name__)

NUM_TRACKS = 8

_BACKDROP_RGBA = (0.0, 0.0, 0.0, 0.5)
_HEADER_RGBA = (0.5, 0.5, 0.5, 1.0)
_HEADER_TEXT = "px/fr"
_LEGEND_WIDTH_CHARS = 7


def _check_tracking(tracking: TrackingConfig) -> None:
    if tracking.max_tracks < 1:
        raise InvalidConfigError(f"max_tracks must be at least 1, got {tracking.max_tracks}")
    if tracking.max_history < MIN_CAPACITY:
        raise InvalidConfigError(
            f"max_history must be at least {MIN_CAPACITY}, got {tracking.max_history}"
        )
    if not tracking.palette_deg:
        raise InvalidConfigError("palette_deg must not be empty")


class TrackSet:
    """Latest detected tracks, kept on screen so the user can inspect them.

    Tracks are held oldest first. When a new track would exceed
    ``max_tracks``, the oldest-created one is evicted, whether or not it is
    still being matched.

    Thread Safety:
        - add_detections(), generate_curves(), generate_labels(),
          label_for_slot(), snapshot() and clear() are all thread-safe
        - Track objects obtained from ``tracks`` share the set's lock, so
          reading them is thread-safe too; after eviction they raise
          ``TrackEvictedError``

    Example:
        ```python
        tracks = TrackSet()
        tracks.add_detections(detections, width=640, height=480)

        buffers = TriangleStripBuffers(tracks.required_vertices())
        tracks.generate_curves(buffers)
        ```
    """

    def __init__(
        self,
        tracking: Optional[TrackingConfig] = None,
        render: Optional[RenderConfig] = None,
    ) -> None:
        self._tracking = tracking or TrackingConfig(max_tracks=NUM_TRACKS)
        self._render = render or RenderConfig()
        _check_tracking(self._tracking)
        # Re-entrant: tracks handed out by ``tracks`` take this same lock
        self._lock = threading.RLock()
        self._tracks: List[Track] = []
        self._current_map: Dict[int, Track] = {}
        self._previous_map: Dict[int, Track] = {}
        # Source image size, not necessarily the screen size
        self._width = 1
        self._height = 1
        self._track_counter = 0
        self._frame_index = 0

    @classmethod
    def from_config(cls, config: AppConfig) -> "TrackSet":
        return cls(tracking=config.tracking, render=config.render)

    @property
    def max_tracks(self) -> int:
        return self._tracking.max_tracks

    @property
    def frame_size(self) -> FrameSize:
        with self._lock:
            return FrameSize(self._width, self._height)

    @property
    def frame_index(self) -> int:
        """Number of ``add_detections`` calls since construction."""
        with self._lock:
            return self._frame_index

    @property
    def tracks(self) -> Tuple[Track, ...]:
        with self._lock:
            return tuple(self._tracks)

    def __len__(self) -> int:
        with self._lock:
            return len(self._tracks)

    def add_detections(self, detections: Sequence[Detection], width: int, height: int) -> None:
        """Add one frame's detections to the correct tracks.

        A detection whose ``predecessor_id`` names a detection from the
        previous call continues that detection's track; anything else starts
        a new track.

        Args:
            detections: This frame's detections, ids unique and non-negative
            width: Width of the source image (not the screen)
            height: Height of the source image (not the screen)

        Raises:
            InvalidInputError: On a negative id or non-positive dimensions.
                The track set is left as it was before the call.
        """
        detections = list(detections)
        if width <= 0 or height <= 0:
            logger.warning(f"Rejected frame with invalid size {width}x{height}")
            raise InvalidInputError(f"Frame size must be positive, got {width}x{height}")
        for detection in detections:
            if detection.id < 0:
                logger.warning(f"Rejected frame: detection ID not specified ({detection.id})")
                raise InvalidInputError(
                    f"ID of a detection not specified: {detection.id}",
                    detection_id=detection.id,
                )

        with self._lock:
            self._width = width
            self._height = height
            self._frame_index += 1

            # swap the maps
            self._current_map, self._previous_map = self._previous_map, self._current_map
            self._current_map.clear()

            for detection in detections:
                track = self._previous_map.get(detection.predecessor_id)
                if track is None:
                    track = self._new_track()
                track.append(detection, frame_index=self._frame_index)
                self._current_map[detection.id] = track

            logger.debug(
                f"Frame {self._frame_index}: {len(detections)} detections, "
                f"{len(self._tracks)} tracks"
            )

    def _new_track(self) -> Track:
        # Caller holds the lock
        self._track_counter += 1
        hue = palette_hue(
            self._track_counter,
            self._tracking.palette_deg,
            self._tracking.hue_offset_deg,
        )
        track = Track(
            hue,
            self._tracking.max_history,
            created_frame=self._frame_index,
            lock=self._lock,
        )
        if len(self._tracks) == self._tracking.max_tracks:
            self._evict(self._tracks.pop(0))
        self._tracks.append(track)
        logger.debug(f"Created track #{self._track_counter} (hue {hue:.2f})")
        return track

    def _evict(self, track: Track) -> None:
        # Caller holds the lock. The previous map may still point at the
        # track; drop those entries so a later frame cannot revive it.
        for mapping in (self._previous_map, self._current_map):
            stale_ids = [det_id for det_id, t in mapping.items() if t is track]
            for det_id in stale_ids:
                del mapping[det_id]
        track.evict()
        logger.debug(f"Evicted {track!r}")

    def required_vertices(self) -> int:
        """Vertex capacity needed to hold the current tracks' curves."""
        with self._lock:
            return self._required_vertices()

    def _required_vertices(self) -> int:
        counts = [t.vertex_count() for t in self._tracks]
        counts = [c for c in counts if c > 0]
        if not counts:
            return 0
        # Two degenerate vertices join consecutive strips
        return sum(counts) + 2 * (len(counts) - 1)

    def max_vertices(self) -> int:
        """Capacity that holds any reachable state of this track set."""
        if self._render.vertex_capacity is not None:
            return self._render.vertex_capacity
        per_track = max(4, 2 * self._tracking.max_history)
        return self._tracking.max_tracks * (per_track + 2)

    def generate_curves(self, b: TriangleStripBuffers) -> None:
        """Fill ``b`` with every retained track's curve and the NDC transform.

        Raises:
            GeometryBufferFullError: If ``b`` cannot hold every curve. ``b`` is
                left untouched.
        """
        with self._lock:
            required = self._required_vertices()
            if required > b.capacity:
                logger.warning(f"Vertex buffer too small: need {required}, have {b.capacity}")
                raise GeometryBufferFullError(
                    f"Curves need {required} vertices, buffer holds {b.capacity}",
                    capacity=b.capacity,
                )
            set_ndc_transform(b.pos_mat, self._width, self._height)
            b.clear()
            for track in self._tracks:
                track.generate_curve(b, self._render.min_alpha, self._render.min_width_px)

    def _legend_metrics(self, height: float) -> Tuple[float, float, float]:
        hs = float(height) / self._render.label_rows
        ws = hs * self._render.char_step_x
        mid = height / 2.0
        top = mid - 0.5 * (len(self._tracks) + 1) * hs
        return hs, ws, top

    def generate_labels(self, sink: LabelSink, height: int) -> None:
        """Emit the speed legend: backdrop, header, then one row per track, oldest first.

        Args:
            sink: Receives rectangles and strings in screen pixels
            height: Height of the screen the legend is drawn on
        """
        with self._lock:
            items = len(self._tracks)
            if items == 0:
                return
            hs, ws, top = self._legend_metrics(height)
            sink.add_rectangle(0.0, top, _LEGEND_WIDTH_CHARS * ws, (items + 1) * hs, _BACKDROP_RGBA)
            sink.add_string(_HEADER_TEXT, ws, top + 0.5 * hs, hs, _HEADER_RGBA)
            for i, track in enumerate(self._tracks):
                track.generate_label(sink, hs, ws, top, i)

    def label_for_slot(self, slot: int, height: int) -> LabelEntry:
        """Legend entry for the track in retention slot ``slot``.

        Raises:
            LabelSlotError: If no track occupies ``slot``
        """
        with self._lock:
            if not 0 <= slot < len(self._tracks):
                raise LabelSlotError(
                    f"No track in slot {slot} ({len(self._tracks)} tracks retained)",
                    slot=slot,
                )
            hs, ws, top = self._legend_metrics(height)
            collector = LabelCollector(self._render.char_step_x)
            self._tracks[slot].generate_label(collector, hs, ws, top, slot)
            return collector.entries[0]

    def snapshot(self) -> Tuple[TrackSnapshot, ...]:
        """Immutable view of the retained tracks, oldest first."""
        with self._lock:
            result = []
            for slot, track in enumerate(self._tracks):
                latest = track.latest
                result.append(
                    TrackSnapshot(
                        slot=slot,
                        hue=track.hue,
                        status=track.status(self._frame_index),
                        length=len(track),
                        latest_id=latest.id if latest is not None else None,
                        center=latest.center if latest is not None else None,
                    )
                )
            return tuple(result)

    def clear(self) -> None:
        """Drop all tracks and both lookup maps."""
        with self._lock:
            for track in self._tracks:
                track.evict()
            self._tracks.clear()
            self._previous_map.clear()
            self._current_map.clear()
            logger.info("Track set cleared")


__all__ = ["NUM_TRACKS", "TrackSet"]
