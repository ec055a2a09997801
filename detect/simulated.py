"""Synthetic detection source for demos and stress tests.

Objects bounce around the frame at constant speed. Each frame yields one
Detection per visible object, with ``predecessor_id`` pointing at that
object's previous detection, the way a real detector links its output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from configs.settings import SimulationConfig
from contracts import NO_PREDECESSOR, Detection


@dataclass
class _SimObject:
    x: float
    y: float
    vx: float
    vy: float
    radius: float
    last_id: int = NO_PREDECESSOR


class SimulatedDetectionSource:
    def __init__(self, config: Optional[SimulationConfig] = None) -> None:
        self.config = config or SimulationConfig()
        self._rng = np.random.default_rng(self.config.seed)
        self._next_id = 0
        self._frame_index = 0
        self._objects: List[_SimObject] = [self._spawn() for _ in range(self.config.objects)]

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def frame_index(self) -> int:
        return self._frame_index

    def _spawn(self) -> _SimObject:
        angle = self._rng.uniform(0.0, 2.0 * np.pi)
        speed = self.config.speed_px
        return _SimObject(
            x=float(self._rng.uniform(0.1, 0.9) * self.config.width),
            y=float(self._rng.uniform(0.1, 0.9) * self.config.height),
            vx=float(np.cos(angle) * speed),
            vy=float(np.sin(angle) * speed),
            radius=float(self._rng.uniform(3.0, 8.0)),
        )

    def _step(self, obj: _SimObject) -> None:
        obj.x += obj.vx
        obj.y += obj.vy
        if not 0.0 <= obj.x < self.config.width:
            obj.vx = -obj.vx
            obj.x = min(max(obj.x, 0.0), self.config.width - 1.0)
        if not 0.0 <= obj.y < self.config.height:
            obj.vy = -obj.vy
            obj.y = min(max(obj.y, 0.0), self.config.height - 1.0)

    def next_frame(self) -> List[Detection]:
        """Advance one frame and return its detections."""
        self._frame_index += 1
        detections: List[Detection] = []
        for i, obj in enumerate(self._objects):
            if self._rng.random() < self.config.respawn:
                obj = self._objects[i] = self._spawn()
            else:
                self._step(obj)
            if self._rng.random() < self.config.dropout:
                continue
            detection = Detection(
                id=self._next_id,
                predecessor_id=obj.last_id,
                center_x=obj.x,
                center_y=obj.y,
                radius=obj.radius,
                velocity=float(np.hypot(obj.vx, obj.vy)),
            )
            self._next_id += 1
            obj.last_id = detection.id
            detections.append(detection)
        return detections


__all__ = ["SimulatedDetectionSource"]
