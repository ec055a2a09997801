"""Triangle-strip vertex buffers and the source-frame to NDC transform.

The buffers are allocated by the caller (the GPU or preview layer) and filled
by ``TrackSet.generate_curves``. Positions stay in source-frame pixel space;
``pos_mat`` maps them into normalized device coordinates.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from contracts import RGBA
from exceptions import GeometryBufferFullError


def set_ndc_transform(mat: np.ndarray, width: float, height: float) -> None:
    """Write the pixel to NDC transform into a 16-element column-major matrix.

    x' = 2x/width - 1, y' = -2y/height + 1 (origin top-left, y down).
    """
    mat[:] = 0.0
    mat[0x0] = 2.0 / width
    mat[0x5] = -2.0 / height
    mat[0xA] = 1.0
    mat[0xF] = 1.0
    mat[0xC] = -1.0
    mat[0xD] = 1.0


def ndc_matrix(width: float, height: float) -> np.ndarray:
    """Row-major 4x4 version of the transform, for numpy use."""
    mat = np.empty(16, dtype=np.float32)
    set_ndc_transform(mat, width, height)
    return mat.reshape(4, 4).T.copy()


class TriangleStripBuffers:
    """Vertex position/color pair for one triangle strip.

    Attributes:
        pos: float32 array of shape (capacity, 2), pixel coordinates
        color: float32 array of shape (capacity, 4), RGBA in [0, 1]
        pos_mat: float32 array of shape (16,), column-major transform
        num_vertices: number of valid leading rows in ``pos``/``color``
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {capacity}")
        self.capacity = capacity
        self.pos = np.zeros((capacity, 2), dtype=np.float32)
        self.color = np.zeros((capacity, 4), dtype=np.float32)
        self.pos_mat = np.eye(4, dtype=np.float32).reshape(16)
        self.num_vertices = 0

    def clear(self) -> None:
        self.num_vertices = 0

    def add_vertex(self, x: float, y: float, rgba: Sequence[float]) -> None:
        if self.num_vertices >= self.capacity:
            raise GeometryBufferFullError(
                f"Vertex buffer full ({self.capacity} vertices)", capacity=self.capacity
            )
        i = self.num_vertices
        self.pos[i, 0] = x
        self.pos[i, 1] = y
        self.color[i] = rgba
        self.num_vertices = i + 1

    def repeat_last(self) -> None:
        """Duplicate the last vertex (degenerate triangle between strips)."""
        if self.num_vertices == 0:
            return
        i = self.num_vertices - 1
        self.add_vertex(float(self.pos[i, 0]), float(self.pos[i, 1]), self.color[i])

    def begin_strip(self, x: float, y: float, rgba: RGBA) -> None:
        """Start a new strip, bridging from the previous one if any."""
        if self.num_vertices > 0:
            self.repeat_last()
            self.add_vertex(x, y, rgba)
        self.add_vertex(x, y, rgba)

    def positions(self) -> np.ndarray:
        return self.pos[: self.num_vertices]

    def colors(self) -> np.ndarray:
        return self.color[: self.num_vertices]

    def ndc_positions(self) -> np.ndarray:
        """Valid positions mapped through ``pos_mat`` (shape (n, 2))."""
        mat = self.pos_mat.reshape(4, 4).T
        pts = self.positions().astype(np.float64)
        return pts @ mat[:2, :2].T + mat[:2, 3]


__all__ = ["TriangleStripBuffers", "ndc_matrix", "set_ndc_transform"]
