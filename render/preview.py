"""OpenCV preview: rasterize track curves and legend labels onto a frame."""

from __future__ import annotations

from typing import Iterable, Optional

import cv2
import numpy as np

from contracts import LabelEntry
from render.buffers import TriangleStripBuffers
from render.color import rgba_to_bgr255

_FONT = cv2.FONT_HERSHEY_SIMPLEX
_MIN_TRIANGLE_AREA = 1e-6


def _ensure_bgr(image: np.ndarray) -> np.ndarray:
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    return image.copy()


def _blend_polygon(image: np.ndarray, pts: np.ndarray, rgba) -> None:
    """Alpha-blend a filled convex polygon, touching only its bounding box."""
    height, width = image.shape[:2]
    x0, y0 = np.maximum(pts.min(axis=0), 0)
    x1, y1 = np.minimum(pts.max(axis=0) + 1, (width, height))
    if x1 <= x0 or y1 <= y0:
        return
    roi = image[y0:y1, x0:x1]
    mask = np.zeros(roi.shape[:2], dtype=np.uint8)
    cv2.fillConvexPoly(mask, (pts - (x0, y0)).astype(np.int32), 1)
    inside = mask > 0
    alpha = float(rgba[3])
    color = np.array(rgba_to_bgr255(rgba), dtype=np.float32)
    roi[inside] = (roi[inside] * (1.0 - alpha) + color * alpha).astype(np.uint8)


def ndc_to_image(ndc: np.ndarray, width: int, height: int) -> np.ndarray:
    """Map NDC points to pixel coordinates of a width x height image."""
    px = (ndc[:, 0] + 1.0) * 0.5 * width
    py = (1.0 - ndc[:, 1]) * 0.5 * height
    return np.stack([px, py], axis=1)


def draw_curves(image: np.ndarray, b: TriangleStripBuffers) -> np.ndarray:
    """Draw the strip buffers onto a copy of ``image`` (BGR or grayscale)."""
    canvas = _ensure_bgr(image)
    n = b.num_vertices
    if n < 3:
        return canvas
    height, width = canvas.shape[:2]
    pts = ndc_to_image(b.ndc_positions(), width, height)
    colors = b.colors()
    for i in range(n - 2):
        tri = pts[i : i + 3]
        # Degenerate joins between strips have zero area
        area = abs(
            (tri[1, 0] - tri[0, 0]) * (tri[2, 1] - tri[0, 1])
            - (tri[2, 0] - tri[0, 0]) * (tri[1, 1] - tri[0, 1])
        )
        if area < _MIN_TRIANGLE_AREA:
            continue
        rgba = colors[i : i + 3].mean(axis=0)
        _blend_polygon(canvas, np.round(tri).astype(np.int32), rgba)
    return canvas


def draw_labels(image: np.ndarray, labels: Iterable[LabelEntry]) -> np.ndarray:
    """Draw legend entries (screen pixel coordinates) onto a copy of ``image``."""
    canvas = _ensure_bgr(image)
    for entry in labels:
        if entry.text is None:
            x0, y0 = int(round(entry.x)), int(round(entry.y))
            x1, y1 = int(round(entry.x + entry.width)), int(round(entry.y + entry.height))
            pts = np.array([[x0, y0], [x1, y0], [x1, y1], [x0, y1]], dtype=np.int32)
            _blend_polygon(canvas, pts, entry.rgba)
            continue
        text_height = max(1, int(round(entry.height * 0.7)))
        scale = cv2.getFontScaleFromHeight(_FONT, text_height, 1)
        baseline_y = int(round(entry.y + text_height / 2.0))
        cv2.putText(
            canvas,
            entry.text,
            (int(round(entry.x)), baseline_y),
            _FONT,
            scale,
            rgba_to_bgr255(entry.rgba),
            1,
            cv2.LINE_AA,
        )
    return canvas


def draw_overlay(
    image: np.ndarray,
    b: TriangleStripBuffers,
    labels: Optional[Iterable[LabelEntry]] = None,
) -> np.ndarray:
    """Curves first, then the legend on top."""
    canvas = draw_curves(image, b)
    if labels:
        canvas = draw_labels(canvas, labels)
    return canvas


__all__ = ["draw_curves", "draw_labels", "draw_overlay", "ndc_to_image"]
