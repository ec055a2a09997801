"""Track color palette and HSV to RGBA conversion."""

from __future__ import annotations

import colorsys
from typing import Sequence, Tuple

from contracts import RGBA
from configs.validator import DEFAULT_PALETTE_DEG

HUE_OFFSET_DEG = 24.56


def palette_hue(
    counter: int,
    palette: Sequence[float] = DEFAULT_PALETTE_DEG,
    offset: float = HUE_OFFSET_DEG,
) -> float:
    """Hue in degrees for the ``counter``-th created track."""
    return palette[counter % len(palette)] + offset


def hsv_to_rgba(hue_deg: float, saturation: float = 1.0, value: float = 1.0, alpha: float = 1.0) -> RGBA:
    """Convert a hue in degrees (any range) to an RGBA tuple in [0, 1]."""
    r, g, b = colorsys.hsv_to_rgb((hue_deg % 360.0) / 360.0, saturation, value)
    return (r, g, b, alpha)


def rgba_to_bgr255(rgba: RGBA) -> Tuple[int, int, int]:
    """RGBA floats to an OpenCV BGR byte triple (alpha dropped)."""
    r, g, b, _ = rgba
    return (int(round(b * 255)), int(round(g * 255)), int(round(r * 255)))


__all__ = ["HUE_OFFSET_DEG", "hsv_to_rgba", "palette_hue", "rgba_to_bgr255"]
