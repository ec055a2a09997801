"""Detection sources feeding the track set."""

from .simulated import SimulatedDetectionSource

__all__ = ["SimulatedDetectionSource"]
