"""Track correlation and retention."""

from .track import Track
from .track_set import NUM_TRACKS, TrackSet

__all__ = ["NUM_TRACKS", "Track", "TrackSet"]
