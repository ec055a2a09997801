"""Custom exception classes for TrackTrail."""

from __future__ import annotations

from typing import Optional


class TrackTrailError(Exception):
    """Base exception for all TrackTrail errors."""

    pass


class InvalidInputError(TrackTrailError):
    """Raised when a frame's detections or dimensions are rejected.

    The call that raised is aborted; the track set keeps its prior state.
    """

    def __init__(self, message: str, detection_id: Optional[int] = None):
        self.detection_id = detection_id
        super().__init__(message)


class TrackEvictedError(TrackTrailError):
    """Raised when an evicted track is dereferenced."""

    pass


class LabelSlotError(TrackTrailError, IndexError):
    """Raised when a label is requested for a slot that holds no track."""

    def __init__(self, message: str, slot: Optional[int] = None):
        self.slot = slot
        super().__init__(message)


class GeometryBufferFullError(TrackTrailError):
    """Raised when curve emission runs past the vertex buffer capacity."""

    def __init__(self, message: str, capacity: Optional[int] = None):
        self.capacity = capacity
        super().__init__(message)


class ConfigError(TrackTrailError):
    """Base exception for configuration errors."""

    pass


class InvalidConfigError(ConfigError):
    """Raised when configuration file is invalid or corrupted."""

    pass


class ConfigValidationError(ConfigError):
    """Raised when configuration fails schema validation."""

    def __init__(self, message: str, validation_errors: Optional[list] = None):
        self.validation_errors = validation_errors or []
        super().__init__(message)
