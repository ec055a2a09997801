"""Configuration loading for the track overlay engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from configs.validator import DEFAULT_PALETTE_DEG, validate_config
from exceptions import InvalidConfigError
from log_config.logger import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).with_name("default.yaml")

_SECTIONS = ("tracking", "render", "simulation")


@dataclass(frozen=True)
class TrackingConfig:
    max_tracks: int = 8
    max_history: int = 32
    hue_offset_deg: float = 24.56
    palette_deg: Tuple[float, ...] = tuple(DEFAULT_PALETTE_DEG)


@dataclass(frozen=True)
class RenderConfig:
    min_alpha: float = 0.1
    min_width_px: float = 1.0
    label_rows: int = 20
    char_step_x: float = 0.5
    vertex_capacity: Optional[int] = None  # None: sized from tracking limits


@dataclass(frozen=True)
class SimulationConfig:
    width: int = 640
    height: int = 480
    objects: int = 3
    speed_px: float = 12.0
    dropout: float = 0.05  # chance an object goes undetected in a frame
    respawn: float = 0.02  # chance an object jumps to a fresh start point
    seed: Optional[int] = None


@dataclass(frozen=True)
class AppConfig:
    tracking: TrackingConfig = field(default_factory=TrackingConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    simulation: SimulationConfig = field(default_factory=SimulationConfig)


def parse_config(data: Optional[Dict[str, Any]]) -> AppConfig:
    """Validate a configuration mapping and build an AppConfig.

    Missing sections and keys take their schema defaults.

    Raises:
        ConfigError: If the mapping fails validation
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidConfigError("Configuration root must be a mapping")
    for section in _SECTIONS:
        if data.get(section) is None:
            data[section] = {}

    validate_config(data)

    try:
        tracking_data = dict(data["tracking"])
        tracking_data["palette_deg"] = tuple(float(h) for h in tracking_data["palette_deg"])
        tracking = TrackingConfig(**tracking_data)
        render = RenderConfig(**data["render"])
        simulation = SimulationConfig(**data["simulation"])
    except (TypeError, ValueError) as e:
        logger.error(f"Failed to construct configuration objects: {e}")
        raise InvalidConfigError(f"Failed to construct configuration: {e}")

    return AppConfig(tracking=tracking, render=render, simulation=simulation)


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Load and validate configuration from YAML file.

    Args:
        path: Path to configuration file

    Returns:
        Validated AppConfig instance

    Raises:
        ConfigError: If configuration is invalid or cannot be loaded
    """
    path = Path(path)
    logger.info(f"Loading configuration from {path}")
    if not path.exists():
        raise InvalidConfigError(f"Configuration file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML configuration: {e}")
        raise InvalidConfigError(f"Failed to parse configuration file: {e}")

    config = parse_config(data)
    logger.info(
        f"Configuration loaded successfully: {config.tracking.max_tracks} tracks, "
        f"{config.tracking.max_history} history points"
    )
    return config


__all__ = [
    "AppConfig",
    "DEFAULT_CONFIG_PATH",
    "RenderConfig",
    "SimulationConfig",
    "TrackingConfig",
    "load_config",
    "parse_config",
]
