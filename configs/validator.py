"""Configuration validation using JSON Schema."""

from __future__ import annotations

from typing import Any, Dict

import jsonschema
from jsonschema import Draft7Validator, validators

from exceptions import ConfigValidationError
from log_config.logger import get_logger

logger = get_logger(__name__)

DEFAULT_PALETTE_DEG = [0.0, 45.0, 90.0, 135.0, 180.0, 225.0, 270.0, 315.0]

# JSON Schema for default.yaml configuration
CONFIG_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "tracking": {
            "type": "object",
            "properties": {
                "max_tracks": {"type": "integer", "minimum": 1, "maximum": 64, "default": 8},
                "max_history": {"type": "integer", "minimum": 2, "maximum": 4096, "default": 32},
                "hue_offset_deg": {"type": "number", "minimum": 0.0, "maximum": 360.0, "default": 24.56},
                "palette_deg": {
                    "type": "array",
                    "items": {"type": "number", "minimum": 0.0, "maximum": 360.0},
                    "minItems": 8,
                    "maxItems": 8,
                    "default": DEFAULT_PALETTE_DEG,
                },
            },
            "additionalProperties": False,
        },
        "render": {
            "type": "object",
            "properties": {
                "min_alpha": {"type": "number", "minimum": 0.0, "maximum": 1.0, "default": 0.1},
                "min_width_px": {"type": "number", "minimum": 0.0, "maximum": 100.0, "default": 1.0},
                "label_rows": {"type": "integer", "minimum": 4, "maximum": 100, "default": 20},
                "char_step_x": {"type": "number", "minimum": 0.1, "maximum": 2.0, "default": 0.5},
                "vertex_capacity": {"type": ["integer", "null"], "minimum": 4, "default": None},
            },
            "additionalProperties": False,
        },
        "simulation": {
            "type": "object",
            "properties": {
                "width": {"type": "integer", "minimum": 16, "maximum": 7680, "default": 640},
                "height": {"type": "integer", "minimum": 16, "maximum": 4320, "default": 480},
                "objects": {"type": "integer", "minimum": 0, "maximum": 64, "default": 3},
                "speed_px": {"type": "number", "minimum": 0.0, "maximum": 500.0, "default": 12.0},
                "dropout": {"type": "number", "minimum": 0.0, "maximum": 1.0, "default": 0.05},
                "respawn": {"type": "number", "minimum": 0.0, "maximum": 1.0, "default": 0.02},
                "seed": {"type": ["integer", "null"], "default": None},
            },
            "additionalProperties": False,
        },
    },
}


def extend_with_default(validator_class):
    """Extend JSON Schema validator to set default values."""
    validate_properties = validator_class.VALIDATORS["properties"]

    def set_defaults(validator, properties, instance, schema):
        if isinstance(instance, dict):
            for prop, subschema in properties.items():
                if "default" in subschema:
                    default = subschema["default"]
                    # Copy list defaults so the schema itself is never mutated
                    instance.setdefault(prop, list(default) if isinstance(default, list) else default)

        for error in validate_properties(validator, properties, instance, schema):
            yield error

    return validators.extend(validator_class, {"properties": set_defaults})


DefaultValidatingValidator = extend_with_default(Draft7Validator)


def validate_config(config: Dict[str, Any]) -> None:
    """Validate configuration against JSON Schema, filling in defaults.

    Args:
        config: Configuration dictionary (defaults are written into it)

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    if not isinstance(config, dict):
        raise ConfigValidationError("Configuration root must be a mapping")

    try:
        validator = DefaultValidatingValidator(CONFIG_SCHEMA)
        errors = list(validator.iter_errors(config))

        if errors:
            error_messages = []
            for error in errors:
                path = " -> ".join(str(p) for p in error.path) if error.path else "root"
                error_messages.append(f"{path}: {error.message}")

            logger.error(f"Configuration validation failed with {len(errors)} errors")
            for msg in error_messages:
                logger.error(f"  - {msg}")

            raise ConfigValidationError(
                f"Configuration validation failed with {len(errors)} error(s). See logs for details.",
                validation_errors=error_messages,
            )

        logger.debug("Configuration validation passed")

    except jsonschema.exceptions.SchemaError as e:
        logger.error(f"Invalid schema: {e}")
        raise ConfigValidationError(f"Invalid schema definition: {e}")


__all__ = ["validate_config", "CONFIG_SCHEMA", "DEFAULT_PALETTE_DEG"]
