"""Unit tests for configuration schema validation."""

import unittest

from configs.validator import CONFIG_SCHEMA, DEFAULT_PALETTE_DEG, validate_config
from exceptions import ConfigValidationError


class TestConfigValidator(unittest.TestCase):
    """Test validate_config against the config schema."""

    def test_defaults_filled_in(self):
        """Test that present sections receive default values."""
        config = {"tracking": {}, "render": {"min_alpha": 0.3}}
        validate_config(config)

        self.assertEqual(config["tracking"]["max_tracks"], 8)
        self.assertEqual(config["tracking"]["palette_deg"], DEFAULT_PALETTE_DEG)
        self.assertEqual(config["render"]["min_alpha"], 0.3)
        self.assertEqual(config["render"]["label_rows"], 20)

    def test_default_list_not_shared(self):
        """Test that filled-in list defaults are copies."""
        config = {"tracking": {}}
        validate_config(config)
        config["tracking"]["palette_deg"].append(1.0)

        schema_default = CONFIG_SCHEMA["properties"]["tracking"]["properties"]["palette_deg"]["default"]
        self.assertEqual(len(schema_default), 8)

    def test_palette_must_have_eight_hues(self):
        """Test that a short palette is rejected."""
        with self.assertRaises(ConfigValidationError) as ctx:
            validate_config({"tracking": {"palette_deg": [0, 90, 180]}})
        self.assertTrue(any("palette_deg" in e for e in ctx.exception.validation_errors))

    def test_wrong_type(self):
        """Test that a string where a number belongs is rejected."""
        with self.assertRaises(ConfigValidationError):
            validate_config({"render": {"min_alpha": "faint"}})

    def test_multiple_errors_reported(self):
        """Test that every violation is collected."""
        with self.assertRaises(ConfigValidationError) as ctx:
            validate_config({"tracking": {"max_tracks": 0, "max_history": 1}})
        self.assertEqual(len(ctx.exception.validation_errors), 2)

    def test_non_mapping_root(self):
        """Test that a list document is rejected."""
        with self.assertRaises(ConfigValidationError):
            validate_config([1, 2, 3])


if __name__ == "__main__":
    unittest.main()
