from pathlib import Path

import pytest

from configs.settings import DEFAULT_CONFIG_PATH, load_config, parse_config
from exceptions import ConfigValidationError, InvalidConfigError
from track.track_set import TrackSet


def test_load_default_config() -> None:
    config = load_config(DEFAULT_CONFIG_PATH)

    assert config.tracking.max_tracks == 8
    assert config.tracking.hue_offset_deg == pytest.approx(24.56)
    assert config.tracking.palette_deg == (0.0, 45.0, 90.0, 135.0, 180.0, 225.0, 270.0, 315.0)
    assert config.render.label_rows == 20
    assert config.render.vertex_capacity is None
    assert config.simulation.width == 640


def test_missing_sections_take_defaults() -> None:
    config = parse_config({"tracking": {"max_history": 5}})

    assert config.tracking.max_history == 5
    assert config.tracking.max_tracks == 8
    assert config.render.min_alpha == pytest.approx(0.1)
    assert config.simulation.seed is None


def test_empty_document_is_all_defaults() -> None:
    assert parse_config(None) == parse_config({})


def test_out_of_range_value_rejected() -> None:
    with pytest.raises(ConfigValidationError) as excinfo:
        parse_config({"tracking": {"max_tracks": 0}})
    assert any("max_tracks" in msg for msg in excinfo.value.validation_errors)


def test_unknown_key_rejected() -> None:
    with pytest.raises(ConfigValidationError):
        parse_config({"render": {"line_width": 3}})


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(InvalidConfigError):
        load_config(tmp_path / "nope.yaml")


def test_malformed_yaml(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("tracking: [unclosed\n")
    with pytest.raises(InvalidConfigError):
        load_config(path)


def test_track_set_from_config(tmp_path: Path) -> None:
    path = tmp_path / "small.yaml"
    path.write_text("tracking:\n  max_tracks: 2\n  max_history: 4\nrender:\n  vertex_capacity: 64\n")
    config = load_config(path)
    tracks = TrackSet.from_config(config)

    assert tracks.max_tracks == 2
    assert tracks.max_vertices() == 64
