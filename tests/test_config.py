"""Tests for YAML config loading."""

from __future__ import annotations

import os

import pytest

from compass_heading.config import config_from_dict, default_config, load_config
from compass_heading.pipeline import build_pipeline

REPO_CONFIG = os.path.join(os.path.dirname(__file__), "..", "config", "config.yaml")


def test_defaults():
    cfg = default_config()
    assert cfg.smoothing.transition_s == 0.25
    assert cfg.smoothing.initial_heading == 0.0
    assert cfg.fusion.min_gravity_norm == pytest.approx(0.980665)
    assert cfg.sensors.accelerometer.axis_map.tolist() == [0, 1, 2]


def test_shipped_config_matches_defaults():
    cfg = load_config(REPO_CONFIG)
    d = default_config()
    assert cfg.sample_rate_hz == d.sample_rate_hz
    assert cfg.fusion == d.fusion
    assert cfg.smoothing == d.smoothing
    assert cfg.logging.level == "INFO"


def test_partial_file(tmp_path):
    path = tmp_path / "c.yaml"
    path.write_text(
        "smoothing:\n"
        "  transition_s: 0.5\n"
        "sensors:\n"
        "  magnetometer:\n"
        "    axis_map: [1, 0, 2]\n"
        "    axis_sign: [1, -1, 1]\n"
        "logging:\n"
        "  level: debug\n",
        encoding="utf-8",
    )
    cfg = load_config(str(path))
    assert cfg.smoothing.transition_s == 0.5
    assert cfg.sensors.magnetometer.axis_map.tolist() == [1, 0, 2]
    assert cfg.sensors.magnetometer.axis_sign.tolist() == [1, -1, 1]
    assert cfg.sensors.accelerometer.axis_sign.tolist() == [1, 1, 1]
    assert cfg.logging.level == "DEBUG"


def test_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(str(path)).sample_rate_hz == default_config().sample_rate_hz


@pytest.mark.parametrize("raw", [
    {"sample_rate_hz": 0},
    {"smoothing": {"transition_s": 0}},
    {"sensors": {"accelerometer": {"axis_map": [0, 0, 2]}}},
    {"sensors": {"accelerometer": {"axis_sign": [1, 2, 1]}}},
    {"fusion": [1, 2]},
    {"fusion": {"min_cross_norm": 0}},
    {"fusion": {"min_gravity_norm": -1.0}},
    {"fusion": {"min_field_norm": 0.0}},
])
def test_invalid_values(raw):
    with pytest.raises(ValueError):
        config_from_dict(raw)


def test_top_level_must_be_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(path))


def test_collinear_input_still_skipped_with_custom_thresholds():
    p = build_pipeline(config_from_dict({"fusion": {"min_cross_norm": 1e-9}}))
    p.activate()
    p.push_vector("acc", (0.0, 0.0, 9.81), 0.0)
    assert p.push_vector("mag", (0.0, 0.0, -50.0), 0.1) is None
