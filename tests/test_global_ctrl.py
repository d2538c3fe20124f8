"""
Tests for replay configuration and speed scaling.
"""

import pytest

from core.global_ctrl import GlobalController, ReplayConfig


def test_defaults():
    config = ReplayConfig()
    assert config.animation_duration_ms == 500
    assert config.render_margin_ms == 50
    assert config.focus_poll_ms == 100
    assert config.debug is False


def test_from_mapping_accepts_camel_case_alias():
    config = ReplayConfig.from_mapping({"animationDurationMs": "300", "unknown": 1})
    assert config.animation_duration_ms == 300


def test_from_mapping_prefers_explicit_key():
    config = ReplayConfig.from_mapping({"animationDurationMs": 300, "animation_duration_ms": 700})
    assert config.animation_duration_ms == 700


def test_invalid_durations_are_rejected():
    with pytest.raises(ValueError):
        ReplayConfig(animation_duration_ms=0)
    with pytest.raises(ValueError):
        ReplayConfig.from_mapping({"focus_poll_ms": -5})
    with pytest.raises(ValueError):
        ReplayConfig(render_margin_ms=-1)


def test_speed_scales_durations(qapp):
    ctrl = GlobalController(ReplayConfig(animation_duration_ms=600))
    seen = []
    ctrl.speedChanged.connect(seen.append)

    assert ctrl.animation_duration == 600
    ctrl.set_speed(2.0)
    assert ctrl.animation_duration == 300
    ctrl.set_speed(10)
    assert ctrl.speed == 3.0
    ctrl.set_speed(3.0)
    assert seen == [2.0, 3.0]
