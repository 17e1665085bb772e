"""
Configuration Validation Tests

Tests for config loading and parameter validation.
"""

import pytest

from wsn_analyzer.config.analyzer_config import (
    AnalyzerConfig,
    SensorConfig,
    StandbyConfig,
    TimingConfig,
    CanvasConfig,
    load_config,
)
from wsn_analyzer.config.feature_flags import FeatureFlags
from wsn_analyzer.models.exceptions import InvalidConfigurationError


class TestSectionValidation:
    """Test per-section parameter validation."""

    def test_defaults_are_valid(self):
        is_valid, error = AnalyzerConfig().validate()
        assert is_valid
        assert error is None

    def test_default_values(self):
        config = AnalyzerConfig()
        assert config.sensor.default_range == 160.0
        assert config.sensor.drain_rate_critical / config.sensor.drain_rate_normal == 15.0
        assert config.standby.wake_threshold == 60.0
        assert config.timing.playback_interval_ms == 1500
        assert config.timing.simulation_interval_ms == 1000
        assert config.timing.restructure_delay_ms == 800

    @pytest.mark.parametrize("section", [
        SensorConfig(default_range=0.0),
        SensorConfig(drain_rate_normal=-1.0),
        SensorConfig(drain_rate_critical=0.5),
        SensorConfig(low_battery_threshold=150.0),
        StandbyConfig(spawn_offset=0.0),
        StandbyConfig(wake_radius_factor=1.2),
        TimingConfig(playback_interval_ms=0),
        TimingConfig(restructure_delay_ms=-1),
        CanvasConfig(width=-5.0),
        CanvasConfig(layout_margin=500.0),
    ])
    def test_invalid_sections(self, section):
        is_valid, error = section.validate()
        assert not is_valid
        assert error

    def test_error_names_the_section(self):
        config = AnalyzerConfig(timing=TimingConfig(simulation_interval_ms=0))
        is_valid, error = config.validate()
        assert not is_valid
        assert error.startswith("timing:")


class TestLoadConfig:
    """Test YAML loading."""

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("sensor:\n  drain_rate_critical: 20\nstandby:\n  spawn_offset: 25\n")
        config = load_config(path)
        assert config.sensor.drain_rate_critical == 20
        assert config.sensor.drain_rate_normal == 1.0
        assert config.standby.wake_threshold == 50.0

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(path) == AnalyzerConfig()

    def test_unknown_section(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("physics:\n  gravity: 9.8\n")
        with pytest.raises(InvalidConfigurationError):
            load_config(path)

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("sensor:\n  colour: red\n")
        with pytest.raises(InvalidConfigurationError):
            load_config(path)

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("timing:\n  restructure_delay_ms: -10\n")
        with pytest.raises(InvalidConfigurationError):
            load_config(path)

    def test_non_mapping_root(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(InvalidConfigurationError):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "absent.yaml")


class TestFeatureFlags:

    def test_default_off(self):
        assert FeatureFlags.WAKE_NEAREST_ONLY is False

    def test_toggle_and_reference_mode(self):
        FeatureFlags.enable_nearest_only_wake()
        assert FeatureFlags.WAKE_NEAREST_ONLY is True
        FeatureFlags.reference_mode()
        assert FeatureFlags.WAKE_NEAREST_ONLY is False
