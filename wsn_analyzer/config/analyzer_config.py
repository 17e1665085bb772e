"""
Configuration loading and validation for the WSN analyzer.

Loads a YAML file into dataclass sections and validates every parameter.
All sections have working defaults, so an empty file (or no file) yields the
reference demo configuration.
"""

import yaml
from dataclasses import dataclass, field
from typing import Optional
from pathlib import Path

from ..models.exceptions import InvalidConfigurationError


@dataclass
class SensorConfig:
    """Per-sensor defaults and the linear drain model."""
    default_range: float = 160.0
    default_energy: float = 100.0
    drain_rate_normal: float = 1.0
    drain_rate_critical: float = 15.0
    low_battery_threshold: float = 30.0

    def validate(self) -> tuple[bool, Optional[str]]:
        if self.default_range <= 0:
            return False, "default_range must be positive"
        if self.default_energy <= 0:
            return False, "default_energy must be positive"
        if self.drain_rate_normal < 0:
            return False, "drain_rate_normal must be non-negative"
        if self.drain_rate_critical < self.drain_rate_normal:
            return False, "drain_rate_critical must be >= drain_rate_normal"
        if not (0 <= self.low_battery_threshold <= self.default_energy):
            return False, "low_battery_threshold must be within [0, default_energy]"
        return True, None


@dataclass
class StandbyConfig:
    """Where standbys are spawned and how close a death must be to wake one."""
    spawn_offset: float = 30.0
    wake_radius_factor: float = 2.0

    def validate(self) -> tuple[bool, Optional[str]]:
        if self.spawn_offset <= 0:
            return False, "spawn_offset must be positive"
        # the diagonal offset (offset * sqrt 2) has to fall inside the wake radius
        if self.wake_radius_factor <= 2 ** 0.5:
            return False, "wake_radius_factor must exceed sqrt(2)"
        return True, None

    @property
    def wake_threshold(self) -> float:
        return self.spawn_offset * self.wake_radius_factor


@dataclass
class TimingConfig:
    """Control-layer clock intervals in milliseconds."""
    playback_interval_ms: int = 1500
    simulation_interval_ms: int = 1000
    restructure_delay_ms: int = 800

    def validate(self) -> tuple[bool, Optional[str]]:
        if self.playback_interval_ms <= 0:
            return False, "playback_interval_ms must be positive"
        if self.simulation_interval_ms <= 0:
            return False, "simulation_interval_ms must be positive"
        if self.restructure_delay_ms < 0:
            return False, "restructure_delay_ms must be non-negative"
        return True, None


@dataclass
class CanvasConfig:
    """Coordinate frame used by the demo scenario and the force layout."""
    width: float = 1000.0
    height: float = 800.0
    layout_margin: float = 50.0

    def validate(self) -> tuple[bool, Optional[str]]:
        if self.width <= 0 or self.height <= 0:
            return False, "width and height must be positive"
        if self.layout_margin < 0 or 2 * self.layout_margin >= min(self.width, self.height):
            return False, "layout_margin must leave a non-empty drawing area"
        return True, None


@dataclass
class AnalyzerConfig:
    """Complete analyzer configuration."""
    sensor: SensorConfig = field(default_factory=SensorConfig)
    standby: StandbyConfig = field(default_factory=StandbyConfig)
    timing: TimingConfig = field(default_factory=TimingConfig)
    canvas: CanvasConfig = field(default_factory=CanvasConfig)

    def validate(self) -> tuple[bool, Optional[str]]:
        for section_name in ["sensor", "standby", "timing", "canvas"]:
            section = getattr(self, section_name)
            is_valid, error = section.validate()
            if not is_valid:
                return False, f"{section_name}: {error}"
        return True, None


_SECTIONS = {
    "sensor": SensorConfig,
    "standby": StandbyConfig,
    "timing": TimingConfig,
    "canvas": CanvasConfig,
}


def load_config(path: Path) -> AnalyzerConfig:
    """
    Load and validate configuration from a YAML file.

    Args:
        path: Path to YAML config file.

    Returns:
        Validated AnalyzerConfig.

    Raises:
        InvalidConfigurationError: If a section is malformed or fails validation.
        FileNotFoundError: If file doesn't exist.
    """
    with open(path, 'r') as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise InvalidConfigurationError("Config root must be a mapping")

    unknown = set(raw) - set(_SECTIONS)
    if unknown:
        raise InvalidConfigurationError(f"Unknown config sections: {sorted(unknown)}")

    sections = {}
    for name, section_class in _SECTIONS.items():
        section_raw = raw.get(name) or {}
        try:
            sections[name] = section_class(**section_raw)
        except TypeError as ex:
            raise InvalidConfigurationError(f"{name}: {ex}")

    config = AnalyzerConfig(**sections)
    is_valid, error = config.validate()
    if not is_valid:
        raise InvalidConfigurationError(f"Invalid configuration: {error}")
    return config
