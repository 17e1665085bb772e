"""
WSN Analyzer Configuration Module

Contains feature flags and the YAML-backed analyzer configuration.
"""

from .feature_flags import FeatureFlags
from .analyzer_config import (
    AnalyzerConfig,
    SensorConfig,
    StandbyConfig,
    TimingConfig,
    CanvasConfig,
    load_config,
)

__all__ = [
    "FeatureFlags",
    "AnalyzerConfig",
    "SensorConfig",
    "StandbyConfig",
    "TimingConfig",
    "CanvasConfig",
    "load_config",
]
