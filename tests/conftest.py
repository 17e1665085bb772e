"""
Pytest configuration for WSN analyzer tests.

This file ensures the project root is in sys.path for all tests, routes the
Logger into memory and restores feature flags after every test.
"""

import sys
import os

import pytest

# Add project root to sys.path for imports
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from wsn_analyzer.utils.logger.logger import Logger
from wsn_analyzer.utils.logger.memory_log_strategy import MemoryLogStrategy
from wsn_analyzer.config.feature_flags import FeatureFlags


@pytest.fixture(autouse=True)
def memory_log():
    """Capture log output in memory instead of /tmp."""
    previous = Logger.log_storage_strategy
    strategy = MemoryLogStrategy()
    Logger.set_log_storage_strategy(strategy)
    Logger.set_min_priority(Logger.LogPriority.DEBUG)
    Logger.enable_logging()
    yield strategy
    Logger.set_min_priority(Logger.LogPriority.DEBUG)
    Logger.enable_logging()
    Logger.set_log_storage_strategy(previous)


@pytest.fixture(autouse=True)
def reference_flags():
    FeatureFlags.reference_mode()
    yield
    FeatureFlags.reference_mode()
