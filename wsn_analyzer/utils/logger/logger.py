import os
import threading
from datetime import datetime
from enum import Enum

from .local_file_strategy import LocalFileStrategy


class Logger:
    """
    Static, process-wide logger shared by every analyzer component.

    Entries are handed to a pluggable LogStorageStrategy. Entries below
    `min_priority` are dropped before they reach the storage back end.
    """

    class LogPriority(Enum):
        DEBUG = 1
        INFO = 2
        WARNING = 3
        ERROR = 4
        CRITICAL = 5

    DEFAULT_LOG_PATH = "/tmp/wsn_analyzer_logs.txt"
    LOG_PATH_ENV = "WSN_ANALYZER_LOG_PATH"
    TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

    is_logging_enabled = True
    min_priority = LogPriority.DEBUG
    log_storage_strategy = None
    # re-entrant: disable_logging logs while holding it
    _lock = threading.RLock()

    # INSTALL THE DEFAULT FILE BACK END
    @classmethod
    def initialize(cls, file_location=None):
        """
        Installs a LocalFileStrategy unless a storage strategy is already set.

        The location is `file_location`, else $WSN_ANALYZER_LOG_PATH, else
        DEFAULT_LOG_PATH.
        """
        with cls._lock:
            if cls.log_storage_strategy is not None:
                return
            file_location = file_location or os.getenv(cls.LOG_PATH_ENV, cls.DEFAULT_LOG_PATH)
            cls.log_storage_strategy = LocalFileStrategy(file_location)
        cls.log(f"Logger initialized with file storage at {file_location}.", cls.LogPriority.INFO)

    @classmethod
    def is_enabled_for(cls, priority):
        return (
            cls.is_logging_enabled
            and cls.log_storage_strategy is not None
            and priority.value >= cls.min_priority.value
        )

    @classmethod
    def log(cls, message, priority=LogPriority.DEBUG):
        with cls._lock:
            if cls.is_enabled_for(priority):
                cls.log_storage_strategy.store_log(
                    message, priority.name, datetime.now().strftime(cls.TIMESTAMP_FORMAT)
                )

    @classmethod
    def set_log_storage_strategy(cls, log_storage_strategy):
        with cls._lock:
            cls.log_storage_strategy = log_storage_strategy

    # PRIORITY THRESHOLD
    @classmethod
    def set_min_priority(cls, priority):
        """Accepts a LogPriority or its name, case-insensitive ("info", "WARNING")."""
        if isinstance(priority, str):
            try:
                priority = cls.LogPriority[priority.strip().upper()]
            except KeyError:
                names = ", ".join(p.name.lower() for p in cls.LogPriority)
                raise ValueError(f"Unknown log priority '{priority}'. Choose one of: {names}")
        with cls._lock:
            cls.min_priority = priority

    @classmethod
    def flush_logs(cls):
        with cls._lock:
            if cls.log_storage_strategy is not None:
                cls.log_storage_strategy.flush_logs()

    @classmethod
    def disable_logging(cls):
        with cls._lock:
            cls.log("Logging disabled", cls.LogPriority.INFO)
            cls.is_logging_enabled = False

    @classmethod
    def enable_logging(cls):
        with cls._lock:
            cls.is_logging_enabled = True
            cls.log("Logging enabled", cls.LogPriority.INFO)
