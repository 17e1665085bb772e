from datetime import datetime
from pathlib import Path

from .log_storage_strategy import LogStorageStrategy


class LocalFileStrategy(LogStorageStrategy):
    """
    Appends log entries to a text file on disk.

    The file is started fresh for every session. Once it reaches `max_bytes`
    it is moved to `<name>.1` (replacing any previous backup) and a new file
    is started. `max_bytes=None` disables the rollover.
    """

    DEFAULT_MAX_BYTES = 5 * 1024 * 1024

    def __init__(self, file_location, max_bytes=DEFAULT_MAX_BYTES):
        self.path = self.resolve_path(file_location)
        self.max_bytes = max_bytes
        self._start_file("STARTED")

    @property
    def file_location(self):
        return str(self.path)

    @property
    def backup_path(self):
        return self.path.with_name(self.path.name + ".1")

    # RESOLVE FILE PATH AND CREATE PARENT FOLDERS
    @staticmethod
    def resolve_path(file_location):
        path = Path(file_location).expanduser()
        if not path.is_absolute():
            path = Path.cwd() / path
        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    def _start_file(self, reason):
        self.path.write_text(f"WSN ANALYZER LOG {reason}: {datetime.now()}\n")

    def _needs_rollover(self):
        return self.max_bytes is not None and self.path.exists() and self.path.stat().st_size >= self.max_bytes

    def store_log(self, message, priority, timestamp):
        if self._needs_rollover():
            self.path.replace(self.backup_path)
            self._start_file("ROLLED OVER")
        with self.path.open("a") as log_file:
            log_file.write(self.format_entry(message, priority, timestamp) + "\n")

    def flush_logs(self):
        self._start_file("FLUSHED")
