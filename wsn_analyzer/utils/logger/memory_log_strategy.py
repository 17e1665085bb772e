from .log_storage_strategy import LogStorageStrategy


class MemoryLogStrategy(LogStorageStrategy):
    """Keeps the newest `max_entries` entries in a list; used by tests and short CLI sessions."""

    def __init__(self, max_entries=5000):
        self.entries = []
        self.max_entries = max_entries

    def store_log(self, message, priority, timestamp):
        self.entries.append((timestamp, priority, str(message)))
        if len(self.entries) > self.max_entries:
            del self.entries[:len(self.entries) - self.max_entries]

    def flush_logs(self):
        self.entries = []

    def messages(self, priority=None):
        """Stored messages, optionally only those with the given priority name."""
        return [message for _, level, message in self.entries if priority is None or level == priority]

    def lines(self):
        return [self.format_entry(message, priority, timestamp) for timestamp, priority, message in self.entries]
