class LogStorageStrategy:
    """Destination for Logger entries. Subclasses implement store_log and flush_logs."""

    ENTRY_FORMAT = "[{timestamp}] [{priority}] {message}"

    def store_log(self, message, priority, timestamp):
        """Store one entry; `priority` is the LogPriority name."""
        raise NotImplementedError()

    def flush_logs(self):
        """Discard everything stored so far."""
        raise NotImplementedError()

    @classmethod
    def format_entry(cls, message, priority, timestamp):
        return cls.ENTRY_FORMAT.format(timestamp=timestamp, priority=priority, message=message)
