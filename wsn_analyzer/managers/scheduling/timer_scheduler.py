from wsn_analyzer.utils.logger.logger import Logger


class ScheduledTask:
    """Handle returned by a scheduler; pass it back to cancel()."""
    __slots__ = ("task_id", "due_ms", "interval_ms", "callback", "label", "cancelled", "sequence")

    def __init__(self, task_id, due_ms, interval_ms, callback, label, sequence):
        self.task_id = task_id
        self.due_ms = due_ms
        self.interval_ms = interval_ms  # None for one-shot tasks
        self.callback = callback
        self.label = label
        self.cancelled = False
        self.sequence = sequence

    @property
    def is_repeating(self):
        return self.interval_ms is not None

    def __repr__(self):
        kind = f"every {self.interval_ms}ms" if self.is_repeating else "once"
        return f"ScheduledTask({self.label!r}, due={self.due_ms}ms, {kind}, cancelled={self.cancelled})"


class TimerScheduler:
    """
    Interface for the control-layer clock.

    The analysis and simulation engines never schedule themselves; the
    controller registers callbacks here and owns their lifecycle.
    """

    def call_every(self, interval_ms, callback, label=""):
        """Run callback every interval_ms until cancelled. Returns a ScheduledTask."""
        raise NotImplementedError()

    def call_later(self, delay_ms, callback, label=""):
        """Run callback once after delay_ms unless cancelled. Returns a ScheduledTask."""
        raise NotImplementedError()

    def cancel(self, task):
        """Cancel a task; cancelling None or an already finished task is a no-op."""
        raise NotImplementedError()

    def cancel_all(self):
        raise NotImplementedError()

    def pending_tasks(self):
        """Live tasks ordered by due time."""
        raise NotImplementedError()


class ManualScheduler(TimerScheduler):
    """
    Single-threaded virtual clock.

    Time only moves inside advance(); due callbacks run there, in
    (due time, registration order) order, on the caller's thread. A task
    cancelled before its due time never runs, including tasks cancelled by
    an earlier callback within the same advance() call.
    """

    def __init__(self):
        self.now_ms = 0
        self._tasks = {}
        self._next_id = 0
        self._next_sequence = 0
        Logger.log("ManualScheduler initialized")

    def _register(self, due_ms, interval_ms, callback, label):
        self._next_id += 1
        self._next_sequence += 1
        task = ScheduledTask(self._next_id, due_ms, interval_ms, callback, label, self._next_sequence)
        self._tasks[task.task_id] = task
        Logger.log(f"scheduled {task}")
        return task

    def call_every(self, interval_ms, callback, label=""):
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        return self._register(self.now_ms + interval_ms, interval_ms, callback, label)

    def call_later(self, delay_ms, callback, label=""):
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be non-negative, got {delay_ms}")
        return self._register(self.now_ms + delay_ms, None, callback, label)

    def cancel(self, task):
        if task is None:
            return
        task.cancelled = True
        if self._tasks.pop(task.task_id, None) is not None:
            Logger.log(f"cancelled {task}")

    def cancel_all(self):
        for task in list(self._tasks.values()):
            self.cancel(task)

    def pending_tasks(self):
        return sorted(self._tasks.values(), key=lambda task: (task.due_ms, task.sequence))

    def _next_due(self, until_ms):
        due = [task for task in self._tasks.values() if task.due_ms <= until_ms]
        if not due:
            return None
        return min(due, key=lambda task: (task.due_ms, task.sequence))

    def advance(self, ms):
        """Move the clock forward by ms, running every callback that falls due. Returns the number run."""
        if ms < 0:
            raise ValueError(f"Cannot move the clock backwards ({ms}ms)")
        target = self.now_ms + ms
        fired = 0
        while True:
            task = self._next_due(target)
            if task is None:
                break
            self.now_ms = task.due_ms
            if task.is_repeating:
                self._next_sequence += 1
                task.due_ms += task.interval_ms
                task.sequence = self._next_sequence
            else:
                del self._tasks[task.task_id]
            task.callback()
            fired += 1
        self.now_ms = target
        return fired
