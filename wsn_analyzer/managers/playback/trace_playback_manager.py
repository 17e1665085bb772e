from wsn_analyzer.utils.logger.logger import Logger


class TracePlaybackManager:
    """Cursor over a recorded DFS trace with step forward/back guards."""
    # INITIALIZES THE TRACEPLAYBACKMANAGER
    def __init__(self):
        """Initialize an empty trace and default flags."""
        Logger.log("start TracePlaybackManager__init__")
        self.steps = ()
        self.current_step_index = 0
        self.next_disabled = True
        self.prev_disabled = True
        Logger.log("end TracePlaybackManager__init__")

    def log_playback_attributes(self):
        Logger.log("Logging TracePlaybackManager attributes:")
        Logger.log(f"  steps (length): {len(self.steps)}")
        Logger.log(f"  current_step_index: {self.current_step_index}")
        Logger.log(f"  next_disabled: {self.next_disabled}")
        Logger.log(f"  prev_disabled: {self.prev_disabled}")

    def _update_flags(self):
        last_index = len(self.steps) - 1
        self.prev_disabled = self.current_step_index <= 0
        self.next_disabled = self.current_step_index >= last_index

    def load(self, steps, start_at_end=False):
        """Replace the trace; the cursor starts at the first step, or the last when start_at_end."""
        Logger.log(f"start load(steps={len(steps)}, start_at_end={start_at_end})")
        self.steps = tuple(steps)
        self.current_step_index = max(len(self.steps) - 1, 0) if start_at_end else 0
        self._update_flags()
        self.log_playback_attributes()
        Logger.log("end load")

    def next_step(self):
        """Advance one step. Returns False when already at the last step."""
        Logger.log("start next_step()")
        if self.next_disabled:
            Logger.log("end next_step - end of trace")
            return False
        self.current_step_index += 1
        self._update_flags()
        Logger.log(f"end next_step -> {self.current_step_index}")
        return True

    def prev_step(self):
        """Go back one step; stays on step 0."""
        Logger.log("start prev_step()")
        if self.prev_disabled:
            Logger.log("end prev_step - at first step")
            return False
        self.current_step_index -= 1
        self._update_flags()
        Logger.log(f"end prev_step -> {self.current_step_index}")
        return True

    def current_step(self):
        if not self.steps:
            return None
        return self.steps[self.current_step_index]

    def final_step(self):
        if not self.steps:
            return None
        return self.steps[-1]

    def is_finished(self):
        return bool(self.steps) and self.current_step_index == len(self.steps) - 1

    def reset(self):
        """Clear the trace and reset flags to defaults."""
        Logger.log("start reset()")
        self.steps = ()
        self.current_step_index = 0
        self.next_disabled = True
        self.prev_disabled = True
        Logger.log("end reset()")
