from .timer_scheduler import ManualScheduler, ScheduledTask, TimerScheduler

__all__ = ["ManualScheduler", "ScheduledTask", "TimerScheduler"]
