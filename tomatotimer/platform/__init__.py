"""Platform collaborators: clock, reminders, alerts, app lifecycle."""

from .clock import Clock, SystemClock, FakeClock

__all__ = ["Clock", "SystemClock", "FakeClock"]
