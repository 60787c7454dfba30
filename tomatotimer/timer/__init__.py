"""Timer package."""

from .state import (
    Mode,
    TimerState,
    Snapshot,
    SnapshotError,
    initial_state,
    DEFAULT_WORK_MINUTES,
    DEFAULT_BREAK_MINUTES,
)
from .reducer import Transition, reduce
from .runner import EffectRunner
from .engine import TimerEngine

__all__ = [
    "Mode",
    "TimerState",
    "Snapshot",
    "SnapshotError",
    "initial_state",
    "DEFAULT_WORK_MINUTES",
    "DEFAULT_BREAK_MINUTES",
    "Transition",
    "reduce",
    "EffectRunner",
    "TimerEngine",
]
