"""Effect descriptors produced by the reducer.

The reducer never touches audio, notifications or storage directly.  It
returns a list of these values and :class:`~.runner.EffectRunner` carries
them out against the platform collaborators.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .state import Mode, Snapshot


APP_TITLE = "Pomodoro Timer"

COMPLETION_MESSAGES: dict[Mode, str] = {
    Mode.WORK: "Work session complete! Time for a break.",
    Mode.BREAK: "Break is over! Time to get back to work.",
}


@dataclass(frozen=True)
class PlaySound:
    pass


@dataclass(frozen=True)
class Notify:
    message: str


@dataclass(frozen=True)
class ScheduleSignal:
    delay_seconds: int
    title: str
    body: str


@dataclass(frozen=True)
class CancelSignals:
    pass


@dataclass(frozen=True)
class Persist:
    snapshot: Snapshot


Effect = Union[PlaySound, Notify, ScheduleSignal, CancelSignals, Persist]


def completion_message(finished: Mode) -> str:
    return COMPLETION_MESSAGES[finished]


def schedule_for(mode: Mode, delay_seconds: int) -> ScheduleSignal:
    """The OS-level reminder for an interval of *mode* ending in *delay_seconds*."""
    return ScheduleSignal(
        delay_seconds=max(0, delay_seconds),
        title=APP_TITLE,
        body=COMPLETION_MESSAGES[mode],
    )
