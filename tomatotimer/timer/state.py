"""Timer state for TomatoTimer.

States
------
Idle(Work)      Waiting to start a work interval.
Idle(Break)     Waiting to start a break interval.
Running(Work)   Work interval counting down.
Running(Break)  Break interval counting down.

``TimerState`` is immutable; every transition in :mod:`.reducer` returns a
new value.  ``Snapshot`` is the subset of fields written to disk.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any


# ── enums ─────────────────────────────────────────────────────────────────


class Mode(Enum):
    WORK = "work"
    BREAK = "break"

    @property
    def other(self) -> "Mode":
        return Mode.BREAK if self is Mode.WORK else Mode.WORK


# ── constants ─────────────────────────────────────────────────────────────

DEFAULT_WORK_MINUTES = 25
DEFAULT_BREAK_MINUTES = 5
BLANK_EDIT_DEFAULT_MINUTES = 25  # a field left blank reverts to this

MODE_LABELS: dict[Mode, str] = {
    Mode.WORK: "Work Time",
    Mode.BREAK: "Break Time",
}


class SnapshotError(ValueError):
    """Raised when a persisted snapshot cannot be decoded."""


# ── state ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TimerState:
    mode: Mode = Mode.WORK
    work_duration_minutes: int = DEFAULT_WORK_MINUTES
    break_duration_minutes: int = DEFAULT_BREAK_MINUTES
    is_active: bool = False
    start_time: float | None = None
    total_duration_seconds: int = DEFAULT_WORK_MINUTES * 60
    seconds_left: int = DEFAULT_WORK_MINUTES * 60

    def duration_for(self, mode: Mode) -> int:
        """Configured length of *mode* in seconds."""
        if mode is Mode.WORK:
            return self.work_duration_minutes * 60
        return self.break_duration_minutes * 60

    def snapshot(self) -> "Snapshot":
        return Snapshot(
            is_active=self.is_active,
            mode=self.mode,
            start_time=self.start_time,
            total_duration_seconds=self.total_duration_seconds,
            work_duration_minutes=self.work_duration_minutes,
            break_duration_minutes=self.break_duration_minutes,
        )

    @classmethod
    def from_snapshot(cls, snap: "Snapshot") -> "TimerState":
        """Rebuild a state from disk, before any reconciliation.

        An inactive snapshot always shows the full duration of its mode.
        """
        if snap.is_active and snap.start_time is not None:
            return cls(
                mode=snap.mode,
                work_duration_minutes=snap.work_duration_minutes,
                break_duration_minutes=snap.break_duration_minutes,
                is_active=True,
                start_time=snap.start_time,
                total_duration_seconds=snap.total_duration_seconds,
                seconds_left=snap.total_duration_seconds,
            )
        if snap.mode is Mode.WORK:
            full = snap.work_duration_minutes * 60
        else:
            full = snap.break_duration_minutes * 60
        return cls(
            mode=snap.mode,
            work_duration_minutes=snap.work_duration_minutes,
            break_duration_minutes=snap.break_duration_minutes,
            total_duration_seconds=full,
            seconds_left=full,
        )


def initial_state(
    work_minutes: int = DEFAULT_WORK_MINUTES,
    break_minutes: int = DEFAULT_BREAK_MINUTES,
) -> TimerState:
    """Idle(Work) with the full work duration on the clock."""
    return TimerState(
        work_duration_minutes=work_minutes,
        break_duration_minutes=break_minutes,
        total_duration_seconds=work_minutes * 60,
        seconds_left=work_minutes * 60,
    )


# ── persisted snapshot ────────────────────────────────────────────────────


@dataclass(frozen=True)
class Snapshot:
    """Everything needed to rebuild a ``TimerState`` after a restart."""

    is_active: bool
    mode: Mode
    start_time: float | None
    total_duration_seconds: int
    work_duration_minutes: int
    break_duration_minutes: int

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["mode"] = self.mode.value
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "Snapshot":
        """Validate and decode a JSON object.  Raises ``SnapshotError``."""
        if not isinstance(data, dict):
            raise SnapshotError(f"expected an object, got {type(data).__name__}")
        try:
            mode = Mode(data["mode"])
            is_active = data["is_active"]
            start_time = data["start_time"]
            total = data["total_duration_seconds"]
            work = data["work_duration_minutes"]
            brk = data["break_duration_minutes"]
        except (KeyError, ValueError) as exc:
            raise SnapshotError(f"bad snapshot field: {exc}") from exc

        if not isinstance(is_active, bool):
            raise SnapshotError("is_active must be a boolean")
        for name, value in (("total_duration_seconds", total),
                            ("work_duration_minutes", work),
                            ("break_duration_minutes", brk)):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise SnapshotError(f"{name} must be a non-negative integer")
        if start_time is not None and (
            isinstance(start_time, bool) or not isinstance(start_time, (int, float))
        ):
            raise SnapshotError("start_time must be a number or null")
        if is_active and start_time is None:
            raise SnapshotError("active snapshot without start_time")

        return cls(
            is_active=is_active,
            mode=mode,
            start_time=float(start_time) if start_time is not None else None,
            total_duration_seconds=total,
            work_duration_minutes=work,
            break_duration_minutes=brk,
        )
