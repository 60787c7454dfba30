"""Pure reconciliation reducer.

Every operation maps ``(state, now)`` to a :class:`Transition` holding the
next state and the side effects the host should perform.  Remaining time is
always derived from ``start_time`` and ``total_duration_seconds``, never by
decrementing a counter, so a reconcile after any gap (including a suspended
process or an app restart) lands on the right value.

Transitions
-----------
Idle(m)    → Running(m)   start / resume
Running(m) → Idle(m)      pause (countdown frozen)
Running(m) → Idle(¬m)     reconcile reaching zero (the only mode flip)
any        → Idle(Work)   reset
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace

from .effects import (
    CancelSignals,
    Effect,
    Notify,
    PlaySound,
    completion_message,
    schedule_for,
)
from .input import finish_minutes, parse_minutes
from .state import Mode, Snapshot, TimerState, initial_state


@dataclass(frozen=True)
class Transition:
    state: TimerState
    effects: list[Effect] = field(default_factory=list)


# ── events (for the generic ``reduce`` entry point) ───────────────────────


@dataclass(frozen=True)
class Start:
    pass


@dataclass(frozen=True)
class Pause:
    pass


@dataclass(frozen=True)
class Resume:
    pass


@dataclass(frozen=True)
class Toggle:
    pass


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class Tick:
    pass


@dataclass(frozen=True)
class Foreground:
    pass


@dataclass(frozen=True)
class SetDuration:
    mode: Mode
    minutes: int


@dataclass(frozen=True)
class EditDuration:
    mode: Mode
    text: str


@dataclass(frozen=True)
class FinishDurationEdit:
    mode: Mode
    text: str


# ══════════════════════════════════════════════════════════════════════════
#  OPERATIONS
# ══════════════════════════════════════════════════════════════════════════


def start(state: TimerState, now: float) -> Transition:
    """Begin a fresh interval of the current mode.  Only valid when idle."""
    if state.is_active:
        return Transition(state)
    return _run_for(state, now, state.duration_for(state.mode))


def resume(state: TimerState, now: float) -> Transition:
    """Continue a paused countdown from its frozen ``seconds_left``.

    From an untouched idle state this is the same as :func:`start`.
    """
    if state.is_active:
        return Transition(state)
    if state.seconds_left <= 0:
        return start(state, now)
    return _run_for(state, now, state.seconds_left)


def pause(state: TimerState, now: float) -> Transition:
    """Freeze the countdown at its value for *now*."""
    if not state.is_active:
        return Transition(state)
    reconciled = reconcile(state, now)
    if not reconciled.state.is_active:
        # reached zero on the way: completion already happened
        return reconciled
    frozen = replace(reconciled.state, is_active=False, start_time=None)
    return Transition(frozen, [CancelSignals()])


def toggle(state: TimerState, now: float) -> Transition:
    if state.is_active:
        return pause(state, now)
    return resume(state, now)


def reset(state: TimerState, now: float | None = None) -> Transition:
    full = state.duration_for(Mode.WORK)
    new = replace(
        state,
        mode=Mode.WORK,
        is_active=False,
        start_time=None,
        total_duration_seconds=full,
        seconds_left=full,
    )
    return Transition(new, [CancelSignals()])


def reconcile(state: TimerState, now: float) -> Transition:
    """Recompute ``seconds_left`` from wall-clock time; complete at zero."""
    if not state.is_active or state.start_time is None:
        return Transition(state)
    elapsed = max(0.0, now - state.start_time)
    remaining = max(0, math.ceil(state.total_duration_seconds - elapsed))
    if remaining == 0:
        return complete(replace(state, seconds_left=0))
    if remaining == state.seconds_left:
        return Transition(state)
    return Transition(replace(state, seconds_left=remaining))


def complete(state: TimerState) -> Transition:
    """Finish the current interval and flip to the other mode, idle."""
    finished = state.mode
    next_mode = finished.other
    full = state.duration_for(next_mode)
    new = replace(
        state,
        mode=next_mode,
        total_duration_seconds=full,
        seconds_left=full,
        is_active=False,
        start_time=None,
    )
    return Transition(new, [
        PlaySound(),
        Notify(completion_message(finished)),
        CancelSignals(),
    ])


def set_duration(state: TimerState, mode: Mode, minutes: int) -> Transition:
    """Change the configured minutes for *mode*.

    The idle mode's clock follows the new value; a running interval keeps
    the total it was started with.
    """
    minutes = max(0, int(minutes))
    if mode is Mode.WORK:
        new = replace(state, work_duration_minutes=minutes)
    else:
        new = replace(state, break_duration_minutes=minutes)

    if not new.is_active and new.mode is mode:
        full = new.duration_for(mode)
        new = replace(new, total_duration_seconds=full, seconds_left=full)
    return Transition(new)


def set_work_duration(state: TimerState, minutes: int) -> Transition:
    return set_duration(state, Mode.WORK, minutes)


def set_break_duration(state: TimerState, minutes: int) -> Transition:
    return set_duration(state, Mode.BREAK, minutes)


def edit_duration(state: TimerState, mode: Mode, text: str) -> Transition:
    return set_duration(state, mode, parse_minutes(text))


def finish_duration_edit(state: TimerState, mode: Mode, text: str) -> Transition:
    return set_duration(state, mode, finish_minutes(text))


def restore(snapshot: Snapshot | None, now: float) -> Transition:
    """Rebuild state after a launch and fast-forward it to *now*."""
    if snapshot is None:
        return Transition(initial_state())
    state = TimerState.from_snapshot(snapshot)
    result = reconcile(state, now)
    if result.state.is_active:
        # the in-process scheduler did not survive the restart
        reminder = schedule_for(result.state.mode, result.state.seconds_left)
        return Transition(result.state, result.effects + [reminder])
    return result


# ══════════════════════════════════════════════════════════════════════════
#  GENERIC ENTRY POINT
# ══════════════════════════════════════════════════════════════════════════


def reduce(state: TimerState, event: object, now: float) -> Transition:
    """Apply *event* to *state* at time *now*."""
    if isinstance(event, Start):
        return start(state, now)
    if isinstance(event, Pause):
        return pause(state, now)
    if isinstance(event, Resume):
        return resume(state, now)
    if isinstance(event, Toggle):
        return toggle(state, now)
    if isinstance(event, Reset):
        return reset(state, now)
    if isinstance(event, (Tick, Foreground)):
        return reconcile(state, now)
    if isinstance(event, SetDuration):
        return set_duration(state, event.mode, event.minutes)
    if isinstance(event, EditDuration):
        return edit_duration(state, event.mode, event.text)
    if isinstance(event, FinishDurationEdit):
        return finish_duration_edit(state, event.mode, event.text)
    raise TypeError(f"unknown timer event: {event!r}")


# ── internal ──────────────────────────────────────────────────────────────


def _run_for(state: TimerState, now: float, seconds: int) -> Transition:
    new = replace(
        state,
        is_active=True,
        start_time=now,
        total_duration_seconds=seconds,
        seconds_left=seconds,
    )
    return Transition(new, [schedule_for(state.mode, seconds)])
