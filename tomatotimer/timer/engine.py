"""Qt host for the timer reducer.

The engine owns one :class:`~.state.TimerState`, feeds user actions, ticks
and lifecycle events through :mod:`.reducer`, and hands the resulting
effects to an :class:`~.runner.EffectRunner`.  It is created by the
application window and passed by reference to whatever presents it.

Signals
-------
tick(seconds_left: int)
    Emitted after every reconcile while running.
state_changed(state: TimerState)
    Emitted whenever the state value changes.
interval_completed(finished: Mode)
    Emitted after an interval reaches zero and the mode flips.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from ..platform.clock import Clock, SystemClock
from . import reducer
from .effects import Persist, PlaySound
from .reducer import Transition
from .runner import EffectRunner
from .state import Mode, Snapshot, TimerState, initial_state

logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 1000


class TimerEngine(QObject):
    """Single-writer owner of the timer state."""

    tick = pyqtSignal(int)
    state_changed = pyqtSignal(object)
    interval_completed = pyqtSignal(object)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        clock: Clock | None = None,
        runner: EffectRunner | None = None,
        state: TimerState | None = None,
        tick_interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._clock: Clock = clock or SystemClock()
        self._runner = runner or EffectRunner()
        self._state: TimerState = state or initial_state()

        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(tick_interval_ms)
        self._qt_timer.timeout.connect(self._on_tick)
        self._sync_ticker()

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def mode(self) -> Mode:
        return self._state.mode

    @property
    def is_active(self) -> bool:
        return self._state.is_active

    @property
    def seconds_left(self) -> int:
        return self._state.seconds_left

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def ticker_running(self) -> bool:
        return self._qt_timer.isActive()

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self, now: float | None = None) -> None:
        self._apply(reducer.start(self._state, self._now(now)))

    def pause(self, now: float | None = None) -> None:
        self._apply(reducer.pause(self._state, self._now(now)))

    def resume(self, now: float | None = None) -> None:
        self._apply(reducer.resume(self._state, self._now(now)))

    def toggle(self, now: float | None = None) -> None:
        """Start/Pause button."""
        self._apply(reducer.toggle(self._state, self._now(now)))

    def reset(self, now: float | None = None) -> None:
        self._apply(reducer.reset(self._state, self._now(now)))

    def reconcile(self, now: float | None = None) -> None:
        """Bring ``seconds_left`` up to date.  Called on ticks and on resume
        to the foreground."""
        self._apply(reducer.reconcile(self._state, self._now(now)))
        if self._state.is_active:
            self.tick.emit(self._state.seconds_left)

    def set_work_duration(self, minutes: int) -> None:
        self._apply(reducer.set_work_duration(self._state, minutes))

    def set_break_duration(self, minutes: int) -> None:
        self._apply(reducer.set_break_duration(self._state, minutes))

    def edit_duration(self, mode: Mode, text: str) -> None:
        """A duration field changed while the user is typing."""
        self._apply(reducer.edit_duration(self._state, mode, text))

    def finish_duration_edit(self, mode: Mode, text: str) -> None:
        """A duration field lost focus."""
        self._apply(reducer.finish_duration_edit(self._state, mode, text))

    def restore(self, snapshot: Snapshot | None, now: float | None = None) -> None:
        """Adopt a persisted snapshot (or defaults) and fast-forward it."""
        transition = reducer.restore(snapshot, self._now(now))
        if snapshot is not None:
            logger.info(
                "Restored %s timer (active=%s, %ss left)",
                transition.state.mode.value,
                transition.state.is_active,
                transition.state.seconds_left,
            )
        self._apply(transition, force=True)

    def dispatch(self, event: object, now: float | None = None) -> None:
        """Apply any :mod:`.reducer` event."""
        self._apply(reducer.reduce(self._state, event, self._now(now)))

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _now(self, now: float | None) -> float:
        return self._clock.now() if now is None else now

    def _apply(self, transition: Transition, *, force: bool = False) -> None:
        old = self._state
        new = transition.state
        effects = list(transition.effects)

        # write-through: persist whenever a stored field changed
        if force or new.snapshot() != old.snapshot():
            effects.append(Persist(new.snapshot()))

        self._state = new
        self._sync_ticker()
        self._runner.run(effects)

        if force or new != old:
            self.state_changed.emit(new)
        if any(isinstance(e, PlaySound) for e in transition.effects):
            finished = new.mode.other
            logger.info("%s interval complete", finished.value)
            self.interval_completed.emit(finished)

    def _sync_ticker(self) -> None:
        if self._state.is_active and not self._qt_timer.isActive():
            self._qt_timer.start()
        elif not self._state.is_active and self._qt_timer.isActive():
            self._qt_timer.stop()

    def _on_tick(self) -> None:
        self.reconcile()
