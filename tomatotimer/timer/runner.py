"""Carries out reducer effects against the platform collaborators.

Every collaborator call is best-effort: an exception is logged and the
remaining effects still run.  Nothing here can roll back or corrupt the
engine's state.
"""

from __future__ import annotations

import logging
from typing import Iterable, Protocol

from .effects import (
    CancelSignals,
    Effect,
    Notify,
    Persist,
    PlaySound,
    ScheduleSignal,
)
from .state import Snapshot

logger = logging.getLogger(__name__)


# ── collaborator contracts ────────────────────────────────────────────────


class SoundPlayer(Protocol):
    def play(self) -> None: ...


class Scheduler(Protocol):
    def schedule(self, delay_seconds: int, title: str, body: str) -> None: ...

    def cancel_all(self) -> None: ...

    def consume_delivered(self) -> bool: ...


class Notifier(Protocol):
    def notify(self, message: str) -> None: ...


class PersistentStore(Protocol):
    def load(self) -> Snapshot | None: ...

    def save(self, snapshot: Snapshot) -> None: ...


# ── runner ────────────────────────────────────────────────────────────────


class EffectRunner:
    """Dispatch effect descriptors to the collaborators."""

    def __init__(
        self,
        *,
        sound: SoundPlayer | None = None,
        scheduler: Scheduler | None = None,
        notifier: Notifier | None = None,
        store: PersistentStore | None = None,
    ) -> None:
        self._sound = sound
        self._scheduler = scheduler
        self._notifier = notifier
        self._store = store

    def run(self, effects: Iterable[Effect]) -> None:
        for effect in effects:
            try:
                self._dispatch(effect)
            except Exception:
                logger.exception("Effect %r failed; continuing", effect)

    def _dispatch(self, effect: Effect) -> None:
        if isinstance(effect, PlaySound):
            if self._sound is not None:
                self._sound.play()
        elif isinstance(effect, Notify):
            self._notify(effect.message)
        elif isinstance(effect, ScheduleSignal):
            if self._scheduler is not None:
                self._scheduler.schedule(
                    effect.delay_seconds, effect.title, effect.body,
                )
        elif isinstance(effect, CancelSignals):
            if self._scheduler is not None:
                self._scheduler.cancel_all()
        elif isinstance(effect, Persist):
            if self._store is not None:
                self._store.save(effect.snapshot)
        else:
            logger.warning("Unknown effect %r ignored", effect)

    def _notify(self, message: str) -> None:
        if self._scheduler is not None and self._delivered_already():
            logger.info("Completion already shown by the OS; skipping %r", message)
            return
        if self._notifier is not None:
            self._notifier.notify(message)

    def _delivered_already(self) -> bool:
        try:
            return bool(self._scheduler.consume_delivered())
        except Exception:
            logger.exception("Scheduler delivery check failed")
            return False
