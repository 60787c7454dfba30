"""Foreground/background transitions.

On every background → foreground transition the engine is reconciled
before anything repaints, so the screen never shows a stale countdown.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, Qt, pyqtSignal
from PyQt6.QtGui import QGuiApplication

from ..timer.engine import TimerEngine

logger = logging.getLogger(__name__)

_ACTIVE = Qt.ApplicationState.ApplicationActive


class AppLifecycle(QObject):
    """Bridges ``QGuiApplication.applicationStateChanged`` to the engine."""

    foregrounded = pyqtSignal()
    backgrounded = pyqtSignal()

    def __init__(
        self,
        engine: TimerEngine,
        parent: QObject | None = None,
        *,
        app: QGuiApplication | None = None,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._foreground = True
        app = app or QGuiApplication.instance()
        if app is not None:
            app.applicationStateChanged.connect(self.handle_state)

    @property
    def in_foreground(self) -> bool:
        return self._foreground

    def handle_state(self, state: Qt.ApplicationState) -> None:
        active = state == _ACTIVE
        if active == self._foreground:
            return
        self._foreground = active
        if active:
            logger.debug("Foregrounded; reconciling timer")
            self._engine.reconcile()
            self.foregrounded.emit()
        else:
            logger.debug("Backgrounded")
            self.backgrounded.emit()
