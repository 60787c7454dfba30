"""Completion reminders shown by the OS while the app is in the background.

``TrayScheduler`` keeps at most one pending reminder.  It only shows the
tray message when the application is not active; in the foreground the
engine's own reconcile path detects completion and notifies in-app.
"""

from __future__ import annotations

import logging
from typing import Callable

from PyQt6.QtCore import QObject, Qt, QTimer
from PyQt6.QtGui import QGuiApplication
from PyQt6.QtWidgets import QSystemTrayIcon

logger = logging.getLogger(__name__)


def _app_is_foreground() -> bool:
    return (
        QGuiApplication.applicationState()
        == Qt.ApplicationState.ApplicationActive
    )


class NullScheduler:
    """Used where no notification facility exists.  Foreground
    reconciliation still detects completion on its own."""

    def schedule(self, delay_seconds: int, title: str, body: str) -> None:
        logger.debug("No scheduler available; %ss reminder dropped", delay_seconds)

    def cancel_all(self) -> None:
        pass

    def consume_delivered(self) -> bool:
        return False


class TrayScheduler(QObject):
    """Single-shot reminder delivered through ``QSystemTrayIcon``."""

    def __init__(
        self,
        tray_icon: QSystemTrayIcon,
        parent: QObject | None = None,
        *,
        is_foreground: Callable[[], bool] = _app_is_foreground,
    ) -> None:
        super().__init__(parent)
        self._tray_icon = tray_icon
        self._is_foreground = is_foreground
        self._title = ""
        self._body = ""
        self._delivered = False

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._fire)

    @property
    def pending(self) -> bool:
        return self._timer.isActive()

    def schedule(self, delay_seconds: int, title: str, body: str) -> None:
        """Replace any pending reminder with one *delay_seconds* from now."""
        self._timer.stop()
        self._title, self._body = title, body
        self._delivered = False
        self._timer.start(max(0, int(delay_seconds)) * 1000)
        logger.debug("Reminder scheduled in %ss", delay_seconds)

    def cancel_all(self) -> None:
        if self._timer.isActive():
            logger.debug("Pending reminder cancelled")
        self._timer.stop()
        self._delivered = False

    def consume_delivered(self) -> bool:
        """True once if the pending reminder was already shown."""
        delivered, self._delivered = self._delivered, False
        return delivered

    def _fire(self) -> None:
        if self._is_foreground():
            # in-app reconcile will handle it
            return
        self._tray_icon.showMessage(
            self._title,
            self._body,
            QSystemTrayIcon.MessageIcon.Information,
        )
        self._delivered = True
        logger.info("Completion reminder delivered via system tray")


def create_scheduler(
    tray_icon: QSystemTrayIcon | None,
    parent: QObject | None = None,
    *,
    enabled: bool = True,
) -> TrayScheduler | NullScheduler:
    """Pick the tray scheduler when the platform supports one."""
    if not enabled:
        return NullScheduler()
    if tray_icon is None or not QSystemTrayIcon.isSystemTrayAvailable():
        logger.info("System tray unavailable; background reminders disabled")
        return NullScheduler()
    return TrayScheduler(tray_icon, parent)
