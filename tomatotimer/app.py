"""Main application window for TomatoTimer."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QColor, QIcon, QImage, QPainter, QPen, QPixmap
from PyQt6.QtWidgets import QMainWindow, QMenu, QSystemTrayIcon

from .audio.sounds import ChimePlayer
from .database.store import SnapshotStore
from .platform.clock import Clock, SystemClock
from .platform.lifecycle import AppLifecycle
from .platform.notifier import DialogNotifier
from .platform.scheduler import create_scheduler
from .settings import Settings, load_settings, save_settings
from .timer.engine import TimerEngine
from .timer.runner import EffectRunner
from .timer.state import MODE_LABELS, Mode, TimerState
from .ui.timer_widget import TimerWidget, format_time

logger = logging.getLogger(__name__)


# ── tray‑icon image generation ────────────────────────────────────────────


def _make_tray_icon(state: TimerState) -> QIcon:
    """32×32 tray icon: tomato red while working, green on a break,
    outline only while idle."""
    size = 64  # draw at 2× for Retina
    img = QImage(size, size, QImage.Format.Format_ARGB32_Premultiplied)
    img.fill(Qt.GlobalColor.transparent)
    p = QPainter(img)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)

    colour = QColor("#E5533D") if state.mode is Mode.WORK else QColor("#4CAF50")
    r = size // 2 - 4
    if state.is_active:
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(colour)
    else:
        p.setPen(QPen(colour, 4))
        p.setBrush(Qt.BrushStyle.NoBrush)
    p.drawEllipse(size // 2 - r, size // 2 - r, r * 2, r * 2)
    p.end()

    img.setDevicePixelRatio(2.0)
    return QIcon(QPixmap.fromImage(img))


class TomatoTimerApp(QMainWindow):
    """Main application window.  Owns the engine and its collaborators."""

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        store: SnapshotStore | None = None,
        clock: Clock | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Pomodoro Timer")

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = settings or load_settings()
        self.resize(self._settings.window_width, self._settings.window_height)
        self._geometry_save_timer = QTimer(self)
        self._geometry_save_timer.setSingleShot(True)
        self._geometry_save_timer.setInterval(500)
        self._geometry_save_timer.timeout.connect(self._save_geometry)

        # ── system tray icon ──────────────────────────────────────────
        self._tray_icon: QSystemTrayIcon | None = None
        if QSystemTrayIcon.isSystemTrayAvailable():
            self._tray_icon = QSystemTrayIcon(self)
            self._tray_icon.setToolTip("Pomodoro Timer")
            self._tray_icon.activated.connect(self._on_tray_activated)

        # ── collaborators ─────────────────────────────────────────────
        self._store = store or SnapshotStore()
        self._sound = ChimePlayer(parent=self)
        self._sound.set_volume(self._settings.sound_volume)
        self._sound.set_enabled(self._settings.sound_enabled)
        self._scheduler = create_scheduler(
            self._tray_icon, self,
            enabled=self._settings.notifications_enabled,
        )
        self._notifier = DialogNotifier(self)
        runner = EffectRunner(
            sound=self._sound,
            scheduler=self._scheduler,
            notifier=self._notifier,
            store=self._store,
        )

        # ── engine ────────────────────────────────────────────────────
        self._engine = TimerEngine(
            self,
            clock=clock or SystemClock(),
            runner=runner,
            tick_interval_ms=self._settings.tick_interval_ms,
        )
        self._lifecycle = AppLifecycle(self._engine, self)

        # ── central widget ────────────────────────────────────────────
        self._timer_widget = TimerWidget(self._engine, self)
        self.setCentralWidget(self._timer_widget)

        # ── wire signals ──────────────────────────────────────────────
        self._engine.state_changed.connect(self._on_state_changed)
        self._engine.tick.connect(self._on_tick)

        if self._tray_icon is not None:
            self._build_tray_menu()
            self._tray_icon.show()

        # ── restore persisted timer ───────────────────────────────────
        self._engine.restore(self._store.load())
        self._restore_geometry()

    # ── accessors ─────────────────────────────────────────────────────

    @property
    def engine(self) -> TimerEngine:
        return self._engine

    @property
    def timer_widget(self) -> TimerWidget:
        return self._timer_widget

    # ══════════════════════════════════════════════════════════════════
    #  SYSTEM TRAY
    # ══════════════════════════════════════════════════════════════════

    def _build_tray_menu(self) -> None:
        menu = QMenu(self)

        self._tray_start_action = menu.addAction("Start")
        self._tray_start_action.triggered.connect(lambda: self._engine.toggle())

        reset_action = menu.addAction("Reset")
        reset_action.triggered.connect(lambda: self._engine.reset())

        menu.addSeparator()

        show_action = menu.addAction("Show Pomodoro Timer")
        show_action.triggered.connect(self._show_window)

        quit_action = menu.addAction("Quit")
        quit_action.triggered.connect(self._quit_app)

        self._tray_icon.setContextMenu(menu)
        self._update_tray_state(self._engine.state)

    def _on_tray_activated(self, reason: QSystemTrayIcon.ActivationReason) -> None:
        if reason == QSystemTrayIcon.ActivationReason.Trigger:
            self._show_window()

    def _show_window(self) -> None:
        self.show()
        self.raise_()
        self.activateWindow()

    def _quit_app(self) -> None:
        if self._tray_icon is not None:
            self._tray_icon.hide()
        from PyQt6.QtWidgets import QApplication
        QApplication.instance().quit()

    def _update_tray_state(self, state: TimerState) -> None:
        if self._tray_icon is None:
            return
        self._tray_icon.setIcon(_make_tray_icon(state))
        if hasattr(self, "_tray_start_action"):
            self._tray_start_action.setText("Pause" if state.is_active else "Start")
        label = MODE_LABELS[state.mode]
        self._tray_icon.setToolTip(
            f"Pomodoro Timer: {label} {format_time(state.seconds_left)}"
        )

    # ══════════════════════════════════════════════════════════════════
    #  TIMER SIGNALS
    # ══════════════════════════════════════════════════════════════════

    def _on_state_changed(self, state: TimerState) -> None:
        self._update_tray_state(state)

    def _on_tick(self, seconds_left: int) -> None:
        if self._tray_icon is not None:
            label = MODE_LABELS[self._engine.mode]
            self._tray_icon.setToolTip(
                f"Pomodoro Timer: {label} {format_time(seconds_left)}"
            )

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW GEOMETRY
    # ══════════════════════════════════════════════════════════════════

    def _restore_geometry(self) -> None:
        s = self._settings
        if s.window_x is not None and s.window_y is not None:
            self.move(s.window_x, s.window_y)

    def _save_geometry(self) -> None:
        pos = self.pos()
        size = self.size()
        self._settings.window_x = pos.x()
        self._settings.window_y = pos.y()
        self._settings.window_width = size.width()
        self._settings.window_height = size.height()
        try:
            save_settings(self._settings)
        except OSError:
            logger.warning("Could not save window geometry", exc_info=True)

    def _schedule_geometry_save(self) -> None:
        self._geometry_save_timer.start()

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def closeEvent(self, event) -> None:  # type: ignore[override]
        """Hide to the tray so background reminders keep working."""
        self._save_geometry()
        if self._tray_icon is not None and self._tray_icon.isVisible():
            event.ignore()
            self.hide()
        else:
            event.accept()

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._schedule_geometry_save()

    def moveEvent(self, event) -> None:  # type: ignore[override]
        super().moveEvent(event)
        self._schedule_geometry_save()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """Space toggles start/pause, Escape resets."""
        key = event.key()
        if key == Qt.Key.Key_Space and not event.modifiers():
            self._engine.toggle()
            event.accept()
            return
        if key == Qt.Key.Key_Escape:
            self._engine.reset()
            event.accept()
            return
        super().keyPressEvent(event)
