"""Tests for the timer screen and the main window wiring."""

import pytest
from PyQt6.QtCore import Qt
from PyQt6.QtTest import QTest
from PyQt6.QtWidgets import QApplication

from tomatotimer.app import TomatoTimerApp
from tomatotimer.platform.clock import FakeClock
from tomatotimer.settings import Settings
from tomatotimer.timer.state import Mode, Snapshot
from tomatotimer.ui.timer_widget import TimerWidget, format_time

from helpers import MemoryStore


# ═══════════════════════════════════════════════════════════════════════════
#  FORMATTING
# ═══════════════════════════════════════════════════════════════════════════


@pytest.mark.parametrize("seconds, text", [
    (1500, "25:00"),
    (300, "5:00"),
    (61, "1:01"),
    (9, "0:09"),
    (0, "0:00"),
    (-5, "0:00"),
])
def test_format_time(seconds, text):
    assert format_time(seconds) == text


# ═══════════════════════════════════════════════════════════════════════════
#  TIMER WIDGET
# ═══════════════════════════════════════════════════════════════════════════


class TestTimerWidget:

    def test_initial_display(self, engine):
        w = TimerWidget(engine)
        assert w.time_text == "25:00"
        assert w.mode_text == "Work Time"
        assert w.start_pause_button.text() == "Start"
        assert w.work_input.text() == "25"
        assert w.break_input.text() == "5"

    def test_start_pause_button(self, engine, clock):
        w = TimerWidget(engine)
        w.start_pause_button.click()
        assert engine.is_active
        assert w.start_pause_button.text() == "Pause"
        clock.advance(61)
        engine.reconcile()
        assert w.time_text == "23:59"
        w.start_pause_button.click()
        assert not engine.is_active
        assert w.start_pause_button.text() == "Start"

    def test_reset_button(self, engine, clock):
        w = TimerWidget(engine)
        engine.start()
        clock.advance(1500)
        engine.reconcile()
        assert w.mode_text == "Break Time"
        w.reset_button.click()
        assert w.mode_text == "Work Time"
        assert w.time_text == "25:00"

    def test_typing_duration_updates_clock(self, engine):
        w = TimerWidget(engine)
        w.work_input.textEdited.emit("10")
        assert engine.state.work_duration_minutes == 10
        assert w.time_text == "10:00"

    def test_blank_field_reverts_on_return(self, engine):
        w = TimerWidget(engine)
        w.show()
        w.work_input.setFocus()
        w.work_input.selectAll()
        QTest.keyClick(w.work_input, Qt.Key.Key_Backspace)
        assert engine.state.work_duration_minutes == 0
        QTest.keyClick(w.work_input, Qt.Key.Key_Return)
        assert engine.state.work_duration_minutes == 25
        assert w.work_input.text() == "25"
        assert w.time_text == "25:00"

    def test_blank_field_reverts_on_focus_out(self, engine):
        w = TimerWidget(engine)
        w.show()
        w.activateWindow()
        w.work_input.setFocus()
        w.work_input.selectAll()
        QTest.keyClick(w.work_input, Qt.Key.Key_Backspace)
        w.break_input.setFocus()
        QApplication.processEvents()
        assert engine.state.work_duration_minutes == 25
        assert w.work_input.text() == "25"

    def test_typed_digits_kept_on_return(self, engine):
        w = TimerWidget(engine)
        w.show()
        w.break_input.setFocus()
        w.break_input.selectAll()
        QTest.keyClicks(w.break_input, "12")
        QTest.keyClick(w.break_input, Qt.Key.Key_Return)
        assert engine.state.break_duration_minutes == 12
        assert w.break_input.text() == "12"

    def test_non_digits_rejected_by_field(self, engine):
        w = TimerWidget(engine)
        w.show()
        w.work_input.setFocus()
        w.work_input.selectAll()
        QTest.keyClicks(w.work_input, "7x")
        assert w.work_input.text() == "7"
        assert engine.state.work_duration_minutes == 7

    def test_break_field(self, engine):
        w = TimerWidget(engine)
        w.break_input.textEdited.emit("8")
        assert engine.state.break_duration_minutes == 8
        assert w.time_text == "25:00"  # work clock unaffected


# ═══════════════════════════════════════════════════════════════════════════
#  MAIN WINDOW
# ═══════════════════════════════════════════════════════════════════════════


def _window(snapshot=None, now=0.0, **settings):
    store = MemoryStore(snapshot=snapshot)
    window = TomatoTimerApp(
        settings=Settings(sound_enabled=False, **settings),
        store=store,
        clock=FakeClock(now),
    )
    return window, store


@pytest.mark.usefixtures("qapp")
class TestMainWindow:

    def test_fresh_launch_defaults(self):
        window, store = _window()
        assert window.engine.mode is Mode.WORK
        assert window.timer_widget.time_text == "25:00"
        assert store.snapshot is not None

    def test_restores_running_interval(self):
        snap = Snapshot(
            is_active=True, mode=Mode.WORK, start_time=1000.0,
            total_duration_seconds=1500,
            work_duration_minutes=25, break_duration_minutes=5,
        )
        window, _ = _window(snapshot=snap, now=1600.0)
        assert window.engine.is_active
        assert window.engine.seconds_left == 900
        assert window.timer_widget.time_text == "15:00"

    def test_restores_stale_interval_as_completed(self):
        snap = Snapshot(
            is_active=True, mode=Mode.WORK, start_time=0.0,
            total_duration_seconds=1500,
            work_duration_minutes=25, break_duration_minutes=5,
        )
        window, store = _window(snapshot=snap, now=2000.0)
        assert window.engine.is_active is False
        assert window.engine.mode is Mode.BREAK
        assert window.engine.seconds_left == 300
        assert store.snapshot.mode is Mode.BREAK

    def test_restores_configured_durations(self):
        snap = Snapshot(
            is_active=False, mode=Mode.WORK, start_time=None,
            total_duration_seconds=600,
            work_duration_minutes=10, break_duration_minutes=3,
        )
        window, _ = _window(snapshot=snap)
        assert window.timer_widget.time_text == "10:00"
        assert window.timer_widget.break_input.text() == "3"

    def test_tick_interval_from_settings(self):
        window, _ = _window(tick_interval_ms=250)
        assert window.engine._qt_timer.interval() == 250

    def test_space_toggles(self):
        from PyQt6.QtGui import QKeyEvent
        from PyQt6.QtCore import QEvent

        window, _ = _window()
        event = QKeyEvent(QEvent.Type.KeyPress, Qt.Key.Key_Space,
                          Qt.KeyboardModifier.NoModifier)
        window.keyPressEvent(event)
        assert window.engine.is_active
