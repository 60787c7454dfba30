"""The single timer screen.

Layout (top → bottom):
    - Title
    - Remaining time (mm:ss)
    - Mode label ("Work Time" / "Break Time")
    - Work and break duration fields (minutes)
    - Start/Pause and Reset buttons
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, QRegularExpression
from PyQt6.QtGui import QRegularExpressionValidator
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLabel, QPushButton, QLineEdit, QFrame,
)

from ..timer.engine import TimerEngine
from ..timer.state import MODE_LABELS, Mode, TimerState


STYLE = """
QFrame#card { background: #FFFFFF; }
QLabel#title { font-size: 28px; }
QLabel#time { font-size: 48px; font-weight: 600; }
QLabel#mode { font-size: 20px; color: #555555; }
QLineEdit { min-width: 100px; max-width: 100px; }
"""


def format_time(seconds: int) -> str:
    """``m:ss`` as shown on the clock face."""
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes}:{secs:02d}"


class TimerWidget(QWidget):
    """Presents a :class:`TimerEngine` and forwards user input to it."""

    def __init__(self, engine: TimerEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._build_ui()
        self._connect_signals()
        self._on_state_changed(engine.state)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        self.setStyleSheet(STYLE)
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(12)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        title = QLabel("Pomodoro Timer", card)
        title.setObjectName("title")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(title)

        self._time_label = QLabel(card)
        self._time_label.setObjectName("time")
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._time_label)

        self._mode_label = QLabel(card)
        self._mode_label.setObjectName("mode")
        self._mode_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._mode_label)

        # ── duration fields ──────────────────────────────────────────
        form = QFormLayout()
        form.setFormAlignment(Qt.AlignmentFlag.AlignHCenter)
        self._work_input = self._make_duration_input(card, "Work Duration (min)")
        self._break_input = self._make_duration_input(card, "Break Duration (min)")
        form.addRow("Work", self._work_input)
        form.addRow("Break", self._break_input)
        layout.addLayout(form)

        # ── controls ─────────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._start_pause_btn = QPushButton("Start", card)
        self._reset_btn = QPushButton("Reset", card)
        btn_row.addWidget(self._start_pause_btn)
        btn_row.addWidget(self._reset_btn)
        layout.addLayout(btn_row)

    @staticmethod
    def _make_duration_input(parent: QWidget, placeholder: str) -> QLineEdit:
        field = QLineEdit(parent)
        field.setPlaceholderText(placeholder)
        field.setAlignment(Qt.AlignmentFlag.AlignCenter)
        # blank must stay Acceptable or editingFinished is never emitted
        field.setValidator(
            QRegularExpressionValidator(QRegularExpression(r"\d{0,3}"), field)
        )
        return field

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(lambda: self._engine.toggle())
        self._reset_btn.clicked.connect(lambda: self._engine.reset())

        self._work_input.textEdited.connect(
            lambda text: self._engine.edit_duration(Mode.WORK, text)
        )
        self._break_input.textEdited.connect(
            lambda text: self._engine.edit_duration(Mode.BREAK, text)
        )
        self._work_input.editingFinished.connect(
            lambda: self._finish_edit(Mode.WORK, self._work_input)
        )
        self._break_input.editingFinished.connect(
            lambda: self._finish_edit(Mode.BREAK, self._break_input)
        )

        self._engine.tick.connect(self._refresh_time)
        self._engine.state_changed.connect(self._on_state_changed)

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_state_changed(self, state: TimerState) -> None:
        self._start_pause_btn.setText("Pause" if state.is_active else "Start")
        self._mode_label.setText(MODE_LABELS[state.mode])
        self._sync_field(self._work_input, state.work_duration_minutes)
        self._sync_field(self._break_input, state.break_duration_minutes)
        self._refresh_time(state.seconds_left)

    def _finish_edit(self, mode: Mode, field: QLineEdit) -> None:
        self._engine.finish_duration_edit(mode, field.text())
        field.setText(str(self._engine.state.duration_for(mode) // 60))

    @staticmethod
    def _sync_field(field: QLineEdit, minutes: int) -> None:
        # leave a field alone while it is being typed in (blank stays blank)
        if field.hasFocus():
            return
        text = str(minutes)
        if field.text() != text:
            field.setText(text)

    def _refresh_time(self, seconds_left: int) -> None:
        self._time_label.setText(format_time(seconds_left))

    # ── accessors for the window / tests ─────────────────────────────────

    @property
    def time_text(self) -> str:
        return self._time_label.text()

    @property
    def mode_text(self) -> str:
        return self._mode_label.text()

    @property
    def start_pause_button(self) -> QPushButton:
        return self._start_pause_btn

    @property
    def reset_button(self) -> QPushButton:
        return self._reset_btn

    @property
    def work_input(self) -> QLineEdit:
        return self._work_input

    @property
    def break_input(self) -> QLineEdit:
        return self._break_input
