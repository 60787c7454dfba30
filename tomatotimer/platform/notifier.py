"""In-app completion alert."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QMessageBox, QWidget

from ..timer.effects import APP_TITLE


class DialogNotifier:
    """Shows a non-modal message box over the main window."""

    def __init__(self, parent: QWidget | None = None) -> None:
        self._parent = parent
        self._box: QMessageBox | None = None

    def notify(self, message: str) -> None:
        if self._box is not None:
            self._box.close()
        box = QMessageBox(
            QMessageBox.Icon.Information,
            APP_TITLE,
            message,
            QMessageBox.StandardButton.Ok,
            self._parent,
        )
        box.setModal(False)
        box.setAttribute(Qt.WidgetAttribute.WA_DeleteOnClose)
        box.finished.connect(self._on_finished)
        box.show()
        self._box = box

    def _on_finished(self, _result: int) -> None:
        self._box = None
