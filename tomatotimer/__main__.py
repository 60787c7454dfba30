"""Allow running TomatoTimer as a module: python -m tomatotimer."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .app import TomatoTimerApp
from .database.db import init_db
from .logging_setup import setup_logging
from .settings import load_settings

logger = logging.getLogger(__name__)


def main() -> None:
    settings = load_settings()
    setup_logging(settings.log_level)
    init_db()
    logger.info("TomatoTimer ready")

    app = QApplication(sys.argv)
    app.setApplicationName("TomatoTimer")
    app.setOrganizationName("TomatoTimer")
    app.setQuitOnLastWindowClosed(False)

    window = TomatoTimerApp(settings=settings)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
