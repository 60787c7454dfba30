import logging
from pathlib import Path

from .settings import APP_SUPPORT_DIR

LOG_DIR = APP_SUPPORT_DIR / "logs"


def setup_logging(level: str = "INFO", log_dir: Path | None = None) -> None:
    log_dir = log_dir or LOG_DIR
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    file_error: OSError | None = None
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.FileHandler(log_dir / "tomatotimer.log", encoding="utf-8")
        )
    except OSError as exc:
        file_error = exc
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
    )
    if file_error is not None:
        logging.getLogger(__name__).warning(
            "File logging disabled: %s", file_error,
        )
