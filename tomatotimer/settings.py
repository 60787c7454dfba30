"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/TomatoTimer/settings.json

Set ``TOMATOTIMER_HOME`` to use a different directory.  Timer durations are
not settings: they live in the persisted timer snapshot.

Usage::

    settings = load_settings()
    settings.sound_volume = 50
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, asdict, fields
from pathlib import Path

logger = logging.getLogger(__name__)


def _app_support_dir() -> Path:
    override = os.environ.get("TOMATOTIMER_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / "Library" / "Application Support" / "TomatoTimer"


APP_SUPPORT_DIR = _app_support_dir()
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100

    # ── notifications ─────────────────────────────────────────────────
    notifications_enabled: bool = True

    # ── engine ────────────────────────────────────────────────────────
    tick_interval_ms: int = 1000
    log_level: str = "INFO"

    # ── window ────────────────────────────────────────────────────────
    window_x: int | None = None
    window_y: int | None = None
    window_width: int = 360
    window_height: int = 520


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from disk, falling back to defaults."""
    path = path or SETTINGS_PATH
    if not path.exists():
        return Settings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        logger.warning("Unreadable settings at %s; using defaults", path, exc_info=True)
        return Settings()
    if not isinstance(data, dict):
        logger.warning("Settings at %s is not an object; using defaults", path)
        return Settings()
    # Only use keys that exist in the dataclass
    valid_keys = {f.name for f in fields(Settings)}
    filtered = {k: v for k, v in data.items() if k in valid_keys}
    return Settings(**filtered)


def save_settings(settings: Settings, path: Path | None = None) -> None:
    """Write settings to disk as JSON."""
    path = path or SETTINGS_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
