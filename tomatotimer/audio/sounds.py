"""Completion chime: numpy synthesis + QSoundEffect playback.

The chime is generated once as a WAV file with sine-wave synthesis and an
ADSR envelope, cached under the app support directory, and replayed for
every completed interval.
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..settings import APP_SUPPORT_DIR

logger = logging.getLogger(__name__)


# ── paths ────────────────────────────────────────────────────────────────

SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"
CHIME_FILENAME = "chirp.wav"

SAMPLE_RATE = 44100


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _make_envelope(
    length: int,
    attack: int = 200,
    decay: int = 400,
    sustain_level: float = 0.7,
    release: int = 800,
) -> np.ndarray:
    """ADSR envelope (all durations in samples)."""
    env = np.full(length, sustain_level, dtype=np.float64)
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    d_end = min(a + decay, length)
    if d_end > a:
        env[a:d_end] = np.linspace(1.0, sustain_level, d_end - a)
    r_start = max(length - release, d_end)
    if r_start < length:
        env[r_start:] = np.linspace(sustain_level, 0.0, length - r_start)
    return env


def _sine(freq: float, duration_s: float) -> np.ndarray:
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Float samples in -1..1 → mono 16-bit PCM WAV."""
    pcm = (np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(pcm.tobytes())
    return buf.getvalue()


def generate_chirp() -> bytes:
    """Two quick rising chirps (A5→E6) with a short ringing tail."""
    parts: list[np.ndarray] = []
    for freq in (880.0, 1318.51):
        tone = _sine(freq, 0.09) * 0.55 + _sine(freq * 2, 0.09) * 0.08
        env = _make_envelope(len(tone), attack=60, decay=300, sustain_level=0.45, release=900)
        parts.append(tone * env)
        parts.append(np.zeros(int(SAMPLE_RATE * 0.04)))
    tail = _sine(1318.51, 0.25) * 0.25
    parts.append(tail * _make_envelope(len(tail), attack=20, decay=800, sustain_level=0.3,
                                       release=int(SAMPLE_RATE * 0.18)))
    return _to_wav_bytes(np.concatenate(parts))


# ═══════════════════════════════════════════════════════════════════════════
#  PLAYER
# ═══════════════════════════════════════════════════════════════════════════


class ChimePlayer(QObject):
    """Plays the completion chime.

    ``play()`` never raises: a missing file or audio backend only logs.
    Calling it while a previous chime is still playing restarts it.
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = 0.7  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effect: QSoundEffect | None = None

        try:
            self._ensure_wav_file()
            self._load_effect()
        except OSError:
            logger.exception("Could not prepare completion chime")

    # ── public API ────────────────────────────────────────────────────

    @property
    def path(self) -> Path:
        return self._sounds_dir / CHIME_FILENAME

    @property
    def volume(self) -> int:
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def loaded(self) -> bool:
        return self._effect is not None

    def set_volume(self, level: int) -> None:
        """Set volume (0-100)."""
        self._volume = max(0, min(level, 100)) / 100.0
        if self._effect is not None:
            self._effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def play(self) -> None:
        if not self._enabled:
            return
        if self._effect is None:
            logger.warning("Completion chime not loaded; skipping playback")
            return
        if self._effect.isPlaying():
            self._effect.stop()
        self._effect.play()

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_file(self) -> None:
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self.path.write_bytes(generate_chirp())
            logger.debug("Generated chime at %s", self.path)

    def _load_effect(self) -> None:
        effect = QSoundEffect(self)
        effect.setSource(QUrl.fromLocalFile(str(self.path)))
        effect.setVolume(self._volume)
        self._effect = effect
