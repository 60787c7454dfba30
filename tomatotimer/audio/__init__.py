"""Audio package."""

from .sounds import ChimePlayer, generate_chirp

__all__ = ["ChimePlayer", "generate_chirp"]
