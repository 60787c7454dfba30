"""TomatoTimer: a work/break countdown timer that survives suspension."""

__version__ = "0.1.0"
