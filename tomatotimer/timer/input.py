"""Normalisation of the minutes typed into the duration fields."""

from __future__ import annotations

import re

from .state import BLANK_EDIT_DEFAULT_MINUTES

_LEADING_INT = re.compile(r"^\s*(\d+)")


def parse_minutes(text: str | None) -> int:
    """Minutes for a field that is still being edited.

    Leading digits win (``"12min"`` → 12).  Blank, non-numeric and negative
    text is held as a transient 0 until the user finishes editing.
    """
    if not text:
        return 0
    match = _LEADING_INT.match(text)
    if match is None:
        return 0
    return int(match.group(1))


def finish_minutes(text: str | None) -> int:
    """Minutes once editing is done: a blank field reverts to the default."""
    if text is None or not text.strip():
        return BLANK_EDIT_DEFAULT_MINUTES
    return parse_minutes(text)
