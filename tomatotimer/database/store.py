"""Persistent timer snapshot, stored as JSON under one key."""

from __future__ import annotations

import json
import logging

from sqlalchemy.exc import SQLAlchemyError

from ..timer.state import Snapshot, SnapshotError
from .db import get_session
from .models import KeyValue, utc_now

logger = logging.getLogger(__name__)

SNAPSHOT_KEY = "timer_state"


class SnapshotStore:
    """``load()``/``save()`` for the engine's write-through persistence.

    A missing or corrupt row loads as ``None`` so the app starts from
    defaults.  ``save`` raises on database errors; the effect runner logs
    them without touching the in-memory state.
    """

    def __init__(self, key: str = SNAPSHOT_KEY) -> None:
        self._key = key

    def load(self) -> Snapshot | None:
        try:
            with get_session() as db:
                row = db.query(KeyValue).filter_by(key=self._key).one_or_none()
                raw = row.value if row is not None else None
        except SQLAlchemyError:
            logger.exception("Could not read saved timer state")
            return None
        if raw is None:
            return None
        try:
            return Snapshot.from_dict(json.loads(raw))
        except (ValueError, SnapshotError) as exc:
            logger.warning("Ignoring corrupt timer snapshot: %s", exc)
            return None

    def save(self, snapshot: Snapshot) -> None:
        payload = json.dumps(snapshot.to_dict(), sort_keys=True)
        with get_session() as db:
            row = db.query(KeyValue).filter_by(key=self._key).one_or_none()
            if row is None:
                db.add(KeyValue(key=self._key, value=payload))
            else:
                row.value = payload
                row.updated_at = utc_now()

    def clear(self) -> None:
        with get_session() as db:
            db.query(KeyValue).filter_by(key=self._key).delete()
