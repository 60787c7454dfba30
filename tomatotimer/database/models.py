"""SQLAlchemy ORM models for TomatoTimer."""

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import DeclarativeBase


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class KeyValue(Base):
    """Opaque JSON blobs stored under a single string key."""

    __tablename__ = "key_values"

    id = Column(Integer, primary_key=True, autoincrement=True)
    key = Column(String(64), nullable=False, unique=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, nullable=False, default=utc_now)

    def __repr__(self) -> str:
        return f"<KeyValue key={self.key} updated_at={self.updated_at}>"
