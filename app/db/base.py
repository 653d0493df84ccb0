import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime, UUID

from app.core.db import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseModel(Base):
    """Общие колонки для всех таблиц"""
    __abstract__ = True

    uuid = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    # Время задаётся в Python, чтобы последовательные сохранения различались и в SQLite
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite возвращает naive datetime, считаем такие значения UTC"""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
