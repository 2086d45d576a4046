import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime

from collabdocs.core.db import Base


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class BaseModel(Base):
    """Общие колонки: строковый идентификатор и метки времени"""
    __abstract__ = True

    id = Column(String(64), primary_key=True, default=new_id)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)
