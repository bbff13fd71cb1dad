import uuid
from datetime import datetime, timezone
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import DateTime, String

def utcnow():
    return datetime.now(timezone.utc)

def new_id() -> str:
    return uuid.uuid4().hex

class StringIdMixin:
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
