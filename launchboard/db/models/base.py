import uuid
from sqlalchemy import Column, String, DateTime, func
from launchboard.db.database import Base


def new_id() -> str:
    """Opaque text identifier for new rows"""
    return str(uuid.uuid4())


class TimestampMixin:
    """Mixin for created_at and updated_at timestamps"""
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), default=func.now(), nullable=False)


class CreatedAtMixin:
    """Mixin for append-only rows"""
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class StringIDMixin:
    """Mixin for opaque string primary keys"""
    id = Column(String(36), primary_key=True, default=new_id)
