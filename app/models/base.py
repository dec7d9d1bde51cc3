"""Base Models and Mixins"""

import uuid
from sqlalchemy import Column, DateTime, Boolean
from sqlalchemy.dialects.postgresql import UUID, ENUM

from app.database import Base
from app.utils.time import get_utc_now


class BaseModel(Base):
    """
    Abstract base for every table: UUID primary key plus naive-UTC
    created_at / updated_at stamps.
    """
    __abstract__ = True

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    created_at = Column(DateTime, default=get_utc_now, nullable=False)
    updated_at = Column(DateTime, default=get_utc_now, onupdate=get_utc_now, nullable=False)


class StatusMixin:
    """Soft on/off switch for registry rows (users, departments, beds)"""
    is_active = Column(Boolean, default=True, nullable=False, index=True)


def enum_column_type(enum_cls, name: str) -> ENUM:
    """Postgres ENUM that stores the enum *values* (e.g. 'semi-private')."""
    return ENUM(enum_cls, name=name, values_callable=lambda x: [e.value for e in x])
