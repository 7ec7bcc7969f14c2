"""
Declarative base, shared columns and base Pydantic schemas
"""

import uuid
from datetime import datetime

from pydantic import BaseModel as PydanticBaseModel
from sqlalchemy import DateTime, func
from sqlalchemy.dialects.postgresql import UUID as PGUUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from feedhub.utils.datetime_utils import utc_now_naive


class Base(DeclarativeBase):
    """Declarative base for all ORM models"""


class BaseModel(Base):
    """Abstract model with UUID primary key and audit timestamps"""
    __abstract__ = True

    id: Mapped[uuid.UUID] = mapped_column(
        PGUUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=utc_now_naive,
        server_default=func.now(),
        comment="Row creation time (UTC)"
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=utc_now_naive,
        onupdate=utc_now_naive,
        server_default=func.now(),
        comment="Last modification time (UTC)"
    )


class BaseSchema(PydanticBaseModel):
    """Base schema reading attributes from ORM objects"""

    class Config:
        from_attributes = True

