"""
Feed source models
"""

from typing import Optional, List
from datetime import datetime
from sqlalchemy import String, Boolean, DateTime, Index, UniqueConstraint, true
from sqlalchemy.dialects.postgresql import ENUM
from sqlalchemy.orm import Mapped, mapped_column, relationship
from pydantic import Field, AnyUrl, field_validator
import enum

from .base import BaseModel, BaseSchema


class SourceType(str, enum.Enum):
    """Kind of feed a source is crawled as. Values are case-sensitive."""
    RSS = "RSS"
    WEBFLOW = "Webflow"
    NEXTJS = "NextJS"
    REMIX = "Remix"

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]


source_type_enum = ENUM(
    *SourceType.values(),
    name="sourcetype",
    create_type=False,
)


class Source(BaseModel):
    """Feed that articles are collected from"""
    __tablename__ = "sources"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name of the source"
    )
    feed_url: Mapped[str] = mapped_column(
        String(1000),
        nullable=False,
        comment="URL the source is crawled from"
    )
    source_type: Mapped[str] = mapped_column(
        source_type_enum,
        nullable=False,
        default=SourceType.RSS.value,
        comment="How the source is crawled"
    )
    active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
        comment="Inactive sources are skipped by the crawler"
    )
    last_crawled_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime,
        nullable=True,
        comment="When the source was last crawled (UTC)"
    )

    articles: Mapped[List["Article"]] = relationship(
        "Article",
        back_populates="source",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index('idx_sources_active', 'active'),
        Index('idx_sources_source_type', 'source_type'),
        UniqueConstraint('feed_url', name='uq_sources_feed_url'),
    )

    def __repr__(self) -> str:
        return f"<Source(id={self.id}, name={self.name}, type={self.source_type})>"


# Pydantic Schemas
class SourceBaseSchema(BaseSchema):
    """Base source schema"""

    name: str = Field(..., max_length=255, description="Display name")
    feed_url: AnyUrl = Field(..., description="Feed URL")
    source_type: SourceType = Field(SourceType.RSS, description="Type of the source")
    active: bool = Field(True, description="Whether the source is crawled")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Name cannot be empty')
        return v.strip()


class SourceCreateSchema(SourceBaseSchema):
    """Schema for creating sources"""
    pass


class SourceUpdateSchema(BaseSchema):
    """Schema for updating sources"""

    name: Optional[str] = Field(None, max_length=255, description="Display name")
    feed_url: Optional[AnyUrl] = Field(None, description="Feed URL")
    source_type: Optional[SourceType] = Field(None, description="Type of the source")
    active: Optional[bool] = Field(None, description="Whether the source is crawled")

