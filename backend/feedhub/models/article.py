"""
Article models
"""

from typing import Optional
from datetime import datetime
from uuid import UUID
from sqlalchemy import String, Text, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID as PGUUID
from sqlalchemy.orm import Mapped, mapped_column, relationship
from pydantic import Field, AnyUrl, field_validator

from .base import BaseModel, BaseSchema


class Article(BaseModel):
    """Article collected from a feed source"""
    __tablename__ = "articles"

    source_id: Mapped[UUID] = mapped_column(
        PGUUID(as_uuid=True),
        ForeignKey("sources.id", ondelete="CASCADE"),
        nullable=False,
        comment="Source the article was collected from"
    )
    title: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        comment="Article title"
    )
    url: Mapped[str] = mapped_column(
        String(1000),
        nullable=False,
        comment="Canonical article URL, used for deduplication"
    )
    summary: Mapped[Optional[str]] = mapped_column(
        Text,
        comment="Article summary"
    )
    published_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        comment="When the article was originally published (UTC)"
    )

    source: Mapped["Source"] = relationship(
        "Source",
        back_populates="articles",
    )

    __table_args__ = (
        Index('idx_articles_source_published', 'source_id', 'published_at'),
        Index('idx_articles_published_at', 'published_at'),
        UniqueConstraint('url', name='uq_articles_url'),
    )

    def __repr__(self) -> str:
        title = self.title[:50] + "..." if self.title and len(self.title) > 50 else self.title
        return f"<Article(id={self.id}, title={title})>"


# Pydantic Schemas
class ArticleBaseSchema(BaseSchema):
    """Base article schema"""

    source_id: UUID = Field(..., description="Source ID")
    title: str = Field(..., max_length=500, description="Article title")
    url: AnyUrl = Field(..., description="Article URL")
    summary: Optional[str] = Field(None, description="Article summary")
    published_at: datetime = Field(..., description="Publication date")

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        if not v.strip():
            raise ValueError('Title cannot be empty')
        return v.strip()


class ArticleCreateSchema(ArticleBaseSchema):
    """Schema for creating articles"""
    pass


class ArticleUpdateSchema(BaseSchema):
    """Schema for updating articles"""

    source_id: Optional[UUID] = Field(None, description="Source ID")
    title: Optional[str] = Field(None, max_length=500, description="Article title")
    url: Optional[AnyUrl] = Field(None, description="Article URL")
    summary: Optional[str] = Field(None, description="Article summary")
    published_at: Optional[datetime] = Field(None, description="Publication date")


class ArticleExistsRequest(BaseSchema):
    """Batch URL existence check request"""

    urls: list[str] = Field(default_factory=list, description="Candidate article URLs")


class ArticleExistsResponse(BaseSchema):
    """Only URLs that already exist are listed"""

    existing: dict[str, bool] = Field(default_factory=dict)
