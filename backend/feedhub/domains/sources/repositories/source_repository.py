"""
SQLAlchemy repository for feed sources.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID

from sqlalchemy import and_, asc, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from feedhub.core.exceptions import StorageError
from feedhub.models import Source
from feedhub.search import equals_criteria, keyword_criteria


@dataclass
class SourceSearchFilters:
    source_type: Optional[str] = None  # one of SourceType values, validated by the service
    active: Optional[bool] = None


@dataclass
class SourceRepository:
    session: AsyncSession

    async def get(self, source_id: UUID) -> Optional[Source]:
        result = await self.session.execute(select(Source).where(Source.id == source_id))
        return result.scalar_one_or_none()

    async def get_by_feed_url(self, feed_url: str) -> Optional[Source]:
        result = await self.session.execute(select(Source).where(Source.feed_url == feed_url))
        return result.scalar_one_or_none()

    async def list(self) -> List[Source]:
        result = await self.session.execute(select(Source).order_by(asc(Source.name)))
        return list(result.scalars().all())

    async def list_active(self) -> List[Source]:
        result = await self.session.execute(
            select(Source).where(Source.active.is_(True)).order_by(asc(Source.name))
        )
        return list(result.scalars().all())

    async def search_with_filters(
        self,
        keywords: Sequence[str],
        filters: Optional[SourceSearchFilters] = None,
    ) -> List[Source]:
        """Sources whose name or feed URL contains every keyword, ordered by name."""
        filters = filters or SourceSearchFilters()
        criteria = keyword_criteria(keywords, (Source.name, Source.feed_url))
        criteria.extend(equals_criteria(Source.source_type, filters.source_type))
        criteria.extend(equals_criteria(Source.active, filters.active))

        stmt = select(Source).order_by(asc(Source.name))
        if criteria:
            stmt = stmt.where(and_(*criteria))

        try:
            result = await self.session.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as exc:
            raise StorageError(f"Source search failed: {exc}") from exc

    async def create(self, source: Source) -> Source:
        self.session.add(source)
        await self.session.flush()
        return source

    async def update(self, source: Source, data: Dict[str, Any]) -> Source:
        for field, value in data.items():
            setattr(source, field, value)
        await self.session.flush()
        return source

    async def delete(self, source: Source) -> None:
        await self.session.delete(source)
        await self.session.flush()

    async def touch_crawled_at(self, source_id: UUID, crawled_at: datetime) -> bool:
        result = await self.session.execute(
            update(Source)
            .where(Source.id == source_id)
            .values(last_crawled_at=crawled_at)
        )
        return bool(result.rowcount)
