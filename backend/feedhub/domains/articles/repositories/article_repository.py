"""
SQLAlchemy repository for article persistence.

Read paths that back search and deduplication translate driver failures into
``StorageError``; write paths leave transaction handling to the services.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID

from sqlalchemy import and_, delete, desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from feedhub.core.exceptions import StorageError
from feedhub.models import Article, Source
from feedhub.search import (
    date_range_criteria,
    equals_criteria,
    keyword_criteria,
    membership_criteria,
)


@dataclass
class ArticleSearchFilters:
    source_id: Optional[UUID] = None
    published_from: Optional[datetime] = None
    published_to: Optional[datetime] = None


@dataclass
class ArticleWithSource:
    article: Article
    source_name: str


# Newest first; created_at breaks ties between equal publication times.
_ARTICLE_ORDER = (desc(Article.published_at), desc(Article.created_at))


class ArticleRepository:
    """Encapsulates queries over the ``articles`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _dialect_name(self) -> str:
        return self._session.get_bind().dialect.name

    async def get(self, article_id: UUID) -> Optional[Article]:
        result = await self._session.execute(
            select(Article).where(Article.id == article_id)
        )
        return result.scalar_one_or_none()

    async def get_by_url(self, url: str) -> Optional[Article]:
        result = await self._session.execute(
            select(Article).where(Article.url == url)
        )
        return result.scalar_one_or_none()

    async def get_with_source(self, article_id: UUID) -> Optional[ArticleWithSource]:
        stmt = (
            select(Article, Source.name)
            .join(Source, Article.source_id == Source.id)
            .where(Article.id == article_id)
        )
        result = await self._session.execute(stmt)
        row = result.first()
        if row is None:
            return None
        return ArticleWithSource(article=row[0], source_name=row[1])

    async def list(self, *, limit: Optional[int] = None, offset: int = 0) -> List[Article]:
        stmt = select(Article).order_by(*_ARTICLE_ORDER).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def list_with_source(
        self,
        *,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[ArticleWithSource]:
        stmt = (
            select(Article, Source.name)
            .join(Source, Article.source_id == Source.id)
            .order_by(*_ARTICLE_ORDER)
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self._session.execute(stmt)
        return [ArticleWithSource(article=article, source_name=name) for article, name in result.all()]

    def _build_criteria(self, keywords: Sequence[str], filters: ArticleSearchFilters) -> List:
        criteria = keyword_criteria(keywords, (Article.title, Article.summary))
        criteria.extend(equals_criteria(Article.source_id, filters.source_id))
        criteria.extend(
            date_range_criteria(
                Article.published_at,
                filters.published_from,
                filters.published_to,
            )
        )
        return criteria

    async def search_with_filters(
        self,
        keywords: Sequence[str],
        filters: Optional[ArticleSearchFilters] = None,
    ) -> List[ArticleWithSource]:
        """
        Articles whose title or summary contains every keyword.

        Keywords are matched case-insensitively as literal substrings. Set
        filters narrow the result further; results are newest first.
        """
        criteria = self._build_criteria(keywords, filters or ArticleSearchFilters())
        stmt = (
            select(Article, Source.name)
            .join(Source, Article.source_id == Source.id)
            .order_by(*_ARTICLE_ORDER)
        )
        if criteria:
            stmt = stmt.where(and_(*criteria))

        try:
            result = await self._session.execute(stmt)
            rows = result.all()
        except SQLAlchemyError as exc:
            raise StorageError(f"Article search failed: {exc}") from exc
        return [ArticleWithSource(article=article, source_name=name) for article, name in rows]

    async def exists_by_url(self, url: str) -> bool:
        stmt = select(select(Article.id).where(Article.url == url).exists())
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            raise StorageError(f"URL existence check failed: {exc}") from exc
        return bool(result.scalar())

    async def exists_by_url_batch(self, urls: Sequence[str]) -> Dict[str, bool]:
        """
        Check many URLs with a single query.

        On PostgreSQL the URLs travel as one array parameter, so batch size is
        not limited by the driver.

        Only URLs already stored appear in the result, each mapped to ``True``.
        An empty input returns ``{}`` without touching the database.
        """
        if not urls:
            return {}

        candidates = list(dict.fromkeys(urls))
        stmt = select(Article.url).where(
            membership_criteria(Article.url, candidates, self._dialect_name())
        )
        try:
            result = await self._session.execute(stmt)
            found = result.scalars().all()
        except SQLAlchemyError as exc:
            raise StorageError(f"Batch URL existence check failed: {exc}") from exc
        return {url: True for url in found}

    async def create(self, article: Article) -> Article:
        self._session.add(article)
        await self._session.flush()
        return article

    async def update(self, article: Article, data: Dict[str, Any]) -> Article:
        for field, value in data.items():
            setattr(article, field, value)
        await self._session.flush()
        return article

    async def add_all(self, articles: Sequence[Article]) -> None:
        self._session.add_all(articles)
        await self._session.flush()

    async def delete(self, article: Article) -> None:
        await self._session.delete(article)
        await self._session.flush()

    async def delete_by_source(self, source_id: UUID) -> int:
        result = await self._session.execute(
            delete(Article).where(Article.source_id == source_id)
        )
        return result.rowcount or 0

