"""
Articles domain facade.

Single entry point for the API layer and other domains; callers do not need
to know which service or repository backs an operation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from feedhub.models import Article
from feedhub.models.article import ArticleCreateSchema, ArticleUpdateSchema
from feedhub.search import SearchLimits

from .repositories import ArticleSearchFilters, ArticleWithSource
from .services.ingestion_service import ArticleIngestionService, IngestionResult
from .services.query_service import ArticleQueryService


@dataclass
class ArticleFacade:
    """Facade coordinating article services."""

    session: AsyncSession
    limits: SearchLimits = field(default_factory=SearchLimits)

    @property
    def query_service(self) -> ArticleQueryService:
        return ArticleQueryService(self.session, self.limits)

    @property
    def ingestion_service(self) -> ArticleIngestionService:
        return ArticleIngestionService(self.session)

    async def list_articles(
        self,
        *,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[ArticleWithSource]:
        return await self.query_service.list_articles(limit=limit, offset=offset)

    async def get_article(self, article_id: UUID) -> ArticleWithSource:
        return await self.query_service.get_article(article_id)

    async def search_articles(
        self,
        query: str,
        filters: Optional[ArticleSearchFilters] = None,
    ) -> List[ArticleWithSource]:
        return await self.query_service.search(query, filters)

    async def exists_batch(self, urls: Sequence[str]) -> Dict[str, bool]:
        return await self.query_service.exists_batch(urls)

    async def create_article(self, payload: ArticleCreateSchema) -> Tuple[Article, bool]:
        return await self.ingestion_service.create_article(payload)

    async def update_article(self, article_id: UUID, payload: ArticleUpdateSchema) -> Article:
        return await self.ingestion_service.update_article(article_id, payload)

    async def delete_article(self, article_id: UUID) -> None:
        await self.ingestion_service.delete_article(article_id)

    async def ingest_batch(
        self,
        source_id: UUID,
        entries: Sequence[Mapping[str, Any]],
    ) -> IngestionResult:
        return await self.ingestion_service.ingest_batch(source_id, entries)
