"""
Query service for the articles domain.

Provides read operations backed by ``ArticleRepository``. Search and
existence checks are bounded by the ``SearchLimits`` the service was built
with; nothing here keeps state between calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence
from uuid import UUID

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from feedhub.core.exceptions import NotFoundError
from feedhub.search import SearchLimits, parse_keywords, run_with_deadline

from ..repositories import ArticleRepository, ArticleSearchFilters, ArticleWithSource


@dataclass
class ArticleQueryService:
    """Encapsulates read-only article use cases."""

    session: AsyncSession
    limits: SearchLimits = field(default_factory=SearchLimits)

    @property
    def repo(self) -> ArticleRepository:
        return ArticleRepository(self.session)

    async def list_articles(
        self,
        *,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[ArticleWithSource]:
        return await self.repo.list_with_source(limit=limit, offset=offset)

    async def get_article(self, article_id: UUID) -> ArticleWithSource:
        item = await self.repo.get_with_source(article_id)
        if item is None:
            raise NotFoundError("Article", article_id)
        return item

    async def search(
        self,
        query: str,
        filters: Optional[ArticleSearchFilters] = None,
    ) -> List[ArticleWithSource]:
        """Parse free-text ``query`` into keywords and run a filtered search."""
        keywords = parse_keywords(
            query,
            self.limits.max_keyword_count,
            self.limits.max_keyword_length,
        )
        return await self.search_keywords(keywords, filters)

    async def search_keywords(
        self,
        keywords: Sequence[str],
        filters: Optional[ArticleSearchFilters] = None,
    ) -> List[ArticleWithSource]:
        filters = filters or ArticleSearchFilters()
        logger.info(
            f"Article search: keywords={list(keywords)}, source_id={filters.source_id}, "
            f"from={filters.published_from}, to={filters.published_to}"
        )
        results = await run_with_deadline(
            "article search",
            self.repo.search_with_filters(keywords, filters),
            self.limits.timeout_seconds,
        )
        logger.debug(f"Article search returned {len(results)} items")
        return results

    async def exists_batch(self, urls: Sequence[str]) -> Dict[str, bool]:
        """URLs from ``urls`` that are already stored, each mapped to ``True``."""
        if not urls:
            return {}
        return await run_with_deadline(
            "batch URL existence check",
            self.repo.exists_by_url_batch(urls),
            self.limits.timeout_seconds,
        )
