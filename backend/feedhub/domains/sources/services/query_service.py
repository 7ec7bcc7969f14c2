"""
Query service for the sources domain.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence
from uuid import UUID

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from feedhub.core.exceptions import NotFoundError
from feedhub.models import Source, SourceType
from feedhub.search import SearchLimits, parse_keywords, run_with_deadline
from feedhub.utils.validation import validate_enum

from ..repositories import SourceRepository, SourceSearchFilters


@dataclass
class SourceQueryService:
    session: AsyncSession
    limits: SearchLimits = field(default_factory=SearchLimits)

    @property
    def repo(self) -> SourceRepository:
        return SourceRepository(self.session)

    async def list_sources(self) -> List[Source]:
        return await self.repo.list()

    async def list_active(self) -> List[Source]:
        return await self.repo.list_active()

    async def get_source(self, source_id: UUID) -> Source:
        source = await self.repo.get(source_id)
        if source is None:
            raise NotFoundError("Source", source_id)
        return source

    async def search(
        self,
        query: str,
        *,
        source_type: Optional[str] = None,
        active: Optional[bool] = None,
    ) -> List[Source]:
        """
        Search sources by name or feed URL.

        ``source_type`` must be one of the ``SourceType`` values, compared
        case-sensitively; an unknown value raises ``InvalidFilterValueError``
        before any query is issued.
        """
        keywords = parse_keywords(
            query,
            self.limits.max_keyword_count,
            self.limits.max_keyword_length,
        )
        filters = SourceSearchFilters(
            source_type=validate_enum(source_type, SourceType.values(), "source_type"),
            active=active,
        )
        return await self.search_keywords(keywords, filters)

    async def search_keywords(
        self,
        keywords: Sequence[str],
        filters: Optional[SourceSearchFilters] = None,
    ) -> List[Source]:
        filters = filters or SourceSearchFilters()
        logger.info(
            f"Source search: keywords={list(keywords)}, "
            f"source_type={filters.source_type}, active={filters.active}"
        )
        return await run_with_deadline(
            "source search",
            self.repo.search_with_filters(keywords, filters),
            self.limits.timeout_seconds,
        )
