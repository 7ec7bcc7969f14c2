"""
Sources domain facade.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from feedhub.models import Source
from feedhub.models.source import SourceCreateSchema, SourceUpdateSchema
from feedhub.search import SearchLimits

from .services.management_service import SourceManagementService
from .services.query_service import SourceQueryService


@dataclass
class SourceFacade:
    """Facade coordinating source services."""

    session: AsyncSession
    limits: SearchLimits = field(default_factory=SearchLimits)

    @property
    def query_service(self) -> SourceQueryService:
        return SourceQueryService(self.session, self.limits)

    @property
    def management_service(self) -> SourceManagementService:
        return SourceManagementService(self.session)

    async def list_sources(self, *, active_only: bool = False) -> List[Source]:
        if active_only:
            return await self.query_service.list_active()
        return await self.query_service.list_sources()

    async def get_source(self, source_id: UUID) -> Source:
        return await self.query_service.get_source(source_id)

    async def search_sources(
        self,
        query: str,
        *,
        source_type: Optional[str] = None,
        active: Optional[bool] = None,
    ) -> List[Source]:
        return await self.query_service.search(query, source_type=source_type, active=active)

    async def create_source(self, payload: SourceCreateSchema) -> Source:
        return await self.management_service.create_source(payload)

    async def update_source(self, source_id: UUID, payload: SourceUpdateSchema) -> Source:
        return await self.management_service.update_source(source_id, payload)

    async def delete_source(self, source_id: UUID) -> int:
        return await self.management_service.delete_source(source_id)

    async def touch_crawled_at(self, source_id: UUID, crawled_at: Optional[datetime] = None) -> None:
        await self.management_service.touch_crawled_at(source_id, crawled_at)
