"""
Write operations for feed sources.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from feedhub.core.exceptions import NotFoundError, SourceServiceError, ValidationError
from feedhub.domains.articles.repositories import ArticleRepository
from feedhub.models import Source
from feedhub.models.source import SourceCreateSchema, SourceUpdateSchema
from feedhub.utils.datetime_utils import to_naive_utc, utc_now_naive

from ..repositories import SourceRepository


@dataclass
class SourceManagementService:
    session: AsyncSession

    def __post_init__(self) -> None:
        self._repo = SourceRepository(self.session)
        self._article_repo = ArticleRepository(self.session)

    async def create_source(self, payload: SourceCreateSchema) -> Source:
        feed_url = str(payload.feed_url)
        try:
            if await self._repo.get_by_feed_url(feed_url) is not None:
                raise ValidationError(
                    f"source with feed URL '{feed_url}' already exists",
                    {"field": "feed_url", "value": feed_url},
                )
            source = Source(
                name=payload.name,
                feed_url=feed_url,
                source_type=payload.source_type.value,
                active=payload.active,
            )
            await self._repo.create(source)
            await self.session.commit()
            await self.session.refresh(source)
            logger.info(f"Created source {source.id} ({source.name})")
            return source
        except ValidationError:
            await self.session.rollback()
            raise
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.exception("Failed to create source")
            raise SourceServiceError(f"Failed to create source: {exc}") from exc

    async def update_source(self, source_id: UUID, payload: SourceUpdateSchema) -> Source:
        try:
            source = await self._repo.get(source_id)
            if source is None:
                raise NotFoundError("Source", source_id)

            data = {
                key: value
                for key, value in payload.model_dump(exclude_unset=True).items()
                if value is not None
            }
            if "feed_url" in data:
                data["feed_url"] = str(data["feed_url"])
                other = await self._repo.get_by_feed_url(data["feed_url"])
                if other is not None and other.id != source.id:
                    raise ValidationError(
                        f"source with feed URL '{data['feed_url']}' already exists",
                        {"field": "feed_url", "value": data["feed_url"]},
                    )
            if "source_type" in data:
                data["source_type"] = data["source_type"].value

            await self._repo.update(source, data)
            await self.session.commit()
            await self.session.refresh(source)
            logger.info(f"Updated source {source_id}")
            return source
        except (ValidationError, NotFoundError):
            await self.session.rollback()
            raise
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.exception(f"Failed to update source {source_id}")
            raise SourceServiceError(f"Failed to update source: {exc}") from exc

    async def delete_source(self, source_id: UUID) -> int:
        """Delete a source together with its articles; returns the article count removed."""
        try:
            source = await self._repo.get(source_id)
            if source is None:
                raise NotFoundError("Source", source_id)
            removed = await self._article_repo.delete_by_source(source_id)
            await self._repo.delete(source)
            await self.session.commit()
            logger.info(f"Deleted source {source_id} and {removed} articles")
            return removed
        except NotFoundError:
            await self.session.rollback()
            raise
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.exception(f"Failed to delete source {source_id}")
            raise SourceServiceError(f"Failed to delete source: {exc}") from exc

    async def touch_crawled_at(self, source_id: UUID, crawled_at: Optional[datetime] = None) -> None:
        try:
            timestamp = to_naive_utc(crawled_at) if crawled_at is not None else utc_now_naive()
            if not await self._repo.touch_crawled_at(source_id, timestamp):
                raise NotFoundError("Source", source_id)
            await self.session.commit()
        except NotFoundError:
            await self.session.rollback()
            raise
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.exception(f"Failed to update crawl time for source {source_id}")
            raise SourceServiceError(f"Failed to update crawl time: {exc}") from exc
