"""
Ingestion service for the articles domain.

Handles creation, update and deletion flows as well as batch ingestion of
crawled feed entries. Deduplication by URL goes through a single batch
existence query per batch.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Sequence, Tuple
from uuid import UUID

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from feedhub.core.exceptions import (
    ArticleServiceError,
    InvalidParameterError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from feedhub.domains.sources.repositories import SourceRepository
from feedhub.models import Article
from feedhub.models.article import ArticleCreateSchema, ArticleUpdateSchema
from feedhub.utils.datetime_utils import parse_iso8601, to_naive_utc, utc_now_naive

from ..repositories import ArticleRepository


@dataclass
class IngestionResult:
    created: List[Article] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def created_count(self) -> int:
        return len(self.created)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


@dataclass
class ArticleIngestionService:
    session: AsyncSession

    def __post_init__(self) -> None:
        self._repo = ArticleRepository(self.session)
        self._source_repo = SourceRepository(self.session)

    async def create_article(self, payload: ArticleCreateSchema) -> Tuple[Article, bool]:
        """
        Store a new article.

        Returns ``(article, created)``. When the URL is already stored the
        existing article is returned with ``created`` set to ``False``.
        """
        url = str(payload.url)
        try:
            if await self._source_repo.get(payload.source_id) is None:
                raise NotFoundError("Source", payload.source_id)

            existing = await self._repo.get_by_url(url)
            if existing is not None:
                logger.debug(f"Existing article found for URL {url}")
                return existing, False

            article = Article(
                source_id=payload.source_id,
                title=payload.title,
                url=url,
                summary=payload.summary,
                published_at=to_naive_utc(payload.published_at),
            )
            await self._repo.create(article)
            await self.session.commit()
            await self.session.refresh(article)
            logger.info(f"Created article {article.id} from source {payload.source_id}")
            return article, True
        except (ValidationError, NotFoundError, StorageError):
            await self.session.rollback()
            raise
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.exception("Failed to create article")
            raise ArticleServiceError(f"Failed to create article: {exc}") from exc

    async def update_article(self, article_id: UUID, payload: ArticleUpdateSchema) -> Article:
        try:
            article = await self._repo.get(article_id)
            if article is None:
                raise NotFoundError("Article", article_id)

            # Only summary may be cleared; other columns are NOT NULL.
            data = {
                key: value
                for key, value in payload.model_dump(exclude_unset=True).items()
                if value is not None or key == "summary"
            }
            if "url" in data:
                data["url"] = str(data["url"])
            if "published_at" in data:
                data["published_at"] = to_naive_utc(data["published_at"])
            if "source_id" in data:
                if await self._source_repo.get(data["source_id"]) is None:
                    raise NotFoundError("Source", data["source_id"])

            await self._repo.update(article, data)
            await self.session.commit()
            await self.session.refresh(article)
            logger.info(f"Updated article {article_id}")
            return article
        except (ValidationError, NotFoundError, StorageError):
            await self.session.rollback()
            raise
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.exception(f"Failed to update article {article_id}")
            raise ArticleServiceError(f"Failed to update article: {exc}") from exc

    async def delete_article(self, article_id: UUID) -> None:
        try:
            article = await self._repo.get(article_id)
            if article is None:
                raise NotFoundError("Article", article_id)
            await self._repo.delete(article)
            await self.session.commit()
            logger.info(f"Deleted article {article_id}")
        except NotFoundError:
            await self.session.rollback()
            raise
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.exception(f"Failed to delete article {article_id}")
            raise ArticleServiceError(f"Failed to delete article: {exc}") from exc

    async def ingest_batch(
        self,
        source_id: UUID,
        entries: Sequence[Mapping[str, Any]],
    ) -> IngestionResult:
        """
        Store crawled entries for ``source_id``, skipping known URLs.

        Each entry needs ``title``, ``url`` and ``published_at`` (a datetime or
        an ISO 8601 string); ``summary`` is optional. URLs repeated within the
        batch are kept once. The source's ``last_crawled_at`` is updated even
        when nothing new was found.
        """
        result = IngestionResult()
        try:
            if await self._source_repo.get(source_id) is None:
                raise NotFoundError("Source", source_id)

            unique: Dict[str, Mapping[str, Any]] = {}
            for entry in entries:
                url = entry.get("url")
                if not url:
                    logger.warning(f"Skipping entry without URL for source {source_id}")
                    continue
                if url in unique:
                    result.skipped.append(url)
                    continue
                unique[url] = entry

            existing = await self._repo.exists_by_url_batch(list(unique))
            new_articles = []
            for url, entry in unique.items():
                if existing.get(url):
                    result.skipped.append(url)
                    continue
                new_articles.append(
                    Article(
                        source_id=source_id,
                        title=self._entry_title(entry),
                        url=url,
                        summary=entry.get("summary"),
                        published_at=self._entry_published_at(entry),
                    )
                )

            if new_articles:
                await self._repo.add_all(new_articles)
            await self._source_repo.touch_crawled_at(source_id, utc_now_naive())
            await self.session.commit()
            result.created.extend(new_articles)
        except (ValidationError, NotFoundError, StorageError):
            await self.session.rollback()
            raise
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.exception(f"Failed to ingest batch for source {source_id}")
            raise ArticleServiceError(f"Failed to ingest batch: {exc}") from exc

        logger.info(
            f"Ingested batch for source {source_id}: "
            f"{result.created_count} created, {result.skipped_count} skipped"
        )
        return result

    @staticmethod
    def _entry_title(entry: Mapping[str, Any]) -> str:
        title = entry.get("title")
        if not isinstance(title, str) or not title.strip():
            raise InvalidParameterError("title", str(title), "non-empty string")
        return title.strip()

    @staticmethod
    def _entry_published_at(entry: Mapping[str, Any]) -> datetime:
        value = entry.get("published_at")
        if isinstance(value, datetime):
            return to_naive_utc(value)
        parsed = parse_iso8601(value) if isinstance(value, str) else None
        if parsed is None:
            raise InvalidParameterError("published_at", str(value), "ISO 8601 datetime")
        return to_naive_utc(parsed)
