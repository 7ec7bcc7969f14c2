from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from feedhub.core.exceptions import InvalidParameterError, NotFoundError
from feedhub.domains.articles.repositories import ArticleRepository
from feedhub.domains.articles.services.ingestion_service import ArticleIngestionService
from feedhub.domains.sources.repositories import SourceRepository
from feedhub.models.article import ArticleCreateSchema, ArticleUpdateSchema
from tests.utils.builders import create_article, create_source, utc


@pytest.mark.asyncio
async def test_create_article_stores_naive_utc(async_session: AsyncSession) -> None:
    service = ArticleIngestionService(async_session)
    source = await create_source(async_session)

    article, created = await service.create_article(
        ArticleCreateSchema(
            source_id=source.id,
            title="  Release notes  ",
            url="https://example.com/release",
            published_at=datetime(2024, 5, 1, 12, tzinfo=timezone.utc),
        )
    )

    assert created is True
    assert article.title == "Release notes"
    assert article.published_at == datetime(2024, 5, 1, 12)


@pytest.mark.asyncio
async def test_create_article_returns_existing_for_known_url(async_session: AsyncSession) -> None:
    service = ArticleIngestionService(async_session)
    source = await create_source(async_session)
    existing = await create_article(async_session, source, title="Old", url="https://example.com/dup")

    article, created = await service.create_article(
        ArticleCreateSchema(
            source_id=source.id,
            title="New",
            url="https://example.com/dup",
            published_at=datetime(2024, 5, 1),
        )
    )

    assert created is False
    assert article.id == existing.id
    assert article.title == "Old"


@pytest.mark.asyncio
async def test_create_article_requires_source(async_session: AsyncSession) -> None:
    service = ArticleIngestionService(async_session)

    with pytest.raises(NotFoundError):
        await service.create_article(
            ArticleCreateSchema(
                source_id=uuid4(),
                title="Orphan",
                url="https://example.com/orphan",
                published_at=datetime(2024, 5, 1),
            )
        )


@pytest.mark.asyncio
async def test_update_article_changes_only_given_fields(async_session: AsyncSession) -> None:
    service = ArticleIngestionService(async_session)
    source = await create_source(async_session)
    article = await create_article(async_session, source, title="Draft", summary="keep me")

    updated = await service.update_article(article.id, ArticleUpdateSchema(title="Final"))

    assert updated.title == "Final"
    assert updated.summary == "keep me"


@pytest.mark.asyncio
async def test_delete_article(async_session: AsyncSession) -> None:
    service = ArticleIngestionService(async_session)
    source = await create_source(async_session)
    article = await create_article(async_session, source, title="Bye")

    await service.delete_article(article.id)

    assert await ArticleRepository(async_session).get(article.id) is None
    with pytest.raises(NotFoundError):
        await service.delete_article(article.id)


@pytest.mark.asyncio
async def test_ingest_batch_skips_known_and_repeated_urls(
    async_session: AsyncSession,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    service = ArticleIngestionService(async_session)
    source = await create_source(async_session)
    await create_article(async_session, source, title="Known", url="https://example.com/known")

    calls = []
    original = ArticleRepository.exists_by_url_batch

    async def counting_batch_check(self, urls):
        calls.append(list(urls))
        return await original(self, urls)

    monkeypatch.setattr(ArticleRepository, "exists_by_url_batch", counting_batch_check)

    result = await service.ingest_batch(
        source.id,
        [
            {"title": "Known", "url": "https://example.com/known", "published_at": utc(2024, 1, 1)},
            {"title": "Fresh", "url": "https://example.com/fresh", "published_at": "2024-02-01T08:00:00Z"},
            {"title": "Fresh again", "url": "https://example.com/fresh", "published_at": utc(2024, 2, 1)},
        ],
    )

    assert calls == [["https://example.com/known", "https://example.com/fresh"]]
    assert [article.title for article in result.created] == ["Fresh"]
    assert result.created[0].published_at == datetime(2024, 2, 1, 8)
    assert sorted(result.skipped) == ["https://example.com/fresh", "https://example.com/known"]

    refreshed = await SourceRepository(async_session).get(source.id)
    await async_session.refresh(refreshed)
    assert refreshed.last_crawled_at is not None


@pytest.mark.asyncio
async def test_ingest_batch_rejects_unparseable_dates(async_session: AsyncSession) -> None:
    service = ArticleIngestionService(async_session)
    source = await create_source(async_session)

    with pytest.raises(InvalidParameterError):
        await service.ingest_batch(
            source.id,
            [{"title": "Bad", "url": "https://example.com/bad", "published_at": "last week"}],
        )

    assert await ArticleRepository(async_session).exists_by_url("https://example.com/bad") is False


@pytest.mark.asyncio
async def test_ingest_batch_unknown_source(async_session: AsyncSession) -> None:
    service = ArticleIngestionService(async_session)

    with pytest.raises(NotFoundError):
        await service.ingest_batch(uuid4(), [])


@pytest.mark.asyncio
async def test_delete_missing_article_rolls_back(
    async_session: AsyncSession,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    rollback = AsyncMock(wraps=async_session.rollback)
    monkeypatch.setattr(async_session, "rollback", rollback)

    with pytest.raises(NotFoundError):
        await ArticleIngestionService(async_session).delete_article(uuid4())

    rollback.assert_awaited_once()


@pytest.mark.asyncio
async def test_ingest_batch_rejects_entry_without_title(async_session: AsyncSession) -> None:
    service = ArticleIngestionService(async_session)
    source = await create_source(async_session)

    with pytest.raises(InvalidParameterError) as exc_info:
        await service.ingest_batch(
            source.id,
            [{"url": "https://example.com/untitled", "published_at": utc(2024, 1, 1)}],
        )

    assert exc_info.value.field == "title"
    assert await ArticleRepository(async_session).exists_by_url("https://example.com/untitled") is False
