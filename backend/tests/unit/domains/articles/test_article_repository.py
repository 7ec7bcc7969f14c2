from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects.postgresql import asyncpg
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from feedhub.core.exceptions import StorageError
from feedhub.domains.articles.repositories import ArticleRepository, ArticleSearchFilters
from tests.utils.builders import create_article, create_source, utc


@pytest.mark.asyncio
async def test_exists_by_url_batch_reports_only_stored_urls(async_session: AsyncSession) -> None:
    repo = ArticleRepository(async_session)
    source = await create_source(async_session)
    await create_article(async_session, source, title="A", url="https://example.com/a")

    result = await repo.exists_by_url_batch(["https://example.com/a", "https://example.com/b"])

    assert result == {"https://example.com/a": True}


@pytest.mark.asyncio
async def test_exists_by_url_batch_collapses_duplicate_input(async_session: AsyncSession) -> None:
    repo = ArticleRepository(async_session)
    source = await create_source(async_session)
    await create_article(async_session, source, title="A", url="a")

    result = await repo.exists_by_url_batch(["a", "a", "b"])

    assert result == {"a": True}


@pytest.mark.asyncio
async def test_exists_by_url_batch_uses_a_single_query(async_session: AsyncSession) -> None:
    repo = ArticleRepository(async_session)
    source = await create_source(async_session)
    await create_article(async_session, source, title="A", url="a")
    await create_article(async_session, source, title="B", url="b")

    spy = AsyncMock(wraps=async_session.execute)
    async_session.execute = spy  # type: ignore[method-assign]

    result = await repo.exists_by_url_batch(["a", "b", "c", "d"])

    assert result == {"a": True, "b": True}
    assert spy.await_count == 1


@pytest.mark.asyncio
async def test_exists_by_url_batch_empty_input_skips_storage() -> None:
    session = AsyncMock(spec=AsyncSession)
    repo = ArticleRepository(session)

    assert await repo.exists_by_url_batch([]) == {}
    session.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_exists_by_url_batch_sends_large_batches_as_one_parameter_on_postgres() -> None:
    session = AsyncMock(spec=AsyncSession)
    session.get_bind.return_value.dialect.name = "postgresql"
    result = MagicMock()
    result.scalars.return_value.all.return_value = ["https://example.com/7"]
    session.execute.return_value = result
    repo = ArticleRepository(session)
    urls = [f"https://example.com/{i}" for i in range(40000)]

    found = await repo.exists_by_url_batch(urls)

    assert found == {"https://example.com/7": True}
    session.execute.assert_awaited_once()
    stmt = session.execute.await_args.args[0]
    compiled = stmt.compile(
        dialect=asyncpg.dialect(),
        compile_kwargs={"render_postcompile": True},
    )
    assert len(compiled.params) == 1


@pytest.mark.asyncio
async def test_exists_by_url_batch_wraps_storage_failures() -> None:
    session = AsyncMock(spec=AsyncSession)
    cause = OperationalError("SELECT", {}, Exception("connection lost"))
    session.execute.side_effect = cause
    repo = ArticleRepository(session)

    with pytest.raises(StorageError) as exc_info:
        await repo.exists_by_url_batch(["a"])

    assert exc_info.value.__cause__ is cause


@pytest.mark.asyncio
async def test_exists_by_url(async_session: AsyncSession) -> None:
    repo = ArticleRepository(async_session)
    source = await create_source(async_session)
    await create_article(async_session, source, title="A", url="a")

    assert await repo.exists_by_url("a") is True
    assert await repo.exists_by_url("b") is False


@pytest.mark.asyncio
async def test_search_requires_every_keyword(async_session: AsyncSession) -> None:
    repo = ArticleRepository(async_session)
    source = await create_source(async_session)
    await create_article(async_session, source, title="Go and React", summary="frontend")
    await create_article(async_session, source, title="Go only", summary="backend")
    await create_article(async_session, source, title="Go tips", summary="React hooks")

    results = await repo.search_with_filters(["go", "react"])

    assert sorted(item.article.title for item in results) == ["Go and React", "Go tips"]


@pytest.mark.asyncio
async def test_search_is_case_insensitive(async_session: AsyncSession) -> None:
    repo = ArticleRepository(async_session)
    source = await create_source(async_session)
    await create_article(async_session, source, title="Learning GOLANG")

    results = await repo.search_with_filters(["golang"])

    assert [item.article.title for item in results] == ["Learning GOLANG"]


@pytest.mark.asyncio
async def test_search_treats_wildcards_literally(async_session: AsyncSession) -> None:
    repo = ArticleRepository(async_session)
    source = await create_source(async_session)
    await create_article(async_session, source, title="Save 100% now")
    await create_article(async_session, source, title="Save 1000 now")
    await create_article(async_session, source, title="snake_case names")
    await create_article(async_session, source, title="snakeXcase names")

    percent = await repo.search_with_filters(["100%"])
    underscore = await repo.search_with_filters(["snake_case"])

    assert [item.article.title for item in percent] == ["Save 100% now"]
    assert [item.article.title for item in underscore] == ["snake_case names"]


@pytest.mark.asyncio
async def test_search_orders_newest_first_and_includes_source_name(async_session: AsyncSession) -> None:
    repo = ArticleRepository(async_session)
    source = await create_source(async_session, name="Go Weekly")
    await create_article(async_session, source, title="go old", published_at=utc(2024, 1, 1))
    await create_article(async_session, source, title="go new", published_at=utc(2024, 3, 1))
    await create_article(async_session, source, title="go mid", published_at=utc(2024, 2, 1))

    results = await repo.search_with_filters(["go"])

    assert [item.article.title for item in results] == ["go new", "go mid", "go old"]
    assert {item.source_name for item in results} == {"Go Weekly"}


@pytest.mark.asyncio
async def test_search_with_empty_filters_matches_keyword_only_search(async_session: AsyncSession) -> None:
    repo = ArticleRepository(async_session)
    first = await create_source(async_session, name="First")
    second = await create_source(async_session, name="Second")
    await create_article(async_session, first, title="python news", published_at=utc(2024, 1, 1))
    await create_article(async_session, second, title="python tips", published_at=utc(2024, 2, 1))
    await create_article(async_session, second, title="rust tips")

    keyword_only = await repo.search_with_filters(["python"])
    unset_filters = await repo.search_with_filters(["python"], ArticleSearchFilters())

    assert [item.article.id for item in unset_filters] == [item.article.id for item in keyword_only]
    assert [item.article.title for item in keyword_only] == ["python tips", "python news"]


@pytest.mark.asyncio
async def test_search_filters_by_source(async_session: AsyncSession) -> None:
    repo = ArticleRepository(async_session)
    first = await create_source(async_session, name="First")
    second = await create_source(async_session, name="Second")
    await create_article(async_session, first, title="python news")
    await create_article(async_session, second, title="python tips")

    results = await repo.search_with_filters(
        ["python"],
        ArticleSearchFilters(source_id=second.id),
    )

    assert [item.article.title for item in results] == ["python tips"]


@pytest.mark.asyncio
async def test_search_date_bounds_are_inclusive(async_session: AsyncSession) -> None:
    repo = ArticleRepository(async_session)
    source = await create_source(async_session)
    await create_article(async_session, source, title="rust before", published_at=utc(2023, 12, 31, 23))
    await create_article(async_session, source, title="rust start", published_at=utc(2024, 1, 1))
    await create_article(async_session, source, title="rust end", published_at=utc(2024, 1, 31))
    await create_article(async_session, source, title="rust after", published_at=utc(2024, 1, 31, 1))

    results = await repo.search_with_filters(
        ["rust"],
        ArticleSearchFilters(published_from=utc(2024, 1, 1), published_to=utc(2024, 1, 31)),
    )

    assert [item.article.title for item in results] == ["rust end", "rust start"]


@pytest.mark.asyncio
async def test_search_with_inverted_range_is_empty(async_session: AsyncSession) -> None:
    repo = ArticleRepository(async_session)
    source = await create_source(async_session)
    await create_article(async_session, source, title="rust", published_at=utc(2024, 1, 15))

    results = await repo.search_with_filters(
        ["rust"],
        ArticleSearchFilters(published_from=utc(2024, 2, 1), published_to=utc(2024, 1, 1)),
    )

    assert results == []


@pytest.mark.asyncio
async def test_search_wraps_storage_failures() -> None:
    session = AsyncMock(spec=AsyncSession)
    session.execute.side_effect = OperationalError("SELECT", {}, Exception("timeout"))
    repo = ArticleRepository(session)

    with pytest.raises(StorageError):
        await repo.search_with_filters(["go"])


@pytest.mark.asyncio
async def test_delete_by_source_removes_only_that_source(async_session: AsyncSession) -> None:
    repo = ArticleRepository(async_session)
    first = await create_source(async_session, name="First")
    second = await create_source(async_session, name="Second")
    await create_article(async_session, first, title="one")
    await create_article(async_session, first, title="two")
    await create_article(async_session, second, title="three")

    removed = await repo.delete_by_source(first.id)
    await async_session.commit()

    assert removed == 2
    assert [article.title for article in await repo.list()] == ["three"]
