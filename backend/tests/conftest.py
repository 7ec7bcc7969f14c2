"""Shared test fixtures for backend tests."""

from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects.postgresql import ENUM, UUID as PGUUID
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

from feedhub.core.database import get_db
from feedhub.domains.articles import ArticleFacade
from feedhub.domains.sources import SourceFacade
from feedhub.main import app as fastapi_app
from feedhub.models import Base


SQLITE_TEST_URL = "sqlite+aiosqlite:///:memory:"


@compiles(PGUUID, "sqlite")
def compile_uuid(element, compiler, **kw):  # type: ignore[override]
    return "CHAR(36)"


@compiles(ENUM, "sqlite")
def compile_enum(element, compiler, **kw):  # type: ignore[override]
    # emulate enum via TEXT in SQLite
    return "VARCHAR"


@pytest_asyncio.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Provide a fresh in-memory SQLite engine per test."""
    engine = create_async_engine(
        SQLITE_TEST_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def async_session_factory(
    async_engine: AsyncEngine,
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Provide an async session factory bound to the test engine."""
    factory = async_sessionmaker(
        async_engine,
        expire_on_commit=False,
        class_=AsyncSession,
    )
    yield factory


@pytest_asyncio.fixture
async def async_session(
    async_session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Yield an AsyncSession and ensure rollback between tests."""
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest_asyncio.fixture
async def article_facade(async_session: AsyncSession) -> AsyncGenerator[ArticleFacade, None]:
    yield ArticleFacade(async_session)


@pytest_asyncio.fixture
async def source_facade(async_session: AsyncSession) -> AsyncGenerator[SourceFacade, None]:
    yield SourceFacade(async_session)


@pytest_asyncio.fixture
async def test_app(async_session: AsyncSession) -> AsyncGenerator[FastAPI, None]:
    """Provide FastAPI app with the database dependency bound to the test session."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield async_session

    fastapi_app.dependency_overrides[get_db] = override_get_db

    yield fastapi_app

    fastapi_app.dependency_overrides.pop(get_db, None)


@pytest_asyncio.fixture
async def async_client(test_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """HTTPX async client bound to the FastAPI app."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
