"""
API dependencies
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from feedhub.core.config import settings
from feedhub.core.database import get_db
from feedhub.domains.articles import ArticleFacade
from feedhub.domains.sources import SourceFacade
from feedhub.search import SearchLimits


def get_search_limits() -> SearchLimits:
    """
    Search limits for the current request, read from settings.
    """
    return SearchLimits.from_settings(settings)


def get_article_facade(
    db: AsyncSession = Depends(get_db),
    limits: SearchLimits = Depends(get_search_limits),
) -> ArticleFacade:
    """
    Provide ArticleFacade instance for request-scoped operations.
    """
    return ArticleFacade(db, limits)


def get_source_facade(
    db: AsyncSession = Depends(get_db),
    limits: SearchLimits = Depends(get_search_limits),
) -> SourceFacade:
    """
    Provide SourceFacade instance for request-scoped operations.
    """
    return SourceFacade(db, limits)
