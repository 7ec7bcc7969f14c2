"""
Articles domain package.

Provides the facade, services and repository for working with articles
collected from feed sources.
"""

from .facade import ArticleFacade  # noqa: F401
from .services.query_service import ArticleQueryService  # noqa: F401
from .services.ingestion_service import ArticleIngestionService, IngestionResult  # noqa: F401
from .repositories import ArticleRepository, ArticleSearchFilters, ArticleWithSource  # noqa: F401
