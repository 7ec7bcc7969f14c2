"""
Service layer for the articles domain.
"""

from .ingestion_service import ArticleIngestionService, IngestionResult  # noqa: F401
from .query_service import ArticleQueryService  # noqa: F401
