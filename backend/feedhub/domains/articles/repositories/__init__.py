"""
Repository layer for the articles domain.

Repositories encapsulate database access and SQLAlchemy queries. Higher layers
should depend on repository interfaces rather than raw sessions.
"""

from .article_repository import (  # noqa: F401
    ArticleRepository,
    ArticleSearchFilters,
    ArticleWithSource,
)
