"""
Repository layer for the sources domain.
"""

from .source_repository import SourceRepository, SourceSearchFilters  # noqa: F401
