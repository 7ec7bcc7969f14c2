"""
Service layer for the sources domain.
"""

from .management_service import SourceManagementService
from .query_service import SourceQueryService

__all__ = [
    "SourceManagementService",
    "SourceQueryService",
]
