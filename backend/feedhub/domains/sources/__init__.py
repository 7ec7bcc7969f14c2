"""
Sources domain package.

Feed sources that articles are crawled from.
"""

from .facade import SourceFacade  # noqa: F401
from .services.query_service import SourceQueryService  # noqa: F401
from .services.management_service import SourceManagementService  # noqa: F401
from .repositories import SourceRepository, SourceSearchFilters  # noqa: F401
