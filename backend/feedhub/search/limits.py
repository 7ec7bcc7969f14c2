"""
Bounds applied to a single search request.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_MAX_KEYWORD_COUNT = 10
DEFAULT_MAX_KEYWORD_LENGTH = 100
DEFAULT_SEARCH_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True)
class SearchLimits:
    """Input-validation limits and storage deadline for one search call.

    The limits bound query size; they are not a performance guarantee.
    """

    max_keyword_count: int = DEFAULT_MAX_KEYWORD_COUNT
    max_keyword_length: int = DEFAULT_MAX_KEYWORD_LENGTH
    timeout_seconds: float = DEFAULT_SEARCH_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        if self.max_keyword_count < 1:
            raise ValueError("max_keyword_count must be >= 1")
        if self.max_keyword_length < 1:
            raise ValueError("max_keyword_length must be >= 1")
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")

    @classmethod
    def from_settings(cls, settings) -> "SearchLimits":
        return cls(
            max_keyword_count=settings.SEARCH_MAX_KEYWORD_COUNT,
            max_keyword_length=settings.SEARCH_MAX_KEYWORD_LENGTH,
            timeout_seconds=settings.SEARCH_TIMEOUT_SECONDS,
        )
