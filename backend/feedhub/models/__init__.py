"""
Models package
"""

from .base import Base, BaseModel
from .source import Source, SourceType
from .article import Article

__all__ = [
    "Base",
    "BaseModel",
    "Source",
    "SourceType",
    "Article",
]
