"""
Version 1 API router configuration.
"""

from fastapi import APIRouter

from feedhub.api.v1.endpoints import articles, sources

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(articles.router)
api_router.include_router(sources.router)
