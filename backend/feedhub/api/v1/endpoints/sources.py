"""
Feed source endpoints
"""

from typing import Optional, Dict, Any

from fastapi import APIRouter, Depends, Query, Response, status
from loguru import logger

from feedhub.api.dependencies import get_source_facade
from feedhub.domains.sources import SourceFacade
from feedhub.models import Source
from feedhub.models.source import SourceCreateSchema, SourceUpdateSchema
from feedhub.utils.validation import parse_bool, parse_uuid

router = APIRouter(prefix="/sources", tags=["sources"])


def serialize_source(source: Source) -> Dict[str, Any]:
    return {
        "id": str(source.id),
        "name": source.name,
        "feed_url": source.feed_url,
        "source_type": source.source_type,
        "active": source.active,
        "last_crawled_at": source.last_crawled_at.isoformat() if source.last_crawled_at else None,
        "created_at": source.created_at.isoformat() if source.created_at else None,
        "updated_at": source.updated_at.isoformat() if source.updated_at else None,
    }


@router.get("/", response_model=Dict[str, Any])
@router.get("", response_model=Dict[str, Any], include_in_schema=False)
async def list_sources(
    active: Optional[str] = Query(None, description="Only active sources when true"),
    facade: SourceFacade = Depends(get_source_facade),
):
    sources = await facade.list_sources(active_only=bool(parse_bool(active, "active")))
    return {
        "items": [serialize_source(source) for source in sources],
        "count": len(sources),
    }


@router.get("/search", response_model=Dict[str, Any])
async def search_sources(
    keyword: str = Query("", description="Space-separated keywords matched against name and feed URL"),
    source_type: Optional[str] = Query(None, description="RSS, Webflow, NextJS or Remix (case-sensitive)"),
    active: Optional[str] = Query(None, description="Filter by active flag"),
    facade: SourceFacade = Depends(get_source_facade),
):
    """
    Search sources by keywords in name or feed URL.
    """
    logger.info(f"Source search request: keyword={keyword!r}, source_type={source_type}, active={active}")
    sources = await facade.search_sources(
        keyword,
        source_type=source_type,
        active=parse_bool(active, "active"),
    )
    return {
        "items": [serialize_source(source) for source in sources],
        "count": len(sources),
    }


@router.get("/{source_id}", response_model=Dict[str, Any])
async def get_source(
    source_id: str,
    facade: SourceFacade = Depends(get_source_facade),
):
    source = await facade.get_source(parse_uuid(source_id, "source_id"))
    return serialize_source(source)


@router.post("/", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
@router.post("", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED, include_in_schema=False)
async def create_source(
    payload: SourceCreateSchema,
    facade: SourceFacade = Depends(get_source_facade),
):
    logger.info(f"Create source request: {payload.name}")
    source = await facade.create_source(payload)
    return serialize_source(source)


@router.put("/{source_id}", response_model=Dict[str, Any])
async def update_source(
    source_id: str,
    payload: SourceUpdateSchema,
    facade: SourceFacade = Depends(get_source_facade),
):
    source = await facade.update_source(parse_uuid(source_id, "source_id"), payload)
    return serialize_source(source)


@router.delete("/{source_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_source(
    source_id: str,
    facade: SourceFacade = Depends(get_source_facade),
):
    logger.info(f"Delete source request: {source_id}")
    await facade.delete_source(parse_uuid(source_id, "source_id"))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
