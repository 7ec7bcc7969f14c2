"""
Article endpoints: listing, keyword search, CRUD and batch URL existence
"""

from typing import Optional, Dict, Any

from fastapi import APIRouter, Depends, Query, Response, status
from loguru import logger

from feedhub.api.dependencies import get_article_facade
from feedhub.domains.articles import ArticleFacade, ArticleSearchFilters
from feedhub.models import Article
from feedhub.models.article import (
    ArticleCreateSchema,
    ArticleExistsRequest,
    ArticleExistsResponse,
    ArticleUpdateSchema,
)
from feedhub.utils.validation import parse_date_iso8601, parse_uuid

router = APIRouter(prefix="/articles", tags=["articles"])


def serialize_article(article: Article, source_name: Optional[str] = None) -> Dict[str, Any]:
    return {
        "id": str(article.id),
        "source_id": str(article.source_id),
        "source_name": source_name,
        "title": article.title,
        "url": article.url,
        "summary": article.summary,
        "published_at": article.published_at.isoformat() if article.published_at else None,
        "created_at": article.created_at.isoformat() if article.created_at else None,
        "updated_at": article.updated_at.isoformat() if article.updated_at else None,
    }


@router.get("/", response_model=Dict[str, Any])
@router.get("", response_model=Dict[str, Any], include_in_schema=False)
async def list_articles(
    limit: Optional[int] = Query(None, ge=1, le=1000, description="Maximum number of articles"),
    offset: int = Query(0, ge=0, description="Number of articles to skip"),
    facade: ArticleFacade = Depends(get_article_facade),
):
    """
    List articles, newest first, with the name of their source.
    """
    items = await facade.list_articles(limit=limit, offset=offset)
    return {
        "items": [serialize_article(item.article, item.source_name) for item in items],
        "count": len(items),
    }


@router.get("/search", response_model=Dict[str, Any])
async def search_articles(
    keyword: str = Query("", description="Space-separated keywords; every keyword must match"),
    source_id: Optional[str] = Query(None, description="Restrict to one source"),
    date_from: Optional[str] = Query(None, alias="from", description="Published on or after (ISO 8601)"),
    date_to: Optional[str] = Query(None, alias="to", description="Published on or before (ISO 8601)"),
    facade: ArticleFacade = Depends(get_article_facade),
):
    """
    Search articles by keywords in title or summary.

    Keywords are matched case-insensitively as literal substrings, so ``%``
    and ``_`` carry no special meaning.
    """
    logger.info(f"Article search request: keyword={keyword!r}, source_id={source_id}, from={date_from}, to={date_to}")
    filters = ArticleSearchFilters(
        source_id=parse_uuid(source_id, "source_id") if source_id else None,
        published_from=parse_date_iso8601(date_from, "from"),
        published_to=parse_date_iso8601(date_to, "to"),
    )
    items = await facade.search_articles(keyword, filters)
    return {
        "items": [serialize_article(item.article, item.source_name) for item in items],
        "count": len(items),
    }


@router.post("/exists", response_model=ArticleExistsResponse)
async def check_articles_exist(
    payload: ArticleExistsRequest,
    facade: ArticleFacade = Depends(get_article_facade),
):
    """
    Report which of the given URLs are already stored.

    Only stored URLs are listed in ``existing``; absent URLs are omitted.
    """
    existing = await facade.exists_batch(payload.urls)
    return ArticleExistsResponse(existing=existing)


@router.get("/{article_id}", response_model=Dict[str, Any])
async def get_article(
    article_id: str,
    facade: ArticleFacade = Depends(get_article_facade),
):
    item = await facade.get_article(parse_uuid(article_id, "article_id"))
    return serialize_article(item.article, item.source_name)


@router.post(
    "/",
    response_model=Dict[str, Any],
    status_code=status.HTTP_201_CREATED,
)
@router.post(
    "",
    response_model=Dict[str, Any],
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def create_article(
    payload: ArticleCreateSchema,
    response: Response,
    facade: ArticleFacade = Depends(get_article_facade),
):
    logger.info(f"Create article request: {payload.url}")
    article, created = await facade.create_article(payload)
    if not created:
        response.status_code = status.HTTP_200_OK
    return serialize_article(article)


@router.put("/{article_id}", response_model=Dict[str, Any])
async def update_article(
    article_id: str,
    payload: ArticleUpdateSchema,
    facade: ArticleFacade = Depends(get_article_facade),
):
    article = await facade.update_article(parse_uuid(article_id, "article_id"), payload)
    return serialize_article(article)


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(
    article_id: str,
    facade: ArticleFacade = Depends(get_article_facade),
):
    logger.info(f"Delete article request: {article_id}")
    await facade.delete_article(parse_uuid(article_id, "article_id"))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
