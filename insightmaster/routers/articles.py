"""
FastAPI router for Article endpoints.

CRUD over the current user's articles. Listing supports a status filter,
tag filter, keyword search and skip/limit paging.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from common.utils import NotFoundException, success_response

from insightmaster.dependencies import (
    get_article_repository,
    load_owned_article,
    require_auth,
)
from insightmaster.models.article import ArticleStatus, serialize_article
from insightmaster.schemas.article import ArticleCreateRequest, ArticleUpdateRequest
from insightmaster.services.articles import ArticleRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/articles", tags=["articles"])


def article_fields(body: BaseModel, **dump_options) -> dict:
    """Request body as document fields; datetimes stay native, status is stored by value."""
    fields = body.model_dump(exclude_none=True, **dump_options)
    if "status" in fields:
        fields["status"] = ArticleStatus(fields["status"]).value
    return fields


@router.get("")
async def list_articles(
    user: Annotated[dict, Depends(require_auth)],
    articles: Annotated[ArticleRepository, Depends(get_article_repository)],
    status: Optional[ArticleStatus] = None,
    tag: Optional[str] = None,
    search: Optional[str] = None,
    limit: int = Query(10, ge=1, le=100),
    skip: int = Query(0, ge=0),
):
    """
    List the current user's articles.

    ``tag`` takes precedence over ``search``, which takes precedence over the
    plain status-filtered listing.
    """
    user_id = str(user["_id"])
    status_value = status.value if status else None

    if tag:
        docs = await articles.find_by_tag(user_id, tag, limit=limit, skip=skip)
    elif search:
        docs = await articles.search(user_id, search, limit=limit, skip=skip)
    else:
        docs = await articles.find_by_user(user_id, status=status_value, limit=limit, skip=skip)

    total = await articles.count_by_user(user_id, status=status_value)

    return success_response({
        "articles": [serialize_article(doc) for doc in docs],
        "total": total,
        "limit": limit,
        "skip": skip,
    })


@router.post("", status_code=201)
async def create_article(
    body: ArticleCreateRequest,
    user: Annotated[dict, Depends(require_auth)],
    articles: Annotated[ArticleRepository, Depends(get_article_repository)],
):
    """Create a new article."""
    doc = await articles.create(str(user["_id"]), article_fields(body))
    return success_response(serialize_article(doc), message="Article created")


@router.get("/{article_id}")
async def get_article(
    article_id: str,
    user: Annotated[dict, Depends(require_auth)],
    articles: Annotated[ArticleRepository, Depends(get_article_repository)],
):
    """Get one of the current user's articles."""
    article = await load_owned_article(article_id, user, articles)
    return success_response(serialize_article(article))


@router.put("/{article_id}")
async def update_article(
    article_id: str,
    body: ArticleUpdateRequest,
    user: Annotated[dict, Depends(require_auth)],
    articles: Annotated[ArticleRepository, Depends(get_article_repository)],
):
    """Update an article. Only provided fields are changed."""
    await load_owned_article(article_id, user, articles)

    updates = article_fields(body, exclude_unset=True)
    doc = await articles.update(article_id, str(user["_id"]), updates)
    if not doc:
        raise NotFoundException(message="Article not found", code="ARTICLE_NOT_FOUND")

    return success_response(serialize_article(doc), message="Article updated")


@router.delete("/{article_id}")
async def delete_article(
    article_id: str,
    user: Annotated[dict, Depends(require_auth)],
    articles: Annotated[ArticleRepository, Depends(get_article_repository)],
):
    """Delete an article."""
    await load_owned_article(article_id, user, articles)
    await articles.delete(article_id, str(user["_id"]))

    return success_response(message="Article deleted")
