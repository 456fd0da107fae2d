"""
FastAPI router for article Insight endpoints.

User insights live embedded in the article document; these endpoints list,
add, edit and remove them.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from common.utils import BadRequestException, NotFoundException, success_response

from insightmaster.dependencies import (
    get_article_repository,
    load_owned_article,
    require_auth,
)
from insightmaster.models.article import serialize_article
from insightmaster.models.categories import ArticleInsightCategory
from insightmaster.models.insight import ArticleInsight
from insightmaster.schemas.article import InsightCreateRequest, InsightUpdateRequest
from insightmaster.services.articles import ArticleRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/articles/{article_id}/insights", tags=["insights"])


@router.get("")
async def list_insights(
    article_id: str,
    user: Annotated[dict, Depends(require_auth)],
    articles: Annotated[ArticleRepository, Depends(get_article_repository)],
):
    """List the user insights and AI insights of an article."""
    article = serialize_article(await load_owned_article(article_id, user, articles))
    return success_response({
        "insights": article["insights"],
        "aiInsights": article["aiInsights"],
    })


@router.post("", status_code=201)
async def add_insight(
    article_id: str,
    body: InsightCreateRequest,
    user: Annotated[dict, Depends(require_auth)],
    articles: Annotated[ArticleRepository, Depends(get_article_repository)],
):
    """
    Add a user insight to an article.

    Content and category are required. Unknown categories are stored as
    ``other``.
    """
    if not body.content:
        raise BadRequestException(message="Insight content is required", code="MISSING_CONTENT")
    if not body.category:
        raise BadRequestException(message="Insight category is required", code="MISSING_CATEGORY")

    await load_owned_article(article_id, user, articles)

    insight = ArticleInsight(
        content=body.content,
        category=body.category,
        evidence=body.evidence,
    )
    doc = await articles.add_insight(article_id, str(user["_id"]), insight)
    if not doc:
        raise NotFoundException(message="Article not found", code="ARTICLE_NOT_FOUND")

    logger.info(f"Added insight {insight.id} to article {article_id}")
    return success_response({"article": serialize_article(doc)}, message="Insight added")


@router.put("/{insight_id}")
async def update_insight(
    article_id: str,
    insight_id: str,
    body: InsightUpdateRequest,
    user: Annotated[dict, Depends(require_auth)],
    articles: Annotated[ArticleRepository, Depends(get_article_repository)],
):
    """Edit one insight. Only provided fields are changed."""
    article = await load_owned_article(article_id, user, articles)
    if not any(i.get("id") == insight_id for i in article.get("insights") or []):
        raise NotFoundException(message="Insight not found", code="INSIGHT_NOT_FOUND")

    updates = body.model_dump(exclude_unset=True)
    if updates.get("category") is not None:
        updates["category"] = ArticleInsightCategory.parse(updates["category"])

    doc = await articles.update_insight(article_id, str(user["_id"]), insight_id, updates)
    if not doc:
        raise NotFoundException(message="Insight not found", code="INSIGHT_NOT_FOUND")

    return success_response({"article": serialize_article(doc)}, message="Insight updated")


@router.delete("/{insight_id}")
async def delete_insight(
    article_id: str,
    insight_id: str,
    user: Annotated[dict, Depends(require_auth)],
    articles: Annotated[ArticleRepository, Depends(get_article_repository)],
):
    """Remove one insight from an article."""
    article = await load_owned_article(article_id, user, articles)
    if not any(i.get("id") == insight_id for i in article.get("insights") or []):
        raise NotFoundException(message="Insight not found", code="INSIGHT_NOT_FOUND")

    doc = await articles.delete_insight(article_id, str(user["_id"]), insight_id)
    if not doc:
        raise NotFoundException(message="Article not found", code="ARTICLE_NOT_FOUND")

    return success_response({"article": serialize_article(doc)}, message="Insight deleted")
