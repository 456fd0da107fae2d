"""
FastAPI router for free-form AI insight generation.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from common.utils import NotFoundException, success_response

from insightmaster.dependencies import get_ai_service, get_article_repository, require_auth
from insightmaster.schemas.ai import GenerateInsightsRequest
from insightmaster.services.ai import AIInsightService, fallback_generated_insights
from insightmaster.services.articles import ArticleRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/generate-insights")
async def generate_insights(
    body: GenerateInsightsRequest,
    user: Annotated[dict, Depends(require_auth)],
    articles: Annotated[ArticleRepository, Depends(get_article_repository)],
    ai_service: Annotated[AIInsightService, Depends(get_ai_service)],
):
    """
    Generate tagged insights for one of the user's articles.

    Another user's article is reported as not found. The optional ``prompt``
    steers what the model should pay attention to.
    """
    article = await articles.find_by_id(body.articleId)
    if not article or str(article.get("userId")) != str(user["_id"]):
        raise NotFoundException(
            message="Article not found or access denied",
            code="ARTICLE_NOT_FOUND",
        )

    result = await ai_service.generate_insights(article, body.prompt)
    if not result.ok:
        logger.warning(f"Using fallback generated insights for article {body.articleId}: {result.error}")
    insights = result.unwrap_or_else(
        lambda _: fallback_generated_insights(article.get("title") or "")
    )

    return success_response({"insights": [i.model_dump() for i in insights]})
