"""
FastAPI router for AI article analysis.

Runs the AI insight service against a stored article, persists the AI
insights, and compares them with the user's own insights. AI failures fall
back to static data so these endpoints stay usable without an API key.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends

from common.utils import BadRequestException, success_response

from insightmaster.dependencies import (
    get_ai_service,
    get_article_repository,
    load_owned_article,
    require_auth,
)
from insightmaster.models.article import serialize_article
from insightmaster.models.categories import AnalysisLevel
from insightmaster.models.insight import AiInsight, ArticleInsight
from insightmaster.schemas.article import AnalyzeRequest
from insightmaster.services.ai import (
    AIInsightService,
    fallback_ai_insights,
    fallback_comparisons,
)
from insightmaster.services.analysis import compare_texts
from insightmaster.services.articles import ArticleRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/articles/{article_id}", tags=["analysis"])


@router.get("/analyze")
async def get_analysis(
    article_id: str,
    user: Annotated[dict, Depends(require_auth)],
    articles: Annotated[ArticleRepository, Depends(get_article_repository)],
):
    """Return whether the article has been analysed, and the stored AI insights."""
    article = await load_owned_article(article_id, user, articles)
    return success_response({
        "hasAnalysis": bool(article.get("analyzedAt")),
        "analyzedAt": article.get("analyzedAt"),
        "insights": serialize_article(article)["aiInsights"],
    })


@router.post("/analyze")
async def analyze_article(
    article_id: str,
    user: Annotated[dict, Depends(require_auth)],
    articles: Annotated[ArticleRepository, Depends(get_article_repository)],
    ai_service: Annotated[AIInsightService, Depends(get_ai_service)],
    body: Optional[AnalyzeRequest] = None,
):
    """
    Run AI analysis on an article and store the resulting insights.

    Replaces any previous AI insights. Uses the static fallback insights
    when the AI provider is unavailable or returns unusable output.
    """
    article = await load_owned_article(article_id, user, articles)
    level = body.level if body else AnalysisLevel.BEGINNER

    result = await ai_service.analyze_article(article, level)
    if not result.ok:
        logger.warning(f"Using fallback insights for article {article_id}: {result.error}")
    insights = result.unwrap_or(fallback_ai_insights())

    await articles.save_ai_insights(article_id, str(user["_id"]), insights)

    return success_response(
        {"insights": [i.model_dump(mode="json") for i in insights]},
        message="Article analysis completed",
    )


@router.post("/compare")
async def compare_insights(
    article_id: str,
    user: Annotated[dict, Depends(require_auth)],
    articles: Annotated[ArticleRepository, Depends(get_article_repository)],
    ai_service: Annotated[AIInsightService, Depends(get_ai_service)],
):
    """
    Compare the user's insights on an article with its stored AI insights.

    Both sets must exist. Besides the per-insight comparisons the response
    carries a keyword-overlap ``overallScore`` (0-100).
    """
    article = await load_owned_article(article_id, user, articles)

    if not article.get("aiInsights"):
        raise BadRequestException(
            message="This article has no AI insights yet. Run the analysis first.",
            code="NO_AI_INSIGHTS",
        )
    if not article.get("insights"):
        raise BadRequestException(
            message="This article has no user insights yet. Add an insight first.",
            code="NO_USER_INSIGHTS",
        )

    user_insights = [ArticleInsight.model_validate(i) for i in article["insights"]]
    ai_insights = [AiInsight.model_validate(i) for i in article["aiInsights"]]

    result = await ai_service.compare_insights(user_insights, ai_insights)
    if not result.ok:
        logger.warning(f"Using fallback comparison for article {article_id}: {result.error}")
    comparisons = result.unwrap_or_else(
        lambda _: fallback_comparisons(user_insights, ai_insights)
    )

    overall = compare_texts(
        [u.content for u in user_insights],
        [a.content for a in ai_insights],
    )

    return success_response(
        {
            "comparisons": [c.model_dump(mode="json") for c in comparisons],
            "overallScore": overall,
        },
        message="Insight comparison completed",
    )
