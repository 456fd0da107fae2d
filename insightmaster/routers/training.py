"""
FastAPI router for training mode.

Training works against the heuristic InsightAnalyzer, so no AI provider is
needed. Either a stored article (``articleId``) or an ad-hoc article body
(title, content, category) can be analysed.
"""

import logging
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends

from common.utils import BadRequestException, success_response

from insightmaster.dependencies import (
    get_analyzer,
    get_article_repository,
    load_owned_article,
    require_auth,
)
from insightmaster.models.insight import UserInsight
from insightmaster.schemas.training import TrainingAnalyzeRequest, TrainingEvaluateRequest
from insightmaster.services.analysis import InsightAnalyzer
from insightmaster.services.articles import ArticleRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/training", tags=["training"])


async def resolve_article(
    body: TrainingAnalyzeRequest,
    user: dict,
    articles: ArticleRepository,
) -> Dict[str, Any]:
    """Load the referenced article, or build one from the request body."""
    if body.articleId:
        return await load_owned_article(body.articleId, user, articles)

    if not body.title or not body.content:
        raise BadRequestException(
            message="Either articleId or title and content are required",
            code="MISSING_ARTICLE",
        )

    return {
        "id": "",
        "title": body.title,
        "content": body.content,
        "category": body.category,
    }


@router.post("/analyze")
async def analyze(
    body: TrainingAnalyzeRequest,
    user: Annotated[dict, Depends(require_auth)],
    articles: Annotated[ArticleRepository, Depends(get_article_repository)],
    analyzer: Annotated[InsightAnalyzer, Depends(get_analyzer)],
):
    """Produce the reference insight analysis for an article."""
    article = await resolve_article(body, user, articles)
    analysis = analyzer.analyze_article(article, body.level)

    return success_response(analysis.model_dump(mode="json"))


@router.post("/evaluate")
async def evaluate(
    body: TrainingEvaluateRequest,
    user: Annotated[dict, Depends(require_auth)],
    articles: Annotated[ArticleRepository, Depends(get_article_repository)],
    analyzer: Annotated[InsightAnalyzer, Depends(get_analyzer)],
):
    """
    Score the user's insights against the reference analysis.

    Returns the match score (0-100), strong and weak categories, missed
    reference points, extra user insights, recommendations and feedback.
    """
    if not body.insights:
        raise BadRequestException(
            message="At least one insight is required",
            code="MISSING_INSIGHTS",
        )

    article = await resolve_article(body, user, articles)
    analysis = analyzer.analyze_article(article, body.level)

    user_id = str(user["_id"])
    user_insights = [
        UserInsight(
            userId=user_id,
            articleId=analysis.articleId,
            category=item.category,
            description=item.description,
            relatedText=item.relatedText,
        )
        for item in body.insights
    ]

    result = analyzer.evaluate(analysis, user_insights, user_id=user_id)
    logger.info(f"Training evaluation for user {user_id}: score {result.matchScore}")

    return success_response(result.model_dump(mode="json"))
