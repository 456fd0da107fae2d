"""
Static substitutes used when the AI provider is unavailable or fails.
"""

from typing import List, Sequence

from insightmaster.models.categories import ArticleInsightCategory
from insightmaster.models.insight import (
    AiInsight,
    ArticleInsight,
    GeneratedInsight,
    InsightComparison,
)

CATEGORY_MATCH_SCORE = 0.5
NO_MATCH_SCORE = 0.3

FALLBACK_FEEDBACK = (
    "Consider adding more concrete examples or evidence to deepen this insight."
)


def fallback_ai_insights() -> List[AiInsight]:
    """Three placeholder insights: main idea, supporting evidence, implication."""
    return [
        AiInsight(
            content="A concise summary of the article's main idea and argument.",
            category=ArticleInsightCategory.MAIN_IDEA,
            evidence="Derived from the overall context of the article.",
            confidence=0.9,
        ),
        AiInsight(
            content="Evidence and facts that support the main idea.",
            category=ArticleInsightCategory.SUPPORTING_EVIDENCE,
            evidence="Extracted from specific passages of the article.",
            confidence=0.85,
        ),
        AiInsight(
            content="Implications and consequences that follow from the article.",
            category=ArticleInsightCategory.IMPLICATION,
            evidence="Derived from the article's context and general knowledge.",
            confidence=0.7,
        ),
    ]


def fallback_comparisons(
    user_insights: Sequence[ArticleInsight],
    ai_insights: Sequence[AiInsight],
) -> List[InsightComparison]:
    """Pair each user insight with the first AI insight sharing its category."""
    comparisons = []
    for user_insight in user_insights:
        match = next(
            (ai for ai in ai_insights if ai.category == user_insight.category),
            None,
        )
        comparisons.append(
            InsightComparison(
                userInsight=user_insight,
                aiInsight=match,
                matchScore=CATEGORY_MATCH_SCORE if match else NO_MATCH_SCORE,
                feedback=FALLBACK_FEEDBACK,
            )
        )
    return comparisons


def fallback_generated_insights(title: str = "") -> List[GeneratedInsight]:
    """Single placeholder item for free-form generation."""
    subject = f"\"{title}\"" if title else "this article"
    return [
        GeneratedInsight(
            content=(
                f"AI insight generation is currently unavailable. Review the key "
                f"claims of {subject} and note the evidence behind each one."
            ),
            tags=["review"],
        )
    ]
