"""
Heuristic insight analyzer for training mode.

Synthesizes a deterministic set of reference InsightPoints for an article
from its topic category and the requested analysis level, then evaluates
user insights against them. No AI call is involved, so training works
offline.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from insightmaster.models.categories import AnalysisLevel, InsightCategory
from insightmaster.models.insight import (
    InsightAnalysis,
    InsightPoint,
    UserInsight,
    UserInsightAnalysis,
)
from insightmaster.services.analysis.feedback import (
    build_recommendations,
    classify_categories,
    count_categories,
    matched_categories,
    summarize_feedback,
)
from insightmaster.services.analysis.scorer import compare_insights

logger = logging.getLogger(__name__)

# (category, title, description, importance)
PointTemplate = Tuple[InsightCategory, str, str, int]

TOPIC_ALIASES = {
    "technology": "technology",
    "tech": "technology",
    "テクノロジー": "technology",
    "environment": "environment",
    "環境": "environment",
    "economy": "economy",
    "economics": "economy",
    "経済": "economy",
}

TOPIC_POINTS: Dict[str, List[PointTemplate]] = {
    "technology": [
        (
            InsightCategory.HIDDEN_ASSUMPTION,
            "Assumed technical feasibility",
            "The article assumes technology keeps advancing at its current pace, "
            "but technical barriers or regulatory change could alter that pace.",
            4,
        ),
        (
            InsightCategory.INDUSTRY_TREND,
            "Competing technologies",
            "Other technologies may solve the same problem. The wider industry "
            "direction needs to be taken into account.",
            3,
        ),
    ],
    "environment": [
        (
            InsightCategory.AUTHOR_BIAS,
            "Pro-conservation viewpoint",
            "The author argues from an environmental-protection standpoint and may "
            "not fully weigh economic impact or feasibility concerns.",
            4,
        ),
        (
            InsightCategory.DATA_INTERPRETATION,
            "Selective use of statistics",
            "The cited data may have been chosen to support a particular claim. "
            "A more comprehensive dataset should be considered.",
            5,
        ),
    ],
    "economy": [
        (
            InsightCategory.CAUSALITY,
            "Correlation mistaken for causation",
            "The article implies that a policy caused a change in economic "
            "indicators, but the relationship may only be correlation.",
            5,
        ),
        (
            InsightCategory.CONTRADICTION,
            "Short-term versus long-term effects",
            "The article stresses short-term economic effects, while the long-term "
            "impact could lead to a different conclusion.",
            4,
        ),
    ],
}

DEFAULT_POINTS: List[PointTemplate] = [
    (
        InsightCategory.HIDDEN_ASSUMPTION,
        "General assumptions",
        "The article rests on assumptions it does not state. If they change, "
        "the conclusion may change too.",
        3,
    ),
    (
        InsightCategory.AUTHOR_BIAS,
        "Author's perspective",
        "The author's background and field may be shaping the content and "
        "conclusions of the article.",
        3,
    ),
]

INTERMEDIATE_POINT: PointTemplate = (
    InsightCategory.DATA_INTERPRETATION,
    "Reliability of data sources",
    "The reliability and methodology of the data sources cited in the article "
    "deserve scrutiny.",
    4,
)

ADVANCED_POINT: PointTemplate = (
    InsightCategory.INDUSTRY_TREND,
    "Historical context",
    "Placing the current situation within the industry's historical development "
    "patterns gives insight into how things may unfold.",
    5,
)


def _get(article: Any, key: str, default: Any = None) -> Any:
    if isinstance(article, dict):
        return article.get(key, default)
    return getattr(article, key, default)


def resolve_topic(category: Optional[str]) -> Optional[str]:
    """Map an article's topic category to a known topic key."""
    if not category:
        return None
    return TOPIC_ALIASES.get(str(category).strip().lower())


class InsightAnalyzer:
    """Deterministic article analyzer and user-insight evaluator."""

    def analyze_article(
        self,
        article: Any,
        level: AnalysisLevel = AnalysisLevel.BEGINNER,
    ) -> InsightAnalysis:
        """
        Produce a reference analysis for an article.

        Args:
            article: Article document (dict) or object with id/_id, title, category
            level: Analysis depth; higher levels add more points

        Returns:
            InsightAnalysis with two topic points plus one per level step
        """
        level = AnalysisLevel.parse(level)
        article_id = str(_get(article, "id") or _get(article, "_id") or "")
        topic = resolve_topic(_get(article, "category"))

        templates = list(TOPIC_POINTS.get(topic, DEFAULT_POINTS))
        if level in (AnalysisLevel.INTERMEDIATE, AnalysisLevel.ADVANCED):
            templates.append(INTERMEDIATE_POINT)
        if level is AnalysisLevel.ADVANCED:
            templates.append(ADVANCED_POINT)

        points = [
            InsightPoint(
                articleId=article_id,
                category=category,
                title=title,
                description=description,
                importance=importance,
            )
            for category, title, description, importance in templates
        ]

        logger.debug(
            f"Analyzed article {article_id} (topic={topic or 'default'}, "
            f"level={level.value}): {len(points)} points"
        )

        return InsightAnalysis(
            articleId=article_id,
            insights=points,
            summary=self.summarize(_get(article, "title") or "", points),
            analysisLevel=level,
        )

    @staticmethod
    def summarize(title: str, points: Sequence[InsightPoint]) -> str:
        counts = count_categories(p.category for p in points)
        breakdown = ", ".join(
            f"{category.label.lower()} ({count})" for category, count in counts.items()
        )
        return (
            f"The analysis of \"{title}\" identified {len(points)} insight points. "
            f"The main categories are {breakdown}. Understanding these points helps "
            f"you evaluate the article critically and notice hidden assumptions "
            f"and author bias."
        )

    def evaluate(
        self,
        analysis: InsightAnalysis,
        user_insights: Sequence[UserInsight],
        user_id: Optional[str] = None,
    ) -> UserInsightAnalysis:
        """
        Compare user insights against a reference analysis.

        Returns:
            UserInsightAnalysis with score, category classification,
            per-category matched counts, missed and extra insights,
            and recommendations
        """
        reference = list(analysis.insights)
        score = compare_insights([u.description for u in user_insights], reference)

        user_counts = count_categories(u.category for u in user_insights)
        ai_counts = count_categories(p.category for p in reference)
        strengths, weaknesses = classify_categories(user_counts, ai_counts)

        missed = [p for p in reference if user_counts.get(p.category, 0) == 0]
        extra = [u for u in user_insights if ai_counts.get(u.category, 0) == 0]

        return UserInsightAnalysis(
            articleId=analysis.articleId,
            userId=user_id,
            userInsights=list(user_insights),
            aiInsights=reference,
            matchScore=score,
            missedInsights=missed,
            extraInsights=extra,
            strengths=strengths,
            weaknesses=weaknesses,
            matchedCategories=matched_categories(user_counts, ai_counts),
            recommendations=build_recommendations(score, weaknesses),
            feedback=summarize_feedback(score, strengths, weaknesses),
        )
